#!/usr/bin/env python3
"""
Mock Okta Client Script

This script exercises the Okta Mock Server the way an application using the
Okta SDK would: it walks a full user lifecycle plus group, application, token
and discovery requests, and prints what comes back.

Usage:
    python mock_okta_client.py

Configuration:
    Set OKTA_CLIENT_ORGURL and OKTA_CLIENT_TOKEN environment variables or rely on the defaults below.

Examples:
    # Run against a local server
    python mock_okta_client.py

    # Set custom endpoint and token
    export OKTA_CLIENT_ORGURL="http://localhost:8080"
    export OKTA_CLIENT_TOKEN="test-api-token-12345"
    python mock_okta_client.py
"""

import os
import sys
from typing import Any, Dict, List, Optional

import requests


class MockOktaClient:
    """Minimal Okta Management API client used to smoke-test the mock server."""

    def __init__(self, base_url: str, api_token: str, session=None):
        """Initialize the client.

        Args:
            base_url: Mock server base URL (e.g., http://localhost:8080)
            api_token: API token sent with the SSWS scheme
            session: Object with the requests.Session API; a new session when omitted
        """
        self.base_url = base_url.rstrip('/')
        self.api_token = api_token
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'Authorization': f'SSWS {api_token}',
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })

    def _request(self, method: str, path: str, expected_status: int, **kwargs) -> Optional[Any]:
        """Send a request and return the decoded body, or None on any failure.

        Returns True instead of a body for successful 204 responses.
        """
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            print(f"💥 Request failed: {e}")
            return None

        print(f"📤 {method} {url}")
        print(f"📊 Status: {response.status_code}")

        if response.status_code != expected_status:
            print(f"❌ Unexpected status {response.status_code} (expected {expected_status})")
            print(f"🔍 Response: {response.text}")
            return None

        if response.status_code == 204:
            return True
        return response.json()

    def check_health(self) -> bool:
        """Test the health endpoint.

        Returns:
            True if healthy, False otherwise
        """
        print("🏥 Testing health endpoint...")
        result = self._request('GET', '/health', 200)
        if result and result.get('status') == 'healthy':
            print(f"✅ {result.get('service', 'Mock server')} is healthy!")
            return True
        return False

    def list_users(self) -> Optional[List[Dict[str, Any]]]:
        users = self._request('GET', '/api/v1/users', 200)
        if users is not None:
            print(f"✅ Retrieved {len(users)} users")
        return users

    def create_user(self, profile: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Create a user via POST /api/v1/users.

        Args:
            profile: Okta profile attributes (firstName, lastName, email, login, mobilePhone)

        Returns:
            Created user dict or None if failed
        """
        print(f"\n🔄 Creating user: {profile.get('email', 'N/A')}")
        user = self._request('POST', '/api/v1/users', 201, json={'profile': profile})
        if user:
            print(f"✅ User created: {user['id']} ({user['status']})")
        return user

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self._request('GET', f'/api/v1/users/{user_id}', 200)

    def update_user(self, user_id: str, profile: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge profile attributes into an existing user via PUT.

        Returns:
            Updated user dict or None if failed
        """
        print(f"\n🔄 Updating user {user_id}")
        user = self._request('PUT', f'/api/v1/users/{user_id}', 200, json={'profile': profile})
        if user:
            print(f"✅ User updated: {user['profile'].get('firstName')} {user['profile'].get('lastName')}")
        return user

    def delete_user(self, user_id: str) -> bool:
        print(f"\n🔄 Deleting user {user_id}")
        return self._request('DELETE', f'/api/v1/users/{user_id}', 204) is True

    def list_groups(self) -> Optional[List[Dict[str, Any]]]:
        groups = self._request('GET', '/api/v1/groups', 200)
        if groups is not None:
            print(f"✅ Retrieved {len(groups)} groups")
        return groups

    def create_group(self, name: str, description: str = '') -> Optional[Dict[str, Any]]:
        print(f"\n🔄 Creating group: {name}")
        group = self._request(
            'POST', '/api/v1/groups', 201,
            json={'profile': {'name': name, 'description': description}}
        )
        if group:
            print(f"✅ Group created: {group['id']} ({group['type']})")
        return group

    def list_apps(self) -> Optional[List[Dict[str, Any]]]:
        return self._request('GET', '/api/v1/apps', 200)

    def create_app(self, label: str, settings: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        print(f"\n🔄 Creating application: {label}")
        app = self._request('POST', '/api/v1/apps', 201, json={'label': label, 'settings': settings or {}})
        if app:
            print(f"✅ Application created: {app['id']}")
            print(f"🔑 Client ID: {app['credentials']['oauthClient']['client_id']}")
        return app

    def get_token(self) -> Optional[Dict[str, Any]]:
        """Request an access token with the client credentials grant.

        Returns:
            Token response dict or None if failed
        """
        token = self._request(
            'POST', '/oauth2/default/v1/token', 200,
            data={'grant_type': 'client_credentials', 'scope': 'openid profile email'},
            headers={'Content-Type': 'application/x-www-form-urlencoded'}
        )
        if token:
            print(f"✅ Token issued ({token['token_type']}, expires in {token['expires_in']}s)")
        return token

    def get_discovery(self) -> Optional[Dict[str, Any]]:
        document = self._request('GET', '/.well-known/openid-configuration', 200)
        if document:
            print(f"✅ Issuer: {document['issuer']}")
        return document

    def run_smoke_test(self) -> bool:
        """Run the full lifecycle against the server.

        Returns:
            True if every step succeeded, False at the first failure
        """
        if not self.check_health():
            return False

        print("\n📋 Test 1: List users")
        if self.list_users() is None:
            return False

        print("\n📋 Test 2: Create user")
        user = self.create_user({
            'firstName': 'Test',
            'lastName': 'User',
            'email': 'test.user@example.com',
            'login': 'test.user@example.com',
            'mobilePhone': '+55 11 98765-4321'
        })
        if not user:
            return False

        print("\n📋 Test 3: Get user by ID")
        found = self.get_user(user['id'])
        if not found or found['profile']['email'] != 'test.user@example.com':
            return False

        print("\n📋 Test 4: Update user")
        updated = self.update_user(user['id'], {'firstName': 'Updated', 'lastName': 'TestUser'})
        if not updated or updated['profile']['firstName'] != 'Updated':
            return False

        print("\n📋 Test 5: Create group")
        if not self.create_group('Test Group', 'Group created by the smoke test'):
            return False

        print("\n📋 Test 6: List groups")
        if not self.list_groups():
            return False

        print("\n📋 Test 7: Create application")
        if not self.create_app('Smoke Test App'):
            return False

        print("\n📋 Test 8: OAuth 2.0 token")
        if not self.get_token():
            return False

        print("\n📋 Test 9: OIDC discovery")
        if not self.get_discovery():
            return False

        print("\n📋 Test 10: Delete user")
        if not self.delete_user(user['id']):
            return False

        return True


def main():
    """Main function to run the smoke test scenarios."""

    # Configuration
    OKTA_URL = os.environ.get('OKTA_CLIENT_ORGURL', 'http://localhost:8080')
    API_TOKEN = os.environ.get('OKTA_CLIENT_TOKEN', 'test-api-token-12345')

    print("🚀 Okta Mock Server Smoke Test")
    print("=" * 50)
    print(f"📡 Org URL: {OKTA_URL}")
    print(f"🔐 API Token: {API_TOKEN[:4]}{'*' * 8}")
    print()

    client = MockOktaClient(OKTA_URL, API_TOKEN)

    if not client.run_smoke_test():
        print("\n❌ Smoke test failed - is the mock server running?")
        print("   Try: python -m okta_mock")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("🎉 All smoke test scenarios passed!")
    print("=" * 50)


if __name__ == "__main__":
    main()
