"""
Shared fixtures for the Okta Mock Server test suite.

Each test gets its own application (and therefore its own empty store) built
from explicit settings, so nothing depends on the process environment.
"""

import pytest
from fastapi.testclient import TestClient

from okta_mock.config import MockServerSettings
from okta_mock.main import create_app

API_TOKEN = "test-api-token-12345"
JWT_SECRET = "unit-test-signing-secret-0123456789abcdef"
OKTA_DOMAIN = "dev-123456.okta.test"


@pytest.fixture
def settings():
    return MockServerSettings(
        okta_api_token=API_TOKEN,
        jwt_secret=JWT_SECRET,
        okta_domain=OKTA_DOMAIN,
        token_expiration=3600,
        log_level="DEBUG",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Headers the Okta SDK sends (SSWS scheme)"""
    return {"Authorization": f"SSWS {API_TOKEN}"}


@pytest.fixture
def create_user(client, auth_headers):
    """Factory creating a user through the API and returning the response body"""

    def _create(profile=None):
        body = {"profile": profile} if profile is not None else {}
        response = client.post("/api/v1/users", json=body, headers=auth_headers)
        assert response.status_code == 201
        return response.json()

    return _create
