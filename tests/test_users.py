"""
Tests for the /api/v1/users endpoints

Covers the full user lifecycle:
- User creation with profile defaults
- Lookup and listing
- Profile merge on update
- Hard delete and not-found handling
"""

from tests.conftest import OKTA_DOMAIN


class TestCreateUser:

    def test_create_user_returns_full_record(self, client, auth_headers):
        profile = {
            "firstName": "Test",
            "lastName": "User",
            "email": "test.user@example.com",
            "login": "test.user@example.com",
            "mobilePhone": "+55 11 98765-4321",
        }

        response = client.post("/api/v1/users", json={"profile": profile}, headers=auth_headers)

        assert response.status_code == 201
        user = response.json()
        assert user["status"] == "ACTIVE"
        assert user["lastLogin"] is None
        assert user["profile"] == profile
        assert user["credentials"] == {"provider": {"type": "OKTA", "name": "OKTA"}}
        assert user["_links"]["self"]["href"] == f"http://{OKTA_DOMAIN}/api/v1/users/{user['id']}"
        assert user["created"] == user["activated"] == user["lastUpdated"]
        assert user["created"].endswith("Z")

    def test_login_defaults_to_email(self, client, auth_headers):
        response = client.post(
            "/api/v1/users", json={"profile": {"email": "a@b.com"}}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["profile"]["login"] == "a@b.com"

    def test_missing_profile_fields_default(self, create_user):
        user = create_user()

        assert user["profile"] == {
            "firstName": "",
            "lastName": "",
            "email": "",
            "login": "",
            "mobilePhone": None,
        }

    def test_empty_strings_count_as_absent(self, create_user):
        user = create_user({"email": "x@example.com", "login": "", "mobilePhone": ""})

        assert user["profile"]["login"] == "x@example.com"
        assert user["profile"]["mobilePhone"] is None

    def test_non_string_profile_values_are_stored_as_sent(self, create_user):
        user = create_user({"email": "a@b.com", "mobilePhone": 5551234})

        assert user["profile"]["mobilePhone"] == 5551234
        assert user["profile"]["login"] == "a@b.com"

    def test_non_object_profile_falls_back_to_defaults(self, client, auth_headers):
        response = client.post("/api/v1/users", json={"profile": "x"}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["profile"]["login"] == ""

    def test_unknown_profile_attributes_are_ignored_on_create(self, create_user):
        user = create_user({"email": "x@example.com", "nickName": "xx"})

        assert "nickName" not in user["profile"]

    def test_sdk_style_body_with_credentials_is_accepted(self, client, auth_headers):
        body = {
            "profile": {"email": "sdk@example.com"},
            "credentials": {"password": {"value": "Sup3rS3cret!"}},
        }

        response = client.post("/api/v1/users?activate=true", json=body, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["credentials"] == {"provider": {"type": "OKTA", "name": "OKTA"}}

    def test_identifiers_are_unique(self, create_user):
        ids = {create_user({"email": f"user{i}@example.com"})["id"] for i in range(5)}

        assert len(ids) == 5


class TestGetAndListUsers:

    def test_create_then_get_returns_same_record(self, client, auth_headers, create_user):
        created = create_user({"firstName": "Jane", "email": "jane@example.com"})

        response = client.get(f"/api/v1/users/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_user_returns_not_found_envelope(self, client, auth_headers):
        response = client.get("/api/v1/users/does-not-exist", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "errorCode": "E0000007",
            "errorSummary": "Not found: Resource not found: does-not-exist (User)",
        }

    def test_empty_list_is_an_empty_array(self, client, auth_headers):
        response = client.get("/api/v1/users", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_list_is_in_creation_order(self, client, auth_headers, create_user):
        created = [create_user({"email": f"user{i}@example.com"})["id"] for i in range(4)]

        response = client.get("/api/v1/users", headers=auth_headers)

        assert [user["id"] for user in response.json()] == created


class TestUpdateUser:

    def test_update_merges_profile(self, client, auth_headers, create_user):
        created = create_user({"firstName": "Jane", "lastName": "Example", "email": "jane@example.com"})

        response = client.put(
            f"/api/v1/users/{created['id']}",
            json={"profile": {"firstName": "Updated", "department": "Platform"}},
            headers=auth_headers,
        )

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["firstName"] == "Updated"
        assert profile["lastName"] == "Example"
        assert profile["email"] == "jane@example.com"
        assert profile["department"] == "Platform"

    def test_update_only_touches_profile_and_last_updated(self, client, auth_headers, create_user):
        created = create_user({"email": "jane@example.com"})

        updated = client.put(
            f"/api/v1/users/{created['id']}",
            json={"profile": {"firstName": "Jane"}},
            headers=auth_headers,
        ).json()

        for field in ("id", "status", "created", "activated", "lastLogin", "credentials", "_links"):
            assert updated[field] == created[field]
        assert updated["lastUpdated"] > created["lastUpdated"]

    def test_back_to_back_updates_always_advance_last_updated(self, client, auth_headers, create_user):
        user = create_user({"email": "jane@example.com"})
        stamps = [user["lastUpdated"]]

        for i in range(5):
            response = client.put(
                f"/api/v1/users/{user['id']}",
                json={"profile": {"firstName": f"Jane{i}"}},
                headers=auth_headers,
            )
            stamps.append(response.json()["lastUpdated"])

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)

    def test_update_is_visible_on_get(self, client, auth_headers, create_user):
        created = create_user({"email": "jane@example.com"})
        updated = client.put(
            f"/api/v1/users/{created['id']}",
            json={"profile": {"lastName": "Doe"}},
            headers=auth_headers,
        ).json()

        fetched = client.get(f"/api/v1/users/{created['id']}", headers=auth_headers).json()

        assert fetched == updated

    def test_update_without_profile_keeps_profile(self, client, auth_headers, create_user):
        created = create_user({"email": "jane@example.com"})

        response = client.put(f"/api/v1/users/{created['id']}", json={}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["profile"] == created["profile"]

    def test_update_unknown_user(self, client, auth_headers):
        response = client.put(
            "/api/v1/users/missing-id", json={"profile": {"firstName": "X"}}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["errorSummary"] == "Not found: Resource not found: missing-id (User)"


class TestDeleteUser:

    def test_delete_then_get_is_not_found(self, client, auth_headers, create_user):
        created = create_user({"email": "jane@example.com"})

        response = client.delete(f"/api/v1/users/{created['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/api/v1/users/{created['id']}", headers=auth_headers)
        assert response.status_code == 404
        assert created["id"] in response.json()["errorSummary"]

    def test_repeated_delete_returns_same_not_found(self, client, auth_headers, create_user):
        user_id = create_user({"email": "jane@example.com"})["id"]
        client.delete(f"/api/v1/users/{user_id}", headers=auth_headers)

        first = client.delete(f"/api/v1/users/{user_id}", headers=auth_headers)
        second = client.delete(f"/api/v1/users/{user_id}", headers=auth_headers)

        assert first.status_code == second.status_code == 404
        assert first.json() == second.json() == {
            "errorCode": "E0000007",
            "errorSummary": f"Not found: Resource not found: {user_id} (User)",
        }

    def test_delete_removes_only_that_user(self, client, auth_headers, create_user):
        keep = create_user({"email": "keep@example.com"})
        drop = create_user({"email": "drop@example.com"})

        client.delete(f"/api/v1/users/{drop['id']}", headers=auth_headers)

        listed = client.get("/api/v1/users", headers=auth_headers).json()
        assert [user["id"] for user in listed] == [keep["id"]]
