"""
Tests for the API token gate on /api/v1 routes
"""

import pytest

from okta_mock.handlers import extract_token
from tests.conftest import API_TOKEN

INVALID_TOKEN_BODY = {"errorCode": "E0000011", "errorSummary": "Invalid token provided"}

PROTECTED_ROUTES = [
    ("GET", "/api/v1/users"),
    ("GET", "/api/v1/users/some-id"),
    ("POST", "/api/v1/users"),
    ("PUT", "/api/v1/users/some-id"),
    ("DELETE", "/api/v1/users/some-id"),
    ("GET", "/api/v1/groups"),
    ("POST", "/api/v1/groups"),
    ("GET", "/api/v1/apps"),
    ("POST", "/api/v1/apps"),
]


class TestTokenGate:

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_missing_header_is_401(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 401
        assert response.json() == INVALID_TOKEN_BODY

    @pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
    def test_wrong_token_is_403(self, client, method, path):
        response = client.request(method, path, headers={"Authorization": "SSWS wrong-token"})

        assert response.status_code == 403
        assert response.json() == INVALID_TOKEN_BODY

    def test_scheme_without_token_is_401(self, client):
        response = client.get("/api/v1/users", headers={"Authorization": "SSWS"})

        assert response.status_code == 401
        assert response.json() == INVALID_TOKEN_BODY

    @pytest.mark.parametrize("scheme", ["SSWS", "Bearer"])
    def test_any_scheme_with_matching_token_passes(self, client, scheme):
        response = client.get("/api/v1/users", headers={"Authorization": f"{scheme} {API_TOKEN}"})

        assert response.status_code == 200

    def test_rejected_request_does_not_mutate_state(self, client, auth_headers):
        client.post("/api/v1/users", json={"profile": {"email": "a@b.com"}},
                    headers={"Authorization": "SSWS wrong-token"})

        assert client.get("/api/v1/users", headers=auth_headers).json() == []

    def test_token_is_checked_before_the_body_is_parsed(self, client):
        headers = {"Content-Type": "application/json"}

        missing = client.post("/api/v1/users", content=b"{bad", headers=headers)
        wrong = client.post("/api/v1/users", content=b"{bad", headers={**headers, "Authorization": "SSWS wrong-token"})

        assert missing.status_code == 401
        assert missing.json() == INVALID_TOKEN_BODY
        assert wrong.status_code == 403
        assert wrong.json() == INVALID_TOKEN_BODY

    @pytest.mark.parametrize("path", ["/health", "/.well-known/openid-configuration"])
    def test_public_get_routes_need_no_token(self, client, path):
        assert client.get(path).status_code == 200

    def test_token_endpoint_needs_no_token(self, client):
        assert client.post("/oauth2/default/v1/token").status_code == 200


class TestExtractToken:

    @pytest.mark.parametrize("header,expected", [
        (None, None),
        ("", None),
        ("SSWS", None),
        ("SSWS ", None),
        ("SSWS abc", "abc"),
        ("Bearer abc", "abc"),
        ("Bearer abc def", "abc"),
    ])
    def test_extract_token(self, header, expected):
        assert extract_token(header) == expected
