"""
Token Issuer Service

Stateless responder for the default authorization server: signs access tokens
for a fixed test subject and builds the OpenID Connect discovery document.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from ..models import DiscoveryDocument, TokenResponse

logger = logging.getLogger(__name__)

# Claims of the synthetic subject every issued token describes
TEST_SUBJECT_CLAIMS = {
    "sub": "test-user",
    "name": "Test User",
    "email": "test@example.com",
}

SIGNING_ALGORITHM = "HS256"
AUTHORIZATION_SERVER_PATH = "/oauth2/default"


class TokenIssuer:
    """
    Issues HS256-signed JWT access tokens and describes the authorization server.

    No grant type, client credential or scope is checked: every call to
    issue_token() succeeds.

    Example usage:
        issuer = TokenIssuer(signing_secret="secret", expires_in=3600, base_url="http://localhost:8080")
        response = issuer.issue_token()
        # response.access_token, response.token_type == "Bearer", response.expires_in == 3600
        document = issuer.discovery_document()
    """

    def __init__(self, signing_secret: str, expires_in: int, base_url: str):
        """
        Args:
            signing_secret: HMAC key for token signatures
            expires_in: Token lifetime in seconds
            base_url: Scheme and host of the mock org (e.g. "http://localhost:8080")
        """
        self.signing_secret = signing_secret
        self.expires_in = expires_in
        self.issuer = f"{base_url}{AUTHORIZATION_SERVER_PATH}"

    def issue_token(self) -> TokenResponse:
        issued_at = datetime.now(timezone.utc)
        payload = {
            **TEST_SUBJECT_CLAIMS,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.expires_in),
        }
        access_token = jwt.encode(payload, self.signing_secret, algorithm=SIGNING_ALGORITHM)

        logger.info(f"Issued access token for {TEST_SUBJECT_CLAIMS['sub']} (expires in {self.expires_in}s)")

        return TokenResponse(access_token=access_token, expires_in=self.expires_in)

    def discovery_document(self) -> DiscoveryDocument:
        return DiscoveryDocument(
            issuer=self.issuer,
            authorization_endpoint=f"{self.issuer}/v1/authorize",
            token_endpoint=f"{self.issuer}/v1/token",
            userinfo_endpoint=f"{self.issuer}/v1/userinfo",
            jwks_uri=f"{self.issuer}/v1/keys",
        )
