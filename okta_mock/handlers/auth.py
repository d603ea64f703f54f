"""
API token authentication handler for the Okta Mock Server.

This module provides the FastAPI dependency guarding the /api/v1 routes. Clients
send ``Authorization: <scheme> <token>``; the Okta SDKs use the ``SSWS`` scheme,
but any scheme is accepted as long as the token matches.
"""

import logging
import secrets
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from ..exceptions import AuthError

logger = logging.getLogger(__name__)

# Raw Authorization header; scheme parsing happens in extract_token()
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def extract_token(header_value: Optional[str]) -> Optional[str]:
    """
    Return the credential part of ``<scheme> <token>``.

    Returns None when the header is absent or carries no second part.
    """
    if not header_value:
        return None
    parts = header_value.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def verify_api_token(
    request: Request,
    authorization: Annotated[Optional[str], Depends(authorization_header)],
) -> str:
    """
    Verify the API token from the request against the configured token.

    Used as a FastAPI dependency on every protected route. The check is
    stateless and repeated for each request. Both failures carry the same
    error code and summary; only the HTTP status differs.

    Args:
        request: Incoming request (used to reach the application settings)
        authorization: Raw Authorization header, if any

    Returns:
        str: The verified token value

    Raises:
        AuthError: 401 if no token was presented, 403 if it does not match

    Example:
        @app.get("/api/v1/users", dependencies=[Depends(verify_api_token)])
        async def list_users(request: Request):
            # Token is already verified by dependency
            pass
    """
    expected_token = request.app.state.settings.okta_api_token

    provided_token = extract_token(authorization)
    if provided_token is None:
        logger.warning(f"Rejected {request.method} {request.url.path}: no API token")
        raise AuthError.missing()

    # Constant-time comparison
    if not secrets.compare_digest(expected_token.encode(), provided_token.encode()):
        logger.warning(f"Rejected {request.method} {request.url.path}: API token mismatch")
        raise AuthError.mismatched()

    return provided_token
