"""
Okta API error types.

Every error the mock server reports is an OktaAPIError carrying the HTTP status
plus the ``errorCode``/``errorSummary`` pair clients see in the response body.
Codes are shared across conditions the same way the real service shares them:
E0000011 for both 401 and 403 token failures, E0000007 for every not-found.
"""

from fastapi import status

INVALID_TOKEN_CODE = "E0000011"
NOT_FOUND_CODE = "E0000007"
INTERNAL_ERROR_CODE = "E0000009"
MALFORMED_REQUEST_CODE = "E0000003"


class OktaAPIError(Exception):
    """Base class for errors rendered as an Okta error envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = INTERNAL_ERROR_CODE
    error_summary = "Internal Server Error"

    def __init__(self, error_summary=None, status_code=None):
        if error_summary is not None:
            self.error_summary = error_summary
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.error_summary)

    def to_dict(self):
        return {"errorCode": self.error_code, "errorSummary": self.error_summary}


class AuthError(OktaAPIError):
    """Missing (401) or mismatched (403) API token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = INVALID_TOKEN_CODE
    error_summary = "Invalid token provided"

    @classmethod
    def missing(cls):
        return cls(status_code=status.HTTP_401_UNAUTHORIZED)

    @classmethod
    def mismatched(cls):
        return cls(status_code=status.HTTP_403_FORBIDDEN)


class ResourceNotFoundError(OktaAPIError):
    """An identifier is absent from its collection."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = NOT_FOUND_CODE

    def __init__(self, resource_id: str, kind: str):
        self.resource_id = resource_id
        self.kind = kind
        super().__init__(f"Not found: Resource not found: {resource_id} ({kind})")


class RouteNotFoundError(OktaAPIError):
    """No route matches the request."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = NOT_FOUND_CODE
    error_summary = "Not found: Resource not found"


class InternalServerError(OktaAPIError):
    """Unexpected failure inside a handler. The cause is logged, never returned."""


class MalformedRequestError(OktaAPIError):
    """Request body could not be parsed into the expected shape."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = MALFORMED_REQUEST_CODE
    error_summary = "The request body was not well-formed."
