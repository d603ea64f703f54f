"""
Okta Mock Server Models Package

Pydantic models for Okta Management API resources and OAuth2/OIDC documents.
"""

from .okta_resources import (
    OktaUser,
    OktaGroup,
    OktaApplication,
    UserCreateRequest,
    UserUpdateRequest,
    GroupCreateRequest,
    ApplicationCreateRequest,
    HealthResponse,
    TokenResponse,
    DiscoveryDocument,
    build_user,
    build_group,
    build_application,
    format_timestamp,
    next_timestamp,
    utc_now,
)

__all__ = [
    "OktaUser",
    "OktaGroup",
    "OktaApplication",
    "UserCreateRequest",
    "UserUpdateRequest",
    "GroupCreateRequest",
    "ApplicationCreateRequest",
    "HealthResponse",
    "TokenResponse",
    "DiscoveryDocument",
    "build_user",
    "build_group",
    "build_application",
    "format_timestamp",
    "next_timestamp",
    "utc_now",
]
