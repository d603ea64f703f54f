"""
Okta Resource Models

Pydantic models for the Okta Management API resources served by the mock
(users, groups, applications), the request bodies that create and update them,
and the OAuth2/OIDC response documents.

Records are built by one constructor per resource kind (build_user, build_group,
build_application) which apply the declared defaults to partial client input.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator


def format_timestamp(value: datetime) -> str:
    """Render a datetime the way Okta does: UTC, millisecond precision, 'Z' suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


OktaTimestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond resolution Okta exposes."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def next_timestamp(previous: datetime) -> datetime:
    """
    Timestamp for a mutation that must land strictly after ``previous``.

    Two updates inside the same millisecond would otherwise render identical
    lastUpdated values.
    """
    now = utc_now()
    if now <= previous:
        return previous + timedelta(milliseconds=1)
    return now


def generate_id() -> str:
    return str(uuid.uuid4())


def object_or_none(value: Any) -> Optional[Dict[str, Any]]:
    """A profile that is not a JSON object contributes no attributes."""
    return value if isinstance(value, dict) else None


class Link(BaseModel):
    """HAL link object"""
    href: str


class Links(BaseModel):
    """HAL _links container; only the self link is emitted"""
    self_link: Link = Field(alias="self")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def for_resource(cls, base_url: str, collection: str, resource_id: str) -> "Links":
        return cls(self=Link(href=f"{base_url}/api/v1/{collection}/{resource_id}"))


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserProfileInput(BaseModel):
    """Profile attributes accepted on user creation. Unknown keys are ignored."""
    firstName: Optional[Any] = None
    lastName: Optional[Any] = None
    email: Optional[Any] = None
    login: Optional[Any] = None
    mobilePhone: Optional[Any] = None

    model_config = ConfigDict(extra="ignore")


class UserCreateRequest(BaseModel):
    """
    Body of POST /api/v1/users

    Only the profile is read; credentials and other attributes the Okta SDK
    sends are accepted and ignored.
    """
    profile: Optional[UserProfileInput] = None

    @field_validator("profile", mode="before")
    @classmethod
    def ignore_non_object_profile(cls, value):
        return object_or_none(value)

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "profile": {
                    "firstName": "Jane",
                    "lastName": "Example",
                    "email": "jane.example@example.com",
                    "login": "jane.example@example.com",
                    "mobilePhone": "+1 555 0100"
                }
            }
        },
    )


class UserUpdateRequest(BaseModel):
    """
    Body of PUT /api/v1/users/{id}

    The profile is shallow-merged over the stored one, so any keys are allowed.
    """
    profile: Optional[Dict[str, Any]] = None

    @field_validator("profile", mode="before")
    @classmethod
    def ignore_non_object_profile(cls, value):
        return object_or_none(value)

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "profile": {
                    "firstName": "Updated"
                }
            }
        },
    )


class AuthProvider(BaseModel):
    type: str = "OKTA"
    name: str = "OKTA"


class UserCredentials(BaseModel):
    provider: AuthProvider = Field(default_factory=AuthProvider)


class OktaUser(BaseModel):
    """
    Okta User resource

    ``profile`` is a free-form mapping because updates merge arbitrary keys
    into it; creation always populates the five standard attributes.
    """
    id: str
    status: str = "ACTIVE"
    created: OktaTimestamp
    activated: OktaTimestamp
    lastLogin: Optional[OktaTimestamp] = None
    lastUpdated: OktaTimestamp
    profile: Dict[str, Any]
    credentials: UserCredentials = Field(default_factory=UserCredentials)
    links: Links = Field(alias="_links")

    model_config = ConfigDict(populate_by_name=True)


def build_user(request: Optional[UserCreateRequest], base_url: str) -> OktaUser:
    """
    Build a new ACTIVE user from a (possibly empty) creation request.

    Each profile attribute defaults on its own; an empty string counts as
    absent. ``login`` falls back to ``email`` before falling back to "".
    """
    profile = (request.profile if request else None) or UserProfileInput()
    user_id = generate_id()
    now = utc_now()

    return OktaUser(
        id=user_id,
        created=now,
        activated=now,
        lastUpdated=now,
        profile={
            "firstName": profile.firstName or "",
            "lastName": profile.lastName or "",
            "email": profile.email or "",
            "login": profile.login or profile.email or "",
            "mobilePhone": profile.mobilePhone or None,
        },
        links=Links.for_resource(base_url, "users", user_id),
    )


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------

class GroupProfileInput(BaseModel):
    name: Optional[Any] = None
    description: Optional[Any] = None

    model_config = ConfigDict(extra="ignore")


class GroupCreateRequest(BaseModel):
    """Body of POST /api/v1/groups"""
    profile: Optional[GroupProfileInput] = None

    @field_validator("profile", mode="before")
    @classmethod
    def ignore_non_object_profile(cls, value):
        return object_or_none(value)

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "profile": {
                    "name": "Engineering",
                    "description": "All engineers"
                }
            }
        },
    )


class GroupProfile(BaseModel):
    name: Any = ""
    description: Any = ""


class OktaGroup(BaseModel):
    """Okta Group resource (OKTA_GROUP type only)"""
    id: str
    created: OktaTimestamp
    lastUpdated: OktaTimestamp
    lastMembershipUpdated: OktaTimestamp
    objectClass: List[str] = Field(default_factory=lambda: ["okta:user_group"])
    type: str = "OKTA_GROUP"
    profile: GroupProfile
    links: Links = Field(alias="_links")

    model_config = ConfigDict(populate_by_name=True)


def build_group(request: Optional[GroupCreateRequest], base_url: str) -> OktaGroup:
    profile = (request.profile if request else None) or GroupProfileInput()
    group_id = generate_id()
    now = utc_now()

    return OktaGroup(
        id=group_id,
        created=now,
        lastUpdated=now,
        lastMembershipUpdated=now,
        profile=GroupProfile(
            name=profile.name or "",
            description=profile.description or "",
        ),
        links=Links.for_resource(base_url, "groups", group_id),
    )


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------

class ApplicationCreateRequest(BaseModel):
    """Body of POST /api/v1/apps"""
    name: Optional[Any] = None
    label: Optional[Any] = None
    signOnMode: Optional[Any] = None
    settings: Optional[Any] = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "oidc_client",
                "label": "My Web App",
                "signOnMode": "OPENID_CONNECT",
                "settings": {
                    "oauthClient": {
                        "redirect_uris": ["http://localhost:3000/callback"]
                    }
                }
            }
        },
    )


class OAuthClientCredentials(BaseModel):
    client_id: str = Field(default_factory=generate_id)
    client_secret: str = Field(default_factory=generate_id)
    autoKeyRotation: bool = True


class ApplicationCredentials(BaseModel):
    oauthClient: OAuthClientCredentials = Field(default_factory=OAuthClientCredentials)


class OktaApplication(BaseModel):
    """Okta Application resource with generated OAuth client credentials"""
    id: str
    name: Any
    label: Any
    status: str = "ACTIVE"
    created: OktaTimestamp
    lastUpdated: OktaTimestamp
    signOnMode: Any
    credentials: ApplicationCredentials = Field(default_factory=ApplicationCredentials)
    settings: Any = Field(default_factory=dict)
    links: Links = Field(alias="_links")

    model_config = ConfigDict(populate_by_name=True)


def build_application(request: Optional[ApplicationCreateRequest], base_url: str) -> OktaApplication:
    request = request or ApplicationCreateRequest()
    app_id = generate_id()
    now = utc_now()

    return OktaApplication(
        id=app_id,
        name=request.name or "oidc_client",
        label=request.label or "Test Application",
        created=now,
        lastUpdated=now,
        signOnMode=request.signOnMode or "OPENID_CONNECT",
        settings=request.settings or {},
        links=Links.for_resource(base_url, "apps", app_id),
    )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: OktaTimestamp
    service: str = "okta-mock-server"


class TokenResponse(BaseModel):
    """OAuth2 token endpoint response"""
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    scope: str = "openid profile email"


class DiscoveryDocument(BaseModel):
    """OpenID Provider Metadata for the default authorization server"""
    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    jwks_uri: str
    response_types_supported: List[str] = Field(
        default_factory=lambda: ["code", "token", "id_token"]
    )
    grant_types_supported: List[str] = Field(
        default_factory=lambda: [
            "authorization_code",
            "implicit",
            "refresh_token",
            "client_credentials",
        ]
    )
    subject_types_supported: List[str] = Field(default_factory=lambda: ["public"])
