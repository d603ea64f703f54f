"""
Okta Mock Server - Main FastAPI Application

This FastAPI application imitates the subset of the Okta Management API and the
default OAuth2 authorization server that client integration tests rely on. All
state is held in memory and disappears when the process exits.

Endpoints:
- GET /health - Health check
- GET /api/v1/users - List users
- GET /api/v1/users/{user_id} - Get user
- POST /api/v1/users - Create user
- PUT /api/v1/users/{user_id} - Update user profile
- DELETE /api/v1/users/{user_id} - Delete user
- GET /api/v1/groups - List groups
- POST /api/v1/groups - Create group
- GET /api/v1/apps - List applications
- POST /api/v1/apps - Create application
- POST /oauth2/default/v1/token - Issue access token
- GET /.well-known/openid-configuration - OIDC discovery document

Every /api/v1 route requires ``Authorization: <scheme> <OKTA_API_TOKEN>``.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import MockServerSettings, get_settings
from .exceptions import (
    InternalServerError,
    MalformedRequestError,
    OktaAPIError,
    RouteNotFoundError,
)
from .handlers import verify_api_token
from .models import (
    ApplicationCreateRequest,
    GroupCreateRequest,
    HealthResponse,
    UserCreateRequest,
    UserUpdateRequest,
    utc_now,
)
from .services import MockDataStore, TokenIssuer

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SERVICE_NAME = "okta-mock-server"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def render(model, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Serialize a resource (or list of resources) with Okta field names."""
    if isinstance(model, list):
        content = [item.model_dump(mode="json", by_alias=True) for item in model]
    else:
        content = model.model_dump(mode="json", by_alias=True)
    return JSONResponse(content=content, status_code=status_code)


def error_response(error: OktaAPIError) -> JSONResponse:
    return JSONResponse(content=error.to_dict(), status_code=error.status_code)


def get_store(request: Request) -> MockDataStore:
    return request.app.state.store


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


async def parse_body(request: Request, model_cls):
    """
    Decode a JSON object body into ``model_cls``.

    Called from inside handlers, so the token gate has already run. An empty
    body counts as ``{}``.

    Raises:
        MalformedRequestError: If the body is not valid JSON or not a JSON object
    """
    raw = await request.body()
    if not raw.strip():
        return model_cls()

    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise MalformedRequestError() from e

    if not isinstance(payload, dict):
        raise MalformedRequestError()

    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        raise MalformedRequestError() from e


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the startup banner; nothing needs tearing down."""
    settings: MockServerSettings = app.state.settings
    logger.info(f"Okta Mock Server running on port {settings.port}")
    logger.info(f"Health check: http://localhost:{settings.port}/health")
    logger.info(f"API Token: {settings.masked_api_token}")
    logger.info(f"Domain: {settings.okta_domain}")
    yield
    logger.info("Okta Mock Server stopped")


def create_app(settings: Optional[MockServerSettings] = None) -> FastAPI:
    """
    Build a mock server application with its own, empty, in-memory state.

    Args:
        settings: Configuration to use; read from the environment when omitted

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Okta Mock Server",
        description="In-memory test double for the Okta Management API and default OAuth2 authorization server",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = MockDataStore(base_url=settings.base_url)
    app.state.token_issuer = TokenIssuer(
        signing_secret=settings.jwt_secret,
        expires_in=settings.token_expiration,
        base_url=settings.base_url,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client_host = request.client.host if request.client else "-"
        logger.info(
            f'{client_host} "{request.method} {request.url.path}" '
            f"{response.status_code} {elapsed_ms:.1f}ms"
        )
        return response

    register_routes(app)
    register_exception_handlers(app)
    return app


def register_routes(app: FastAPI) -> None:
    protected = [Depends(verify_api_token)]

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint. Does not require a token.

        Returns:
            dict: Status, current timestamp and service name
        """
        return render(HealthResponse(timestamp=utc_now(), service=SERVICE_NAME))

    # Users

    @app.get("/api/v1/users", dependencies=protected)
    async def list_users(store: MockDataStore = Depends(get_store)):
        """List all users in creation order."""
        return render(store.list_users())

    @app.get("/api/v1/users/{user_id}", dependencies=protected)
    async def get_user(user_id: str, store: MockDataStore = Depends(get_store)):
        return render(store.get_user(user_id))

    @app.post("/api/v1/users", dependencies=protected)
    async def create_user(
        request: Request,
        store: MockDataStore = Depends(get_store),
    ):
        """
        Create a new ACTIVE user.

        Missing profile attributes default to empty values; login defaults to email.

        Returns:
            OktaUser: The created user, with status 201
        """
        body = await parse_body(request, UserCreateRequest)
        return render(store.create_user(body), status_code=status.HTTP_201_CREATED)

    @app.put("/api/v1/users/{user_id}", dependencies=protected)
    async def update_user(
        request: Request,
        user_id: str,
        store: MockDataStore = Depends(get_store),
    ):
        """
        Merge the supplied profile attributes into an existing user.

        Returns:
            OktaUser: The updated user
        """
        body = await parse_body(request, UserUpdateRequest)
        return render(store.update_user(user_id, body))

    @app.delete("/api/v1/users/{user_id}", dependencies=protected)
    async def delete_user(user_id: str, store: MockDataStore = Depends(get_store)):
        """
        Remove a user permanently.

        Returns:
            Empty response with 204 status
        """
        store.delete_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # Groups

    @app.get("/api/v1/groups", dependencies=protected)
    async def list_groups(store: MockDataStore = Depends(get_store)):
        return render(store.list_groups())

    @app.post("/api/v1/groups", dependencies=protected)
    async def create_group(
        request: Request,
        store: MockDataStore = Depends(get_store),
    ):
        body = await parse_body(request, GroupCreateRequest)
        return render(store.create_group(body), status_code=status.HTTP_201_CREATED)

    # Applications

    @app.get("/api/v1/apps", dependencies=protected)
    async def list_apps(store: MockDataStore = Depends(get_store)):
        return render(store.list_applications())

    @app.post("/api/v1/apps", dependencies=protected)
    async def create_app_resource(
        request: Request,
        store: MockDataStore = Depends(get_store),
    ):
        """
        Create an application with freshly generated OAuth client credentials.

        Returns:
            OktaApplication: The created application, with status 201
        """
        body = await parse_body(request, ApplicationCreateRequest)
        return render(store.create_application(body), status_code=status.HTTP_201_CREATED)

    # OAuth 2.0 / OIDC

    @app.post("/oauth2/default/v1/token")
    async def issue_token(issuer: TokenIssuer = Depends(get_token_issuer)):
        """
        Issue a signed access token for the fixed test subject.

        The request body (grant type, client credentials, scope) is not inspected.
        """
        return render(issuer.issue_token())

    @app.get("/.well-known/openid-configuration")
    async def openid_configuration(issuer: TokenIssuer = Depends(get_token_issuer)):
        return render(issuer.discovery_document())


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(OktaAPIError)
    async def okta_error_handler(request: Request, exc: OktaAPIError):
        """Render errors raised by handlers and the token gate as Okta error envelopes."""
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Unmatched routes (and unsupported methods) become Okta not-found errors.

        Any other HTTP error is reported as the generic 500.
        """
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(RouteNotFoundError())

        logger.warning(f"HTTP {exc.status_code} for {request.method} {request.url.path}: {exc.detail}")
        return error_response(InternalServerError())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Convert unhandled exceptions to the generic internal error; details stay in the log."""
        logger.exception(f"Unhandled exception for {request.method} {request.url.path}: {exc}")
        return error_response(InternalServerError())


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_settings().host, port=get_settings().port)
