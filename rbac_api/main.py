"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rbac_api.api import router as api_router
from rbac_api.core.config import Settings, get_settings
from rbac_api.core.errors import ApiError
from rbac_api.services.auth import Clock, TokenIssuer, TokenVerifier, utc_now
from rbac_api.services.repository import (
    PostRepository,
    UserRepository,
    load_posts,
    load_users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Available users for testing:")
    for user in app.state.users.list():
        logger.info("- %s: {id: %r, role: %r}", user.role.value.title(), user.id, user.role.value)
    yield


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched path or method is reported the same way: route not found.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not Found", "message": "Route not found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": HTTPStatus(exc.status_code).phrase, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Bad Request", "message": message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "message": "Something went wrong!"},
    )


def create_app(
    settings: Settings | None = None,
    users: UserRepository | None = None,
    posts: PostRepository | None = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Build the application with its services on app.state.

    Stores default to the JSON fixtures named in settings; tests pass their own
    settings, stores or clock.
    """
    settings = settings or get_settings()
    users = users if users is not None else load_users(settings.USERS_FILE)
    posts = posts if posts is not None else load_posts(settings.POSTS_FILE)

    app = FastAPI(
        title="RBAC Social Feed API",
        version="1.0.0",
        description=(
            "Social network backend implementing Role-Based Access Control (RBAC): "
            "JWT login by user id and admin-only post deletion."
        ),
        docs_url="/api-docs",
        redoc_url="/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.users = users
    app.state.posts = posts
    app.state.token_issuer = TokenIssuer(settings, users, clock=clock)
    app.state.token_verifier = TokenVerifier(settings, clock=clock)
    # One RoleGate per role set, built lazily by api.deps.get_gate
    app.state.gates = {}

    if settings.CORS_ORIGINS:
        allow_origins = settings.CORS_ORIGINS
    else:
        allow_origins = ["*"] if settings.APP_ENV == "dev" else []
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    def root() -> RedirectResponse:
        """Redirect to the interactive API documentation."""
        return RedirectResponse(url="/api-docs")

    return app


app = create_app()
