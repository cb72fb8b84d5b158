"""Pydantic request/response schemas."""

from rbac_api.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    Role,
    TokenClaims,
    User,
)
from rbac_api.schemas.errors import ErrorResponse
from rbac_api.schemas.health import HealthResponse
from rbac_api.schemas.posts import DeletePostResponse, Post, PostsPage

__all__ = [
    "CurrentUser",
    "DeletePostResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "Post",
    "PostsPage",
    "Role",
    "TokenClaims",
    "User",
]
