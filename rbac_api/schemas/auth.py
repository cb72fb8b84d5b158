"""Request/response schemas for login and token claims."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Coarse-grained permission label embedded in every token."""

    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """User record from the user store (identity is the join key)."""

    id: str = Field(..., min_length=1, description="User ID", examples=["u1"])
    role: Role = Field(..., description="User role", examples=["user"])


class LoginRequest(BaseModel):
    """Login by user id. Missing or empty userId is reported as 400, not 422."""

    userId: str | None = Field(
        default=None, description="User ID for authentication", examples=["u1"]
    )


class LoginResponse(BaseModel):
    """JWT access token and the plain identity it encodes."""

    message: str = Field(default="Login successful")
    token: str = Field(..., description="JWT token")
    user: User


class TokenClaims(BaseModel):
    """Decoded payload of a verified token."""

    id: str
    role: str
    iat: int
    exp: int


class CurrentUser(BaseModel):
    """Authenticated identity attached to a gated request."""

    id: str
    role: str
