"""Login endpoint: exchange a user id for a JWT access token."""

from typing import Annotated

from fastapi import APIRouter, Depends

from rbac_api.api.deps import get_token_issuer
from rbac_api.schemas.auth import LoginRequest, LoginResponse
from rbac_api.schemas.errors import ErrorResponse
from rbac_api.services.auth import TokenIssuer

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Bad request - userId is required"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Authenticate user and get JWT token",
)
def login(
    body: LoginRequest,
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> LoginResponse:
    """
    Authenticates a user by ID and returns a JWT token for API access.
    Include the token in the Authorization header as: Bearer <token>
    """
    issued = issuer.issue(body.userId)
    return LoginResponse(token=issued.token, user=issued.user)
