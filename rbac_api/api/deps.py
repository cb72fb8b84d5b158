"""Shared FastAPI dependencies: services from app.state and the role gate."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from rbac_api.schemas.auth import CurrentUser, Role
from rbac_api.services.auth import RoleGate, TokenIssuer, make_gate
from rbac_api.services.repository import PostRepository

# Raw header, not HTTPBearer: the gate itself checks the literal "Bearer " prefix.
bearer_header = APIKeyHeader(
    name="Authorization",
    scheme_name="bearerAuth",
    description="JWT token for authentication, sent as: Bearer <token>",
    auto_error=False,
)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_post_repository(request: Request) -> PostRepository:
    return request.app.state.posts


def get_gate(request: Request, roles: frozenset[Role]) -> RoleGate:
    """Return the app's gate for this role set, building it on first use."""
    gates: dict[frozenset[Role], RoleGate] = request.app.state.gates
    gate = gates.get(roles)
    if gate is None:
        gate = gates.setdefault(roles, make_gate(request.app.state.token_verifier, roles))
    return gate


def authorize(*roles: Role) -> Callable[..., CurrentUser]:
    """
    Dependency factory: require a valid Bearer token whose role is in roles.

    Raises MissingToken/InvalidToken/ExpiredToken (401), Forbidden (403) or
    InternalError (500). On success the identity is returned and also stored
    on request.state.user.
    """
    allowed = frozenset(Role(r) for r in roles)

    def dependency(
        request: Request,
        authorization: Annotated[str | None, Security(bearer_header)],
    ) -> CurrentUser:
        user = get_gate(request, allowed)(authorization)
        request.state.user = user
        return user

    return dependency
