"""Token issuance at login and bearer-token role gating for protected routes.

Neither the issuer nor the gate keeps session state: verification depends only
on the token, the clock, the shared secret and the allowed role set.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import NamedTuple

import jwt
from pydantic import ValidationError

from rbac_api.core.config import Settings
from rbac_api.core.errors import (
    ExpiredToken,
    Forbidden,
    InternalError,
    InvalidToken,
    MissingParameter,
    MissingToken,
    UserNotFound,
)
from rbac_api.core.security import create_access_token, decode_access_token
from rbac_api.schemas.auth import CurrentUser, Role, TokenClaims, User
from rbac_api.services.repository import UserRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class IssuedToken(NamedTuple):
    token: str
    user: User


class TokenIssuer:
    """Looks up a user and signs a time-limited token carrying id and role."""

    def __init__(self, settings: Settings, users: UserRepository, clock: Clock = utc_now):
        self._settings = settings
        self._users = users
        self._clock = clock

    def issue(self, user_id: str | None) -> IssuedToken:
        """
        Issue a token for user_id.

        Raises MissingParameter for an absent or empty id and UserNotFound when
        no user matches. Two calls at different instants give different tokens.
        """
        if not user_id:
            raise MissingParameter()
        user = self._users.find(user_id)
        if user is None:
            raise UserNotFound()
        token = create_access_token(
            user.id, user.role.value, self._settings, now=self._clock()
        )
        return IssuedToken(token=token, user=user)


class TokenVerifier:
    """Checks signature, required claims and expiry of a token."""

    def __init__(self, settings: Settings, clock: Clock = utc_now):
        self._settings = settings
        self._clock = clock

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = decode_access_token(token, self._settings)
            claims = TokenClaims.model_validate(payload)
        except (jwt.PyJWTError, ValidationError) as e:
            raise InvalidToken() from e
        # Signature first, then expiry: a forged expired token is InvalidToken.
        if self._clock().timestamp() >= claims.exp:
            raise ExpiredToken()
        return claims


class RoleGate:
    """
    Authorization check permitting only a configured set of roles.

    Call with the raw Authorization header value. Steps run in order and the
    first failure wins: header prefix, signature and expiry, role membership.
    """

    def __init__(self, verifier: TokenVerifier, allowed_roles: Iterable[Role | str]):
        self._verifier = verifier
        self.allowed_roles = frozenset(Role(r).value for r in allowed_roles)

    def __call__(self, authorization: str | None) -> CurrentUser:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise MissingToken()
        token = authorization[len(BEARER_PREFIX):]

        try:
            claims = self._verifier.verify(token)
        except (InvalidToken, ExpiredToken):
            raise
        except Exception as e:
            logger.exception("Unexpected error verifying token: %s", e)
            raise InternalError() from e

        if claims.role not in self.allowed_roles:
            raise Forbidden()
        return CurrentUser(id=claims.id, role=claims.role)


def make_gate(verifier: TokenVerifier, allowed_roles: Iterable[Role | str]) -> RoleGate:
    """Build a reusable gate for one set of permitted roles."""
    return RoleGate(verifier, allowed_roles)
