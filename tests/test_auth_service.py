"""Unit tests for rbac_api.services.auth: token issuance, verification and role gating."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

import jwt

from helpers import TEST_SECRET, FakeClock, make_settings, make_users
from rbac_api.core.errors import (
    ExpiredToken,
    Forbidden,
    InternalError,
    InvalidToken,
    MissingParameter,
    MissingToken,
    UserNotFound,
)
from rbac_api.core.security import create_access_token
from rbac_api.schemas.auth import Role
from rbac_api.services.auth import RoleGate, TokenIssuer, TokenVerifier, make_gate


def _decode(token: str) -> dict:
    return jwt.decode(
        token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False}
    )


class TestTokenIssuer(unittest.TestCase):
    """issue() validates input, looks up the user and signs id/role/iat/exp."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.users = make_users()
        self.issuer = TokenIssuer(make_settings(), self.users, clock=self.clock)

    def test_role_claim_matches_stored_role_for_every_user(self) -> None:
        for user in self.users.list():
            issued = self.issuer.issue(user.id)
            payload = _decode(issued.token)
            self.assertEqual(payload["id"], user.id)
            self.assertEqual(payload["role"], user.role.value)
            self.assertEqual(issued.user, user)

    def test_validity_window_is_one_hour(self) -> None:
        payload = _decode(self.issuer.issue("u1").token)
        self.assertEqual(payload["iat"], int(self.clock.now.timestamp()))
        self.assertEqual(payload["exp"] - payload["iat"], 3600)

    def test_expire_minutes_setting_is_honoured(self) -> None:
        issuer = TokenIssuer(make_settings(JWT_EXPIRE_MINUTES=5), self.users, clock=self.clock)
        payload = _decode(issuer.issue("u2").token)
        self.assertEqual(payload["exp"] - payload["iat"], 300)

    def test_unknown_user_raises_user_not_found(self) -> None:
        for user_id in ("nonexistent", "U1", "u1 ", "admin", "   "):
            with self.assertRaises(UserNotFound):
                self.issuer.issue(user_id)

    def test_missing_user_id_raises_missing_parameter(self) -> None:
        for user_id in (None, ""):
            with self.assertRaises(MissingParameter) as ctx:
                self.issuer.issue(user_id)
            self.assertEqual(ctx.exception.status_code, 400)
            self.assertEqual(ctx.exception.error, "Bad Request")

    def test_tokens_differ_across_instants(self) -> None:
        first = self.issuer.issue("u1").token
        self.clock.advance(seconds=1)
        second = self.issuer.issue("u1").token
        self.assertNotEqual(first, second)


class TestTokenVerifier(unittest.TestCase):
    """verify() checks signature and claims first, then expiry against the clock."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.settings = make_settings()
        self.verifier = TokenVerifier(self.settings, clock=self.clock)
        self.token = create_access_token("u1", "user", self.settings, now=self.clock.now)

    def test_valid_token_returns_claims(self) -> None:
        claims = self.verifier.verify(self.token)
        self.assertEqual(claims.id, "u1")
        self.assertEqual(claims.role, "user")

    def test_token_valid_until_just_before_expiry(self) -> None:
        self.clock.advance(minutes=59, seconds=59)
        self.assertEqual(self.verifier.verify(self.token).id, "u1")

    def test_token_expired_at_exact_expiry(self) -> None:
        self.clock.advance(hours=1)
        with self.assertRaises(ExpiredToken):
            self.verifier.verify(self.token)

    def test_wrong_secret_is_invalid(self) -> None:
        other = make_settings(JWT_SECRET="another-secret-" + "fedcba9876543210" * 4)
        token = create_access_token("u1", "user", other, now=self.clock.now)
        with self.assertRaises(InvalidToken):
            self.verifier.verify(token)

    def test_wrong_secret_wins_over_expiry(self) -> None:
        other = make_settings(JWT_SECRET="another-secret-" + "fedcba9876543210" * 4)
        token = create_access_token("u1", "user", other, now=self.clock.now - timedelta(days=1))
        with self.assertRaises(InvalidToken):
            self.verifier.verify(token)

    def test_malformed_token_is_invalid(self) -> None:
        for token in ("invalid.token.here", "", "abc"):
            with self.assertRaises(InvalidToken):
                self.verifier.verify(token)

    def test_missing_role_claim_is_invalid(self) -> None:
        token = jwt.encode(
            {"id": "u1", "iat": self.clock.now, "exp": self.clock.now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            self.verifier.verify(token)

    def test_other_algorithm_is_invalid(self) -> None:
        token = jwt.encode(
            {"id": "u1", "role": "user", "iat": self.clock.now, "exp": self.clock.now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS512",
        )
        with self.assertRaises(InvalidToken):
            self.verifier.verify(token)


class TestRoleGate(unittest.TestCase):
    """The gate checks header prefix, then token, then role; first failure wins."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.settings = make_settings()
        self.verifier = TokenVerifier(self.settings, clock=self.clock)
        self.admin_gate = make_gate(self.verifier, [Role.ADMIN])
        self.any_gate = make_gate(self.verifier, {Role.USER, Role.ADMIN})
        self.user_token = create_access_token("u1", "user", self.settings, now=self.clock.now)
        self.admin_token = create_access_token("u2", "admin", self.settings, now=self.clock.now)

    def test_missing_header_is_missing_token(self) -> None:
        with self.assertRaises(MissingToken) as ctx:
            self.admin_gate(None)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Authorization header must start with Bearer")

    def test_header_without_bearer_prefix_is_missing_token_not_invalid(self) -> None:
        for header in ("InvalidFormat", self.admin_token, f"bearer {self.admin_token}", f"Token {self.admin_token}", "Bearer"):
            with self.assertRaises(MissingToken):
                self.admin_gate(header)

    def test_garbage_after_prefix_is_invalid_token(self) -> None:
        with self.assertRaises(InvalidToken):
            self.admin_gate("Bearer invalid.token.here")

    def test_user_token_forbidden_on_admin_gate(self) -> None:
        with self.assertRaises(Forbidden) as ctx:
            self.admin_gate(f"Bearer {self.user_token}")
        self.assertEqual(ctx.exception.status_code, 403)

    def test_user_token_accepted_by_user_or_admin_gate(self) -> None:
        user = self.any_gate(f"Bearer {self.user_token}")
        self.assertEqual((user.id, user.role), ("u1", "user"))

    def test_admin_token_accepted_by_admin_gate(self) -> None:
        user = self.admin_gate(f"Bearer {self.admin_token}")
        self.assertEqual((user.id, user.role), ("u2", "admin"))

    def test_expired_token_rejected_even_with_valid_signature(self) -> None:
        self.clock.advance(hours=2)
        with self.assertRaises(ExpiredToken):
            self.admin_gate(f"Bearer {self.admin_token}")

    def test_expired_token_with_wrong_role_reports_expiry(self) -> None:
        self.clock.advance(hours=2)
        with self.assertRaises(ExpiredToken):
            self.admin_gate(f"Bearer {self.user_token}")

    def test_unexpected_verifier_error_is_internal_error(self) -> None:
        verifier = MagicMock()
        verifier.verify.side_effect = RuntimeError("boom")
        gate = RoleGate(verifier, [Role.ADMIN])
        with self.assertLogs("rbac_api.services.auth", level="ERROR"):
            with self.assertRaises(InternalError) as ctx:
                gate(f"Bearer {self.admin_token}")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_gate_accepts_role_strings(self) -> None:
        gate = make_gate(self.verifier, ["admin"])
        self.assertEqual(gate.allowed_roles, frozenset({"admin"}))

    def test_unknown_role_name_rejected_at_construction(self) -> None:
        with self.assertRaises(ValueError):
            make_gate(self.verifier, ["superuser"])


if __name__ == "__main__":
    unittest.main()
