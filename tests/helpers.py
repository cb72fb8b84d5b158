"""Shared builders for tests: settings, stores and a controllable clock."""

from datetime import UTC, datetime, timedelta

from rbac_api.core.config import Settings
from rbac_api.schemas.auth import Role, User
from rbac_api.schemas.posts import Post
from rbac_api.services.repository import InMemoryPostRepository, InMemoryUserRepository

TEST_SECRET = "test-secret-" + "0123456789abcdef" * 4
START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def make_settings(**overrides: object) -> Settings:
    """Build Settings without reading .env."""
    values: dict[str, object] = {"JWT_SECRET": TEST_SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_users() -> InMemoryUserRepository:
    return InMemoryUserRepository(
        [User(id="u1", role=Role.USER), User(id="u2", role=Role.ADMIN)]
    )


def make_posts(count: int = 3) -> InMemoryPostRepository:
    posts = [
        Post(id=str(i), title=f"Post {i}", content=f"Content {i}")
        for i in range(1, count + 1)
    ]
    return InMemoryPostRepository(posts)


class FakeClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)
