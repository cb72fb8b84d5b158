"""User and post stores: repository protocols plus in-memory implementations."""

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter

from rbac_api.schemas.auth import User
from rbac_api.schemas.posts import Post

logger = logging.getLogger(__name__)

_users_adapter = TypeAdapter(list[User])
_posts_adapter = TypeAdapter(list[Post])


class UserRepository(Protocol):
    def find(self, user_id: str) -> User | None: ...

    def list(self) -> list[User]: ...


class PostRepository(Protocol):
    def find(self, post_id: str) -> Post | None: ...

    def list(self) -> list[Post]: ...

    def count(self) -> int: ...

    def remove_by_id(self, post_id: str) -> Post | None: ...


class InMemoryUserRepository:
    """Read-only user store keyed by id."""

    def __init__(self, users: Iterable[User]):
        self._users = {u.id: u for u in users}

    def find(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def list(self) -> list[User]:
        return list(self._users.values())


class InMemoryPostRepository:
    """
    Ordered, mutable post store shared by all requests.

    Every access takes the lock, so a delete is an atomic find-remove-return:
    two concurrent deletes of the same id yield one post and one None.
    """

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)
        self._lock = threading.Lock()

    def find(self, post_id: str) -> Post | None:
        with self._lock:
            for post in self._posts:
                if post.id == post_id:
                    return post
        return None

    def list(self) -> list[Post]:
        """Return a snapshot copy in insertion order."""
        with self._lock:
            return list(self._posts)

    def count(self) -> int:
        with self._lock:
            return len(self._posts)

    def remove_by_id(self, post_id: str) -> Post | None:
        with self._lock:
            for index, post in enumerate(self._posts):
                if post.id == post_id:
                    return self._posts.pop(index)
        return None


def _read_json(path: Path) -> object:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_users(path: Path) -> InMemoryUserRepository:
    """Load and validate the user fixture. Raises on missing or malformed file."""
    users = _users_adapter.validate_python(_read_json(path))
    logger.debug("Loaded %s users from %s", len(users), path)
    return InMemoryUserRepository(users)


def load_posts(path: Path) -> InMemoryPostRepository:
    """Load and validate the post fixture. Raises on missing or malformed file."""
    posts = _posts_adapter.validate_python(_read_json(path))
    logger.debug("Loaded %s posts from %s", len(posts), path)
    return InMemoryPostRepository(posts)
