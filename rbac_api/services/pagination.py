"""Page/limit parsing and slicing for the public post feed."""

import math
from collections.abc import Sequence
from typing import NamedTuple, TypeVar

T = TypeVar("T")


class Page(NamedTuple):
    items: list
    current_page: int
    total_pages: int
    total_items: int


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query value; anything unparsable or below 1 falls back to default."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def paginate(items: Sequence[T], page: int, limit: int) -> Page:
    """Return items [(page-1)*limit, page*limit) with page metadata. page, limit >= 1."""
    start = (page - 1) * limit
    return Page(
        items=list(items[start:start + limit]),
        current_page=page,
        total_pages=math.ceil(len(items) / limit),
        total_items=len(items),
    )
