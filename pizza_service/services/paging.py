"""
Pagination helpers shared by the listing queries.
"""
from typing import List, Tuple, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")

LIKE_ESCAPE = "\\"


def get_offset(page: int, limit: int) -> int:
    """Row offset of a 1-based page."""
    return max(page - 1, 0) * limit


def like_pattern(name_filter: str) -> str:
    """
    Turn a `*` wildcard filter into a SQL LIKE pattern.

    `%` and `_` in the filter match literally; use with `escape=LIKE_ESCAPE`.
    """
    escaped = (
        (name_filter or "*")
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return escaped.replace("*", "%")


def fetch_page(query: Query, page: int, limit: int) -> Tuple[List[T], bool]:
    """
    Fetch a 0-based page of results.

    One row beyond `limit` is requested to find out whether more pages follow.

    Returns:
        (rows, more)
    """
    rows = query.offset(max(page, 0) * limit).limit(limit + 1).all()
    more = len(rows) > limit
    return rows[:limit], more
