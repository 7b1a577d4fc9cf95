"""Offset arithmetic for the paginated comment threads of a movie."""
from __future__ import annotations

from .errors import PreconditionError

COMMENTS_PAGE_SIZE = 30


def comments_offset(page: int, page_size: int = COMMENTS_PAGE_SIZE) -> int:
    """Number of comments to skip to reach the 1-based ``page``."""

    if page < 1:
        raise PreconditionError(f"page must be at least 1, got {page}")
    return (page - 1) * page_size


def comments_pagination(
    page: int, total_count: int, page_size: int = COMMENTS_PAGE_SIZE
) -> tuple[int, bool]:
    """Return ``(offset, has_more)`` for ``page`` of a thread with ``total_count`` comments.

    ``has_more`` uses a strict comparison: when exactly ``page_size`` comments
    remain from ``offset`` onwards, the requested page is the last one.
    """

    offset = comments_offset(page, page_size)
    return offset, total_count - offset > page_size
