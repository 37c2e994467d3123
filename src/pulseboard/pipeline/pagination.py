"""Paginator: fixed-size windows over the filtered events."""

from collections.abc import Sequence
from typing import TypeVar

from pulseboard.models import PageOverflowPolicy

T = TypeVar("T")


def page_count(total: int, page_size: int) -> int:
    """Number of non-empty pages needed for total items."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return -(-max(0, total) // page_size)


def resolve_page_number(
    page_number: int,
    total: int,
    page_size: int,
    policy: PageOverflowPolicy = PageOverflowPolicy.EMPTY,
) -> int:
    """Apply the overflow policy. Page numbers below 1 always become 1."""
    page_number = max(1, page_number)
    if policy == PageOverflowPolicy.CLAMP:
        return min(page_number, max(1, page_count(total, page_size)))
    return page_number


def paginate(filtered: Sequence[T], page_number: int, page_size: int) -> list[T]:
    """
    Slice [(page_number-1)*page_size, page_number*page_size) out of filtered.

    A page past the end is empty rather than an error.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (max(1, page_number) - 1) * page_size
    return list(filtered[start : start + page_size])
