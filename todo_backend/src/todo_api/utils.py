from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


# PUBLIC_INTERFACE
def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed for `total` items (ceiling division, 0 when empty)."""
    if page_size <= 0:
        return 0
    return -(-max(total, 0) // page_size)


# PUBLIC_INTERFACE
def page_slice(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """
    Return the items on a 1-based page.

    Args:
        items: The full, already filtered and sorted sequence.
        page: 1-based page number.
        page_size: Maximum number of items per page.
    """
    start = (max(page, 1) - 1) * max(page_size, 0)
    return list(items[start:start + max(page_size, 0)])
