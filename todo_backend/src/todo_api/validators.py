from __future__ import annotations

from datetime import date
from typing import Optional

from .exceptions import FieldValidationError

MAX_TITLE_LENGTH = 200
MAX_PAGE_SIZE = 100


# PUBLIC_INTERFACE
def validate_title(title: Optional[str]) -> str:
    """
    Require a non-blank title of at most MAX_TITLE_LENGTH characters.

    Returns:
        The stripped title.
    """
    if title is None or not title.strip():
        raise FieldValidationError.single("title", "Title is required.")
    s = title.strip()
    if not (1 <= len(s) <= MAX_TITLE_LENGTH):
        raise FieldValidationError.single(
            "title", f"Title must be between 1 and {MAX_TITLE_LENGTH} characters."
        )
    return s


# PUBLIC_INTERFACE
def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD date string. Blank or None yields None.
    """
    if value is None or not value.strip():
        return None
    s = value.strip()
    # date.fromisoformat accepts other ISO forms on newer Pythons
    if len(s) == 10 and s[4] == "-" and s[7] == "-":
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
    raise FieldValidationError.single("dueDate", "DueDate must be in YYYY-MM-DD format.")


# PUBLIC_INTERFACE
def ensure_date_range(due_after: Optional[date], due_before: Optional[date]) -> None:
    """Reject a range whose lower bound is after its upper bound."""
    if due_after is not None and due_before is not None and due_after > due_before:
        raise FieldValidationError.single(
            "dateRange", "dueAfter must be earlier than or equal to dueBefore."
        )


# PUBLIC_INTERFACE
def validate_pagination(page: int, page_size: int) -> None:
    if page < 1:
        raise FieldValidationError.single("page", "Page must be greater than or equal to 1.")
    if page_size < 1:
        raise FieldValidationError.single("pageSize", "PageSize must be greater than or equal to 1.")
    if page_size > MAX_PAGE_SIZE:
        raise FieldValidationError.single(
            "pageSize", f"PageSize must be less than or equal to {MAX_PAGE_SIZE}."
        )
