from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

import structlog

from . import validators
from .exceptions import FieldValidationError
from .models import TodoRecord
from .repositories import TodoRepository
from .utils import page_slice, total_pages

log = structlog.get_logger()

SORT_FIELDS = {"title", "dueDate", "createdAt"}
SORT_ORDERS = {"asc", "desc"}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing todos.
    """
    is_completed: Optional[bool] = None
    overdue: Optional[bool] = None
    due_before: Optional[date] = None
    due_after: Optional[date] = None
    sort_by: Optional[str] = None  # allowed: title, dueDate, createdAt
    order: str = "asc"  # allowed: asc, desc
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class Page:
    """One page of list results plus the counts needed to navigate."""
    items: List[TodoRecord]
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


def _sort_key(field: str) -> Callable[[TodoRecord], object]:
    if field == "title":
        return lambda r: r["title"].casefold()
    if field == "dueDate":
        # Missing dates compare greatest: last ascending, first descending.
        return lambda r: (r["due_date"] is None, r["due_date"] or date.min)
    return lambda r: r["created_at"]


# PUBLIC_INTERFACE
class TodoService:
    """
    Validation, filtering, sorting and pagination on top of a TodoRepository.

    Not-found is reported as None/False; invalid input raises
    FieldValidationError.
    """

    def __init__(self, repo: TodoRepository, clock: Callable[[], datetime] = _utc_now) -> None:
        self._repo = repo
        self._clock = clock

    def create(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> TodoRecord:
        clean_title = validators.validate_title(title)
        due = validators.parse_date(due_date)
        record: TodoRecord = {
            "id": str(uuid.uuid4()),
            "title": clean_title,
            "description": _clean_description(description),
            "due_date": due,
            "is_completed": False,
            "created_at": self._clock(),
        }
        created = self._repo.add(record)
        log.info("Todo created", todo_id=created["id"])
        return created

    def list(self, query: Optional[ListQuery] = None) -> Page:
        q = query or ListQuery()
        validators.ensure_date_range(q.due_after, q.due_before)
        validators.validate_pagination(q.page, q.page_size)
        if q.sort_by is not None and q.sort_by not in SORT_FIELDS:
            raise FieldValidationError.single(
                "sortBy", f"SortBy must be one of: {', '.join(sorted(SORT_FIELDS))}."
            )
        if q.order not in SORT_ORDERS:
            raise FieldValidationError.single("order", "Order must be 'asc' or 'desc'.")

        items = self._repo.get_all()
        today = self._clock().date()

        # Filtering
        if q.is_completed is not None:
            items = [t for t in items if t["is_completed"] == q.is_completed]
        if q.overdue:
            items = [
                t for t in items
                if t["due_date"] is not None and t["due_date"] < today and not t["is_completed"]
            ]
        if q.due_before is not None:
            items = [t for t in items if t["due_date"] is not None and t["due_date"] <= q.due_before]
        if q.due_after is not None:
            items = [t for t in items if t["due_date"] is not None and t["due_date"] >= q.due_after]

        # Sorting
        if q.sort_by is not None:
            items = sorted(items, key=_sort_key(q.sort_by), reverse=q.order == "desc")

        # Pagination
        total = len(items)
        return Page(
            items=page_slice(items, q.page, q.page_size),
            page=q.page,
            page_size=q.page_size,
            total_count=total,
            total_pages=total_pages(total, q.page_size),
        )

    def get(self, todo_id: str) -> Optional[TodoRecord]:
        return self._repo.get_by_id(todo_id)

    def update(
        self,
        todo_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> Optional[TodoRecord]:
        """
        Apply the provided fields to an existing todo and write the whole
        record back. At least one field must be given.
        """
        existing = self._repo.get_by_id(todo_id)
        if existing is None:
            return None

        has_changes = False
        if title is not None:
            existing["title"] = validators.validate_title(title)
            has_changes = True
        if description is not None:
            existing["description"] = _clean_description(description)
            has_changes = True
        if due_date is not None:
            # An empty string clears the due date
            existing["due_date"] = validators.parse_date(due_date)
            has_changes = True

        if not has_changes:
            raise FieldValidationError.single("request", "Provide at least one field to update.")

        return self._repo.update(existing)

    def set_completed(self, todo_id: str, completed: bool) -> Optional[TodoRecord]:
        existing = self._repo.get_by_id(todo_id)
        if existing is None:
            return None
        existing["is_completed"] = completed
        return self._repo.update(existing)

    def delete(self, todo_id: str) -> bool:
        deleted = self._repo.delete(todo_id)
        if deleted:
            log.info("Todo deleted", todo_id=todo_id)
        return deleted


def _clean_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    s = value.strip()
    return s or None
