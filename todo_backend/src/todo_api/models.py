from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, TypedDict

# fromisoformat before 3.11 only takes 3 or 6 fraction digits
_FRACTION = re.compile(r"\.(\d+)(?=$|[+-])")


# PUBLIC_INTERFACE
class TodoRecord(TypedDict):
    """
    The in-memory shape of a Todo item as held by the data store.

    Fields:
    - id: UUID text, assigned at creation and never changed
    - title: Short title (1..200 chars, enforced by the service layer)
    - description: Optional detailed description
    - due_date: Optional calendar date (no time of day)
    - is_completed: Boolean completion flag
    - created_at: UTC creation timestamp
    """

    id: str
    title: str
    description: Optional[str]
    due_date: Optional[date]
    is_completed: bool
    created_at: datetime


# PUBLIC_INTERFACE
def clone_record(record: TodoRecord) -> TodoRecord:
    """Return an independent copy of a record, keeping only the known fields."""
    return {
        "id": record["id"],
        "title": record["title"],
        "description": record.get("description"),
        "due_date": record.get("due_date"),
        "is_completed": bool(record.get("is_completed", False)),
        "created_at": record["created_at"],
    }


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with a trailing 'Z'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    s = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s)
    parsed = datetime.fromisoformat(s)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# PUBLIC_INTERFACE
def to_document(record: TodoRecord) -> Dict[str, Any]:
    """Map a record to its persisted JSON object (camelCase keys)."""
    due = record.get("due_date")
    return {
        "id": record["id"],
        "title": record["title"],
        "description": record.get("description"),
        "dueDate": due.isoformat() if due is not None else None,
        "isCompleted": record["is_completed"],
        "createdAt": format_timestamp(record["created_at"]),
    }


# PUBLIC_INTERFACE
def from_document(doc: Any) -> TodoRecord:
    """
    Build a record from one persisted JSON object.

    Raises:
        ValueError: if the object is missing a required field or a value has
            the wrong type or format.
    """
    if not isinstance(doc, dict):
        raise ValueError("todo entry must be a JSON object")

    todo_id = doc.get("id")
    title = doc.get("title")
    description = doc.get("description")
    due_raw = doc.get("dueDate")
    completed = doc.get("isCompleted", False)
    created_raw = doc.get("createdAt")

    if not isinstance(todo_id, str) or not todo_id:
        raise ValueError("todo entry has no 'id'")
    if not isinstance(title, str):
        raise ValueError(f"todo {todo_id} has no 'title'")
    if description is not None and not isinstance(description, str):
        raise ValueError(f"todo {todo_id} has a non-string 'description'")
    if not isinstance(completed, bool):
        raise ValueError(f"todo {todo_id} has a non-boolean 'isCompleted'")
    if not isinstance(created_raw, str):
        raise ValueError(f"todo {todo_id} has no 'createdAt'")
    if due_raw is not None and not isinstance(due_raw, str):
        raise ValueError(f"todo {todo_id} has a non-string 'dueDate'")

    return {
        "id": todo_id,
        "title": title,
        "description": description,
        "due_date": date.fromisoformat(due_raw) if due_raw is not None else None,
        "is_completed": completed,
        "created_at": parse_timestamp(created_raw),
    }
