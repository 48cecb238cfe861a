from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import TodoRecord
from .services import Page

_CAMEL = dict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Field rules (title length, date format) are enforced by the service so the
    same checks apply to every caller.
    """

    model_config = ConfigDict(
        **_CAMEL,
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "dueDate": "2025-02-01",
            }
        },
    )

    title: str = Field(..., description="Short title for the todo item (1..200 characters)")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    due_date: Optional[str] = Field(default=None, description="Optional due date in YYYY-MM-DD format")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    All fields are optional but at least one must be provided.
    """

    model_config = ConfigDict(
        **_CAMEL,
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "dueDate": "2025-02-02",
            }
        },
    )

    title: Optional[str] = Field(default=None, description="New title (1..200 characters)")
    description: Optional[str] = Field(default=None, description="New description")
    due_date: Optional[str] = Field(
        default=None, description="New due date in YYYY-MM-DD format; an empty string clears it"
    )


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        **_CAMEL,
        json_schema_extra={
            "example": {
                "id": "0b7d5c8e-8a39-4d6e-9f0e-5e0f3b1f2a11",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "dueDate": "2025-02-01",
                "isCompleted": False,
                "createdAt": "2025-01-25T10:15:30.123456Z",
            }
        },
    )

    id: UUID = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    due_date: Optional[date] = Field(default=None, description="Due date (YYYY-MM-DD)")
    is_completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="UTC creation timestamp")

    @classmethod
    def from_record(cls, record: TodoRecord) -> "TodoOut":
        return cls(
            id=UUID(record["id"]),
            title=record["title"],
            description=record["description"],
            due_date=record["due_date"],
            is_completed=record["is_completed"],
            created_at=record["created_at"],
        )


class PaginatedResponse(BaseModel):
    """
    Envelope for paginated list responses.
    """

    model_config = ConfigDict(**_CAMEL)

    items: List[TodoOut] = Field(..., description="Todo items on this page")
    page: int = Field(..., description="1-based page number")
    page_size: int = Field(..., description="Maximum items per page")
    total_count: int = Field(..., description="Number of items matching the query")
    total_pages: int = Field(..., description="Number of pages for the query")
    has_previous_page: bool = Field(..., description="Whether a previous page exists")
    has_next_page: bool = Field(..., description="Whether a next page exists")

    @classmethod
    def from_page(cls, page: Page) -> "PaginatedResponse":
        return cls(
            items=[TodoOut.from_record(r) for r in page.items],
            page=page.page,
            page_size=page.page_size,
            total_count=page.total_count,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
        )


class ErrorResponse(BaseModel):
    """
    Body returned for validation (400) and server (500) errors.
    """
    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human readable summary")
    errors: Optional[Dict[str, List[str]]] = Field(
        default=None, description="Field name -> validation messages"
    )
