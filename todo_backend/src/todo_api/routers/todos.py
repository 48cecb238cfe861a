from __future__ import annotations

from datetime import date
from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from ..schemas import ErrorResponse, PaginatedResponse, TodoCreate, TodoOut, TodoUpdate
from ..services import ListQuery, TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_NOT_FOUND = {"description": "Todo not found"}
_INVALID = {"model": ErrorResponse, "description": "Validation error"}


def get_service(request: Request) -> TodoService:
    """
    Dependency returning the TodoService built at application startup.
    """
    return request.app.state.todo_service


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new todo item with a title, optional description and optional due date.",
    responses={400: _INVALID},
)
def create_todo(
    payload: TodoCreate, response: Response, service: TodoService = Depends(get_service)
) -> TodoOut:
    created = service.create(payload.title, payload.description, payload.due_date)
    response.headers["Location"] = f"/todos/{created['id']}"
    return TodoOut.from_record(created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=PaginatedResponse,
    summary="List Todos",
    description=(
        "List todos with optional filters, sorting and pagination.\n\n"
        "Query parameters:\n"
        "- isCompleted: filter by completion status\n"
        "- overdue: only items due before today that are not completed\n"
        "- dueBefore / dueAfter: inclusive due date bounds (YYYY-MM-DD)\n"
        "- sortBy: title, dueDate or createdAt; omitted keeps insertion order\n"
        "- order: asc (default) or desc\n"
        "- page: 1-based page number (default 1)\n"
        "- pageSize: items per page, 1..100 (default 10)"
    ),
    responses={400: _INVALID},
)
def list_todos(
    is_completed: Optional[bool] = Query(None, alias="isCompleted", description="Filter by completion status"),
    overdue: Optional[bool] = Query(None, description="Only overdue, incomplete items"),
    due_before: Optional[date] = Query(None, alias="dueBefore", description="Due on or before this date"),
    due_after: Optional[date] = Query(None, alias="dueAfter", description="Due on or after this date"),
    sort_by: Optional[Literal["title", "dueDate", "createdAt"]] = Query(
        None, alias="sortBy", description="Field to sort by"
    ),
    order: Literal["asc", "desc"] = Query("asc", description="Sort direction"),
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(10, alias="pageSize", description="Items per page (1..100)"),
    service: TodoService = Depends(get_service),
) -> PaginatedResponse:
    result = service.list(
        ListQuery(
            is_completed=is_completed,
            overdue=overdue,
            due_before=due_before,
            due_after=due_after,
            sort_by=sort_by,
            order=order,
            page=page,
            page_size=page_size,
        )
    )
    return PaginatedResponse.from_page(result)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single todo item by ID.",
    responses={404: _NOT_FOUND},
)
def get_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> TodoOut:
    item = service.get(str(todo_id))
    if item is None:
        raise _not_found()
    return TodoOut.from_record(item)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Update the title, description or due date of a todo item. "
        "At least one field must be provided; omitted fields keep their value."
    ),
    responses={400: _INVALID, 404: _NOT_FOUND},
)
def update_todo(
    todo_id: UUID, payload: TodoUpdate, service: TodoService = Depends(get_service)
) -> TodoOut:
    updated = service.update(str(todo_id), payload.title, payload.description, payload.due_date)
    if updated is None:
        raise _not_found()
    return TodoOut.from_record(updated)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/complete",
    response_model=TodoOut,
    summary="Complete Todo",
    description="Mark a todo item as completed.",
    responses={404: _NOT_FOUND},
)
def complete_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> TodoOut:
    updated = service.set_completed(str(todo_id), True)
    if updated is None:
        raise _not_found()
    return TodoOut.from_record(updated)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/incomplete",
    response_model=TodoOut,
    summary="Reopen Todo",
    description="Mark a todo item as incomplete.",
    responses={404: _NOT_FOUND},
)
def incomplete_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> TodoOut:
    updated = service.set_completed(str(todo_id), False)
    if updated is None:
        raise _not_found()
    return TodoOut.from_record(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Permanently delete a todo item by ID.",
    responses={404: _NOT_FOUND},
)
def delete_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> Response:
    if not service.delete(str(todo_id)):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
