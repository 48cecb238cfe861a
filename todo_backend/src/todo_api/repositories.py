from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import TodoRecord
from .store import DataStore


# PUBLIC_INTERFACE
class TodoRepository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def get_all(self) -> List[TodoRecord]:
        """Return every TodoRecord in storage order."""

    @abstractmethod
    def get_by_id(self, todo_id: str) -> Optional[TodoRecord]:
        """Return a TodoRecord by id, or None if not found."""

    @abstractmethod
    def add(self, record: TodoRecord) -> TodoRecord:
        """Store a new TodoRecord and return the stored copy."""

    @abstractmethod
    def update(self, record: TodoRecord) -> Optional[TodoRecord]:
        """Replace the TodoRecord with the same id. Return it, or None if not found."""

    @abstractmethod
    def delete(self, todo_id: str) -> bool:
        """Delete a TodoRecord by id. Return True if deleted, False if not found."""


class FileTodoRepository(TodoRepository):
    """
    Repository over a shared DataStore.
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def get_all(self) -> List[TodoRecord]:
        return self._store.read_all()

    def get_by_id(self, todo_id: str) -> Optional[TodoRecord]:
        return self._store.read_by_id(todo_id)

    def add(self, record: TodoRecord) -> TodoRecord:
        return self._store.add(record)

    def update(self, record: TodoRecord) -> Optional[TodoRecord]:
        return self._store.update(record)

    def delete(self, todo_id: str) -> bool:
        return self._store.remove(todo_id)
