from __future__ import annotations

from typing import Dict, List, Mapping, Sequence


class TodoApiError(Exception):
    """Base class for errors raised by the todo API."""


class StoreError(TodoApiError):
    """Base class for data store failures."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


# PUBLIC_INTERFACE
class CorruptDataError(StoreError):
    """The persisted data file exists but is not a valid todo document."""


# PUBLIC_INTERFACE
class DataReadError(StoreError):
    """The persisted data file exists but could not be opened or read."""


# PUBLIC_INTERFACE
class DataDirectoryNotWritableError(StoreError):
    """The data directory cannot be created or written to."""


# PUBLIC_INTERFACE
class DurabilityError(StoreError):
    """
    Writing the data file failed during a mutation.

    The previous file content is left in place and the store's in-memory
    state is rolled back to it.
    """


# PUBLIC_INTERFACE
class FieldValidationError(TodoApiError):
    """
    Input validation failure carrying a field -> messages map.

    Usage:
        raise FieldValidationError.single("title", "Title is required.")
    """

    def __init__(self, errors: Mapping[str, Sequence[str]]) -> None:
        super().__init__("One or more validation errors occurred.")
        self.errors: Dict[str, List[str]] = {k: list(v) for k, v in errors.items()}

    @classmethod
    def single(cls, field: str, message: str) -> "FieldValidationError":
        return cls({field: [message]})
