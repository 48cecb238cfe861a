from __future__ import annotations

import json
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import structlog

from .exceptions import CorruptDataError, DataReadError, DurabilityError
from .models import TodoRecord, clone_record, from_document, to_document

log = structlog.get_logger()


# PUBLIC_INTERFACE
class DataStore:
    """
    Thread-safe todo store backed by a single JSON file.

    The store keeps the whole record list in memory and rewrites the file
    after every mutation: the list is written to a temp file in the same
    directory, which then replaces the target with os.replace. A mutation is
    only applied in memory once that write has succeeded, so memory always
    mirrors the last good file.

    Every public operation, reads included, runs under one mutex.
    Records going in or out are always copies.

    Raises (from the constructor):
        CorruptDataError: the file exists but is not a todo JSON array.
        DataReadError: the file exists but cannot be read, or its directory
            cannot be created.
    """

    def __init__(self, file_path: str) -> None:
        self._path = os.path.abspath(file_path)
        self._lock = threading.Lock()
        self._records: List[TodoRecord] = []
        directory = os.path.dirname(self._path)
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            log.error("Unable to create data directory", path=directory, error=str(e))
            raise DataReadError(f"Unable to create data directory '{directory}'.", self._path) from e
        self._load()

    @property
    def path(self) -> str:
        return self._path

    def read_all(self) -> List[TodoRecord]:
        """Return copies of all records in insertion order."""
        with self._lock:
            return [clone_record(r) for r in self._records]

    def read_by_id(self, todo_id: str) -> Optional[TodoRecord]:
        """Return a copy of the record with this id, or None."""
        with self._lock:
            for record in self._records:
                if record["id"] == todo_id:
                    return clone_record(record)
            return None

    def add(self, record: TodoRecord) -> TodoRecord:
        """
        Append a copy of the record, persist, and return a copy of what was stored.

        A record without an id or created_at gets a new UUID and the current UTC time.
        """
        stored = clone_record(
            {
                **record,
                "id": record.get("id") or str(uuid.uuid4()),
                "created_at": record.get("created_at") or datetime.now(timezone.utc),
            }
        )
        with self._lock:
            self._commit([*self._records, stored])
            return clone_record(stored)

    def update(self, record: TodoRecord) -> Optional[TodoRecord]:
        """
        Replace the record with the same id wholesale.

        Returns None, without writing, if no record has that id.
        """
        stored = clone_record(record)
        with self._lock:
            for idx, existing in enumerate(self._records):
                if existing["id"] == stored["id"]:
                    break
            else:
                return None
            candidate = list(self._records)
            candidate[idx] = stored
            self._commit(candidate)
            return clone_record(stored)

    def remove(self, todo_id: str) -> bool:
        """Remove every record with this id. Returns False, without writing, if none matched."""
        with self._lock:
            remaining = [r for r in self._records if r["id"] != todo_id]
            if len(remaining) == len(self._records):
                return False
            self._commit(remaining)
            return True

    def _commit(self, records: List[TodoRecord]) -> None:
        # Caller holds the lock.
        self._persist(records)
        self._records = records

    def _load(self) -> None:
        if not os.path.exists(self._path):
            log.info("Data file does not exist, creating it", path=self._path)
            self._persist([])
            return

        log.info("Loading existing data", path=self._path)
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
        except UnicodeDecodeError as e:
            log.error("Data file is not valid UTF-8", path=self._path, error=str(e))
            raise CorruptDataError(f"Failed to parse persisted data at '{self._path}'.", self._path) from e
        except OSError as e:
            log.error("Unable to read data file", path=self._path, error=str(e))
            raise DataReadError(f"Unable to read data file '{self._path}'.", self._path) from e

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("top-level JSON value is not an array")
            records = [from_document(doc) for doc in data]
        except ValueError as e:
            log.error("Failed to parse persisted data", path=self._path, error=str(e))
            raise CorruptDataError(f"Failed to parse persisted data at '{self._path}'.", self._path) from e

        self._records = records
        log.info("Loaded todo items from file", path=self._path, count=len(records))

    def _persist(self, records: List[TodoRecord]) -> None:
        directory = os.path.dirname(self._path)
        tmp_path: Optional[str] = None
        log.debug("Persisting todo items", path=self._path, count=len(records))
        try:
            payload = json.dumps([to_document(r) for r in records], indent=2, ensure_ascii=False)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f"{os.path.basename(self._path)}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            log.error("Failed to persist data", path=self._path, error=str(e))
            raise DurabilityError(f"Failed to persist data to '{self._path}'.", self._path) from e
        finally:
            if tmp_path is not None:
                _remove_leftover(tmp_path)


def _remove_leftover(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning("Could not remove temp file", path=path, error=str(e))
