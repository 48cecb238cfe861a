"""Shared test fixtures.

Every test gets its own data file under pytest's tmp_path so nothing touches
the real ./data directory.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.models import TodoRecord
from todo_api.settings import Settings
from todo_api.store import DataStore


def make_record(
    title: str = "Test Task",
    description: Optional[str] = None,
    due_date: Optional[date] = None,
    is_completed: bool = False,
    created_at: Optional[datetime] = None,
    todo_id: Optional[str] = None,
) -> TodoRecord:
    return {
        "id": todo_id or str(uuid.uuid4()),
        "title": title,
        "description": description,
        "due_date": due_date,
        "is_completed": is_completed,
        "created_at": created_at or datetime.now(timezone.utc),
    }


@pytest.fixture()
def data_file(tmp_path):
    """Path of a not-yet-existing data file in a not-yet-existing directory."""
    return str(tmp_path / "data" / "todos.json")


@pytest.fixture()
def store(data_file):
    return DataStore(data_file)


@pytest.fixture()
def settings(data_file):
    return Settings(data_path=data_file, cors_allow_origins=["*"])


@pytest.fixture()
def client(settings):
    """A TestClient with the lifespan (and therefore the data store) running."""
    with TestClient(create_app(settings)) as c:
        yield c
