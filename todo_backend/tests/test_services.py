from datetime import date, datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from todo_api.exceptions import FieldValidationError
from todo_api.repositories import FileTodoRepository, TodoRepository
from todo_api.services import ListQuery, TodoService
from todo_api.utils import page_slice, total_pages

from conftest import make_record

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def fixed_clock():
    return NOW


@pytest.fixture()
def service(store):
    return TodoService(FileTodoRepository(store), clock=fixed_clock)


@pytest.fixture()
def seeded(store, service):
    """Four todos covering overdue, completed, future and undated cases."""
    records = [
        make_record(title="banana", due_date=TODAY - timedelta(days=2), created_at=NOW - timedelta(days=4)),
        make_record(title="Apple", due_date=TODAY - timedelta(days=1), is_completed=True,
                    created_at=NOW - timedelta(days=3)),
        make_record(title="cherry", due_date=TODAY + timedelta(days=10), created_at=NOW - timedelta(days=2)),
        make_record(title="date", due_date=None, created_at=NOW - timedelta(days=1)),
    ]
    for r in records:
        store.add(r)
    return records


def titles(page):
    return [t["title"] for t in page.items]


class TestCreate:
    def test_create_trims_and_defaults(self, service, store):
        created = service.create("  ship feature  ", "  finish writing docs ", "2025-01-01")
        assert created["title"] == "ship feature"
        assert created["description"] == "finish writing docs"
        assert created["due_date"] == date(2025, 1, 1)
        assert created["is_completed"] is False
        assert created["created_at"] == NOW
        assert store.read_by_id(created["id"]) == created

    def test_blank_description_becomes_none(self, service):
        assert service.create("t", "   ")["description"] is None

    def test_blank_title_never_reaches_repository(self):
        repo = MagicMock(spec=TodoRepository)
        service = TodoService(repo, clock=fixed_clock)
        with pytest.raises(FieldValidationError):
            service.create("   ")
        repo.add.assert_not_called()

    def test_bad_due_date_rejected(self, service):
        with pytest.raises(FieldValidationError) as exc_info:
            service.create("ok", due_date="tomorrow")
        assert "dueDate" in exc_info.value.errors


class TestList:
    def test_default_keeps_insertion_order(self, service, seeded):
        page = service.list()
        assert titles(page) == ["banana", "Apple", "cherry", "date"]
        assert page.total_count == 4
        assert page.total_pages == 1

    def test_filter_completed(self, service, seeded):
        assert titles(service.list(ListQuery(is_completed=True))) == ["Apple"]
        assert titles(service.list(ListQuery(is_completed=False))) == ["banana", "cherry", "date"]

    def test_overdue_excludes_completed_and_undated(self, service, seeded):
        page = service.list(ListQuery(overdue=True, sort_by="dueDate"))
        assert titles(page) == ["banana"]
        assert page.total_count == 1

    def test_due_range_is_inclusive(self, service, seeded):
        page = service.list(ListQuery(due_after=TODAY - timedelta(days=1), due_before=TODAY + timedelta(days=10)))
        assert titles(page) == ["Apple", "cherry"]

    def test_inverted_range_rejected(self, service, seeded):
        with pytest.raises(FieldValidationError):
            service.list(ListQuery(due_after=TODAY, due_before=TODAY - timedelta(days=1)))

    def test_sort_by_title_is_case_insensitive(self, service, seeded):
        assert titles(service.list(ListQuery(sort_by="title"))) == ["Apple", "banana", "cherry", "date"]
        assert titles(service.list(ListQuery(sort_by="title", order="desc"))) == ["date", "cherry", "banana", "Apple"]

    def test_missing_due_dates_last_ascending_first_descending(self, service, seeded):
        asc = titles(service.list(ListQuery(sort_by="dueDate")))
        desc = titles(service.list(ListQuery(sort_by="dueDate", order="desc")))
        assert asc == ["banana", "Apple", "cherry", "date"]
        assert desc == ["date", "cherry", "Apple", "banana"]

    def test_sort_by_created_at(self, service, seeded):
        assert titles(service.list(ListQuery(sort_by="createdAt", order="desc"))) == [
            "date", "cherry", "Apple", "banana"
        ]

    def test_unknown_sort_field_rejected(self, service):
        with pytest.raises(FieldValidationError) as exc_info:
            service.list(ListQuery(sort_by="priority"))
        assert "sortBy" in exc_info.value.errors

    def test_pagination(self, service, store):
        for i in range(15):
            store.add(make_record(title=f"Task {i:02d}"))

        first = service.list(ListQuery(page=1, page_size=10))
        second = service.list(ListQuery(page=2, page_size=10))
        beyond = service.list(ListQuery(page=3, page_size=10))

        assert len(first.items) == 10
        assert titles(second) == [f"Task {i:02d}" for i in range(10, 15)]
        assert beyond.items == []
        assert first.total_count == second.total_count == 15
        assert first.total_pages == 2
        assert first.has_next_page and not first.has_previous_page
        assert second.has_previous_page and not second.has_next_page

    def test_invalid_page_size_rejected(self, service):
        with pytest.raises(FieldValidationError):
            service.list(ListQuery(page_size=101))


class TestUpdateAndComplete:
    def test_update_applies_only_given_fields(self, service):
        created = service.create("initial", "keep me", "2025-07-01")
        updated = service.update(created["id"], title="  renamed ")
        assert updated["title"] == "renamed"
        assert updated["description"] == "keep me"
        assert updated["due_date"] == date(2025, 7, 1)
        assert updated["created_at"] == created["created_at"]

    def test_empty_due_date_clears_it(self, service):
        created = service.create("dated", due_date="2025-07-01")
        assert service.update(created["id"], due_date="")["due_date"] is None

    def test_update_without_fields_rejected(self, service):
        created = service.create("initial")
        with pytest.raises(FieldValidationError) as exc_info:
            service.update(created["id"])
        assert list(exc_info.value.errors) == ["request"]

    def test_update_missing_returns_none(self):
        repo = MagicMock(spec=TodoRepository)
        repo.get_by_id.return_value = None
        service = TodoService(repo, clock=fixed_clock)
        assert service.update("missing", title="noop") is None
        repo.update.assert_not_called()

    def test_set_completed_round_trip(self, service):
        created = service.create("toggle me")
        assert service.set_completed(created["id"], True)["is_completed"] is True
        assert service.get(created["id"])["is_completed"] is True
        assert service.set_completed(created["id"], False)["is_completed"] is False

    def test_set_completed_missing_returns_none(self, service):
        assert service.set_completed("missing", True) is None


class TestDelete:
    def test_delete_existing_then_missing(self, service):
        created = service.create("to delete")
        assert service.delete(created["id"]) is True
        assert service.delete(created["id"]) is False
        assert service.get(created["id"]) is None


class TestPaginationHelpers:
    @pytest.mark.parametrize("total,size,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (15, 7, 3)])
    def test_total_pages(self, total, size, expected):
        assert total_pages(total, size) == expected

    def test_page_slice(self):
        items = list(range(7))
        assert page_slice(items, 1, 3) == [0, 1, 2]
        assert page_slice(items, 3, 3) == [6]
        assert page_slice(items, 4, 3) == []
