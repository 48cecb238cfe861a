import os

import pytest

from todo_api.health import DEGRADED, HEALTHY, UNHEALTHY, check_filesystem


class TestFilesystemCheck:
    def test_writable_directory_is_healthy(self, tmp_path):
        result = check_filesystem(str(tmp_path / "health" / "todos.json"))
        assert result.status == HEALTHY
        assert os.path.isdir(tmp_path / "health")
        # Probe file is cleaned up
        assert os.listdir(tmp_path / "health") == []

    def test_bare_file_name_is_unhealthy(self):
        result = check_filesystem("todos.json")
        assert result.status == UNHEALTHY
        assert "invalid" in result.description.lower()

    def test_directory_that_cannot_be_created_is_unhealthy(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        result = check_filesystem(str(blocker / "todos.json"))
        assert result.status == UNHEALTHY

    def test_unreadable_data_file_is_degraded(self, tmp_path):
        # A directory in place of the data file cannot be read as a file
        (tmp_path / "todos.json").mkdir()
        result = check_filesystem(str(tmp_path / "todos.json"))
        assert result.status == DEGRADED


class TestHealthEndpoints:
    @pytest.mark.parametrize("path", ["/health", "/health/ready", "/health/live"])
    def test_endpoints_report_healthy(self, client, path):
        res = client.get(path)
        assert res.status_code == 200
        body = res.json()
        assert body["status"] == HEALTHY
        assert body["checks"][0]["name"] == "filesystem"

    def test_unhealthy_is_503(self, client, data_file, monkeypatch):
        def refuse(*args, **kwargs):
            raise PermissionError("read-only file system")

        monkeypatch.setattr("todo_api.health.open", refuse, raising=False)
        res = client.get("/health")
        assert res.status_code == 503
        assert res.json()["status"] == UNHEALTHY
