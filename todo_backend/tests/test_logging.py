import json
import logging

import structlog

from todo_api.logging_config import FILE_HANDLER_NAME, setup_logging


def file_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == FILE_HANDLER_NAME]


class TestFileLogging:
    def test_events_are_written_to_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "todo-api.log"
        try:
            setup_logging("INFO", "json", str(log_file))
            structlog.get_logger().info("file logging works", answer=42)
            for handler in file_handlers():
                handler.flush()

            lines = log_file.read_text(encoding="utf-8").splitlines()
            events = [json.loads(line) for line in lines]
            assert any(e["event"] == "file logging works" and e["answer"] == 42 for e in events)
        finally:
            for handler in file_handlers():
                logging.getLogger().removeHandler(handler)
                handler.close()
            structlog.reset_defaults()

    def test_reconfiguring_replaces_file_handler(self, tmp_path):
        try:
            setup_logging("INFO", "json", str(tmp_path / "first.log"))
            setup_logging("INFO", "json", str(tmp_path / "second.log"))
            handlers = file_handlers()
            assert len(handlers) == 1
            assert handlers[0].baseFilename.endswith("second.log")

            setup_logging("INFO", "console")
            assert file_handlers() == []
        finally:
            for handler in file_handlers():
                logging.getLogger().removeHandler(handler)
                handler.close()
            structlog.reset_defaults()
