"""Tests for setup_logging."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest
import structlog

from pipeline_console.shared.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_stdout_only_by_default():
    setup_logging(level="WARNING")
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0], RotatingFileHandler)


def test_file_handler_with_rotation(tmp_path):
    log_file = tmp_path / "logs" / "console.log"
    setup_logging(level="INFO", file_path=str(log_file), rotation_max_mb=1, rotation_backups=2)

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024 * 1024
    assert file_handlers[0].backupCount == 2

    logging.getLogger("pipeline_console.test").warning("stage failed")
    file_handlers[0].flush()
    assert "stage failed" in log_file.read_text(encoding="utf-8")


def test_httpx_quiet_unless_debug():
    setup_logging(level="INFO")
    assert logging.getLogger("httpx").level == logging.WARNING
    setup_logging(level="DEBUG")
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_records_carry_service_and_bound_context(tmp_path):
    log_file = tmp_path / "console.log"
    setup_logging(level="INFO", file_path=str(log_file))

    with structlog.contextvars.bound_contextvars(stage="embed", endpoint="embed"):
        logging.getLogger("pipeline_console.test").info("dispatching")
    logging.getLogger("pipeline_console.test").info("idle")
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert records[0]["event"] == "dispatching"
    assert records[0]["stage"] == "embed"
    assert records[0]["service"] == "pipeline-console"
    assert "stage" not in records[1]
