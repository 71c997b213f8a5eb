"""Logging setup and JSON loading."""

import logging

import pytest
from rich.logging import RichHandler

from vmplan.utils import load_json, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_rich_handler(root_logger, monkeypatch):
    monkeypatch.setenv("VMPLAN_LOG_LEVEL", "debug")
    setup_logging()
    assert [type(h) for h in root_logger.handlers] == [RichHandler]
    assert root_logger.level == logging.DEBUG
    assert logging.getLogger("botocore").level == logging.WARNING


def test_setup_logging_replaces_previous_handlers(root_logger):
    setup_logging("WARNING")
    setup_logging(logging.INFO)
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO


def test_load_json_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit):
        load_json(tmp_path / "missing.json")
