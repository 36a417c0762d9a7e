import logging

import pytest

from facet_toolkit.config import ConfigManager
from facet_toolkit.logging_config import setup_logging

SELECTION_LOGGER = "facet_toolkit.core.services.selection_service"
TREE_LOGGER = "facet_toolkit.core.services.tree_build_service"


@pytest.fixture(autouse=True)
def restore_logging(tmp_path, monkeypatch):
    """Run each test with its own log dir and undo dictConfig afterwards."""
    monkeypatch.setenv("FACET_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("FACET_DEBUG_SELECTION", raising=False)
    monkeypatch.delenv("FACET_DEBUG_MODULES", raising=False)

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    touched = [logging.getLogger(n) for n in (SELECTION_LOGGER, TREE_LOGGER, "custom.module")]
    saved = [(lg, lg.handlers[:], lg.level, lg.propagate) for lg in touched]
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for lg, handlers, level, propagate in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


def test_log_file_goes_to_configured_dir(tmp_path):
    setup_logging()
    logging.getLogger("facet_toolkit.test").warning("hello file")

    log_file = tmp_path / "logs" / "facet.log"
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert log_file.exists()
    assert "hello file" in log_file.read_text(encoding="utf-8")


def test_packaged_levels_are_applied():
    setup_logging()

    assert logging.getLogger(TREE_LOGGER).level == logging.INFO


def test_debug_selection_override(monkeypatch):
    monkeypatch.setenv("FACET_DEBUG_SELECTION", "true")
    setup_logging()

    assert logging.getLogger(SELECTION_LOGGER).level == logging.DEBUG
    assert logging.getLogger(TREE_LOGGER).level == logging.DEBUG


def test_debug_modules_override(monkeypatch):
    monkeypatch.setenv("FACET_DEBUG_MODULES", " custom.module , ")
    setup_logging()

    assert logging.getLogger("custom.module").level == logging.DEBUG


def test_invalid_config_falls_back_to_minimal(tmp_path):
    user_dir = tmp_path / "user_config"
    user_dir.mkdir()
    (user_dir / "logging.yml").write_text(
        "handlers:\n  console:\n    class: no.such.Handler\n", encoding="utf-8"
    )
    ConfigManager.reset_instance()

    setup_logging()

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert [type(h) for h in root.handlers] == [logging.StreamHandler]
