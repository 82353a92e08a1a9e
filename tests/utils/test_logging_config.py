"""
Tests for the logging setup helpers.
"""

import logging
import logging.handlers

import pytest

from melodymind.utils import logging_config


@pytest.fixture
def reset_logging(monkeypatch):
    monkeypatch.setattr(logging_config, "_logger_instance", None)
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    for handler in root.handlers:
        handler.close()
    for prefix in logging_config.MelodyMindLogger.COMPONENT_LOGS:
        component = logging.getLogger(prefix)
        for handler in component.handlers:
            handler.close()
        component.handlers.clear()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


class TestLoggingConfig:

    def test_get_logger_before_setup(self, reset_logging):
        with pytest.raises(RuntimeError, match="Logging not setup"):
            logging_config.get_logger("melodymind.test")

    def test_helpers_are_noops_before_setup(self, reset_logging):
        logging_config.log_performance("op", 0.1)
        logging_config.log_api_request("POST", "https://example", 200, 0.2)

    def test_setup_creates_log_files(self, reset_logging, tmp_path):
        instance = logging_config.setup_logging(
            log_dir=str(tmp_path),
            log_level="DEBUG",
            enable_console=False
        )

        assert (tmp_path / "melodymind.log").exists()
        assert (tmp_path / "errors.log").exists()
        assert (tmp_path / "inference.log").exists()
        assert (tmp_path / "api.log").exists()
        assert instance.log_level == logging.DEBUG
        assert logging.getLogger("aiohttp").level == logging.WARNING
        assert logging_config.get_logger("melodymind.test") is not None

        logging_config.log_performance("face.run", 0.01, tier="face_local_heuristic")

    def test_setup_without_files(self, reset_logging):
        instance = logging_config.setup_logging(log_dir=None, enable_console=False)

        assert instance.log_dir is None
        assert not any(
            isinstance(handler, logging.handlers.RotatingFileHandler)
            for handler in logging.getLogger().handlers
        )
