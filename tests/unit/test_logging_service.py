"""Tests for server logging setup."""

import logging

import pytest

from rentbook.config import Settings
from rentbook.services.logging import resolve_level, setup_server_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers.copy(), root.level
    yield root
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def server_settings(tmp_path, **overrides) -> Settings:
    return Settings(log_file=str(tmp_path / "logs" / "server.log"), **overrides)


class TestResolveLevel:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR)],
    )
    def test_known_names(self, name, expected):
        assert resolve_level(name) == expected

    def test_unknown_name_gives_info(self):
        assert resolve_level("chatty") == logging.INFO


class TestSetupServerLogging:
    def test_level_and_file_come_from_settings(self, tmp_path, restore_root_logger):
        settings = server_settings(tmp_path, log_level="warning")

        assert setup_server_logging(settings) == logging.WARNING

        assert (tmp_path / "logs").is_dir()
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 2
        assert all(handler.level == logging.WARNING for handler in restore_root_logger.handlers)

    def test_setup_replaces_previous_handlers(self, tmp_path, restore_root_logger):
        setup_server_logging(server_settings(tmp_path))
        setup_server_logging(server_settings(tmp_path))

        assert len(restore_root_logger.handlers) == 2

    def test_records_reach_the_log_file(self, tmp_path):
        settings = server_settings(tmp_path, log_level="INFO")
        setup_server_logging(settings)

        logging.getLogger("rentbook.services.tenant_service").info("Recorded payment: month=2025-04")
        logging.getLogger("rentbook.services.tenant_service").debug("not written at INFO")

        contents = (tmp_path / "logs" / "server.log").read_text()
        assert "rentbook.services.tenant_service - INFO - Recorded payment: month=2025-04" in contents
        assert "not written at INFO" not in contents
        assert contents.startswith("[")

    def test_defaults_to_get_settings(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "rentbook.services.logging.get_settings",
            lambda: server_settings(tmp_path, log_level="ERROR"),
        )

        assert setup_server_logging() == logging.ERROR
