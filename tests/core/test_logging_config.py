"""Unit tests for logging_config module"""

import io
import logging

import colorlog
import pytest

from infra.core.logging_config import LoggingConfig


@pytest.fixture
def file_config(tmp_path):
    config = LoggingConfig(log_dir=tmp_path, file_logging=True, console_logging=False)
    yield config
    config.close()


class TestLoggingConfig:
    """LoggingConfig 테스트"""

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        monkeypatch.setenv("ENABLE_FILE_LOGGING", "true")
        monkeypatch.setenv("ENABLE_CONSOLE_LOGGING", "false")

        config = LoggingConfig.from_env()

        assert config.level == logging.DEBUG
        assert config.log_dir == tmp_path
        assert config.file_logging is True
        assert config.console_logging is False

    def test_unknown_level_falls_back_to_info(self):
        assert LoggingConfig(level="LOUD").level == logging.INFO

    def test_log_file_per_component(self, tmp_path):
        config = LoggingConfig(log_dir=tmp_path)

        assert config.component_log_file("infra.core.database") == tmp_path / "infra" / "core.log"
        assert config.component_log_file("modules.crud.crud_executor") == tmp_path / "modules" / "crud.log"
        assert config.component_log_file("__main__") == tmp_path / "__main__.log"

    def test_file_logging_writes_component_file(self, file_config, tmp_path):
        logger = file_config.configure_logger("modules.crud.test_file_logging")
        logger.info("component message")

        assert "component message" in (tmp_path / "modules" / "crud.log").read_text(encoding="utf-8")

    def test_component_loggers_share_one_file_handler(self, file_config):
        """같은 컴포넌트 로거는 하나의 회전 핸들러를 공유하고, 재설정해도 중복되지 않음"""
        first = file_config.configure_logger("infra.core.test_first")
        second = file_config.configure_logger("infra.core.test_second")
        file_config.configure_logger("infra.core.test_first")

        assert len(first.handlers) == 1
        assert first.handlers[0] is second.handlers[0]

    def test_close_detaches_file_handlers(self, tmp_path):
        config = LoggingConfig(log_dir=tmp_path, file_logging=True, console_logging=False)
        logger = config.configure_logger("modules.crud.test_close")

        config.close()

        assert logger.handlers == []


class TestConsoleFormatter:
    """콘솔 포매터 선택 테스트"""

    class _TtyStream(io.StringIO):
        def isatty(self):
            return True

    def test_plain_when_not_a_tty(self):
        formatter = LoggingConfig().console_formatter(io.StringIO())

        assert not isinstance(formatter, colorlog.ColoredFormatter)

    def test_colored_on_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)

        formatter = LoggingConfig().console_formatter(self._TtyStream())

        assert isinstance(formatter, colorlog.ColoredFormatter)

    def test_no_color_disables_colors(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")

        formatter = LoggingConfig().console_formatter(self._TtyStream())

        assert not isinstance(formatter, colorlog.ColoredFormatter)
