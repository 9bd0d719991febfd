"""
dbcrud 로깅 설정

콘솔 출력은 루트 로거 하나에 붙이고, TTY이면 colorlog로 레벨별 색을 입힙니다.
ENABLE_FILE_LOGGING=true이면 컴포넌트마다 회전 로그 파일 하나에도 기록합니다.

    infra.core.database, infra.core.config  -> logs/infra/core.log
    modules.crud.crud_executor              -> logs/modules/crud.log
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

import colorlog

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COLORED_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

# 컴포넌트 단위로 파일을 나누는 최상위 패키지
COMPONENT_PACKAGES = ("infra", "modules")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


class LoggingConfig:
    """콘솔/컴포넌트 파일 핸들러를 붙여 주는 로깅 설정"""

    def __init__(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        file_logging: bool = False,
        console_logging: bool = True,
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ):
        self.level = self.parse_level(level)
        self.log_dir = Path(log_dir or "logs")
        self.file_logging = file_logging
        self.console_logging = console_logging
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        # 같은 컴포넌트의 로거들은 하나의 파일 핸들러를 공유 (회전이 한 곳에서만 일어나도록)
        self._file_handlers: Dict[Path, RotatingFileHandler] = {}

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """LOG_LEVEL, LOG_DIR, ENABLE_FILE_LOGGING, ENABLE_CONSOLE_LOGGING에서 생성"""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            file_logging=_env_flag("ENABLE_FILE_LOGGING", "false"),
            console_logging=_env_flag("ENABLE_CONSOLE_LOGGING", "true"),
        )

    @staticmethod
    def parse_level(level: str) -> int:
        """레벨 이름을 정수로 변환 (알 수 없는 이름은 INFO)"""
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.INFO

    def component_log_file(self, logger_name: str) -> Path:
        parts = logger_name.split(".")
        if len(parts) >= 2 and parts[0] in COMPONENT_PACKAGES:
            return self.log_dir / parts[0] / f"{parts[1]}.log"
        return self.log_dir / f"{parts[0]}.log"

    def console_formatter(self, stream=None) -> logging.Formatter:
        stream = stream or sys.stderr
        if stream.isatty() and not os.getenv("NO_COLOR"):
            return colorlog.ColoredFormatter(COLORED_FORMAT, log_colors=LOG_COLORS)
        return logging.Formatter(PLAIN_FORMAT)

    def install_console_handler(self) -> None:
        """루트 로거에 콘솔 핸들러를 한 번만 붙입니다 (이전에 붙인 dbcrud 핸들러는 교체)."""
        root = logging.getLogger()
        for handler in list(root.handlers):
            if getattr(handler, "_dbcrud_console", False):
                root.removeHandler(handler)

        if not self.console_logging:
            return

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.console_formatter(sys.stderr))
        handler._dbcrud_console = True
        root.addHandler(handler)
        if root.level == logging.NOTSET or root.level > self.level:
            root.setLevel(self.level)

    def _file_handler(self, log_file: Path) -> RotatingFileHandler:
        handler = self._file_handlers.get(log_file)
        if handler is None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8",
            )
            handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
            self._file_handlers[log_file] = handler
        return handler

    def configure_logger(self, name: str, level: Optional[str] = None) -> logging.Logger:
        """
        이름에 해당하는 로거를 설정합니다.

        로거는 루트로 전파되어 콘솔에 출력되고, 파일 로깅이 켜져 있으면
        컴포넌트 파일 핸들러가 추가됩니다. 여러 번 호출해도 핸들러는 중복되지 않습니다.
        """
        logger = logging.getLogger(name)
        logger.setLevel(self.parse_level(level) if level else self.level)

        if self.file_logging:
            handler = self._file_handler(self.component_log_file(name))
            if handler not in logger.handlers:
                logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """열린 파일 핸들러를 닫고 로거에서 떼어냅니다."""
        handlers = set(self._file_handlers.values())
        for logger in logging.Logger.manager.loggerDict.values():
            if isinstance(logger, logging.Logger):
                for handler in [h for h in logger.handlers if h in handlers]:
                    logger.removeHandler(handler)
        for handler in handlers:
            handler.close()
        self._file_handlers.clear()


_logging_config: Optional[LoggingConfig] = None


def get_logging_config() -> LoggingConfig:
    """환경변수 기반 로깅 설정 (최초 호출 시 콘솔 핸들러 설치)"""
    global _logging_config

    if _logging_config is None:
        _logging_config = LoggingConfig.from_env()
        _logging_config.install_console_handler()

    return _logging_config


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    설정된 로거 반환

    Args:
        name: 로거 이름 (보통 __name__)
        level: 이 로거에만 적용할 레벨 (선택적)
    """
    return get_logging_config().configure_logger(name, level=level)
