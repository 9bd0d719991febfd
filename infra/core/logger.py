"""
dbcrud 프로젝트의 로거 진입점

모듈에서는 logging_config를 직접 다루지 않고 get_logger만 사용합니다.
"""

import logging
from typing import Optional

from .logging_config import get_logger as get_configured_logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    dbcrud 로거를 반환합니다.

    Args:
        name: 로거 이름 (일반적으로 모듈명)
        level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        설정된 로거 인스턴스
    """
    return get_configured_logger(name, level)
