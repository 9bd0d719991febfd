"""
dbcrud 인프라 코어

설정, 로깅, 예외 계층, SQLite 실행 백엔드를 제공합니다.

주요 컴포넌트:
- Config / get_config: .env 기반 설정
- DatabaseManager / Transaction: SQL 실행 백엔드
- ExecutionResult: 영향받은 행 수와 마지막 삽입 ID
"""

from .config import Config, get_config
from .database import DatabaseManager, ExecutionResult, Transaction, get_database_manager
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    DatabaseError,
    DBCrudError,
    ValidationError,
)
from .logger import get_logger

__all__ = [
    # Configuration
    "Config",
    "get_config",
    # Database
    "DatabaseManager",
    "Transaction",
    "ExecutionResult",
    "get_database_manager",
    # Logging
    "get_logger",
    # Exceptions
    "DBCrudError",
    "DatabaseError",
    "ConnectionError",
    "ConfigurationError",
    "ValidationError",
]
