"""
dbcrud 프로젝트의 설정 관리 시스템

환경 변수(.env)를 로드하고 데이터베이스/로깅/CRUD 가드 설정을 제공합니다.
레이지 싱글톤 패턴으로 구현되어 어디서든 동일한 설정 객체를 참조할 수 있습니다.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .env_validator import PROJECT_ROOT, EnvValidator
from .exceptions import ConfigurationError
from .logging_config import get_logger


logger = get_logger(__name__)


class Config:
    """애플리케이션 설정을 관리하는 클래스"""

    def __init__(self, env_file: Optional[Path] = None):
        """설정 초기화 및 환경 변수 로드"""
        self._env_file = env_file or PROJECT_ROOT / ".env"
        self._load_environment()
        self._validate_environment()

    def _load_environment(self) -> None:
        """환경 변수 파일(.env)을 로드"""
        if self._env_file.exists():
            load_dotenv(self._env_file)
            logger.debug(f".env 파일 로드 완료: {self._env_file}")
        else:
            logger.debug(f".env 파일 없음, 프로세스 환경변수만 사용: {self._env_file}")

    def _validate_environment(self) -> None:
        """환경변수 검증 (필수 누락/잘못된 값이면 ConfigurationError)"""
        result = EnvValidator(self._env_file).validate()

        if not result.success:
            problems = result.required_missing + [f"{name}(잘못된 값)" for name in result.invalid]
            logger.error(f"환경변수 검증 실패: {', '.join(problems)}")
            raise ConfigurationError(
                f"환경변수 검증 실패: {', '.join(problems)}",
                details={
                    "required_missing": result.required_missing,
                    "invalid": result.invalid,
                },
            )

        if result.recommended_missing:
            logger.debug(f"권장 환경변수 누락: {', '.join(result.recommended_missing)}")

    # 데이터베이스 설정
    @property
    def database_path(self) -> str:
        """SQLite 데이터베이스 파일 경로"""
        path = os.getenv("DATABASE_PATH", "./data/dbcrud.db")
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def database_timeout(self) -> float:
        """SQLite 잠금 대기 타임아웃(초)"""
        raw = os.getenv("DATABASE_TIMEOUT", "30")
        try:
            return float(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"DATABASE_TIMEOUT 값이 숫자가 아닙니다: {raw}",
                config_key="DATABASE_TIMEOUT",
            ) from e

    # CRUD 가드 설정
    @property
    def allowed_tables(self) -> List[str]:
        """CRUD를 허용할 테이블 목록 (비어 있으면 제한 없음)"""
        tables = os.getenv("CRUD_ALLOWED_TABLES", "")
        return [table.strip() for table in tables.split(",") if table.strip()]

    # 로깅 설정
    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def debug_mode(self) -> bool:
        return os.getenv("DEBUG", "False").lower() in ("true", "1", "yes", "on")

    @property
    def environment(self) -> str:
        """실행 환경 (development, test, production)"""
        return os.getenv("ENVIRONMENT", "development").lower()

    def to_dict(self) -> dict:
        """설정을 딕셔너리로 반환"""
        return {
            "database_path": self.database_path,
            "database_timeout": self.database_timeout,
            "allowed_tables": self.allowed_tables,
            "log_level": self.log_level,
            "debug_mode": self.debug_mode,
            "environment": self.environment,
        }


@lru_cache(maxsize=1)
def get_config() -> Config:
    """
    설정 인스턴스를 반환하는 레이지 싱글톤 함수

    Returns:
        Config: 설정 인스턴스
    """
    return Config()
