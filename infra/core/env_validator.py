"""
환경변수 선언과 검증

dbcrud가 읽는 환경변수를 한 곳에 선언하고, Config가 시작할 때 누락/잘못된 값을 찾아냅니다.
generate_example_env()는 선언에서 예제 .env 내용을 만듭니다.
"""

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_ENVIRONMENTS = ("development", "test", "production")


class EnvVarCategory(Enum):
    """환경변수 카테고리 (선언 순서가 예제 파일의 섹션 순서)"""
    REQUIRED = "필수"
    RECOMMENDED = "권장"
    OPTIONAL = "선택적"


@dataclass(frozen=True)
class EnvVarDefinition:
    name: str
    category: EnvVarCategory
    description: str
    default: Optional[str] = None
    validator: Optional[Callable[[str], bool]] = None
    example: Optional[str] = None

    def current_value(self) -> Optional[str]:
        return os.getenv(self.name, self.default)


@dataclass
class EnvValidationResult:
    """검증 결과 (변수 이름 목록)"""
    required_missing: List[str] = field(default_factory=list)
    recommended_missing: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """필수 변수가 모두 있고 잘못된 값이 없으면 True (권장 누락은 허용)"""
        return not self.required_missing and not self.invalid


def _is_identifier_list(value: str) -> bool:
    names = [name.strip() for name in value.split(",") if name.strip()]
    return all(_IDENTIFIER_RE.match(name) for name in names)


def _is_positive_number(value: str) -> bool:
    try:
        return float(value) > 0
    except ValueError:
        return False


ENV_DEFINITIONS = (
    EnvVarDefinition(
        "DATABASE_PATH",
        EnvVarCategory.REQUIRED,
        "SQLite 데이터베이스 파일 경로 (:memory:이면 프로세스 메모리 DB)",
        default="./data/dbcrud.db",
    ),
    EnvVarDefinition(
        "CRUD_ALLOWED_TABLES",
        EnvVarCategory.RECOMMENDED,
        "CRUD 작업을 허용할 테이블 목록 (쉼표 구분, 비어 있으면 식별자 형식만 검사)",
        validator=_is_identifier_list,
        example="testing,accounts",
    ),
    EnvVarDefinition(
        "DATABASE_TIMEOUT",
        EnvVarCategory.OPTIONAL,
        "SQLite 잠금 대기 타임아웃 (초)",
        default="30",
        validator=_is_positive_number,
    ),
    EnvVarDefinition(
        "LOG_LEVEL",
        EnvVarCategory.OPTIONAL,
        "로깅 레벨 (" + ", ".join(_LOG_LEVELS) + ")",
        default="INFO",
        validator=lambda x: x.upper() in _LOG_LEVELS,
    ),
    EnvVarDefinition(
        "ENVIRONMENT",
        EnvVarCategory.OPTIONAL,
        "실행 환경 (" + ", ".join(_ENVIRONMENTS) + ")",
        default="development",
        validator=lambda x: x.lower() in _ENVIRONMENTS,
    ),
)


class EnvValidator:
    """선언된 환경변수를 현재 프로세스 환경에 대해 검증"""

    def __init__(self, env_file: Optional[Path] = None, definitions=ENV_DEFINITIONS):
        self.definitions = tuple(definitions)
        env_file = env_file or PROJECT_ROOT / ".env"
        if env_file.exists():
            load_dotenv(env_file)

    def validate(self) -> EnvValidationResult:
        result = EnvValidationResult()

        for env_def in self.definitions:
            value = env_def.current_value()

            if not value:
                if env_def.category == EnvVarCategory.REQUIRED:
                    result.required_missing.append(env_def.name)
                elif env_def.category == EnvVarCategory.RECOMMENDED:
                    result.recommended_missing.append(env_def.name)
            elif env_def.validator and not env_def.validator(value):
                result.invalid.append(env_def.name)

        return result

    def generate_example_env(self) -> str:
        """예제 .env 파일 내용 생성 (값이 없는 변수는 주석 처리)"""
        lines = ["# dbcrud 환경변수 설정"]

        for category in EnvVarCategory:
            category_vars = [d for d in self.definitions if d.category == category]
            if not category_vars:
                continue

            lines.extend(["", f"# ===== {category.value} 설정 ====="])
            for env_def in category_vars:
                lines.append(f"# {env_def.description}")
                value = env_def.example or env_def.default
                lines.append(f"{env_def.name}={value}" if value else f"# {env_def.name}=")

        return "\n".join(lines) + "\n"
