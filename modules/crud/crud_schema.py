"""
CRUD 모듈의 데이터 스키마 정의

빌드된 쿼리(BuiltQuery), CRUD 작업 종류, 허용 테이블 스키마(TableSchema)를 정의합니다.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Tuple

from pydantic import BaseModel, Field, field_validator

from ._crud_helpers import crud_is_valid_identifier

_QUOTED_IDENTIFIER_RE = re.compile(r"`[^`]*`")


class CrudOperation(str, Enum):
    """CRUD 작업 종류 (오류 메시지의 동사구 포함)"""
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def verb_phrase(self) -> str:
        return {
            CrudOperation.INSERT: "insert into",
            CrudOperation.UPDATE: "update",
            CrudOperation.DELETE: "delete from",
        }[self]


@dataclass(frozen=True)
class BuiltQuery:
    """
    SQL 텍스트와 위치 매개변수 쌍

    N번째 ? 플레이스홀더는 params의 N번째 값과 대응합니다.
    sql, params = build_insert(...) 형태로 언패킹할 수 있습니다.
    """

    sql: str
    params: Tuple[Any, ...]

    def __iter__(self) -> Iterator[Any]:
        return iter((self.sql, self.params))

    @property
    def placeholder_count(self) -> int:
        """
        백틱으로 감싼 식별자 밖의 ? 개수

        식별자 안의 ?는 세지 않습니다. 백틱이 포함된 식별자는 따옴표 경계를 깨므로
        세는 값이 틀릴 수 있으며, 이런 이름은 CrudOrchestrator가 거부합니다.
        """
        return _QUOTED_IDENTIFIER_RE.sub("", self.sql).count("?")


class TableSchema(BaseModel):
    """CRUD를 허용할 테이블과 컬럼 목록"""
    name: str = Field(..., description="테이블명")
    columns: List[str] = Field(..., min_length=1, description="허용 컬럼 목록")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not crud_is_valid_identifier(v):
            raise ValueError(f"잘못된 테이블명: {v!r}")
        return v

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v):
        invalid = [column for column in v if not crud_is_valid_identifier(column)]
        if invalid:
            raise ValueError(f"잘못된 컬럼명: {invalid}")
        return v

    def has_column(self, column: str) -> bool:
        return column in self.columns
