"""
CRUD Orchestrator - 실행기 앞단의 입력 가드

쿼리 빌더는 식별자를 이스케이프하지 않고 빈 매핑도 그대로 문장으로 만듭니다.
이 오케스트레이터는 실행 전에 다음을 검사하고 ValidationError로 거부합니다.

- 테이블/컬럼명 형식 ([A-Za-z_][A-Za-z0-9_]*)
- 등록된 TableSchema 또는 허용 테이블 목록 밖의 식별자
- 빈 fields (INSERT/UPDATE), 빈 where (UPDATE/DELETE: 전체 행 대상 방지)
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from infra.core.config import get_config
from infra.core.database import ExecutionResult
from infra.core.exceptions import ValidationError
from infra.core.logger import get_logger

from ._crud_helpers import AttributeMapping, crud_is_valid_identifier, crud_normalize_pairs
from .crud_executor import CrudExecutor
from .crud_schema import CrudOperation, TableSchema

logger = get_logger(__name__)


class CrudOrchestrator:
    """검증을 통과한 호출만 실행기로 넘기는 오케스트레이터"""

    def __init__(
        self,
        executor: CrudExecutor,
        schemas: Optional[Iterable[TableSchema]] = None,
        allowed_tables: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            executor: DirectExecutor 또는 TransactionExecutor
            schemas: 테이블별 허용 컬럼 (있으면 테이블과 컬럼 모두 검사)
            allowed_tables: 허용 테이블명 (schemas가 없을 때만 사용, 비어 있으면 형식만 검사)
        """
        self.executor = executor
        self.schemas: Dict[str, TableSchema] = {s.name: s for s in schemas or []}
        self.allowed_tables = set(allowed_tables or [])

    @classmethod
    def from_config(cls, executor: CrudExecutor, config=None) -> "CrudOrchestrator":
        """설정의 CRUD_ALLOWED_TABLES로 허용 테이블 목록을 구성합니다."""
        if config is None:
            config = get_config()
        return cls(executor, allowed_tables=config.allowed_tables)

    def register_schema(self, schema: TableSchema) -> None:
        self.schemas[schema.name] = schema

    def insert(self, table: str, fields: AttributeMapping) -> ExecutionResult:
        field_pairs = self._require_pairs(CrudOperation.INSERT, "fields", fields)
        self._check_identifiers(table, field_pairs)
        return self.executor.insert(table, field_pairs)

    def update(
        self, table: str, where: AttributeMapping, fields: AttributeMapping
    ) -> ExecutionResult:
        field_pairs = self._require_pairs(CrudOperation.UPDATE, "fields", fields)
        where_pairs = self._require_pairs(CrudOperation.UPDATE, "where", where)
        self._check_identifiers(table, field_pairs + where_pairs)
        return self.executor.update(table, where_pairs, field_pairs)

    def delete(self, table: str, where: AttributeMapping) -> ExecutionResult:
        where_pairs = self._require_pairs(CrudOperation.DELETE, "where", where)
        self._check_identifiers(table, where_pairs)
        return self.executor.delete(table, where_pairs)

    def _require_pairs(
        self, operation: CrudOperation, name: str, attributes: AttributeMapping
    ) -> List[Tuple[str, Any]]:
        pairs = crud_normalize_pairs(attributes)
        if not pairs:
            logger.warning(f"빈 {name}로 {operation.value} 요청 거부")
            raise ValidationError(
                f"{operation.value}에는 비어 있지 않은 {name}가 필요합니다",
                field=name,
                details={"operation": operation.value},
            )
        return pairs

    def _check_identifiers(self, table: str, pairs: List[Tuple[str, Any]]) -> None:
        if not crud_is_valid_identifier(table):
            raise ValidationError(f"잘못된 테이블명: {table!r}", field="table", value=table)

        for column, _ in pairs:
            if not crud_is_valid_identifier(column):
                raise ValidationError(f"잘못된 컬럼명: {column!r}", field="column", value=column)

        if self.schemas:
            schema = self.schemas.get(table)
            if schema is None:
                raise ValidationError(f"허용되지 않은 테이블: {table}", field="table", value=table)
            unknown = [column for column, _ in pairs if not schema.has_column(column)]
            if unknown:
                raise ValidationError(
                    f"{table} 테이블에 허용되지 않은 컬럼: {', '.join(unknown)}",
                    field="column",
                    details={"table": table, "columns": unknown},
                )
        elif self.allowed_tables and table not in self.allowed_tables:
            raise ValidationError(f"허용되지 않은 테이블: {table}", field="table", value=table)
