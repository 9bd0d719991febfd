"""
CRUD 실행기

쿼리 빌더로 만든 문장을 SQL 실행 핸들에 넘기고, 실패를 DatabaseError로 감쌉니다.
직접 실행(DirectExecutor)과 트랜잭션 범위 실행(TransactionExecutor)은
같은 CrudExecutor 인터페이스를 공유하며 핸들만 다릅니다.

재시도/타임아웃은 없습니다. 한 번 실행하고, 원인 예외는 __cause__로 보존합니다.
"""

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from infra.core.database import ExecutionResult
from infra.core.exceptions import DatabaseError
from infra.core.logger import get_logger

from ._crud_helpers import AttributeMapping, crud_mask_params
from .crud_schema import BuiltQuery, CrudOperation
from .query_builder import build_delete, build_insert, build_update

logger = get_logger(__name__)


@runtime_checkable
class SqlHandle(Protocol):
    """execute(sql, params) -> ExecutionResult 를 제공하는 실행 핸들"""

    def execute(self, query: str, params: Sequence[Any] = ()) -> ExecutionResult:
        ...


@runtime_checkable
class TransactionHandle(SqlHandle, Protocol):
    """커밋/롤백을 추가로 제공하는 트랜잭션 핸들"""

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class CrudExecutor:
    """실행 핸들 위의 INSERT/UPDATE/DELETE"""

    def __init__(self, handle: SqlHandle):
        if not isinstance(handle, SqlHandle):
            raise TypeError(f"execute()를 제공하지 않는 핸들입니다: {handle!r}")
        self.handle = handle

    def insert(self, table: str, fields: AttributeMapping) -> ExecutionResult:
        """테이블에 행 하나를 삽입합니다."""
        return self._submit(CrudOperation.INSERT, table, build_insert(table, fields))

    def update(
        self, table: str, where: AttributeMapping, fields: AttributeMapping
    ) -> ExecutionResult:
        """where의 모든 조건(AND)에 맞는 행들의 fields를 변경합니다."""
        return self._submit(CrudOperation.UPDATE, table, build_update(table, where, fields))

    def delete(self, table: str, where: AttributeMapping) -> ExecutionResult:
        """where의 모든 조건(AND)에 맞는 행들을 삭제합니다."""
        return self._submit(CrudOperation.DELETE, table, build_delete(table, where))

    def _submit(
        self, operation: CrudOperation, table: str, query: BuiltQuery
    ) -> ExecutionResult:
        logger.debug(f"{operation.value} 실행: {query.sql} | {crud_mask_params(query.params)}")
        try:
            return self.handle.execute(query.sql, query.params)
        except Exception as e:
            raise DatabaseError(
                f"Unable to {operation.verb_phrase} table {table}: {e}",
                operation=operation.value,
                table=table,
            ) from e


class DirectExecutor(CrudExecutor):
    """비트랜잭션 핸들(DatabaseManager 등)에 바로 실행"""


class TransactionExecutor(CrudExecutor):
    """
    트랜잭션 핸들 위의 실행기

    변경 사항은 commit() 이후에만 보이고 rollback()으로 모두 버릴 수 있습니다.
    with 블록으로 쓰면 정상 종료 시 커밋, 예외 시 롤백합니다.
    """

    def __init__(self, transaction: TransactionHandle):
        if not isinstance(transaction, TransactionHandle):
            raise TypeError(f"commit()/rollback()을 제공하지 않는 핸들입니다: {transaction!r}")
        super().__init__(transaction)

    def commit(self) -> None:
        self.handle.commit()

    def rollback(self) -> None:
        self.handle.rollback()

    def __enter__(self) -> "TransactionExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        if exc_type is not None:
            self.rollback()
            return False
        if not getattr(self.handle, "closed", False):
            self.commit()
        return False
