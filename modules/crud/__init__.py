"""
CRUD 모듈 - 매개변수화된 INSERT/UPDATE/DELETE 빌더와 실행기

주요 기능:
- 쿼리 빌더: build_insert, build_update, build_delete (순수 함수)
- 실행기: DirectExecutor(직접 실행), TransactionExecutor(트랜잭션 범위)
- 오케스트레이터: 식별자 허용 목록과 빈 매핑 검사
"""

from .crud_executor import (
    CrudExecutor,
    DirectExecutor,
    SqlHandle,
    TransactionExecutor,
    TransactionHandle,
)
from .crud_orchestrator import CrudOrchestrator
from .crud_schema import BuiltQuery, CrudOperation, TableSchema
from .query_builder import build_delete, build_insert, build_update, quote_identifier

__all__ = [
    # 쿼리 빌더
    "build_insert",
    "build_update",
    "build_delete",
    "quote_identifier",
    # 실행기
    "CrudExecutor",
    "DirectExecutor",
    "TransactionExecutor",
    "SqlHandle",
    "TransactionHandle",
    # 오케스트레이터
    "CrudOrchestrator",
    # 스키마
    "BuiltQuery",
    "CrudOperation",
    "TableSchema",
]
