"""
dbcrud 프로젝트의 SQLite 실행 백엔드

SQLite 연결을 관리하고 쿼리 실행 결과(영향받은 행 수, 마지막 삽입 ID)를 반환합니다.
직접 실행용 공유 연결은 레이지 싱글톤으로 관리되고,
트랜잭션은 begin()마다 독립된 연결을 열어 커밋/롤백 시 닫습니다.
"""

import sqlite3
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .config import get_config
from .exceptions import ConnectionError, DatabaseError
from .logger import get_logger

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"


@dataclass(frozen=True)
class ExecutionResult:
    """쿼리 실행 결과"""

    rows_affected: int
    last_insert_id: Optional[int] = None

    @classmethod
    def from_cursor(cls, cursor: sqlite3.Cursor) -> "ExecutionResult":
        return cls(rows_affected=cursor.rowcount, last_insert_id=cursor.lastrowid)


def _memory_uri() -> str:
    """연결끼리 공유되는 이름 있는 메모리 DB URI (매니저마다 고유)"""
    return f"file:dbcrud_{uuid.uuid4().hex}?mode=memory&cache=shared"


def _open_connection(target: str, timeout: float, memory: bool = False) -> sqlite3.Connection:
    """
    SQLite 연결 생성 (오토커밋 모드, Row 팩토리, 외래키 활성화)

    memory=True이면 target은 _memory_uri()가 만든 URI입니다.
    """
    try:
        connection = sqlite3.connect(
            target,
            check_same_thread=False,
            timeout=timeout,
            isolation_level=None,
            uri=memory,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        if not memory:
            connection.execute("PRAGMA journal_mode = WAL")
        return connection
    except sqlite3.Error as e:
        raise ConnectionError(
            f"데이터베이스 연결 실패: {str(e)}",
            details={"database_path": target},
        ) from e


def _run(
    connection: sqlite3.Connection,
    query: str,
    params: Sequence[Any],
    operation: str,
) -> sqlite3.Cursor:
    cursor = connection.cursor()
    try:
        cursor.execute(query, tuple(params))
    except sqlite3.Error as e:
        cursor.close()
        logger.error(f"쿼리 실행 실패: {query[:100]}")
        raise DatabaseError(
            f"쿼리 실행 실패: {str(e)}",
            operation=operation,
            details={"query": query[:200], "params": str(params)[:200]},
        ) from e
    return cursor


class Transaction:
    """
    트랜잭션 핸들

    execute()의 결과는 commit() 이후에만 다른 연결에서 보이며, rollback()으로 모두 버릴 수 있습니다.
    commit/rollback 이후에는 핸들이 닫히고 더 이상 사용할 수 없습니다.
    """

    def __init__(self, connection: sqlite3.Connection):
        self._connection = connection
        self._closed = False
        try:
            self._connection.execute("BEGIN")
        except sqlite3.Error as e:
            self._close()
            raise DatabaseError(f"트랜잭션 시작 실패: {str(e)}", operation="begin") from e
        logger.debug("트랜잭션 시작")

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise DatabaseError("이미 종료된 트랜잭션입니다", operation=operation)

    def execute(self, query: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """트랜잭션 안에서 쿼리를 실행합니다."""
        self._ensure_open("execute")
        cursor = _run(self._connection, query, params, "execute")
        try:
            return ExecutionResult.from_cursor(cursor)
        finally:
            cursor.close()

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        """트랜잭션 안에서 단일 행을 조회합니다 (커밋되지 않은 변경 포함)."""
        self._ensure_open("fetch_one")
        cursor = _run(self._connection, query, params, "fetch_one")
        try:
            return cursor.fetchone()
        finally:
            cursor.close()

    def commit(self) -> None:
        self._ensure_open("commit")
        try:
            self._connection.commit()
            logger.debug("트랜잭션 커밋됨")
        except sqlite3.Error as e:
            raise DatabaseError(f"커밋 실패: {str(e)}", operation="commit") from e
        finally:
            self._close()

    def rollback(self) -> None:
        """트랜잭션을 롤백합니다. 이미 종료된 경우 아무 것도 하지 않습니다."""
        if self._closed:
            return
        try:
            self._connection.rollback()
            logger.debug("트랜잭션 롤백됨")
        except sqlite3.Error as e:
            raise DatabaseError(f"롤백 실패: {str(e)}", operation="rollback") from e
        finally:
            self._close()

    def _close(self) -> None:
        self._closed = True
        self._connection.close()


class DatabaseManager:
    """SQLite 연결과 쿼리 실행을 관리하는 클래스"""

    def __init__(self, database_path: Optional[str] = None, timeout: Optional[float] = None):
        """
        데이터베이스 매니저 초기화

        Args:
            database_path: DB 파일 경로 (None이면 설정의 DATABASE_PATH)
            timeout: 잠금 대기 타임아웃 초 (None이면 설정의 DATABASE_TIMEOUT)
        """
        if database_path is None or timeout is None:
            config = get_config()
            database_path = database_path or config.database_path
            timeout = timeout if timeout is not None else config.database_timeout

        self.database_path = database_path
        self.timeout = timeout
        self.is_memory = database_path == MEMORY_DATABASE
        self._target = _memory_uri() if self.is_memory else database_path
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _connect(self) -> sqlite3.Connection:
        return _open_connection(self._target, self.timeout, memory=self.is_memory)

    def _get_connection(self) -> sqlite3.Connection:
        """공유 연결을 반환 (레이지 초기화)"""
        if self._connection is None:
            with self._lock:
                if self._connection is None:
                    self._connection = self._connect()
                    logger.info(f"데이터베이스 연결 성공: {self.database_path}")
        return self._connection

    def execute(self, query: str, params: Sequence[Any] = ()) -> ExecutionResult:
        """
        데이터 변경 쿼리(INSERT/UPDATE/DELETE)를 실행합니다.

        Args:
            query: 실행할 SQL 쿼리 (? 플레이스홀더)
            params: 위치 매개변수

        Returns:
            ExecutionResult: 영향받은 행 수와 마지막 삽입 ID
        """
        cursor = _run(self._get_connection(), query, params, "execute")
        try:
            result = ExecutionResult.from_cursor(cursor)
        finally:
            cursor.close()

        if result.rows_affected > 0:
            logger.debug(f"쿼리 실행 완료: {result.rows_affected}행 영향받음")
        return result

    def execute_script(self, script: str) -> None:
        """여러 SQL 구문(스키마 생성 등)을 한 번에 실행합니다."""
        try:
            self._get_connection().executescript(script)
        except sqlite3.Error as e:
            raise DatabaseError(
                f"스크립트 실행 실패: {str(e)}", operation="execute_script"
            ) from e

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        """단일 행을 조회합니다."""
        cursor = _run(self._get_connection(), query, params, "fetch_one")
        try:
            return cursor.fetchone()
        finally:
            cursor.close()

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        """모든 행을 조회합니다."""
        cursor = _run(self._get_connection(), query, params, "fetch_all")
        try:
            return cursor.fetchall()
        finally:
            cursor.close()

    def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부를 확인합니다."""
        query = "SELECT name FROM sqlite_master WHERE type='table' AND name=?"
        return self.fetch_one(query, (table_name,)) is not None

    def begin(self) -> Transaction:
        """
        새 트랜잭션을 시작합니다.

        트랜잭션마다 독립된 연결을 사용합니다. 메모리 DB는 공유 캐시 URI로 열려
        같은 DB를 보지만, 공유 캐시는 테이블 단위로 잠그므로 커밋되지 않은 쓰기가
        있는 테이블을 다른 연결에서 읽거나 쓰면 DatabaseError("database table is locked")가 납니다.
        """
        if self.is_memory:
            # 공유 연결이 열려 있어야 트랜잭션 연결이 닫혀도 메모리 DB가 유지됨
            self._get_connection()
        return Transaction(self._connect())

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """정상 종료 시 커밋, 예외(KeyboardInterrupt 포함) 시 롤백하는 트랜잭션 컨텍스트 매니저"""
        tx = self.begin()
        try:
            yield tx
        except BaseException as e:
            tx.rollback()
            logger.error(f"트랜잭션 롤백됨: {e!r}")
            raise
        if not tx.closed:
            tx.commit()

    def clear_table_data(self, table_name: str) -> Dict[str, Any]:
        """
        테이블 데이터만 삭제 (스키마 유지)

        테스트 정리용 유틸리티로, 실패해도 예외를 올리지 않고 로그만 남깁니다.

        Args:
            table_name: 정리할 테이블명

        Returns:
            dict: 정리 결과 정보
        """
        try:
            result = self.execute(f"DELETE FROM `{table_name}`")
            logger.info(f"테이블 {table_name} 데이터 삭제 완료: {result.rows_affected}개")
            return {"success": True, "deleted_count": result.rows_affected}
        except DatabaseError as e:
            logger.error(f"테이블 {table_name} 데이터 삭제 실패: {str(e)}")
            return {"success": False, "deleted_count": 0, "error": str(e)}

    def close(self) -> None:
        """공유 연결을 종료합니다."""
        if self._connection:
            with self._lock:
                if self._connection:
                    self._connection.close()
                    self._connection = None
                    logger.info("데이터베이스 연결 종료됨")


@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    """
    설정 기반 데이터베이스 매니저를 반환하는 레이지 싱글톤 함수

    Returns:
        DatabaseManager: 데이터베이스 매니저 인스턴스
    """
    return DatabaseManager()
