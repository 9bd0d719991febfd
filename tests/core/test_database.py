"""
DatabaseManager / Transaction 테스트
"""

import pytest

from infra.core.database import DatabaseManager, ExecutionResult
from infra.core.exceptions import ConnectionError, DatabaseError

MEMORY_SCHEMA = "CREATE TABLE testing (id INTEGER PRIMARY KEY AUTOINCREMENT, test_int INTEGER);"


class TestDatabaseManager:
    """직접 실행 핸들 테스트"""

    def test_execute_returns_result(self, db):
        res = db.execute(
            "INSERT INTO testing (test_string, test_int) VALUES (?, ?)", ("a", 1)
        )

        assert isinstance(res, ExecutionResult)
        assert res.rows_affected == 1
        assert res.last_insert_id >= 1

    def test_execute_wraps_sqlite_error(self, db):
        with pytest.raises(DatabaseError) as exc_info:
            db.execute("INSERT INTO nowhere (a) VALUES (?)", (1,))

        assert exc_info.value.operation == "execute"
        assert exc_info.value.__cause__ is not None

    def test_table_exists(self, db):
        assert db.table_exists("testing")
        assert not db.table_exists("missing_table")

    def test_fetch_helpers(self, db):
        db.execute("INSERT INTO testing (test_int) VALUES (?)", (5,))

        assert db.fetch_one("SELECT test_int FROM testing")["test_int"] == 5
        assert len(db.fetch_all("SELECT * FROM testing")) == 1

    def test_clear_table_data(self, db):
        db.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))
        db.execute("INSERT INTO testing (test_int) VALUES (?)", (2,))

        result = db.clear_table_data("testing")

        assert result == {"success": True, "deleted_count": 2}
        assert db.fetch_all("SELECT * FROM testing") == []

    def test_clear_missing_table_does_not_raise(self, db):
        result = db.clear_table_data("missing_table")

        assert result["success"] is False
        assert result["deleted_count"] == 0

    def test_connection_failure(self, tmp_path):
        manager = DatabaseManager(str(tmp_path / "no_such_dir" / "x.db"), timeout=1.0)

        with pytest.raises(ConnectionError) as exc_info:
            manager.execute("SELECT 1")

        assert exc_info.value.error_code == "DB_CONNECTION_ERROR"

    def test_close_is_idempotent(self, db):
        db.close()
        db.close()
        # 다음 호출에서 다시 연결
        assert db.table_exists("testing")


class TestTransaction:
    """트랜잭션 핸들 테스트"""

    def test_transaction_context_commits(self, db):
        with db.transaction() as tx:
            tx.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))

        assert len(db.fetch_all("SELECT * FROM testing")) == 1

    def test_transaction_context_rolls_back(self, db):
        with pytest.raises(ValueError):
            with db.transaction() as tx:
                tx.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))
                raise ValueError("boom")

        assert db.fetch_all("SELECT * FROM testing") == []

    def test_uncommitted_visible_inside_transaction(self, db):
        tx = db.begin()
        res = tx.execute("INSERT INTO testing (test_int) VALUES (?)", (7,))

        assert tx.fetch_one("SELECT test_int FROM testing WHERE id = ?", (res.last_insert_id,))["test_int"] == 7
        tx.rollback()
        assert tx.closed

    def test_rollback_after_commit_is_noop(self, db):
        tx = db.begin()
        tx.commit()
        tx.rollback()
        assert tx.closed

    def test_commit_twice_fails(self, db):
        tx = db.begin()
        tx.commit()
        with pytest.raises(DatabaseError):
            tx.commit()

    def test_transaction_context_rolls_back_on_keyboard_interrupt(self, db):
        """Exception이 아닌 BaseException으로 빠져나가도 롤백되고 연결이 닫혀야 함"""
        with pytest.raises(KeyboardInterrupt):
            with db.transaction() as tx:
                tx.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))
                raise KeyboardInterrupt

        assert tx.closed
        assert db.fetch_all("SELECT * FROM testing") == []


def _committed_rows(manager):
    """공유 연결에서 본 testing 행 (다른 연결의 미커밋 쓰기로 잠겨 있으면 None)"""
    try:
        return [row["test_int"] for row in manager.fetch_all("SELECT test_int FROM testing ORDER BY id")]
    except DatabaseError:
        return None


class TestMemoryDatabase:
    """:memory: DB도 트랜잭션마다 독립된 연결을 사용하는지 테스트"""

    @pytest.fixture
    def memory_db(self):
        manager = DatabaseManager(":memory:", timeout=1.0)
        manager.execute_script(MEMORY_SCHEMA)
        yield manager
        manager.close()

    def test_managers_do_not_share_data(self, memory_db):
        other = DatabaseManager(":memory:", timeout=1.0)
        try:
            assert not other.table_exists("testing")
        finally:
            other.close()

    def test_commit_and_rollback(self, memory_db):
        tx = memory_db.begin()
        tx.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))
        tx.rollback()
        assert _committed_rows(memory_db) == []

        tx = memory_db.begin()
        tx.execute("INSERT INTO testing (test_int) VALUES (?)", (2,))
        tx.commit()
        assert _committed_rows(memory_db) == [2]

    def test_uncommitted_rows_not_visible_to_direct_handle(self, memory_db):
        tx = memory_db.begin()
        tx.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))

        assert _committed_rows(memory_db) in (None, [])

        tx.commit()
        assert _committed_rows(memory_db) == [1]

    def test_rollback_keeps_direct_writes(self, memory_db):
        tx = memory_db.begin()
        memory_db.execute("INSERT INTO testing (test_int) VALUES (?)", (10,))
        tx.execute("INSERT INTO testing (test_int) VALUES (?)", (20,))
        tx.rollback()

        assert _committed_rows(memory_db) == [10]

    def test_two_transactions_at_once(self, memory_db):
        first = memory_db.begin()
        second = memory_db.begin()

        first.execute("INSERT INTO testing (test_int) VALUES (?)", (1,))
        try:
            seen = second.fetch_one("SELECT COUNT(*) AS n FROM testing")["n"]
        except DatabaseError:
            seen = 0
        assert seen == 0

        first.commit()
        second.execute("INSERT INTO testing (test_int) VALUES (?)", (2,))
        assert second.fetch_one("SELECT COUNT(*) AS n FROM testing")["n"] == 2
        second.commit()

        assert _committed_rows(memory_db) == [1, 2]
