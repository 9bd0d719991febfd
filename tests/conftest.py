"""
공용 pytest 픽스처

임시 SQLite DB에 testing 테이블을 만들고, 테스트가 끝나면 데이터를 비웁니다.
"""

import pytest

from infra.core.database import DatabaseManager
from modules.crud import DirectExecutor

TESTING_TABLE = "testing"

TESTING_SCHEMA = """
CREATE TABLE IF NOT EXISTS testing (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    test_string TEXT,
    test_int INTEGER,
    test_float REAL
);
"""


@pytest.fixture
def db(tmp_path):
    """testing 테이블이 있는 파일 기반 DatabaseManager"""
    manager = DatabaseManager(str(tmp_path / "dbcrud_test.db"), timeout=5.0)
    manager.execute_script(TESTING_SCHEMA)
    yield manager
    manager.clear_table_data(TESTING_TABLE)
    manager.close()


@pytest.fixture
def executor(db):
    """직접 실행기"""
    return DirectExecutor(db)


@pytest.fixture
def test_data():
    """기본 테스트 행"""
    return {
        "test_string": "Hello World",
        "test_int": 42,
        "test_float": 1.23,
    }
