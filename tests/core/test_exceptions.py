"""Unit tests for exceptions module"""

from infra.core.exceptions import (
    ConnectionError,
    DatabaseError,
    DBCrudError,
    ValidationError,
)


def test_database_error_details():
    err = DatabaseError("Unable to delete from table testing", operation="delete", table="testing")

    assert str(err) == "[DB_ERROR] Unable to delete from table testing"
    assert err.operation == "delete"
    assert err.table == "testing"
    assert err.to_dict() == {
        "error_type": "DatabaseError",
        "message": "Unable to delete from table testing",
        "error_code": "DB_ERROR",
        "details": {"operation": "delete", "table": "testing"},
    }


def test_connection_error_is_database_error():
    err = ConnectionError(details={"database_path": "/tmp/x.db"})

    assert isinstance(err, DatabaseError)
    assert err.error_code == "DB_CONNECTION_ERROR"
    assert err.details["database_path"] == "/tmp/x.db"


def test_validation_error_fields():
    err = ValidationError("잘못된 테이블명", field="table", value="bad name")

    assert isinstance(err, DBCrudError)
    assert err.details == {"field": "table", "value": "bad name"}
