"""
dbcrud 프로젝트의 표준 예외 클래스 정의

쿼리 빌더, 실행기, 데이터베이스 백엔드에서 사용할 구조화된 예외 계층을 제공합니다.
모든 사용자 정의 예외는 DBCrudError를 상속받습니다.
"""

from typing import Optional, Dict, Any


class DBCrudError(Exception):
    """dbcrud 프로젝트의 최상위 예외 클래스"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class DatabaseError(DBCrudError):
    """데이터베이스 관련 오류 (실행 실패, 제약조건 위반 등)"""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        **kwargs
    ):
        details = dict(kwargs.get("details") or {})
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", "DB_ERROR"),
            details=details,
        )

    @property
    def operation(self) -> Optional[str]:
        return self.details.get("operation")

    @property
    def table(self) -> Optional[str]:
        return self.details.get("table")


class ConnectionError(DatabaseError):
    """데이터베이스 연결 오류"""

    def __init__(self, message: str = "데이터베이스 연결에 실패했습니다", **kwargs):
        kwargs.setdefault("error_code", "DB_CONNECTION_ERROR")
        super().__init__(message=message, **kwargs)


class ConfigurationError(DBCrudError):
    """설정 관련 오류"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        details = dict(kwargs.get("details") or {})
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", "CONFIG_ERROR"),
            details=details,
        )


class ValidationError(DBCrudError):
    """입력 검증 오류 (식별자, 빈 매핑 등)"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        details = dict(kwargs.get("details") or {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", "VALIDATION_ERROR"),
            details=details,
        )
