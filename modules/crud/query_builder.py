"""
CRUD 쿼리 빌더

테이블명과 속성 매핑으로부터 매개변수화된 INSERT/UPDATE/DELETE 문을 만듭니다.
I/O와 상태가 없는 순수 함수들입니다.

주의:
    * 테이블/컬럼명은 백틱으로 감싸기만 하고 이스케이프하지 않습니다.
      외부 입력을 식별자로 넘기지 말고 CrudOrchestrator의 허용 목록 검사를 거치세요.
    * 빈 where는 WHERE 절이 없는 문장(전체 행 대상)을 만듭니다. 빌더는 이를 막지 않습니다.
"""

from typing import Any, List, Tuple

from ._crud_helpers import AttributeMapping, crud_normalize_pairs
from .crud_schema import BuiltQuery

IDENTIFIER_QUOTE = "`"
PLACEHOLDER = "?"


def quote_identifier(name: str) -> str:
    """식별자를 백틱으로 감쌉니다 (이스케이프 없음)."""
    return f"{IDENTIFIER_QUOTE}{name}{IDENTIFIER_QUOTE}"


def _assignments(pairs: List[Tuple[str, Any]]) -> List[str]:
    return [f"{quote_identifier(column)}={PLACEHOLDER}" for column, _ in pairs]


def _where_clause(where: AttributeMapping) -> Tuple[str, List[Any]]:
    """AND로 연결된 등호 조건 (빈 매핑이면 WHERE 없음)"""
    pairs = crud_normalize_pairs(where)
    if not pairs:
        return "", []
    return " WHERE " + " AND ".join(_assignments(pairs)), [value for _, value in pairs]


def build_insert(table: str, fields: AttributeMapping) -> BuiltQuery:
    """
    INSERT 문 생성

    Args:
        table: 테이블명
        fields: 삽입할 컬럼 → 값

    Returns:
        BuiltQuery: INSERT INTO `t` (`a`, `b`) VALUES (?, ?) 와 값 튜플
    """
    pairs = crud_normalize_pairs(fields)
    columns = ", ".join(quote_identifier(column) for column, _ in pairs)
    placeholders = ", ".join(PLACEHOLDER for _ in pairs)

    sql = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({placeholders})"
    return BuiltQuery(sql=sql, params=tuple(value for _, value in pairs))


def build_update(table: str, where: AttributeMapping, fields: AttributeMapping) -> BuiltQuery:
    """
    UPDATE 문 생성

    매개변수는 SET 값들 다음에 WHERE 값들이 옵니다.

    Args:
        table: 테이블명
        where: 일치 조건 컬럼 → 값 (AND)
        fields: 변경할 컬럼 → 값

    Returns:
        BuiltQuery: UPDATE `t` SET `a`=?, `b`=? WHERE `id`=? 와 값 튜플
    """
    pairs = crud_normalize_pairs(fields)
    where_sql, where_values = _where_clause(where)

    sql = f"UPDATE {quote_identifier(table)} SET {', '.join(_assignments(pairs))}{where_sql}"
    return BuiltQuery(sql=sql, params=tuple([value for _, value in pairs] + where_values))


def build_delete(table: str, where: AttributeMapping) -> BuiltQuery:
    """
    DELETE 문 생성

    Args:
        table: 테이블명
        where: 일치 조건 컬럼 → 값 (AND)

    Returns:
        BuiltQuery: DELETE FROM `t` WHERE `id`=? 와 값 튜플
    """
    where_sql, where_values = _where_clause(where)

    sql = f"DELETE FROM {quote_identifier(table)}{where_sql}"
    return BuiltQuery(sql=sql, params=tuple(where_values))
