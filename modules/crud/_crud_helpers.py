"""
CRUD 모듈 내부 헬퍼 함수들

식별자 검사와 속성 매핑 정규화를 담당합니다.
"""

import re
from typing import Any, Iterable, List, Mapping, Tuple, Union

AttributeMapping = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def crud_is_valid_identifier(name: Any) -> bool:
    """영문자/숫자/밑줄로만 구성되고 숫자로 시작하지 않는 이름인지 확인"""
    return isinstance(name, str) and bool(_IDENTIFIER_RE.match(name))


def crud_normalize_pairs(attributes: AttributeMapping) -> List[Tuple[str, Any]]:
    """
    속성 매핑을 (컬럼, 값) 쌍 리스트로 변환

    Mapping이면 삽입 순서, 쌍 시퀀스면 주어진 순서를 그대로 유지합니다.
    """
    if isinstance(attributes, Mapping):
        return list(attributes.items())
    return [(column, value) for column, value in attributes]


def crud_mask_params(params: Iterable[Any], max_length: int = 200) -> str:
    """로그용 매개변수 문자열 (길이 제한)"""
    text = repr(tuple(params))
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text
