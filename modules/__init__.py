"""
dbcrud 모듈 패키지
"""

from . import crud

__all__ = [
    "crud",
]
