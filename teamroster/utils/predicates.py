"""동적 WHERE 조건 유틸리티.

Dynamic WHERE clause utilities.
Predicate builders return None for absent filter values; the helpers here
drop those and AND the rest onto a Select.
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, and_


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 하나라도 있으면 True.

    True when the value is not None and contains a non-whitespace character.
    """
    return value is not None and value.strip() != ""


def conjunction(*predicates: ColumnElement[bool] | None) -> list[ColumnElement[bool]]:
    """None 조건을 제외한 조건 목록 — Present predicates only."""
    return [p for p in predicates if p is not None]


def apply_where(query: Select[Any], predicates: list[ColumnElement[bool]]) -> Select[Any]:
    """조건 목록을 AND로 묶어 적용합니다. 비어 있으면 전체 조회.

    AND the predicates onto the query. An empty list leaves it unfiltered.
    """
    if not predicates:
        return query
    return query.where(and_(*predicates))
