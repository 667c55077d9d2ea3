"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request / sort models, sort application with a stable
tie-break, and a paginate function that can skip the count query when
the page itself already determines the total.
"""

from collections.abc import Callable, Mapping
from math import ceil
from typing import Any, Literal, Sequence

from pydantic import BaseModel, Field
from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.config import settings
from teamroster.utils.exceptions import InvalidArgumentError

# 64비트 정수 컬럼 상한 — Largest offset/limit a BIGINT bind parameter accepts
MAX_ROW_BOUND: int = 2**63 - 1


class SortOrder(BaseModel):
    """정렬 조건 — 필드, 방향, NULL 위치.

    Sort specification: field name, direction and null placement.

    Attributes:
        field: 정렬 필드 이름 (Whitelisted field name)
        direction: 정렬 방향 (asc | desc)
        nulls: NULL 위치 (first | last | None = database default)
    """

    field: str
    direction: Literal["asc", "desc"] = "asc"
    nulls: Literal["first", "last"] | None = None

    @classmethod
    def parse(cls, expr: str) -> "SortOrder":
        """쿼리스트링 형식 "필드,방향,nulls위치"를 해석합니다.

        Parse the query-string form, e.g. "age", "age,desc",
        "username,asc,nullslast".

        Raises:
            InvalidArgumentError: 방향 또는 NULL 위치 값이 잘못된 경우
        """
        # 필드 이름은 대소문자 그대로 — field names match the whitelist exactly
        field, *options = [p.strip() for p in expr.split(",")]
        if not field:
            raise InvalidArgumentError(f"Invalid sort expression: {expr!r}")

        direction: str = "asc"
        nulls: str | None = None
        for part in (o.lower() for o in options):
            if part in ("asc", "desc"):
                direction = part
            elif part in ("nullsfirst", "nulls_first"):
                nulls = "first"
            elif part in ("nullslast", "nulls_last"):
                nulls = "last"
            else:
                raise InvalidArgumentError(f"Invalid sort expression: {expr!r}")
        return cls(field=field, direction=direction, nulls=nulls)


class PageRequest(BaseModel):
    """페이지 요청 — offset/limit 및 정렬 조건.

    Page request with offset, limit and optional sort orders.
    Bounds are checked by ensure_valid() so that violations surface as
    InvalidArgumentError (HTTP 400) from the query layer.

    Attributes:
        offset: 건너뛸 행 수, 0 이상 (Rows to skip, non-negative)
        limit: 최대 행 수, 1 이상 (Maximum rows, positive)
        sort: 정렬 조건 목록 (Sort orders, applied in sequence)
    """

    offset: int = 0
    limit: int = settings.DEFAULT_PAGE_SIZE
    sort: list[SortOrder] = Field(default_factory=list)

    @classmethod
    def of(
        cls,
        page: int,
        per_page: int,
        sort: Sequence[str | SortOrder] | None = None,
    ) -> "PageRequest":
        """1부터 시작하는 페이지 번호로 요청을 생성합니다.

        Build a request from a 1-based page number.
        """
        orders: list[SortOrder] = [
            s if isinstance(s, SortOrder) else SortOrder.parse(s) for s in (sort or [])
        ]
        request = cls(offset=(page - 1) * per_page, limit=per_page, sort=orders)
        request.ensure_valid()
        return request

    def ensure_valid(self) -> None:
        """offset/limit 범위를 검증합니다.

        Raises:
            InvalidArgumentError: offset < 0, limit <= 0, 또는 64비트 범위 초과
                                  (Out of range, including past a 64-bit integer)
        """
        if self.limit <= 0:
            raise InvalidArgumentError("limit must be positive")
        if self.offset < 0:
            raise InvalidArgumentError("offset must be non-negative")
        if self.offset > MAX_ROW_BOUND or self.limit > MAX_ROW_BOUND:
            raise InvalidArgumentError("offset and limit must fit in a 64-bit integer")


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수, 요청하지 않으면 None (Total count, None when not requested)
        offset: 요청 offset (Requested offset)
        limit: 요청 limit (Requested limit)
        page: 현재 페이지 번호, 1부터 시작 (1-indexed; None when offset is not a multiple of limit)
        pages: 전체 페이지 수, total이 없으면 None (Total pages, None without total)
    """

    items: list[Any]
    total: int | None = None
    offset: int
    limit: int
    page: int | None = None
    pages: int | None = None

    @classmethod
    def build(cls, items: list[Any], page_request: PageRequest, total: int | None) -> "Page":
        """항목과 요청으로 페이지를 구성합니다 — Assemble a page.

        page는 offset이 limit의 배수일 때만 정의됩니다
        (page is only defined when offset is a multiple of limit).
        """
        page_number, remainder = divmod(page_request.offset, page_request.limit)
        return cls(
            items=items,
            total=total,
            offset=page_request.offset,
            limit=page_request.limit,
            page=page_number + 1 if remainder == 0 else None,
            pages=ceil(total / page_request.limit) if total is not None else None,
        )


def apply_sort(
    query: Select[Any],
    sort: Sequence[SortOrder],
    columns: Mapping[str, ColumnElement[Any]],
    tie_breaker: ColumnElement[Any],
) -> Select[Any]:
    """정렬 조건을 적용하고 마지막에 tie-break 컬럼을 추가합니다.

    Apply sort orders through a column whitelist, then append the
    tie-break column ascending so that ordering is always stable.

    Raises:
        InvalidArgumentError: 허용되지 않은 정렬 필드 (Unknown sort field)
    """
    clauses: list[Any] = []
    for order in sort:
        column = columns.get(order.field)
        if column is None:
            raise InvalidArgumentError(f"Unsupported sort field: {order.field}")
        clause = column.desc() if order.direction == "desc" else column.asc()
        if order.nulls == "first":
            clause = clause.nulls_first()
        elif order.nulls == "last":
            clause = clause.nulls_last()
        clauses.append(clause)
    clauses.append(tie_breaker.asc())
    return query.order_by(*clauses)


def short_circuit_total(offset: int, limit: int, size: int) -> int | None:
    """카운트 쿼리 없이 전체 개수를 확정할 수 있으면 반환합니다.

    Return the total when the page alone determines it, otherwise None.
    A short page (size < limit) ends the result set, so total is
    offset + size. An empty page past offset 0 does not prove where the
    set ends and still needs the count query.
    """
    if size < limit and (offset == 0 or size > 0):
        return offset + size
    return None


async def count_total(db: AsyncSession, count_query: Select[Any]) -> int:
    """카운트 쿼리를 실행합니다 — Execute a count query (None → 0)."""
    return (await db.execute(count_query)).scalar() or 0


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
    count_query: Select[Any] | None = None,
    with_total: bool = True,
    optimize_count: bool = True,
    scalars: bool = True,
    mapper: Callable[[Any], Any] | None = None,
) -> Page:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated query and return a Page.
    The content query gets OFFSET/LIMIT; the total comes from count_query
    (default: COUNT over the unordered query as a subquery) unless
    optimize_count allows it to be derived from the page itself.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬까지 적용된 SELECT 쿼리 (Ordered base query)
        page_request: 페이지 요청 (Offset, limit)
        count_query: 별도 카운트 쿼리 (Dedicated count query, optional)
        with_total: 전체 개수 포함 여부 (Whether to compute the total)
        optimize_count: 짧은 페이지에서 카운트 생략 (Skip count on short pages)
        scalars: True면 첫 컬럼 엔티티, False면 Row (Entities vs rows)
        mapper: 각 항목 변환 함수 (Per-item transform, optional)

    Returns:
        Page: 페이지 결과 (Page result)

    Raises:
        InvalidArgumentError: offset/limit 범위 위반
    """
    page_request.ensure_valid()

    result = await db.execute(query.offset(page_request.offset).limit(page_request.limit))
    rows: list[Any] = list(result.scalars().all()) if scalars else list(result.all())
    items: list[Any] = [mapper(r) for r in rows] if mapper is not None else rows

    total: int | None = None
    if with_total:
        if optimize_count:
            total = short_circuit_total(page_request.offset, page_request.limit, len(rows))
        if total is None:
            if count_query is None:
                count_query = select(func.count()).select_from(query.order_by(None).subquery())
            total = await count_total(db, count_query)

    return Page.build(items, page_request, total)
