"""회원 라우터 — 회원 조회/검색/CRUD 엔드포인트.

Member Router — Lookup, paged list, dynamic search and CRUD endpoints.
Page numbers are 1-based; page sizes above MAX_PAGE_SIZE are clamped.
Sort parameters use the "field,direction[,nullslast]" form and may repeat.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.config import settings
from teamroster.database import get_db
from teamroster.schemas.member import (
    AgeStatistics,
    BulkAgePlusRequest,
    BulkAgePlusResponse,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberUpdate,
)
from teamroster.services.member_service import member_service
from teamroster.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


def page_request_params(
    page: int = 1,
    per_page: int = settings.DEFAULT_PAGE_SIZE,
    sort: Annotated[list[str] | None, Query()] = None,
) -> PageRequest:
    """쿼리 파라미터로 페이지 요청을 구성합니다.

    Build a PageRequest from query parameters. Invalid bounds raise
    InvalidArgumentError (400).
    """
    return PageRequest.of(page, min(per_page, settings.MAX_PAGE_SIZE), sort)


@router.get("", response_model=Page)
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(page_request_params)],
) -> Page:
    """회원 목록을 페이지 단위로 조회합니다.

    List members page by page.
    """
    return await member_service.list_members(db, page_request)


@router.get("/search", response_model=Page)
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(page_request_params)],
    condition: Annotated[MemberSearchCondition, Depends()],
    with_total: bool = True,
) -> Page:
    """조건(이름, 팀 이름, 나이 범위)으로 회원 + 팀 정보를 검색합니다.

    Search member + team rows. Every filter is optional; with_total=false
    skips the total count.
    """
    return await member_service.search_members(db, condition, page_request, with_total=with_total)


@router.get("/stats", response_model=AgeStatistics)
async def member_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AgeStatistics:
    """회원 나이 집계 — Age aggregates over all members."""
    return await member_service.age_statistics(db)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원을 ID로 조회합니다. 없으면 404.

    Retrieve a member by id.
    """
    return await member_service.get_member(db, member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다.

    Create a new member.
    """
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 정보를 수정합니다.

    Update an existing member (partial).
    """
    result: MemberResponse = await member_service.update_member(db, member_id, data)
    await db.commit()
    return result


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """회원을 삭제합니다.

    Delete a member by id.
    """
    await member_service.delete_member(db, member_id)
    await db.commit()


@router.post("/bulk-age-plus", response_model=BulkAgePlusResponse)
async def bulk_age_plus(
    data: BulkAgePlusRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BulkAgePlusResponse:
    """age 이상인 회원의 나이를 일괄 1 증가시킵니다.

    Increment the age of every member aged at least data.age.
    """
    updated: int = await member_service.bulk_age_plus(db, data.age)
    await db.commit()
    return BulkAgePlusResponse(updated=updated)
