"""팀 라우터 — 팀 CRUD 및 통계 엔드포인트.

Team Router — CRUD and statistics endpoints for teams.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.database import get_db
from teamroster.schemas.team import TeamAgeAverage, TeamCreate, TeamDetailResponse, TeamResponse
from teamroster.services.team_service import team_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamResponse]:
    """팀 목록을 조회합니다."""
    return await team_service.list_teams(db)


@router.get("/stats", response_model=list[TeamAgeAverage])
async def team_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamAgeAverage]:
    """팀별 평균 나이를 조회합니다.

    Average member age per team, ordered by team name.
    """
    return await team_service.average_age_by_team(db)


@router.get("/{team_id}", response_model=TeamDetailResponse)
async def get_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamDetailResponse:
    """팀 상세 정보를 조회합니다 (소속 회원 포함)."""
    return await team_service.get_team(db, team_id)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다. 이름 중복 시 409."""
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result


@router.delete("/{team_id}", status_code=204)
async def delete_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """팀을 삭제합니다. 소속 회원은 팀 없음 상태가 됩니다."""
    await team_service.delete_team(db, team_id)
    await db.commit()
