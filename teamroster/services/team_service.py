"""팀 서비스 — 팀 CRUD 비즈니스 로직.

Team Service — Business logic for team CRUD and per-team statistics.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.models.team import Team
from teamroster.repositories.member_repository import member_repository
from teamroster.repositories.team_repository import team_repository
from teamroster.schemas.team import (
    TeamAgeAverage,
    TeamCreate,
    TeamDetailResponse,
    TeamMemberItem,
    TeamResponse,
)
from teamroster.utils.exceptions import DuplicateError, NotFoundError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    def _to_response(self, team: Team) -> TeamResponse:
        return TeamResponse(id=team.id, name=team.name, created_at=team.created_at)

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        """전체 팀 목록 (id 순)."""
        teams: list[Team] = await team_repository.list_all(db)
        return [self._to_response(t) for t in teams]

    async def get_team(
        self,
        db: AsyncSession,
        team_id: int,
    ) -> TeamDetailResponse:
        """팀 상세 정보를 소속 회원과 함께 조회합니다.

        Retrieve team detail with its members.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        team: Team | None = await team_repository.get_detail(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")

        return TeamDetailResponse(
            id=team.id,
            name=team.name,
            created_at=team.created_at,
            members=[
                TeamMemberItem(id=m.id, username=m.username, age=m.age)
                for m in team.members
            ],
        )

    async def create_team(
        self,
        db: AsyncSession,
        data: TeamCreate,
    ) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team.

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 존재할 때
                            (When a team with the same name already exists)
        """
        if await team_repository.exists(db, {"name": data.name}):
            raise DuplicateError("A team with this name already exists")

        team: Team = await team_repository.create(db, {"name": data.name})
        return self._to_response(team)

    async def delete_team(self, db: AsyncSession, team_id: int) -> None:
        """팀을 삭제합니다. 소속 회원은 팀 없음 상태로 남습니다.

        Delete a team; its members remain with no team.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        if await team_repository.get_by_id(db, team_id) is None:
            raise NotFoundError("Team not found")

        await member_repository.detach_team(db, team_id)
        await team_repository.delete(db, team_id)

    async def average_age_by_team(self, db: AsyncSession) -> list[TeamAgeAverage]:
        """팀별 평균 나이 (팀 이름 순)."""
        rows = await member_repository.average_age_by_team(db)
        return [TeamAgeAverage(team_name=name, average_age=avg) for name, avg in rows]


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
