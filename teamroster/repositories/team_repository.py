"""팀 레포지토리 — 팀 CRUD 및 관련 쿼리.

Team Repository — CRUD and related queries for teams.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from teamroster.models.team import Team
from teamroster.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the teams table.
    """

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> Team | None:
        """이름으로 팀을 조회합니다.

        Retrieve a team by its unique name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 팀 이름 (Team name)

        Returns:
            Team | None: 팀 또는 None (Team or None)
        """
        result = await db.execute(select(Team).where(Team.name == name))
        return result.scalar_one_or_none()

    async def get_detail(
        self,
        db: AsyncSession,
        team_id: int,
    ) -> Team | None:
        """팀 상세 정보를 소속 회원과 함께 조회합니다.

        Retrieve a team with its members eagerly loaded.
        populate_existing refreshes a team already in the identity map.
        """
        query: Select = (
            select(Team)
            .options(selectinload(Team.members))
            .where(Team.id == team_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_all(self, db: AsyncSession) -> list[Team]:
        """전체 팀 목록 (id 순) — All teams ordered by id."""
        result = await db.execute(select(Team).order_by(Team.id))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
