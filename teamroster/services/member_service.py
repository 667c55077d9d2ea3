"""회원 서비스 — 회원 CRUD 및 검색 비즈니스 로직.

Member Service — Business logic for member CRUD, paging and search.
Converts ORM entities into response schemas and turns missing rows into
NotFoundError where the caller requires a present value.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.models.member import Member
from teamroster.repositories.member_repository import member_repository
from teamroster.repositories.team_repository import team_repository
from teamroster.schemas.member import (
    AgeStatistics,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberUpdate,
)
from teamroster.utils.exceptions import NotFoundError
from teamroster.utils.pagination import Page, PageRequest


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다 (team이 로드되어 있어야 함).

        Convert a Member (with its team loaded) to a MemberResponse.
        """
        return MemberResponse(
            id=member.id,
            username=member.username,
            age=member.age,
            team_id=member.team_id,
            team_name=member.team.name if member.team is not None else None,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )

    async def _ensure_team(self, db: AsyncSession, team_id: int | None) -> None:
        """참조할 팀이 존재하는지 확인합니다.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        if team_id is not None and await team_repository.get_by_id(db, team_id) is None:
            raise NotFoundError("Team not found")

    async def find_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> MemberResponse | None:
        """회원을 조회합니다. 없으면 None (예외 없음).

        Look up a member; absence is returned as None.
        """
        member: Member | None = await member_repository.get_detail(db, member_id)
        return self._to_response(member) if member is not None else None

    async def get_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> MemberResponse:
        """회원을 조회합니다. 반드시 존재해야 함.

        Retrieve a member that must exist.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        response: MemberResponse | None = await self.find_member(db, member_id)
        if response is None:
            raise NotFoundError("Member not found")
        return response

    async def list_members(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> Page:
        """회원 목록을 페이지 단위로 조회합니다.

        List members page by page.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page_request: 페이지 요청 (Offset, limit, sort)

        Returns:
            Page: MemberResponse 항목의 페이지 (Page of member responses)
        """
        page: Page = await member_repository.find_all_paged(db, page_request)
        page.items = [self._to_response(m) for m in page.items]
        return page

    async def search_members(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        with_total: bool = True,
    ) -> Page:
        """동적 조건으로 회원 + 팀 정보를 검색합니다.

        Search member + team rows with the dynamic condition.
        """
        return await member_repository.search_page_complex(
            db, condition, page_request, with_total=with_total
        )

    async def create_member(
        self,
        db: AsyncSession,
        data: MemberCreate,
    ) -> MemberResponse:
        """새 회원을 생성합니다.

        Create a new member, optionally assigned to an existing team.

        Raises:
            NotFoundError: 지정한 팀이 없을 때 (Referenced team not found)
        """
        await self._ensure_team(db, data.team_id)
        member: Member = await member_repository.create(db, data.model_dump())
        return await self.get_member(db, member.id)

    async def update_member(
        self,
        db: AsyncSession,
        member_id: int,
        data: MemberUpdate,
    ) -> MemberResponse:
        """회원 정보를 부분 수정합니다.

        Partially update a member (only fields that were sent).

        Raises:
            NotFoundError: 회원 또는 지정한 팀이 없을 때
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        if "team_id" in update_data:
            await self._ensure_team(db, update_data["team_id"])

        member: Member | None = await member_repository.update(db, member_id, update_data)
        if member is None:
            raise NotFoundError("Member not found")
        return await self.get_member(db, member_id)

    async def delete_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> None:
        """회원을 삭제합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        deleted: bool = await member_repository.delete(db, member_id)
        if not deleted:
            raise NotFoundError("Member not found")

    async def bulk_age_plus(self, db: AsyncSession, age: int) -> int:
        """age 이상인 회원의 나이를 일괄 1 증가 — returns updated row count."""
        return await member_repository.bulk_age_plus(db, age)

    async def age_statistics(self, db: AsyncSession) -> AgeStatistics:
        return await member_repository.age_statistics(db)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
