"""회원 레포지토리 — 회원 CRUD, 파생 쿼리, 동적 검색.

Member Repository — CRUD, derived finder queries, and the dynamic search.

The dynamic search builds its WHERE clause from a MemberSearchCondition:
each field maps to a predicate builder that returns None when the field is
absent, and the present predicates are ANDed together. Members are LEFT
OUTER JOINed to teams so that members without a team stay in the result
unless a team-name filter is given.
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, joinedload, selectinload

from teamroster.models.base_entity import utcnow
from teamroster.models.member import Member
from teamroster.models.team import Team
from teamroster.repositories.base import BaseRepository
from teamroster.schemas.member import AgeStatistics, MemberDto, MemberSearchCondition, MemberTeamRow
from teamroster.utils.pagination import Page, PageRequest, apply_sort, paginate
from teamroster.utils.predicates import apply_where, conjunction, has_text

# 엔티티 페이지 정렬 허용 필드 — Sortable fields for member entity pages
MEMBER_SORT_COLUMNS: dict[str, ColumnElement[Any]] = {
    "id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "created_at": Member.created_at,
}

# 검색 프로젝션 정렬 허용 필드 — Sortable fields for the member + team projection
SEARCH_SORT_COLUMNS: dict[str, ColumnElement[Any]] = {
    "id": Member.id,
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_id": Team.id,
    "team_name": Team.name,
}


# ---------------------------------------------------------------------------
# 검색 조건 빌더 — 값이 없으면 None (조건 없음)
# Predicate builders — None when the value is absent (no constraint)
# ---------------------------------------------------------------------------
def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def search_predicates(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """검색 조건에서 존재하는 조건만 모읍니다.

    Collect the predicates for the fields present in the condition.
    """
    return conjunction(
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )


def _to_row(row: Any) -> MemberTeamRow:
    return MemberTeamRow(**row._mapping)


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # ------------------------------------------------------------------
    # 단건 조회 — Single lookups
    # ------------------------------------------------------------------
    async def get_detail(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> Member | None:
        """회원을 소속 팀과 함께 조회합니다.

        Retrieve a member with its team eagerly loaded.
        populate_existing refreshes a member already in the identity map
        (e.g. right after team_id was changed).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 회원 ID (Member identifier)

        Returns:
            Member | None: 팀이 로드된 회원 또는 None (Member with team, or None)
        """
        query: Select = (
            select(Member)
            .options(selectinload(Member.team))
            .where(Member.id == member_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_one_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Member | None:
        """이름으로 회원 한 명을 조회합니다. 없으면 None.

        Retrieve the single member with this username, or None.

        Raises:
            MultipleResultsFound: 같은 이름의 회원이 둘 이상인 경우
        """
        result = await db.execute(select(Member).where(Member.username == username))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # 파생 쿼리 — Derived finder queries
    # ------------------------------------------------------------------
    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """이름이 일치하는 회원 목록 (id 순)."""
        query: Select = select(Member).where(Member.username == username).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_username_and_age_greater_than(
        self,
        db: AsyncSession,
        username: str,
        age: int,
    ) -> list[Member]:
        """이름이 일치하고 나이가 age보다 큰 회원 목록.

        Members with the given username and age strictly greater than age.
        """
        query: Select = (
            select(Member)
            .where(Member.username == username, Member.age > age)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_user(self, db: AsyncSession, username: str, age: int) -> list[Member]:
        """이름과 나이가 모두 일치하는 회원 목록."""
        query: Select = (
            select(Member)
            .where(Member.username == username, Member.age == age)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_top3(self, db: AsyncSession) -> list[Member]:
        """id 순 처음 3명 — First three members by id."""
        result = await db.execute(select(Member).order_by(Member.id).limit(3))
        return list(result.scalars().all())

    async def find_username_list(self, db: AsyncSession) -> list[str | None]:
        """회원 이름만 조회 (id 순) — Usernames only."""
        result = await db.execute(select(Member.username).order_by(Member.id))
        return list(result.scalars().all())

    async def find_by_names(self, db: AsyncSession, names: list[str]) -> list[Member]:
        """이름 목록에 포함된 회원 (username IN ...).

        Members whose username is in names. An empty list matches nothing.
        """
        if not names:
            return []
        query: Select = select(Member).where(Member.username.in_(names)).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_member_dto(self, db: AsyncSession) -> list[MemberDto]:
        """회원 id/이름 + 팀 이름 DTO 목록 (내부 조인, 팀 없는 회원 제외).

        Member id, username and team name; inner join, so members without
        a team are excluded.
        """
        query: Select = (
            select(Member.id, Member.username, Team.name.label("team_name"))
            .select_from(Member)
            .join(Member.team)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [MemberDto(**row._mapping) for row in result.all()]

    async def find_member_fetch_join(self, db: AsyncSession) -> list[Member]:
        """회원 목록을 팀과 함께 한 번의 쿼리로 조회합니다 (LEFT OUTER JOIN).

        Members with their team loaded in the same query.
        """
        query: Select = select(Member).options(joinedload(Member.team)).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_all_paged(self, db: AsyncSession, page_request: PageRequest) -> Page:
        """전체 회원을 페이지 단위로 조회합니다 (팀 포함).

        Page over all members with their team loaded.
        """
        query: Select = apply_sort(
            select(Member).options(selectinload(Member.team)),
            page_request.sort,
            MEMBER_SORT_COLUMNS,
            Member.id,
        )
        count_query: Select = select(func.count(Member.id))
        return await paginate(db, query, page_request, count_query=count_query)

    async def find_by_age(self, db: AsyncSession, age: int, page_request: PageRequest) -> Page:
        """나이가 일치하는 회원을 페이지 단위로 조회합니다.

        Page over members of the given age; the count query does not join.
        """
        query: Select = apply_sort(
            select(Member).options(selectinload(Member.team)).where(Member.age == age),
            page_request.sort,
            MEMBER_SORT_COLUMNS,
            Member.id,
        )
        count_query: Select = select(func.count(Member.id)).where(Member.age == age)
        return await paginate(db, query, page_request, count_query=count_query)

    # ------------------------------------------------------------------
    # 벌크 연산 — Bulk operations
    # ------------------------------------------------------------------
    async def bulk_age_plus(self, db: AsyncSession, age: int) -> int:
        """age 이상인 회원의 나이를 일괄 1 증가시킵니다.

        Increment the age of every member aged at least age in a single
        UPDATE statement. The statement bypasses the identity map, so the
        session is expired afterwards; reload entities before reading them.

        Returns:
            int: 변경된 행 수 (Number of updated rows)
        """
        stmt = (
            update(Member)
            .where(Member.age >= age)
            .values(age=Member.age + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        db.expire_all()
        return result.rowcount

    async def detach_team(self, db: AsyncSession, team_id: int) -> int:
        """팀 소속 회원을 팀 없음 상태로 바꿉니다.

        Clear team_id on every member of the team; returns the row count.
        """
        stmt = (
            update(Member)
            .where(Member.team_id == team_id)
            .values(team_id=None, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        db.expire_all()
        return result.rowcount

    # ------------------------------------------------------------------
    # 집계 및 서브쿼리 — Aggregates and subqueries
    # ------------------------------------------------------------------
    async def age_statistics(self, db: AsyncSession) -> AgeStatistics:
        """나이 집계 (count, sum, avg, max, min)."""
        query: Select = select(
            func.count(Member.id),
            func.sum(Member.age),
            func.avg(Member.age),
            func.max(Member.age),
            func.min(Member.age),
        )
        count, total, average, oldest, youngest = (await db.execute(query)).one()
        return AgeStatistics(
            count=count,
            sum=total,
            avg=float(average) if average is not None else None,
            max=oldest,
            min=youngest,
        )

    async def average_age_by_team(self, db: AsyncSession) -> list[tuple[str, float]]:
        """팀별 평균 나이 (팀 이름 순, 팀 없는 회원 제외)."""
        query: Select = (
            select(Team.name, func.avg(Member.age))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await db.execute(query)
        return [(name, float(avg)) for name, avg in result.all()]

    async def find_oldest(self, db: AsyncSession) -> list[Member]:
        """최고령 회원 목록 — age = (SELECT max(age) ...)."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age == select(func.max(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_age_at_least_average(self, db: AsyncSession) -> list[Member]:
        """평균 나이 이상인 회원 목록 — age >= (SELECT avg(age) ...)."""
        member_sub = aliased(Member, name="member_sub")
        query: Select = (
            select(Member)
            .where(Member.age >= select(func.avg(member_sub.age)).scalar_subquery())
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # 동적 검색 — Dynamic search
    # ------------------------------------------------------------------
    def _search_query(self, condition: MemberSearchCondition) -> Select:
        """회원 + 팀 프로젝션 쿼리 (LEFT OUTER JOIN + 동적 WHERE)."""
        query: Select = (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
        )
        return apply_where(query, search_predicates(condition))

    def _search_count_query(self, condition: MemberSearchCondition) -> Select:
        """검색 카운트 쿼리 — 회원 id 기준, 팀 조건이 있을 때만 조인.

        Count query over member ids; teams are joined only when the
        team-name predicate needs them.
        """
        query: Select = select(func.count(Member.id)).select_from(Member)
        if has_text(condition.team_name):
            query = query.outerjoin(Member.team)
        return apply_where(query, search_predicates(condition))

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamRow]:
        """조건에 맞는 회원 + 팀 정보를 id 순으로 모두 조회합니다.

        Return every member + team row matching the condition, by member id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건, 빈 필드는 무시 (Search condition)

        Returns:
            list[MemberTeamRow]: 프로젝션 행 목록 (Projection rows)
        """
        query: Select = self._search_query(condition).order_by(Member.id)
        result = await db.execute(query)
        return [_to_row(row) for row in result.all()]

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page:
        """단순 페이징 — 내용 쿼리와 카운트 쿼리를 항상 함께 실행.

        Simple paging: the count query (over the joined content query)
        always runs.
        """
        query: Select = apply_sort(
            self._search_query(condition), page_request.sort, SEARCH_SORT_COLUMNS, Member.id
        )
        return await paginate(
            db, query, page_request, optimize_count=False, scalars=False, mapper=_to_row
        )

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        with_total: bool = True,
    ) -> Page:
        """복잡한 페이징 — 카운트 쿼리 분리 및 생략 최적화.

        Complex paging: a dedicated count query over member ids that only
        joins teams when needed, skipped entirely when the page is short
        enough to determine the total by itself.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Offset, limit, sort)
            with_total: 전체 개수 포함 여부 (Whether to compute the total)

        Returns:
            Page: MemberTeamRow 항목의 페이지 (Page of projection rows)

        Raises:
            InvalidArgumentError: offset/limit 위반 또는 허용되지 않은 정렬 필드
        """
        query: Select = apply_sort(
            self._search_query(condition), page_request.sort, SEARCH_SORT_COLUMNS, Member.id
        )
        return await paginate(
            db,
            query,
            page_request,
            count_query=self._search_count_query(condition),
            with_total=with_total,
            scalars=False,
            mapper=_to_row,
        )


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
