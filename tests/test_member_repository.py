"""회원 레포지토리 테스트.

Member repository tests — pre-save hooks, derived finders, bulk update,
aggregates, subqueries and entity paging.
"""

import pytest
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.models.member import Member
from teamroster.repositories.member_repository import member_repository
from teamroster.repositories.team_repository import team_repository
from teamroster.utils.pagination import PageRequest, SortOrder


class TestSaveHooks:
    """저장 전 훅 테스트."""

    async def test_pre_persist_sets_timestamps(self, db: AsyncSession, teams):
        member = await member_repository.save(db, Member("hooked", 1))
        assert member.id is not None
        assert member.created_at is not None
        assert member.created_at == member.updated_at

    async def test_pre_update_only_touches_updated_at(self, db: AsyncSession, members):
        member = members["member1"]
        created_at = member.created_at
        updated = await member_repository.update(db, member.id, {"age": 11})
        assert updated.age == 11
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at

    async def test_update_missing_returns_none(self, db: AsyncSession):
        assert await member_repository.update(db, 999, {"age": 1}) is None

    async def test_get_by_id_missing_returns_none(self, db: AsyncSession):
        """없는 ID 조회는 예외가 아닌 None."""
        assert await member_repository.get_by_id(db, 999) is None


class TestDerivedQueries:
    """파생 쿼리 테스트."""

    async def test_find_by_username_and_age_greater_than(self, db: AsyncSession, members):
        await member_repository.save(db, Member("member1", 25))
        result = await member_repository.find_by_username_and_age_greater_than(db, "member1", 15)
        assert [(m.username, m.age) for m in result] == [("member1", 25)]

    async def test_find_user(self, db: AsyncSession, members):
        result = await member_repository.find_user(db, "member3", 30)
        assert len(result) == 1
        assert await member_repository.find_user(db, "member3", 31) == []

    async def test_find_top3(self, db: AsyncSession, members):
        result = await member_repository.find_top3(db)
        assert [m.username for m in result] == ["member1", "member2", "member3"]

    async def test_find_username_list(self, db: AsyncSession, members):
        assert await member_repository.find_username_list(db) == ["member1", "member2", "member3", "member4"]

    async def test_find_by_names(self, db: AsyncSession, members):
        result = await member_repository.find_by_names(db, ["member4", "member1", "ghost"])
        assert [m.username for m in result] == ["member1", "member4"]
        assert await member_repository.find_by_names(db, []) == []

    async def test_find_one_by_username(self, db: AsyncSession, members):
        found = await member_repository.find_one_by_username(db, "member2")
        assert found is not None and found.age == 20
        assert await member_repository.find_one_by_username(db, "ghost") is None

    async def test_find_one_by_username_duplicates_raise(self, db: AsyncSession, members):
        await member_repository.save(db, Member("member2", 99))
        with pytest.raises(MultipleResultsFound):
            await member_repository.find_one_by_username(db, "member2")

    async def test_find_member_dto_inner_join(self, db: AsyncSession, members, loner):
        """팀 없는 회원은 DTO 조회(내부 조인)에서 제외."""
        result = await member_repository.find_member_dto(db)
        assert [(d.username, d.team_name) for d in result] == [
            ("member1", "teamA"),
            ("member2", "teamA"),
            ("member3", "teamB"),
            ("member4", "teamB"),
        ]

    async def test_find_member_fetch_join(self, db: AsyncSession, members, loner):
        db.expunge_all()
        result = await member_repository.find_member_fetch_join(db)
        # 팀이 이미 로드되어 있어 추가 쿼리 없이 접근 가능
        assert [m.team.name if m.team else None for m in result] == ["teamA", "teamA", "teamB", "teamB", None]


class TestPagedQueries:
    """엔티티 페이징 테스트."""

    async def test_find_by_age(self, db: AsyncSession, teams):
        await member_repository.save_all(db, [Member(f"m{i}", 10) for i in range(5)] + [Member("old", 70)])
        request = PageRequest(offset=0, limit=3, sort=[SortOrder(field="username", direction="desc")])
        page = await member_repository.find_by_age(db, 10, request)
        assert [m.username for m in page.items] == ["m4", "m3", "m2"]
        assert page.total == 5
        assert page.pages == 2

    async def test_find_all_paged_last_page(self, db: AsyncSession, members):
        page = await member_repository.find_all_paged(db, PageRequest(offset=3, limit=3))
        assert [m.username for m in page.items] == ["member4"]
        assert page.total == 4


class TestBulkUpdate:
    async def test_bulk_age_plus(self, db: AsyncSession, members):
        """age 20 이상 회원 3명의 나이가 1 증가."""
        updated = await member_repository.bulk_age_plus(db, 20)
        assert updated == 3

        # 벌크 연산 후 세션이 만료되므로 다시 조회 — session was expired, reload
        ages = [m.age for m in await member_repository.find_top3(db)]
        assert ages == [10, 21, 31]


class TestAggregates:
    async def test_age_statistics(self, db: AsyncSession, members):
        stats = await member_repository.age_statistics(db)
        assert stats.count == 4
        assert stats.sum == 100
        assert stats.avg == 25
        assert stats.max == 40
        assert stats.min == 10

    async def test_age_statistics_empty(self, db: AsyncSession):
        stats = await member_repository.age_statistics(db)
        assert stats.count == 0
        assert stats.avg is None

    async def test_average_age_by_team(self, db: AsyncSession, members, loner):
        assert await member_repository.average_age_by_team(db) == [("teamA", 15.0), ("teamB", 35.0)]

    async def test_find_oldest(self, db: AsyncSession, members):
        assert [m.age for m in await member_repository.find_oldest(db)] == [40]

    async def test_find_age_at_least_average(self, db: AsyncSession, members):
        assert [m.age for m in await member_repository.find_age_at_least_average(db)] == [30, 40]


class TestTeamRepository:
    async def test_get_by_name(self, db: AsyncSession, teams):
        team = await team_repository.get_by_name(db, "teamB")
        assert team is not None and team.id == teams["teamB"].id
        assert await team_repository.get_by_name(db, "teamZ") is None

    async def test_get_detail_members_ordered(self, db: AsyncSession, members):
        team = await team_repository.get_detail(db, members["member3"].team_id)
        assert [m.username for m in team.members] == ["member3", "member4"]

    async def test_change_team(self, db: AsyncSession, members, teams):
        """소속 팀 변경 후 양쪽 팀의 회원 목록이 갱신."""
        member = members["member1"]
        member.change_team(teams["teamB"])
        await db.flush()

        team_a = await team_repository.get_detail(db, teams["teamA"].id)
        team_b = await team_repository.get_detail(db, teams["teamB"].id)
        assert [m.username for m in team_a.members] == ["member2"]
        assert [m.username for m in team_b.members] == ["member1", "member3", "member4"]
