"""초기 데이터 시드 스크립트 — 팀과 샘플 회원 생성.

Seed script — Creates tables, two teams and sample members.

Usage:
    python -m teamroster.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - SEED_MEMBER_COUNT명 회원: user{i}, 나이 i, 짝수는 teamA / 홀수는 teamB
      (Members user0..user{N-1} aged i, alternating between the teams)
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from teamroster.config import settings
from teamroster.database import Base, async_session, engine
from teamroster.models import Member, Team
from teamroster.repositories.member_repository import member_repository
from teamroster.repositories.team_repository import team_repository


async def seed_data(db: AsyncSession, member_count: int) -> bool:
    """시드 데이터를 삽입합니다. 이미 팀이 있으면 건너뜁니다.

    Insert the seed data unless any team already exists.

    Returns:
        bool: 삽입 여부 (Whether data was inserted)
    """
    if await team_repository.count(db) > 0:
        return False

    team_a, team_b = await team_repository.save_all(db, [Team(name="teamA"), Team(name="teamB")])
    members: list[Member] = [
        Member(f"user{i}", i, team_a if i % 2 == 0 else team_b) for i in range(member_count)
    ]
    await member_repository.save_all(db, members)
    return True


async def seed() -> None:
    """테이블을 생성하고 시드 데이터를 커밋합니다.

    Create tables from ORM metadata and commit the seed data.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        inserted: bool = await seed_data(db, settings.SEED_MEMBER_COUNT)
        if not inserted:
            print("Already seeded. Skipping.")
            return
        await db.commit()

    print(f"Seed complete: 2 teams, {settings.SEED_MEMBER_COUNT} members")


if __name__ == "__main__":
    asyncio.run(seed())
