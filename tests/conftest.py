"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Temporary database, session, and httpx client fixtures.
Each test gets a fresh schema on a throwaway SQLite file (aiosqlite);
set TEST_DATABASE_URL to run against another database instead.
"""

import os

# 앱 모듈 임포트 전에 설정 — must be set before teamroster.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from teamroster.database import Base, get_db
from teamroster.main import app
from teamroster.models import Member, Team  # noqa: F401 — register all models with metadata


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 만듭니다."""
    url: str = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    eng = create_async_engine(url, echo=False)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    from teamroster.repositories.team_repository import team_repository
    team_a, team_b = await team_repository.save_all(db, [Team(name="teamA"), Team(name="teamB")])
    return {"teamA": team_a, "teamB": team_b}


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams) -> dict[str, Member]:
    """member1~4 (나이 10~40)를 생성합니다. 1,2는 teamA, 3,4는 teamB."""
    from teamroster.repositories.member_repository import member_repository
    created = await member_repository.save_all(db, [
        Member("member1", 10, teams["teamA"]),
        Member("member2", 20, teams["teamA"]),
        Member("member3", 30, teams["teamB"]),
        Member("member4", 40, teams["teamB"]),
    ])
    return {m.username: m for m in created}


@pytest_asyncio.fixture
async def loner(db: AsyncSession, members) -> Member:
    """팀이 없는 회원을 생성합니다."""
    from teamroster.repositories.member_repository import member_repository
    return await member_repository.save(db, Member("loner", 50))
