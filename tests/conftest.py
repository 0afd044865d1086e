"""테스트 인프라 — 테스트별 임시 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Per-test database, session, and httpx client fixtures.
Each test gets a fresh SQLite file (aiosqlite) under tmp_path; set
TEST_DATABASE_URL to run the same suite against PostgreSQL instead.
Executed SQL statements can be recorded to assert on count-query usage.
"""

import os

# 앱 엔진은 테스트에서 사용되지 않음 — get_db는 픽스처 세션으로 오버라이드
# The app-level engine is never used by tests; keep it driver-light and quiet
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Member, Team  # noqa: E402 — register all models with metadata

TEST_DATABASE_URL: str | None = os.environ.get("TEST_DATABASE_URL")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성하고 종료 시 삭제합니다."""
    url: str = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    eng = create_async_engine(url, echo=False)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다. 변경은 커밋하지 않습니다."""
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


@pytest.fixture
def statements(engine: AsyncEngine):
    """실행된 SQL 문을 기록합니다 (Record every SQL statement sent to the store)."""
    recorded: list[str] = []

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        recorded.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
    yield recorded
    event.remove(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)


def count_statements(recorded: list[str]) -> list[str]:
    """기록된 SQL 중 count 쿼리만 반환합니다."""
    return [s for s in recorded if "count(" in s.lower()]


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    team_a = Team(name="teamA")
    team_b = Team(name="teamB")
    db.add_all([team_a, team_b])
    await db.flush()
    return {"teamA": team_a, "teamB": team_b}


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams: dict[str, Team]) -> list[Member]:
    """member1(10,teamA), member2(20,teamA), member3(30,teamB), member4(40,teamB)."""
    result = [
        Member("member1", 10, teams["teamA"]),
        Member("member2", 20, teams["teamA"]),
        Member("member3", 30, teams["teamB"]),
        Member("member4", 40, teams["teamB"]),
    ]
    db.add_all(result)
    await db.flush()
    return result


@pytest_asyncio.fixture
async def teamless_member(db: AsyncSession, members: list[Member]) -> Member:
    """팀이 없는 회원을 생성합니다 (members 이후에 삽입)."""
    member = Member("loner", 50)
    db.add(member)
    await db.flush()
    return member
