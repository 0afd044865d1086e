"""샘플 데이터 시드 스크립트 — 팀 2개, 회원 100명 생성.

Seed script — Creates sample teams and members for local runs.
Runs automatically on startup when APP_PROFILE=local, or manually.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0..member99, 나이 = 번호,
      짝수 번호는 teamA, 홀수 번호는 teamB
      (100 members, age = index, even -> teamA, odd -> teamB)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.database import engine, Base
from app.models import Member, Team

SEED_MEMBER_COUNT: int = 100


async def seed(db_engine: AsyncEngine | None = None) -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Seed the database with sample teams and members.
    Creates tables if they don't exist, then inserts the sample rows.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if any team exists).

    Args:
        db_engine: 대상 엔진, 없으면 앱 엔진 (Target engine; the app engine if None)
    """
    db_engine = db_engine or engine
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        team_a: Team = Team(name="teamA")
        team_b: Team = Team(name="teamB")
        db.add_all([team_a, team_b])

        for i in range(SEED_MEMBER_COUNT):
            selected_team: Team = team_a if i % 2 == 0 else team_b
            db.add(Member(f"member{i}", i, selected_team))

        await db.commit()
        print(f"Seeded: teams=2, members={SEED_MEMBER_COUNT}")


if __name__ == "__main__":
    asyncio.run(seed())
