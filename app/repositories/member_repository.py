"""회원 레포지토리 — 조건 검색, 페이지네이션, 기본 조회.

Member Repository — Conditional search, pagination and basic lookups.
Every search is a LEFT OUTER JOIN from members to teams with the active
predicates AND-combined in the WHERE clause, projected straight into
MemberTeamDto columns inside the SELECT.

Without sort instructions rows come back in the store's natural order,
which is not guaranteed to be stable across calls.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member, Team
from app.repositories.base import BaseRepository
from app.repositories.member_predicates import build_predicates, to_where_clauses
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.utils.exceptions import InvalidPageRequestError
from app.utils.pagination import Page, PageRequest, SortOrder, compute_total, paginate

# 프로젝션 컬럼 — 동일 이름 충돌을 피하기 위해 명시적 라벨 사용
# Projection columns with explicit labels (member id vs team id)
_MEMBER_TEAM_COLUMNS: tuple[Any, ...] = (
    Member.id.label("member_id"),
    Member.username.label("username"),
    Member.age.label("age"),
    Team.id.label("team_id"),
    Team.name.label("team_name"),
)

# 정렬 가능 속성 — Sortable properties mapped to columns
_SORTABLE_COLUMNS: dict[str, Any] = {
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_id": Team.id,
    "team_name": Team.name,
}


def project_member_team(rows: Sequence[Row[Any]]) -> list[MemberTeamDto]:
    """라벨된 조인 행을 MemberTeamDto로 변환합니다.

    Map labelled joined rows to MemberTeamDto. Rows of teamless members
    carry NULL team columns and map to None team fields.
    """
    return [MemberTeamDto(**row._mapping) for row in rows]


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> list[Member]:
        """사용자명으로 회원 목록을 조회합니다 (Members with the given username)."""
        result = await db.execute(
            select(Member).where(Member.username == username).order_by(Member.id)
        )
        return list(result.scalars().all())

    async def assign_team(
        self,
        db: AsyncSession,
        member: Member,
        team: Team,
    ) -> Member:
        """회원의 소속 팀을 변경합니다 — 양쪽 팀의 회원 목록을 먼저 로드.

        Move ``member`` to ``team`` inside an async session. The previous and
        new teams' ``members`` collections are loaded first so the
        ``back_populates`` update lands on loaded collections and reading
        ``team.members`` afterwards needs no implicit IO.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member: 대상 회원 (Member to move)
            team: 새 소속 팀 (Target team)

        Returns:
            Member: 팀이 변경된 회원 (The updated member)
        """
        previous: Team | None = await member.awaitable_attrs.team
        if previous is not None:
            await previous.awaitable_attrs.members
        await team.awaitable_attrs.members

        member.change_team(team)
        await db.flush()
        return member

    def _order_by(self, sort: Sequence[SortOrder]) -> list[ColumnElement[Any]]:
        """정렬 조건을 ORDER BY 절로 변환합니다.

        Translate sort instructions into ORDER BY clauses.

        Raises:
            InvalidPageRequestError: 정렬할 수 없는 속성 (Unknown sort property)
        """
        clauses: list[ColumnElement[Any]] = []
        for order in sort:
            column = _SORTABLE_COLUMNS.get(order.property)
            if column is None:
                raise InvalidPageRequestError(f"Unknown sort property: {order.property}")
            clauses.append(column.desc() if order.direction == "desc" else column.asc())
        return clauses

    def _where(self, condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
        return to_where_clauses(build_predicates(condition))

    def _content_query(
        self,
        condition: MemberSearchCondition,
        sort: Sequence[SortOrder] = (),
    ) -> Select:
        """프로젝션 + LEFT OUTER JOIN + WHERE + ORDER BY 쿼리를 구성합니다.

        Build the projected content query. Sort validation happens here,
        before anything is sent to the store.
        """
        order_by: list[ColumnElement[Any]] = self._order_by(sort)
        query: Select = (
            select(*_MEMBER_TEAM_COLUMNS)
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*self._where(condition))
        )
        if order_by:
            query = query.order_by(*order_by)
        return query

    def _count_query(self, condition: MemberSearchCondition) -> Select:
        return (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*self._where(condition))
        )

    async def count(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> int:
        """조건에 맞는 전체 회원 수를 조회합니다.

        Count all members matching ``condition`` under the same join.
        """
        result = await db.execute(self._count_query(condition))
        return result.scalar_one()

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Sequence[SortOrder] = (),
    ) -> list[MemberTeamDto]:
        """조건에 맞는 모든 회원을 팀 정보와 함께 조회합니다 (페이지 없음).

        Search all members matching ``condition``, unbounded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            sort: 정렬 조건, 없으면 저장소 기본 순서 (Sort; natural order if empty)

        Returns:
            list[MemberTeamDto]: 회원+팀 프로젝션 목록 (Member/team projections)
        """
        result = await db.execute(self._content_query(condition, sort))
        return project_member_team(result.all())

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """페이지 검색 — 가능하면 count 쿼리를 생략합니다.

        Paged search. The content query runs first; the count query runs
        afterwards only when the fetched page cannot prove the total.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Page request)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page of projections with total)
        """
        query: Select = self._content_query(condition, page_request.sort)
        result = await db.execute(
            query.offset(page_request.offset).limit(page_request.limit)
        )
        content: list[MemberTeamDto] = project_member_team(result.all())

        async def count_query() -> int:
            return await self.count(db, condition)

        total: int = await compute_total(content, page_request, count_query)
        return Page[MemberTeamDto].of(content, page_request, total)

    async def search_page_with_count(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """페이지 검색 — content와 count 쿼리를 항상 모두 실행합니다.

        Paged search that always runs both the content and count queries.
        """
        query: Select = self._content_query(condition, page_request.sort)
        rows, total = await paginate(db, query, page_request)
        return Page[MemberTeamDto].of(project_member_team(rows), page_request, total)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
