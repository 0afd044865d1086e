"""회원 검색 서비스 — 검색 조건/페이지 요청을 레포지토리 호출로 연결.

Member Search Service — Wires search conditions and page requests
to the member repository. Stateless; every call is a self-contained
read inside the caller's session.
"""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.member_repository import member_repository
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.utils.pagination import Page, PageRequest, SortOrder


class MemberService:
    """회원 검색 비즈니스 로직을 처리하는 서비스.

    Service handling member search use cases.
    """

    async def search_members(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        sort: Sequence[SortOrder] = (),
    ) -> list[MemberTeamDto]:
        """조건에 맞는 모든 회원을 조회합니다 (Unbounded member search)."""
        return await member_repository.search(db, condition, sort)

    async def search_members_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
        always_count: bool = False,
    ) -> Page[MemberTeamDto]:
        """회원 페이지 검색.

        Paged member search.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Page request)
            always_count: True면 count 쿼리를 항상 실행
                          (Always run the count query instead of eliding it)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page result)
        """
        if always_count:
            return await member_repository.search_page_with_count(db, condition, page_request)
        return await member_repository.search_page(db, condition, page_request)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
