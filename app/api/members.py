"""회원 검색 라우터 — v1/v2/v3 검색 엔드포인트.

Member Search Router — Versioned member search endpoints.

Endpoints:
    - GET /v1/members: 전체 검색, 페이지 없음 (Unbounded search)
    - GET /v2/members: 페이지 검색, count 항상 실행 (Paged, always counts)
    - GET /v3/members: 페이지 검색, count 생략 가능 (Paged, count elision)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_page_request, get_search_condition, get_sort
from app.database import get_db
from app.schemas.member import MemberSearchCondition, MemberTeamDto
from app.services.member_service import member_service
from app.utils.pagination import Page, PageRequest, SortOrder

router: APIRouter = APIRouter()


@router.get("/v1/members", response_model=list[MemberTeamDto])
async def search_members_v1(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    sort: Annotated[list[SortOrder], Depends(get_sort)],
) -> list[MemberTeamDto]:
    """조건에 맞는 모든 회원을 조회합니다.

    Search all members matching the condition (no pagination).
    """
    return await member_service.search_members(db, condition, sort)


@router.get("/v2/members", response_model=Page[MemberTeamDto])
async def search_members_v2(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색 — count 쿼리 항상 실행.

    Paged member search; always runs the count query.
    """
    return await member_service.search_members_page(
        db, condition, page_request, always_count=True
    )


@router.get("/v3/members", response_model=Page[MemberTeamDto])
async def search_members_v3(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 페이지 검색 — 필요할 때만 count 쿼리 실행.

    Paged member search; the count query runs only when needed.
    """
    return await member_service.search_members_page(db, condition, page_request)
