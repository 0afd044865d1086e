"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 요청 파싱.

FastAPI dependency injection module — Query-string parsing for
member search conditions and page requests.

Page request parameters:
    page: 0부터 시작하는 페이지 번호 (0-based page number, 0..MAX_PAGE_NUMBER)
    size: 페이지 크기 (Page size, 1..MAX_PAGE_SIZE)
    sort: "property,direction" 형식, 반복 가능 (Repeatable, e.g. sort=age,desc)
"""

from typing import Annotated

from fastapi import Depends, Query

from app.config import settings
from app.schemas.member import MemberSearchCondition
from app.utils.pagination import PageRequest, SortOrder


def get_search_condition(
    username: Annotated[str | None, Query(description="사용자명 일치")] = None,
    team_name: Annotated[str | None, Query(description="팀 이름 일치")] = None,
    age_goe: Annotated[int | None, Query(description="최소 나이 (포함)")] = None,
    age_loe: Annotated[int | None, Query(description="최대 나이 (포함)")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터에서 검색 조건을 구성합니다 (Build the condition from query params)."""
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_sort(
    sort: Annotated[list[str] | None, Query(description="정렬: property,asc|desc")] = None,
) -> list[SortOrder]:
    """반복된 sort 파라미터를 파싱합니다 (Parse repeated sort params)."""
    return [SortOrder.parse(raw) for raw in sort or []]


def get_page_request(
    sort: Annotated[list[SortOrder], Depends(get_sort)],
    page: Annotated[
        int, Query(ge=0, le=settings.MAX_PAGE_NUMBER, description="페이지 번호, 0부터 시작")
    ] = 0,
    size: Annotated[
        int, Query(ge=1, le=settings.MAX_PAGE_SIZE, description="페이지 크기")
    ] = settings.DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """페이지 요청을 구성합니다 (Build the page request)."""
    return PageRequest.of(page, size, sort)
