"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request / page result models and the total-count
strategy that skips the count query when the fetched page already
proves the total.

Count elision rules (PageableExecutionUtils semantics):
    1. 첫 페이지이고 content가 limit보다 적으면 total = len(content)
       (First page shorter than limit: total is the content size)
    2. 이후 페이지이고 content가 비어있지 않으면서 limit보다 적으면
       total = offset + len(content)
       (Later, non-empty short page: it is the last page)
    3. 그 외에는 count 쿼리를 실행 (Otherwise run the count query)
"""

import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from sqlalchemy import Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.exceptions import InvalidPageRequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# count 쿼리 공급자 — 인자 없는 비동기 호출 (Zero-arg async count supplier)
CountQuery = Callable[[], Awaitable[int]]


class SortOrder(BaseModel):
    """정렬 조건 — 속성명과 방향.

    Single sort instruction (property name + direction).
    """

    model_config = ConfigDict(frozen=True)

    property: str
    direction: Literal["asc", "desc"] = "asc"

    @classmethod
    def parse(cls, raw: str) -> "SortOrder":
        """``"age,desc"`` 형식의 문자열을 파싱합니다.

        Parse a ``property[,direction]`` query-string value.

        Raises:
            InvalidPageRequestError: 속성명이 없거나 방향이 잘못된 경우
                                     (Empty property or unknown direction)
        """
        parts: list[str] = [p.strip() for p in raw.split(",")]
        prop: str = parts[0]
        direction: str = parts[1].lower() if len(parts) > 1 and parts[1] else "asc"
        if not prop or len(parts) > 2:
            raise InvalidPageRequestError(f"Invalid sort expression: {raw!r}")
        if direction not in ("asc", "desc"):
            raise InvalidPageRequestError(f"Invalid sort direction: {direction!r}")
        return cls(property=prop, direction=direction)  # type: ignore[arg-type]


class PageRequest(BaseModel):
    """페이지 요청 모델 — 불변.

    Immutable page request. Construction fails with a pydantic
    ``ValidationError`` when ``offset < 0`` or ``limit <= 0``, so an
    invalid request can never reach the store.

    Attributes:
        offset: 건너뛸 행 수 (Rows to skip, >= 0)
        limit: 페이지 크기 (Page size, > 0)
        sort: 정렬 조건 목록 (Ordered sort instructions)
    """

    model_config = ConfigDict(frozen=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(gt=0)
    sort: tuple[SortOrder, ...] = ()

    @classmethod
    def of(cls, page: int, size: int, sort: Sequence[SortOrder] = ()) -> "PageRequest":
        """0부터 시작하는 페이지 번호로 요청을 생성합니다.

        Build a request from a 0-based page number and page size.
        """
        return cls(offset=page * size, limit=size, sort=tuple(sort))


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 요청 오프셋 (Requested offset)
        limit: 요청 페이지 크기 (Requested page size)
    """

    content: list[T]
    total: int = Field(ge=0)
    offset: int
    limit: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pages(self) -> int:
        """전체 페이지 수 (Total pages, ceil(total / limit))."""
        return math.ceil(self.total / self.limit) if self.limit else 0

    @classmethod
    def of(cls, content: Sequence[T], page_request: PageRequest, total: int) -> "Page[T]":
        return cls(
            content=list(content),
            total=total,
            offset=page_request.offset,
            limit=page_request.limit,
        )


def resolve_total(content_size: int, page_request: PageRequest) -> int | None:
    """content 크기만으로 전체 개수를 확정할 수 있으면 반환합니다.

    Return the total when the page size alone proves it, else None.
    A full page never proves the total; neither does an empty page past
    the first one (the offset may already be beyond the last row).
    """
    if content_size >= page_request.limit:
        return None
    if page_request.offset == 0:
        return content_size
    if content_size > 0:
        return page_request.offset + content_size
    return None


async def compute_total(
    content: Sequence[Any],
    page_request: PageRequest,
    count_query: CountQuery,
) -> int:
    """전체 개수를 계산합니다 — 가능하면 count 쿼리를 생략.

    Compute the total, running ``count_query`` only when the fetched page
    cannot prove it. Errors from the count query propagate unchanged.
    """
    total: int | None = resolve_total(len(content), page_request)
    if total is not None:
        logger.debug(
            "count query skipped (offset=%d, limit=%d, fetched=%d)",
            page_request.offset, page_request.limit, len(content),
        )
        return total
    return await count_query()


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> tuple[Sequence[Row[Any]], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다 — 항상 count 실행.

    Execute a paginated SQLAlchemy query, returning rows and total count.
    Always runs two queries: the page of results with OFFSET/LIMIT, then
    the total count (via subquery of the unpaged query).

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리, 정렬 포함 가능 (Base query, may be ordered)
        page_request: 페이지 요청 (Page request)

    Returns:
        tuple[Sequence[Row], int]: (행 목록, 전체 개수) 튜플
            (Tuple of page rows and total count)
    """
    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page rows with offset/limit)
    result = await db.execute(query.offset(page_request.offset).limit(page_request.limit))
    rows: Sequence[Row[Any]] = result.all()

    # 전체 개수 조회 — 정렬을 제거한 서브쿼리로 COUNT 실행 (Count via unordered subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    return rows, total
