"""회원 검색 관련 Pydantic 요청/응답 스키마 정의.

Member search Pydantic request/response schema definitions.
Covers the optional-field search condition and the flat
member+team projection returned by every search endpoint.
"""

from pydantic import BaseModel, ConfigDict


class MemberSearchCondition(BaseModel):
    """회원 검색 조건 스키마 — 모든 필드 선택.

    Member search condition. Every field is optional and independent;
    an unset or blank field adds no filter. ``age_goe`` greater than
    ``age_loe`` is allowed and simply matches nothing.

    Attributes:
        username: 사용자명 일치 (Exact username match)
        team_name: 팀 이름 일치 (Exact team name match)
        age_goe: 최소 나이, 포함 (Minimum age, inclusive)
        age_loe: 최대 나이, 포함 (Maximum age, inclusive)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class MemberTeamDto(BaseModel):
    """회원+팀 프로젝션 응답 스키마.

    Flat projection of a member joined with its team.
    ``team_id`` and ``team_name`` are None for members without a team.

    Attributes:
        member_id: 회원 ID (Member identifier)
        username: 사용자명 (Username, nullable)
        age: 나이 (Age)
        team_id: 팀 ID (Team identifier, nullable)
        team_name: 팀 이름 (Team name, nullable)
    """

    model_config = ConfigDict(frozen=True)

    member_id: int
    username: str | None
    age: int
    team_id: int | None = None  # 팀 없는 회원이면 None (None for teamless members)
    team_name: str | None = None  # 팀 없는 회원이면 None (None for teamless members)
