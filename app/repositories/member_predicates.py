"""회원 검색 조건 → 술어(predicate) 변환 모듈.

Member search predicate builder.
Turns a MemberSearchCondition into a list of independent predicates,
one per populated field. Unset or blank fields produce no predicate at
all, so the generated WHERE clause only carries real constraints.
"""

from dataclasses import dataclass
from typing import Literal

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute

from app.models.member import Member, Team
from app.schemas.member import MemberSearchCondition

# 검색 대상 컬럼 — predicate field 이름 → 매핑된 컬럼
# Searchable columns keyed by predicate field name
_SEARCH_COLUMNS: dict[str, InstrumentedAttribute] = {
    "username": Member.username,
    "team_name": Team.name,
    "age": Member.age,
}


@dataclass(frozen=True)
class MemberPredicate:
    """단일 필드 술어 — eq / goe / loe.

    A single-field boolean filter.

    Attributes:
        field: 대상 필드 ("username" | "team_name" | "age")
        op: 비교 연산 ("eq" | "goe" | "loe")
        value: 비교 값 (Comparison value)
    """

    field: str
    op: Literal["eq", "goe", "loe"]
    value: str | int

    def to_clause(self) -> ColumnElement[bool]:
        """SQLAlchemy boolean 절로 변환합니다 (Convert to a SQLAlchemy boolean clause)."""
        column: InstrumentedAttribute = _SEARCH_COLUMNS[self.field]
        if self.op == "eq":
            return column == self.value
        if self.op == "goe":
            return column >= self.value
        if self.op == "loe":
            return column <= self.value
        raise ValueError(f"Unsupported predicate op: {self.op!r}")


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 하나 이상 있는지 (At least one non-whitespace character)."""
    return value is not None and bool(value.strip())


def build_predicates(condition: MemberSearchCondition) -> list[MemberPredicate]:
    """검색 조건에서 활성 술어 목록을 생성합니다.

    Build the active predicate set for ``condition``.

    Args:
        condition: 회원 검색 조건 (Member search condition)

    Returns:
        list[MemberPredicate]: 채워진 필드별 술어, AND로 결합됨
                               (One predicate per populated field, AND-combined)
    """
    predicates: list[MemberPredicate] = []
    if has_text(condition.username):
        predicates.append(MemberPredicate("username", "eq", condition.username))  # type: ignore[arg-type]
    if has_text(condition.team_name):
        predicates.append(MemberPredicate("team_name", "eq", condition.team_name))  # type: ignore[arg-type]
    if condition.age_goe is not None:
        predicates.append(MemberPredicate("age", "goe", condition.age_goe))
    if condition.age_loe is not None:
        predicates.append(MemberPredicate("age", "loe", condition.age_loe))
    return predicates


def to_where_clauses(predicates: list[MemberPredicate]) -> list[ColumnElement[bool]]:
    return [p.to_clause() for p in predicates]
