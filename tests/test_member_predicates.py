"""회원 검색 술어 생성 테스트.

Member search predicate builder tests — present fields become predicates,
absent or blank fields are omitted entirely.
"""

import pytest

from app.repositories.member_predicates import (
    MemberPredicate,
    build_predicates,
    has_text,
    to_where_clauses,
)
from app.schemas.member import MemberSearchCondition


def _sql(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


class TestHasText:
    """공백 검사 테스트."""

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n  "])
    def test_blank_values(self, value):
        assert has_text(value) is False

    @pytest.mark.parametrize("value", ["a", "  teamA  "])
    def test_text_values(self, value):
        assert has_text(value) is True


class TestBuildPredicates:
    """검색 조건 → 술어 목록 변환 테스트."""

    def test_empty_condition_builds_nothing(self):
        """모든 필드가 비어 있으면 술어 없음."""
        assert build_predicates(MemberSearchCondition()) == []

    def test_blank_strings_same_as_absent(self):
        """빈 문자열/공백 문자열은 필드 미지정과 동일."""
        empty = MemberSearchCondition(username="", team_name="")
        blank = MemberSearchCondition(username="   ", team_name="\t")
        assert build_predicates(empty) == []
        assert build_predicates(blank) == []

    def test_all_fields(self):
        """모든 필드 지정 시 필드별 술어 생성."""
        condition = MemberSearchCondition(
            username="member1", team_name="teamA", age_goe=10, age_loe=20
        )
        assert build_predicates(condition) == [
            MemberPredicate("username", "eq", "member1"),
            MemberPredicate("team_name", "eq", "teamA"),
            MemberPredicate("age", "goe", 10),
            MemberPredicate("age", "loe", 20),
        ]

    def test_zero_age_is_present(self):
        """나이 0은 값이 있는 것으로 취급."""
        predicates = build_predicates(MemberSearchCondition(age_goe=0))
        assert predicates == [MemberPredicate("age", "goe", 0)]

    def test_inverted_range_still_builds_both(self):
        """age_goe > age_loe도 오류 없이 두 술어를 생성."""
        predicates = build_predicates(MemberSearchCondition(age_goe=50, age_loe=10))
        assert [p.op for p in predicates] == ["goe", "loe"]


class TestToClause:
    """SQLAlchemy 절 변환 테스트."""

    def test_eq_on_team_name(self):
        clause = MemberPredicate("team_name", "eq", "teamB").to_clause()
        assert _sql(clause) == "teams.name = 'teamB'"

    def test_range_on_age(self):
        goe, loe = to_where_clauses([
            MemberPredicate("age", "goe", 35),
            MemberPredicate("age", "loe", 45),
        ])
        assert _sql(goe) == "members.age >= 35"
        assert _sql(loe) == "members.age <= 45"

    @pytest.mark.parametrize("op", ["lt", "ne", ""])
    def test_unknown_op_rejected(self, op):
        with pytest.raises(ValueError, match="Unsupported predicate op"):
            MemberPredicate("age", op, 30).to_clause()  # type: ignore[arg-type]
