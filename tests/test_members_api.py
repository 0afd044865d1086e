"""회원 검색 API 테스트.

Member search API tests — v1 (unbounded), v2 (always counts) and
v3 (count elision) endpoints, plus page request validation.
"""

from httpx import AsyncClient

from tests.conftest import count_statements


class TestSearchV1:
    """전체 검색 엔드포인트 테스트."""

    async def test_condition_filter(self, client: AsyncClient, members):
        """35 <= age <= 45, teamB → member4."""
        res = await client.get("/api/v1/members", params={
            "age_goe": 35, "age_loe": 45, "team_name": "teamB",
        })
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data] == ["member4"]
        assert data[0]["team_name"] == "teamB"

    async def test_blank_params_ignored(self, client: AsyncClient, teamless_member):
        """빈 쿼리 파라미터는 조건 없음으로 처리."""
        res = await client.get("/api/v1/members", params={
            "username": "", "team_name": " ", "sort": "member_id",
        })
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 5
        assert data[-1] == {
            "member_id": teamless_member.id,
            "username": "loner",
            "age": 50,
            "team_id": None,
            "team_name": None,
        }

    async def test_sort_desc(self, client: AsyncClient, members):
        res = await client.get("/api/v1/members", params={"sort": "age,desc"})
        assert res.status_code == 200
        assert [m["age"] for m in res.json()] == [40, 30, 20, 10]


class TestSearchPaged:
    """페이지 검색 엔드포인트 테스트."""

    async def test_v2_always_counts(self, client: AsyncClient, members, statements):
        statements.clear()
        res = await client.get("/api/v2/members", params={"page": 0, "size": 5})
        assert res.status_code == 200
        data = res.json()
        assert len(data["content"]) == 4
        assert data["total"] == 4
        assert len(count_statements(statements)) == 1

    async def test_v3_full_page(self, client: AsyncClient, members, statements):
        """page 0, size 3 → 3건, total 4 (count 실행)."""
        statements.clear()
        res = await client.get("/api/v3/members", params={
            "page": 0, "size": 3, "sort": "member_id,asc",
        })
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member1", "member2", "member3"]
        assert data["total"] == 4
        assert data["offset"] == 0
        assert data["limit"] == 3
        assert data["pages"] == 2
        assert len(count_statements(statements)) == 1

    async def test_v3_short_page_skips_count(self, client: AsyncClient, members, statements):
        statements.clear()
        res = await client.get("/api/v3/members", params={"page": 0, "size": 5})
        assert res.status_code == 200
        data = res.json()
        assert len(data["content"]) == 4
        assert data["total"] == 4
        assert count_statements(statements) == []

    async def test_v3_second_page(self, client: AsyncClient, members):
        res = await client.get("/api/v3/members", params={
            "page": 1, "size": 3, "sort": "member_id",
        })
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member4"]
        assert data["offset"] == 3
        assert data["total"] == 4


class TestPageRequestValidation:
    """페이지 요청 검증 테스트 — 저장소 접근 전에 거부."""

    async def test_zero_size(self, client: AsyncClient, statements):
        statements.clear()
        res = await client.get("/api/v3/members", params={"size": 0})
        assert res.status_code == 422
        assert statements == []

    async def test_negative_page(self, client: AsyncClient):
        res = await client.get("/api/v3/members", params={"page": -1})
        assert res.status_code == 422

    async def test_page_number_too_large(self, client: AsyncClient, statements):
        """offset 오버플로 전에 422로 거부."""
        statements.clear()
        res = await client.get("/api/v3/members", params={"page": 10**15, "size": 100})
        assert res.status_code == 422
        assert statements == []

    async def test_oversized_page(self, client: AsyncClient):
        res = await client.get("/api/v2/members", params={"size": 1000})
        assert res.status_code == 422

    async def test_unknown_sort_property(self, client: AsyncClient, members):
        res = await client.get("/api/v3/members", params={"sort": "height"})
        assert res.status_code == 400
        assert "height" in res.json()["detail"]

    async def test_invalid_sort_direction(self, client: AsyncClient):
        res = await client.get("/api/v1/members", params={"sort": "age,sideways"})
        assert res.status_code == 400


async def test_health(client: AsyncClient):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
