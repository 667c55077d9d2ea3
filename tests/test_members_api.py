"""회원 API 테스트.

Member API tests — lookup, paged list, search query parameters,
validation errors, and CRUD.
"""

import pytest
from httpx import AsyncClient

URL = "/api/v1/members"


class TestMemberRead:
    """회원 조회 테스트."""

    async def test_get_member(self, client: AsyncClient, members):
        member = members["member3"]
        res = await client.get(f"{URL}/{member.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["username"] == "member3"
        assert data["age"] == 30
        assert data["team_name"] == "teamB"
        assert data["created_at"] is not None

    async def test_get_nonexistent_member(self, client: AsyncClient):
        """존재하지 않는 회원 조회 시 404."""
        res = await client.get(f"{URL}/999")
        assert res.status_code == 404
        assert res.json()["detail"] == "Member not found"

    async def test_list_default_page_size(self, client: AsyncClient, teams):
        """기본 페이지 크기는 5."""
        for i in range(7):
            await client.post(URL, json={"username": f"user{i}", "age": i})

        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()
        assert len(data["items"]) == 5
        assert data["total"] == 7
        assert data["pages"] == 2

        res = await client.get(URL, params={"page": 2})
        assert [m["username"] for m in res.json()["items"]] == ["user5", "user6"]

    async def test_list_sorted(self, client: AsyncClient, members):
        res = await client.get(URL, params={"sort": "age,desc", "per_page": 2})
        assert res.status_code == 200
        assert [m["age"] for m in res.json()["items"]] == [40, 30]

    async def test_list_invalid_page(self, client: AsyncClient):
        res = await client.get(URL, params={"page": 0})
        assert res.status_code == 400

    @pytest.mark.parametrize("path", ["", "/search"])
    async def test_huge_page_rejected(self, client: AsyncClient, members, path):
        """64비트 범위를 넘는 페이지 번호 → 400 (DB 드라이버 오류 아님)."""
        res = await client.get(f"{URL}{path}", params={"page": str(10**20)})
        assert res.status_code == 400

    async def test_list_invalid_per_page(self, client: AsyncClient):
        res = await client.get(URL, params={"per_page": 0})
        assert res.status_code == 400

    async def test_list_per_page_clamped(self, client: AsyncClient, members):
        res = await client.get(URL, params={"per_page": 10_000})
        assert res.status_code == 200
        assert res.json()["limit"] == 100

    async def test_stats(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/stats")
        assert res.status_code == 200
        assert res.json()["sum"] == 100


class TestMemberSearch:
    """회원 검색 API 테스트."""

    async def test_search_all(self, client: AsyncClient, members, loner):
        res = await client.get(f"{URL}/search", params={"per_page": 10})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 5
        assert data["items"][-1] == {
            "member_id": loner.id,
            "username": "loner",
            "age": 50,
            "team_id": None,
            "team_name": None,
        }

    async def test_search_filters(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={"team_name": "teamB", "age_goe": 31})
        assert res.status_code == 200
        assert [r["username"] for r in res.json()["items"]] == ["member4"]

    async def test_search_paging(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={"page": 2, "per_page": 2, "sort": "username,desc"})
        data = res.json()
        assert [r["username"] for r in data["items"]] == ["member2", "member1"]
        assert data["total"] == 4

    async def test_search_without_total(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={"with_total": "false"})
        assert res.status_code == 200
        assert res.json()["total"] is None

    async def test_search_bad_sort(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={"sort": "nope"})
        assert res.status_code == 400


class TestMemberWrite:
    """회원 생성/수정/삭제 테스트."""

    async def test_create_member(self, client: AsyncClient, teams):
        res = await client.post(URL, json={
            "username": "newbie",
            "age": 21,
            "team_id": teams["teamA"].id,
        })
        assert res.status_code == 201
        data = res.json()
        assert data["username"] == "newbie"
        assert data["team_name"] == "teamA"
        assert data["created_at"] == data["updated_at"]

    async def test_create_member_unknown_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "team_id": 999})
        assert res.status_code == 404

    async def test_create_member_negative_age(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "x", "age": -1})
        assert res.status_code == 422

    async def test_update_member_team(self, client: AsyncClient, members, teams):
        """팀 변경 — 부분 업데이트."""
        member = members["member1"]
        res = await client.put(f"{URL}/{member.id}", json={"team_id": teams["teamB"].id})
        assert res.status_code == 200
        data = res.json()
        assert data["team_name"] == "teamB"
        assert data["age"] == 10

    async def test_update_member_remove_team(self, client: AsyncClient, members):
        member = members["member2"]
        res = await client.put(f"{URL}/{member.id}", json={"team_id": None})
        assert res.status_code == 200
        assert res.json()["team_name"] is None

    async def test_update_nonexistent(self, client: AsyncClient):
        res = await client.put(f"{URL}/999", json={"age": 5})
        assert res.status_code == 404

    async def test_delete_member(self, client: AsyncClient, members):
        member = members["member4"]
        res = await client.delete(f"{URL}/{member.id}")
        assert res.status_code == 204

        res2 = await client.get(f"{URL}/{member.id}")
        assert res2.status_code == 404

    async def test_delete_nonexistent(self, client: AsyncClient):
        res = await client.delete(f"{URL}/999")
        assert res.status_code == 404

    async def test_bulk_age_plus(self, client: AsyncClient, members):
        res = await client.post(f"{URL}/bulk-age-plus", json={"age": 30})
        assert res.status_code == 200
        assert res.json() == {"updated": 2}

        res = await client.get(f"{URL}/search", params={"age_goe": 31})
        assert [r["age"] for r in res.json()["items"]] == [31, 41]
