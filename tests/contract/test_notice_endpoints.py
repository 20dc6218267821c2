"""Contract tests for /api/notices endpoints."""

import pytest


@pytest.fixture
def notice(client):
    response = client.post(
        "/api/notices",
        json={"title": "Water shutdown", "category": "maintenance", "content": "Tuesday 10-12"},
    )
    assert response.status_code == 201
    return response.json()


class TestNoticeEndpoints:
    def test_create(self, notice):
        assert notice["id"]
        assert notice["category"] == "maintenance"
        assert notice["date"]
        assert "createdAt" in notice

    def test_invalid_category_is_400(self, client):
        response = client.post("/api/notices", json={"title": "t", "category": "party", "content": "c"})
        assert response.status_code == 400
        assert "category" in response.json()["error"]

    def test_blank_title_is_400(self, client):
        response = client.post("/api/notices", json={"title": " ", "category": "update", "content": "c"})
        assert response.status_code == 400
        assert response.json() == {"error": "title is required"}

    def test_list_and_filter(self, client, notice):
        client.post("/api/notices", json={"title": "Rent due", "category": "announcement", "content": "5th"})

        assert len(client.get("/api/notices").json()) == 2
        assert len(client.get("/api/notices", params={"category": "all"}).json()) == 2
        filtered = client.get("/api/notices", params={"category": "maintenance"}).json()
        assert [n["id"] for n in filtered] == [notice["id"]]

    def test_list_bad_category_is_400(self, client):
        assert client.get("/api/notices", params={"category": "gossip"}).status_code == 400

    def test_get_one(self, client, notice):
        assert client.get(f"/api/notices/{notice['id']}").json()["title"] == "Water shutdown"

    def test_replace_requires_full_body(self, client, notice):
        partial = client.put(f"/api/notices/{notice['id']}", json={"title": "Only title"})
        assert partial.status_code == 400

        full = client.put(
            f"/api/notices/{notice['id']}",
            json={"title": "Water back", "category": "update", "content": "Restored"},
        )
        assert full.status_code == 200
        assert full.json()["category"] == "update"

    def test_delete(self, client, notice):
        response = client.delete(f"/api/notices/{notice['id']}")
        assert response.json() == {"message": "Notice deleted successfully"}
        assert client.get(f"/api/notices/{notice['id']}").status_code == 404

    def test_unknown_notice_is_404(self, client):
        response = client.get("/api/notices/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Notice not found"}
