"""Tests for the search service and the FastAPI app."""

import pytest
from fastapi.testclient import TestClient

import sitesearch.api as api
from sitesearch.api import run_search
from sitesearch.config import MAX_QUERY_CHARS
from sitesearch.index_loader import IndexLoader


class TestRunSearch:
    def test_results(self, sample_index):
        resp = run_search("  vinyl ", sample_index)
        assert resp.query == "vinyl"
        assert resp.mode == "results"
        assert resp.hits[0].title == "Luxury Vinyl Tile (LVT)"

    def test_results_are_truncated(self, sample_index):
        assert len(run_search("materials", sample_index, limit=2).hits) == 2

    def test_falls_back_to_suggestions(self, sample_index):
        resp = run_search("carpets", sample_index)
        assert resp.mode == "suggestions"
        assert [h.url for h in resp.hits] == ["/materials/carpet/"]

    def test_nothing_found(self, sample_index):
        resp = run_search("zzzz", sample_index)
        assert resp.mode == "empty"
        assert resp.hits == []

    def test_short_query_skips_ranking(self, sample_index, monkeypatch):
        def boom(*args, **kwargs):
            raise AssertionError("rank must not be called")

        monkeypatch.setattr(api, "rank", boom)
        assert run_search("l", sample_index).mode == "empty"
        assert run_search(" -!- ", sample_index).mode == "empty"

    def test_long_query_is_cut(self, sample_index):
        resp = run_search("carpet " + "x" * (MAX_QUERY_CHARS * 10), sample_index)
        assert len(resp.query) == MAX_QUERY_CHARS
        assert resp.query.startswith("carpet x")


@pytest.fixture
def client(index_file, monkeypatch):
    monkeypatch.setattr(api, "index_loader", IndexLoader(index_file))
    with TestClient(api.app) as c:
        yield c


class TestApi:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_get_search(self, client):
        resp = client.get("/search", params={"q": "lvt"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["mode"] == "results"
        assert data["hits"][0]["title"] == "Luxury Vinyl Tile (LVT)"
        assert data["hits"][0]["snippet"] == "lvt"

    def test_get_search_limit(self, client):
        data = client.get("/search", params={"q": "materials", "limit": 2}).json()
        assert len(data["hits"]) == 2

    def test_get_search_suggestions(self, client):
        data = client.get("/search", params={"q": "carpets"}).json()
        assert data["mode"] == "suggestions"
        assert data["hits"][0]["url"] == "/materials/carpet/"

    def test_short_query_is_empty(self, client):
        data = client.get("/search", params={"q": "l"}).json()
        assert data == {"query": "l", "mode": "empty", "hits": []}

    def test_missing_query(self, client):
        assert client.get("/search").status_code == 422

    def test_overlong_query_rejected(self, client):
        long_q = "a" * (MAX_QUERY_CHARS + 1)
        assert client.get("/search", params={"q": long_q}).status_code == 422
        assert client.post("/search", json={"query": long_q}).status_code == 422

    def test_post_search(self, client):
        resp = client.post("/search", json={"query": "hardwood"})
        assert resp.status_code == 200
        assert resp.json()["hits"][0]["url"] == "/materials/hardwood/"

    def test_post_blank_query(self, client):
        assert client.post("/search", json={"query": "   "}).status_code == 422


def test_missing_index_returns_503(tmp_path, monkeypatch):
    monkeypatch.setattr(api, "index_loader", IndexLoader(tmp_path / "missing.json"))
    with TestClient(api.app) as c:
        resp = c.get("/search", params={"q": "lvt"})
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Search index unavailable"
