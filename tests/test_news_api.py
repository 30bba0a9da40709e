"""News endpoint tests."""
import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock

from api.dependencies import get_news_service
from api.main import app
from api.services.news_service import NewsService


@pytest.fixture
def news_repo():
    repo = MagicMock()
    repo.create_news = AsyncMock()
    repo.get_news = AsyncMock(return_value=None)
    repo.exists_by_url = AsyncMock(return_value=False)
    repo.update_news = AsyncMock(return_value=None)
    repo.delete_news = AsyncMock(return_value=True)
    repo.increment_view_count = AsyncMock(return_value=None)
    repo.find_page = AsyncMock(return_value=([], 0))
    return repo


@pytest.fixture
def client(news_repo):
    """HTTP client backed by a mocked news repository."""
    app.dependency_overrides[get_news_service] = lambda: NewsService(news_repo)
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.fixture
def payload():
    return {
        "title": "Chip exports rebound for third month",
        "content": "Semiconductor exports rose again in January.",
        "source": "HANKYUNG",
        "url": "https://example.com/news/chip-exports"
    }


class TestCreateNews:
    """Tests for POST /api/v1/news."""

    @pytest.mark.asyncio
    async def test_create_news(self, client, news_repo, news_model, payload):
        news_repo.create_news.return_value = news_model

        async with client:
            response = await client.post("/api/v1/news", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == news_model.id
        assert body["sentimentLabel"] == "POSITIVE"
        assert body["contentLength"] == len(news_model.content)
        assert "estimatedReadingTime" in body

    @pytest.mark.asyncio
    async def test_create_duplicate(self, client, news_repo, payload):
        news_repo.exists_by_url.return_value = True

        async with client:
            response = await client.post("/api/v1/news", json=payload)

        assert response.status_code == 409
        assert response.json()["code"] == "E409002"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("url", "not-a-valid-url"),
        ("title", "Hi"),
        ("content", " " * 12),
        ("source", ""),
    ])
    async def test_create_invalid_payload(self, client, news_repo, payload, field, value):
        payload[field] = value

        async with client:
            response = await client.post("/api/v1/news", json=payload)

        assert response.status_code == 422
        news_repo.create_news.assert_not_awaited()


class TestReadNews:
    """Tests for news lookups and listings."""

    @pytest.mark.asyncio
    async def test_get_missing_news(self, client):
        async with client:
            response = await client.get("/api/v1/news/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "E404002"

    @pytest.mark.asyncio
    async def test_list_news_page(self, client, news_repo, news_model):
        news_repo.find_page.return_value = ([news_model], 1)

        async with client:
            response = await client.get("/api/v1/news", params={"page": 0, "size": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["totalElements"] == 1
        assert body["totalPages"] == 1
        assert body["isFirst"] is True
        assert body["isLast"] is True
        assert body["content"][0]["contentSummary"].endswith("...")

    @pytest.mark.asyncio
    async def test_list_rejects_oversized_page(self, client):
        async with client:
            response = await client.get("/api/v1/news", params={"size": 1000})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_popular_is_not_an_id(self, client, news_repo):
        async with client:
            response = await client.get("/api/v1/news/popular")

        assert response.status_code == 200
        news_repo.get_news.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_url_exists(self, client, news_repo):
        news_repo.exists_by_url.return_value = True

        async with client:
            response = await client.get(
                "/api/v1/news/exists",
                params={"url": "https://example.com/news/chip-exports"}
            )

        assert response.status_code == 200
        assert response.json()["exists"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("keyword", ["   ", "\t"])
    async def test_blank_keyword_rejected(self, client, news_repo, keyword):
        async with client:
            response = await client.get("/api/v1/news/search", params={"keyword": keyword})

        assert response.status_code == 422
        news_repo.find_page.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_advanced_search_bad_sort(self, client):
        async with client:
            response = await client.post("/api/v1/news/search/advanced", json={"sort": "secret,asc"})

        assert response.status_code == 422


class TestModifyNews:
    """Tests for update, delete and view counting."""

    @pytest.mark.asyncio
    async def test_update_news(self, client, news_repo, news_model):
        news_repo.update_news.return_value = news_model

        async with client:
            response = await client.put(
                f"/api/v1/news/{news_model.id}",
                json={"sentimentScore": 0.45}
            )

        assert response.status_code == 200
        news_repo.update_news.assert_awaited_once_with(news_model.id, {"sentiment_score": 0.45})

    @pytest.mark.asyncio
    async def test_update_rejects_out_of_range_sentiment(self, client):
        async with client:
            response = await client.put("/api/v1/news/any", json={"sentimentScore": 1.5})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_news(self, client, news_model):
        async with client:
            response = await client.delete(f"/api/v1/news/{news_model.id}")

        assert response.status_code == 200
        assert news_model.id in response.json()["message"]

    @pytest.mark.asyncio
    async def test_view_missing_news(self, client):
        async with client:
            response = await client.post("/api/v1/news/missing/view")

        assert response.status_code == 404
