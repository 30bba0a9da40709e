"""News service: CRUD, listing and search over stored articles."""
import logging
import re
from typing import Any, Dict, List, Tuple

from pymongo import ASCENDING, DESCENDING

from api.schemas.requests import (
    NEWS_SORT_FIELDS,
    NewsCreateRequest,
    NewsSearchRequest,
    NewsUpdateRequest,
)
from api.schemas.responses import NewsDetailResponse, NewsResponse, PageResponse
from api.services import news_mapper
from database.repositories.news_repo import NewsRepository
from shared.config import settings
from shared.exceptions import DuplicateResourceError, InvalidRequestError, NewsNotFoundError
from shared.utils import get_utc_now

logger = logging.getLogger(__name__)

Sort = List[Tuple[str, int]]

NEWEST_FIRST: Sort = [("created_at", DESCENDING)]
MOST_VIEWED: Sort = [("view_count", DESCENDING), ("created_at", DESCENDING)]
LATEST_PUBLISHED: Sort = [("published_at", DESCENDING)]


def keyword_filter(keyword: str) -> Dict[str, Any]:
    """Case-insensitive substring match on title or content."""
    pattern = {"$regex": re.escape(keyword.strip()), "$options": "i"}
    return {"$or": [{"title": pattern}, {"content": pattern}]}


def build_search_query(request: NewsSearchRequest) -> Dict[str, Any]:
    """Translate advanced search filters into a MongoDB query."""
    query: Dict[str, Any] = {}

    if request.keyword and request.keyword.strip():
        query.update(keyword_filter(request.keyword))
    if request.source:
        query["source"] = request.source
    if request.min_view_count is not None:
        query["view_count"] = {"$gte": request.min_view_count}
    if request.is_high_view is not None:
        query["is_high_view"] = request.is_high_view

    sentiment = {}
    if request.min_sentiment_score is not None:
        sentiment["$gte"] = request.min_sentiment_score
    if request.max_sentiment_score is not None:
        sentiment["$lte"] = request.max_sentiment_score
    if sentiment:
        query["sentiment_score"] = sentiment

    published = {}
    if request.start_date is not None:
        published["$gte"] = request.start_date
    if request.end_date is not None:
        published["$lte"] = request.end_date
    if published:
        query["published_at"] = published

    return query


def parse_sort(sort: str) -> Sort:
    """Turn "viewCount,desc" into a MongoDB sort specification."""
    field, _, direction = sort.partition(",")
    field = NEWS_SORT_FIELDS.get(field, field)
    return [(field, ASCENDING if direction == "asc" else DESCENDING)]


class NewsService:
    """Service for news article management."""

    def __init__(self, news_repo: NewsRepository):
        self.news_repo = news_repo

    async def create_news(self, request: NewsCreateRequest) -> NewsDetailResponse:
        """Store a new article. URLs are unique."""
        if await self.news_repo.exists_by_url(request.url):
            logger.warning(f"Duplicate news URL rejected: {request.url}")
            raise DuplicateResourceError.duplicate_news_url(request.url)

        news = await self.news_repo.create_news(news_mapper.to_document(request, get_utc_now()))
        logger.info(f"News created: id={news.id}, source={news.source}")
        return news_mapper.to_detail_response(news)

    async def get_news(self, news_id: str) -> NewsDetailResponse:
        news = await self.news_repo.get_news(news_id)
        if news is None:
            raise NewsNotFoundError(news_id)
        return news_mapper.to_detail_response(news)

    async def update_news(self, news_id: str, request: NewsUpdateRequest) -> NewsDetailResponse:
        """Apply a partial update."""
        fields = news_mapper.update_fields(request)
        if fields:
            news = await self.news_repo.update_news(news_id, fields)
        else:
            news = await self.news_repo.get_news(news_id)

        if news is None:
            raise NewsNotFoundError(news_id)

        logger.info(f"News updated: id={news_id}, fields={sorted(fields)}")
        return news_mapper.to_detail_response(news)

    async def delete_news(self, news_id: str):
        if not await self.news_repo.delete_news(news_id):
            raise NewsNotFoundError(news_id)
        logger.info(f"News deleted: id={news_id}")

    async def increment_view_count(self, news_id: str) -> NewsDetailResponse:
        news = await self.news_repo.increment_view_count(news_id, settings.news_high_view_threshold)
        if news is None:
            raise NewsNotFoundError(news_id)
        return news_mapper.to_detail_response(news)

    async def exists_by_url(self, url: str) -> bool:
        return await self.news_repo.exists_by_url(url)

    async def list_news(self, page: int, size: int) -> PageResponse[NewsResponse]:
        return await self._page({}, NEWEST_FIRST, page, size)

    async def get_recent_news(self, page: int, size: int) -> PageResponse[NewsResponse]:
        return await self._page({}, NEWEST_FIRST, page, size)

    async def get_popular_news(self, page: int, size: int) -> PageResponse[NewsResponse]:
        return await self._page({}, MOST_VIEWED, page, size)

    async def get_news_by_source(self, source: str, page: int, size: int) -> PageResponse[NewsResponse]:
        return await self._page({"source": source}, LATEST_PUBLISHED, page, size)

    async def search_by_keyword(self, keyword: str, page: int, size: int) -> PageResponse[NewsResponse]:
        if not keyword.strip():
            raise InvalidRequestError("keyword must not be blank", details={"keyword": keyword})
        return await self._page(keyword_filter(keyword), NEWEST_FIRST, page, size)

    async def search_news(self, request: NewsSearchRequest) -> PageResponse[NewsResponse]:
        """Advanced search combining every supplied filter."""
        query = build_search_query(request)
        logger.debug(f"Advanced news search: query={query}, sort={request.sort}")
        return await self._page(query, parse_sort(request.sort), request.page, request.size)

    async def _page(
        self,
        query: Dict[str, Any],
        sort: Sort,
        page: int,
        size: int
    ) -> PageResponse[NewsResponse]:
        items, total = await self.news_repo.find_page(query, sort, skip=page * size, limit=size)
        return PageResponse[NewsResponse].of(
            [news_mapper.to_response(news) for news in items],
            total=total,
            page=page,
            size=size
        )
