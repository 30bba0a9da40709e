"""Conversions between news documents, models and API schemas."""
from datetime import datetime
from typing import Any, Dict, Optional

from api.models.news import NewsModel
from api.schemas.requests import NewsCreateRequest, NewsUpdateRequest
from api.schemas.responses import NewsDetailResponse, NewsResponse
from shared.config import settings
from shared.utils import generate_news_id, normalize_url, truncate

READING_CHARS_PER_MINUTE = 200


def sentiment_label(score: Optional[float]) -> str:
    """Bucket a sentiment score in [-1, 1]."""
    if score is None:
        return "NOT_ANALYZED"
    if score >= 0.7:
        return "VERY_POSITIVE"
    if score >= 0.3:
        return "POSITIVE"
    if score >= -0.3:
        return "NEUTRAL"
    if score >= -0.7:
        return "NEGATIVE"
    return "VERY_NEGATIVE"


def estimated_reading_time(content: Optional[str]) -> int:
    """Reading time in whole minutes, at least one for non-empty content."""
    if not content:
        return 0
    return max(1, len(content) // READING_CHARS_PER_MINUTE)


def to_document(request: NewsCreateRequest, now: datetime) -> Dict[str, Any]:
    """Build a news document for insertion."""
    return {
        "_id": generate_news_id(),
        "title": request.title,
        "content": request.content,
        "source": request.source,
        "url": normalize_url(request.url),
        "view_count": 0,
        "published_at": request.published_at or now,
        "crawled_at": now,
        "sentiment_score": None,
        "is_high_view": False,
        "created_at": now,
        "updated_at": now
    }


def update_fields(request: NewsUpdateRequest) -> Dict[str, Any]:
    """Fields present in a partial update request."""
    return request.model_dump(exclude_unset=True, exclude_none=True)


def to_response(news: NewsModel) -> NewsResponse:
    return NewsResponse(
        id=news.id,
        title=news.title,
        content_summary=truncate(news.content, settings.news_summary_length),
        source=news.source,
        url=news.url,
        view_count=news.view_count,
        is_high_view=news.is_high_view,
        sentiment_score=news.sentiment_score,
        sentiment_label=sentiment_label(news.sentiment_score),
        published_at=news.published_at,
        created_at=news.created_at
    )


def to_detail_response(news: NewsModel) -> NewsDetailResponse:
    return NewsDetailResponse(
        id=news.id,
        title=news.title,
        content=news.content,
        source=news.source,
        url=news.url,
        view_count=news.view_count,
        is_high_view=news.is_high_view,
        sentiment_score=news.sentiment_score,
        sentiment_label=sentiment_label(news.sentiment_score),
        published_at=news.published_at,
        crawled_at=news.crawled_at,
        created_at=news.created_at,
        updated_at=news.updated_at,
        content_length=len(news.content or ""),
        estimated_reading_time=estimated_reading_time(news.content)
    )
