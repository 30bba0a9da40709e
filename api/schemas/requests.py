"""Request schemas for API endpoints."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.config import settings
from shared.utils import validate_url


# Sortable fields for advanced search, keyed by their wire name
NEWS_SORT_FIELDS = {
    "createdAt": "created_at",
    "publishedAt": "published_at",
    "viewCount": "view_count",
    "sentimentScore": "sentiment_score",
    "title": "title",
}


class CamelRequest(BaseModel):
    """Base for request bodies accepting camelCase or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError('must not be blank')
    return v


class NewsCreateRequest(CamelRequest):
    """Request schema for creating a news article."""
    title: str = Field(..., min_length=5, max_length=500, description="News headline")
    content: str = Field(..., min_length=10, description="Article body")
    source: str = Field(..., min_length=1, max_length=100, description="Source name (e.g., NAVER_FINANCE)")
    url: str = Field(..., description="Original article URL")
    published_at: Optional[datetime] = Field(default=None, description="Original publication time")

    @field_validator('title', 'content', 'source')
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator('url')
    @classmethod
    def validate_url_format(cls, v: str) -> str:
        """Validate URL format."""
        if not validate_url(v):
            raise ValueError('URL must start with http:// or https://')
        return v


class NewsUpdateRequest(CamelRequest):
    """Request schema for a partial news update; omitted fields are left alone."""
    title: Optional[str] = Field(default=None, min_length=5, max_length=500)
    content: Optional[str] = Field(default=None, min_length=10)
    source: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sentiment_score: Optional[float] = Field(default=None, ge=-1.0, le=1.0)

    @field_validator('title', 'content', 'source')
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)


class NewsSearchRequest(CamelRequest):
    """Request schema for advanced news search. Every filter is optional."""
    keyword: Optional[str] = Field(default=None, description="Matched against title or content")
    source: Optional[str] = None
    min_view_count: Optional[int] = Field(default=None, ge=0)
    min_sentiment_score: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    max_sentiment_score: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_high_view: Optional[bool] = None
    page: int = Field(default=0, ge=0)
    size: int = Field(default=settings.news_default_page_size, ge=1, le=settings.news_max_page_size)
    sort: str = Field(default="createdAt,desc", description="field,direction")

    @field_validator('sort')
    @classmethod
    def validate_sort(cls, v: str) -> str:
        field, _, direction = v.partition(",")
        field = field.strip()
        direction = (direction or "desc").strip().lower()
        if field not in NEWS_SORT_FIELDS and field not in NEWS_SORT_FIELDS.values():
            raise ValueError(f'cannot sort by {field}')
        if direction not in ("asc", "desc"):
            raise ValueError('sort direction must be asc or desc')
        return f"{field},{direction}"

    @model_validator(mode='after')
    def validate_ranges(self) -> "NewsSearchRequest":
        if (
            self.min_sentiment_score is not None
            and self.max_sentiment_score is not None
            and self.min_sentiment_score > self.max_sentiment_score
        ):
            raise ValueError('minSentimentScore must not exceed maxSentimentScore')
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError('startDate must not be after endDate')
        return self
