"""Response schemas for API endpoints.

Field names are serialized in camelCase.
"""
from typing import Generic, List, Optional, TypeVar
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api.models.crawl_job import CrawlJob
from shared.utils import count_pages

T = TypeVar("T")


class CamelResponse(BaseModel):
    """Base for responses serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CrawlJobResponse(CamelResponse):
    """Response schema for crawl job trigger and status."""
    id: str = Field(..., description="Unique job identifier")
    status: str = Field(..., description="PENDING, RUNNING, COMPLETED or FAILED")
    total_articles: int = Field(..., description="Number of collected articles")
    media_results: Optional[str] = Field(None, description="Per-source breakdown, set on completion")
    error_message: Optional[str] = Field(None, description="Failure description, set on failure")
    created_at: datetime = Field(..., description="Job creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    completed_at: Optional[datetime] = Field(None, description="Terminal transition timestamp")

    @classmethod
    def from_job(cls, job: CrawlJob) -> "CrawlJobResponse":
        return cls(
            id=job.id,
            status=job.status.value,
            total_articles=job.total_articles,
            media_results=job.media_results,
            error_message=job.error_message,
            created_at=job.created_at,
            updated_at=job.updated_at,
            completed_at=job.completed_at
        )


class NewsResponse(CamelResponse):
    """Schema for a news article in list results."""
    id: str
    title: str
    content_summary: str = Field(..., description="Content shortened for listings")
    source: str
    url: str
    view_count: int
    is_high_view: bool
    sentiment_score: Optional[float] = None
    sentiment_label: str
    published_at: Optional[datetime] = None
    created_at: datetime


class NewsDetailResponse(CamelResponse):
    """Schema for a single news article with full content."""
    id: str
    title: str
    content: Optional[str] = None
    source: str
    url: str
    view_count: int
    is_high_view: bool
    sentiment_score: Optional[float] = None
    sentiment_label: str
    published_at: Optional[datetime] = None
    crawled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    content_length: int
    estimated_reading_time: int = Field(..., description="Minutes")


class PageResponse(CamelResponse, Generic[T]):
    """One page of results."""
    content: List[T] = Field(default_factory=list)
    current_page: int
    page_size: int
    total_elements: int
    total_pages: int
    is_first: bool
    is_last: bool
    has_next: bool
    has_previous: bool

    @classmethod
    def of(cls, content: List[T], total: int, page: int, size: int) -> "PageResponse[T]":
        total_pages = count_pages(total, size)
        return cls(
            content=content,
            current_page=page,
            page_size=size,
            total_elements=total,
            total_pages=total_pages,
            is_first=page == 0,
            is_last=page >= total_pages - 1,
            has_next=page < total_pages - 1,
            has_previous=page > 0
        )


class UrlExistsResponse(CamelResponse):
    """Response schema for the URL duplicate check."""
    url: str
    exists: bool
    message: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    code: str = Field(..., description="Application error code")
    error: str = Field(..., description="Error message")
    detail: Optional[dict] = Field(None, description="Detailed error information")
