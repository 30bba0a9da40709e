"""Crawl job model definitions."""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class CrawlJobStatus(str, Enum):
    """Crawl job status enumeration."""
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


TERMINAL_STATUSES = frozenset({CrawlJobStatus.COMPLETED, CrawlJobStatus.FAILED})


class CrawlJob(BaseModel):
    """Crawl job record as stored in the crawl_jobs collection."""
    id: str = Field(alias="_id")
    status: CrawlJobStatus = CrawlJobStatus.PENDING
    total_articles: int = Field(default=0, ge=0)
    media_results: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        populate_by_name = True

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
