"""Message schemas exchanged with the crawler worker over Redis queues."""
import json
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from api.models.crawl_job import CrawlJobStatus


class CrawlRequestMessage(BaseModel):
    """Job request pushed to the crawl.request queue.

    Serialized as ``{"jobId": "...", "maxArticles": 50}``.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: str
    max_articles: int = Field(..., ge=1)


class CrawlResultMessage(BaseModel):
    """Status report sent back by the worker on the crawl.result queue."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_id: str = Field(..., min_length=1)
    status: CrawlJobStatus
    total_articles: int = Field(default=0, ge=0)
    media_results: Optional[str] = None
    error_message: Optional[str] = None
    # Redelivery counter, set by the result consumer when it re-queues
    attempt: int = Field(default=0, ge=0)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: CrawlJobStatus) -> CrawlJobStatus:
        """Workers never report PENDING."""
        if v == CrawlJobStatus.PENDING:
            raise ValueError("status must be RUNNING, COMPLETED or FAILED")
        return v

    @field_validator("media_results", mode="before")
    @classmethod
    def serialize_media_results(cls, v: Any) -> Optional[str]:
        """Per-source breakdowns may arrive as JSON objects; store them as text."""
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v, ensure_ascii=False)
