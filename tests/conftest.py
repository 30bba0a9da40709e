"""Pytest configuration and fixtures."""
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from unittest.mock import MagicMock, AsyncMock

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from api.models.news import NewsModel
from shared.exceptions import (
    ConflictError,
    CrawlJobNotFoundError,
    InvalidTransitionError,
)
from shared.utils import generate_job_id, get_utc_now


class InMemoryCrawlJobRepository:
    """Dict-backed stand-in for CrawlJobRepository with the same contract."""

    def __init__(self):
        self.jobs: Dict[str, CrawlJob] = {}

    async def create_job(self) -> CrawlJob:
        now = get_utc_now()
        job = CrawlJob(_id=generate_job_id(), created_at=now, updated_at=now)
        self.jobs[job.id] = job
        return job

    async def find_job(self, job_id: str) -> Optional[CrawlJob]:
        return self.jobs.get(job_id)

    async def get_job(self, job_id: str) -> CrawlJob:
        job = self.jobs.get(job_id)
        if job is None:
            raise CrawlJobNotFoundError(job_id)
        return job

    async def exists_with_status(self, status: CrawlJobStatus) -> bool:
        return any(job.status == status for job in self.jobs.values())

    async def update_job(self, job: CrawlJob, expected_status: CrawlJobStatus) -> CrawlJob:
        current = self.jobs.get(job.id)
        if current is None:
            raise CrawlJobNotFoundError(job.id)
        if current.status != expected_status:
            raise InvalidTransitionError(job.id, current.status.value, job.status.value)
        if job.status == CrawlJobStatus.RUNNING and any(
            other.status == CrawlJobStatus.RUNNING
            for other in self.jobs.values()
            if other.id != job.id
        ):
            raise ConflictError("A crawl job is already running")

        stored = job.model_copy(update={"updated_at": get_utc_now()})
        self.jobs[job.id] = stored
        return stored

    async def list_jobs(self, status=None, limit: int = 50, skip: int = 0) -> List[CrawlJob]:
        jobs = sorted(self.jobs.values(), key=lambda j: j.created_at, reverse=True)
        if status:
            jobs = [job for job in jobs if job.status == status]
        return jobs[skip:skip + limit]


@pytest.fixture
def job_repo():
    """In-memory crawl job store."""
    return InMemoryCrawlJobRepository()


@pytest.fixture
def mock_publisher():
    """Publisher that records calls instead of talking to Redis."""
    publisher = MagicMock()
    publisher.publish = AsyncMock(return_value=None)
    return publisher


@pytest.fixture
def mock_mongo_db():
    """Create mock MongoDB database."""
    db = MagicMock()

    # Mock collections
    db.crawl_jobs = MagicMock()
    db.news = MagicMock()

    # Mock common operations
    db.crawl_jobs.find_one = AsyncMock()
    db.crawl_jobs.insert_one = AsyncMock()
    db.crawl_jobs.update_one = AsyncMock()
    db.crawl_jobs.count_documents = AsyncMock(return_value=0)
    db.crawl_jobs.find = MagicMock()

    db.news.find_one = AsyncMock()
    db.news.insert_one = AsyncMock()
    db.news.find_one_and_update = AsyncMock()
    db.news.delete_one = AsyncMock()
    db.news.count_documents = AsyncMock(return_value=0)
    db.news.find = MagicMock()

    return db


@pytest.fixture
def mock_redis_client():
    """Create mock Redis client."""
    redis = AsyncMock()

    redis.lpush = AsyncMock(return_value=1)
    redis.brpop = AsyncMock(return_value=None)
    redis.llen = AsyncMock(return_value=0)

    return redis


@pytest.fixture
def sample_crawl_job():
    """Create sample crawl job document."""
    created = datetime(2026, 2, 6, 10, 30, tzinfo=timezone.utc)
    return {
        "_id": "550e8400-e29b-41d4-a716-446655440000",
        "status": "PENDING",
        "total_articles": 0,
        "media_results": None,
        "error_message": None,
        "created_at": created,
        "updated_at": created,
        "completed_at": None
    }


@pytest.fixture
def sample_news():
    """Create sample news document."""
    created = datetime(2026, 2, 4, 10, 30, tzinfo=timezone.utc)
    return {
        "_id": "7d444840-9dc0-11d1-b245-5ffdce74fad2",
        "title": "Chip exports rebound for third month",
        "content": "Semiconductor exports rose again in January as memory prices recovered. " * 5,
        "source": "HANKYUNG",
        "url": "https://example.com/news/chip-exports",
        "view_count": 12,
        "published_at": created,
        "crawled_at": created,
        "sentiment_score": 0.45,
        "is_high_view": False,
        "created_at": created,
        "updated_at": created
    }


@pytest.fixture
def news_model(sample_news):
    return NewsModel.model_validate(sample_news)
