"""Admin routes for triggering and tracking crawl jobs."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_crawl_job_service
from api.models.crawl_job import CrawlJobStatus
from api.schemas.responses import CrawlJobResponse, ErrorResponse
from api.services.crawl_job_service import CrawlJobService
from shared.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.post(
    "/crawl/trigger",
    response_model=CrawlJobResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}}
)
async def trigger_crawl(
    max_articles: int = Query(
        default=settings.crawl_default_max_articles,
        alias="maxArticles",
        ge=1,
        le=settings.crawl_max_articles_limit,
        description="Maximum articles to collect per media source"
    ),
    service: CrawlJobService = Depends(get_crawl_job_service)
):
    """
    Trigger a crawl.

    - Rejects with 409 while another job is running
    - Creates a PENDING job record
    - Publishes the request to the crawler queue
    - Returns immediately; poll the status endpoint for progress
    """
    logger.info(f"Crawl trigger requested: max_articles={max_articles}")
    job = await service.trigger_crawl(max_articles)
    return CrawlJobResponse.from_job(job)


@router.get(
    "/crawl/jobs/{job_id}",
    response_model=CrawlJobResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_job_status(
    job_id: str,
    service: CrawlJobService = Depends(get_crawl_job_service)
):
    """Get the current status of a crawl job."""
    job = await service.get_job_status(job_id)
    return CrawlJobResponse.from_job(job)


@router.get("/crawl/jobs", response_model=List[CrawlJobResponse])
async def list_jobs(
    status_filter: Optional[CrawlJobStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    skip: int = Query(default=0, ge=0),
    service: CrawlJobService = Depends(get_crawl_job_service)
):
    """List crawl jobs, newest first, with optional status filter."""
    jobs = await service.list_jobs(status=status_filter, limit=limit, skip=skip)
    return [CrawlJobResponse.from_job(job) for job in jobs]
