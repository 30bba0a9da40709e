"""Crawl job coordination between the admin API, the job store and the worker."""
import logging
from typing import Callable, List, Optional

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from api.services import job_state_machine
from api.services.publisher import CrawlRequestPublisher
from database.repositories.crawl_job_repo import CrawlJobRepository
from shared.exceptions import AppError, ConflictError, InvalidRequestError

logger = logging.getLogger(__name__)


class CrawlJobService:
    """Creates crawl jobs, hands them to the worker and applies worker reports."""

    def __init__(self, job_repo: CrawlJobRepository, publisher: CrawlRequestPublisher):
        self.job_repo = job_repo
        self.publisher = publisher

    async def trigger_crawl(self, max_articles: int) -> CrawlJob:
        """
        Start a new crawl.

        - Rejects a non-positive `max_articles` before anything is stored
        - Rejects the request while another job is RUNNING
        - Creates a PENDING job
        - Publishes the request to the worker queue
        - Returns the job without waiting for the worker

        If the request cannot be published the job is marked FAILED
        before the error propagates.
        """
        if max_articles < 1:
            raise InvalidRequestError(
                f"max_articles must be at least 1, got {max_articles}",
                details={"max_articles": max_articles}
            )

        if await self.job_repo.exists_with_status(CrawlJobStatus.RUNNING):
            logger.warning("Crawl trigger rejected: a crawl job is already running")
            raise ConflictError("A crawl job is already running. Try again after it finishes.")

        job = await self.job_repo.create_job()
        logger.info(f"Crawl job created: job_id={job.id}, status={job.status.value}")

        try:
            await self.publisher.publish(job.id, max_articles)
        except Exception as e:
            reason = e.message if isinstance(e, AppError) else f"Failed to publish crawl request: {e}"
            try:
                await self.mark_failed(job.id, reason)
            except AppError:
                logger.exception(f"Could not mark unpublished job {job.id} as failed")
            raise

        return job

    async def get_job_status(self, job_id: str) -> CrawlJob:
        """Get a job by ID."""
        return await self.job_repo.get_job(job_id)

    async def list_jobs(
        self,
        status: Optional[CrawlJobStatus] = None,
        limit: int = 50,
        skip: int = 0
    ) -> List[CrawlJob]:
        """List jobs, optionally only those with the given status."""
        return await self.job_repo.list_jobs(status=status, limit=limit, skip=skip)

    async def mark_running(self, job_id: str) -> CrawlJob:
        """Record that the worker started the job."""
        job = await self._apply(job_id, job_state_machine.mark_running)
        logger.info(f"Crawl job running: job_id={job_id}")
        return job

    async def mark_completed(self, job_id: str, total_articles: int, media_results: Optional[str]) -> CrawlJob:
        """Record a successful crawl."""
        job = await self._apply(
            job_id,
            lambda current: job_state_machine.mark_completed(current, total_articles, media_results)
        )
        logger.info(f"Crawl job completed: job_id={job_id}, total_articles={total_articles}")
        return job

    async def mark_failed(self, job_id: str, error_message: str) -> CrawlJob:
        """Record a failed crawl."""
        job = await self._apply(
            job_id,
            lambda current: job_state_machine.mark_failed(current, error_message)
        )
        logger.error(f"Crawl job failed: job_id={job_id}, error={error_message}")
        return job

    async def _apply(self, job_id: str, transition: Callable[[CrawlJob], CrawlJob]) -> CrawlJob:
        """Fetch, transition and persist a job."""
        current = await self.job_repo.get_job(job_id)
        updated = transition(current)
        return await self.job_repo.update_job(updated, expected_status=current.status)
