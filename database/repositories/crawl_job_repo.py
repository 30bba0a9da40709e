"""Crawl job repository for CRUD operations on the crawl_jobs collection."""
import logging
from typing import Optional, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from shared.exceptions import (
    ConflictError,
    CrawlJobNotFoundError,
    InvalidTransitionError,
    StorageError,
)
from shared.utils import generate_job_id, get_utc_now

logger = logging.getLogger(__name__)

# Value held by the one RUNNING job; a unique partial index rejects a second holder.
RUNNING_LOCK = "crawl"


class CrawlJobRepository:
    """Repository for crawl job persistence."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.crawl_jobs

    async def create_job(self) -> CrawlJob:
        """Insert a new PENDING job and return it."""
        now = get_utc_now()

        job = {
            "_id": generate_job_id(),
            "status": CrawlJobStatus.PENDING.value,
            "total_articles": 0,
            "media_results": None,
            "error_message": None,
            "created_at": now,
            "updated_at": now,
            "completed_at": None
        }

        try:
            await self.collection.insert_one(job)
        except PyMongoError as e:
            raise StorageError(f"Failed to create crawl job: {e}") from e
        return CrawlJob.model_validate(job)

    async def find_job(self, job_id: str) -> Optional[CrawlJob]:
        """Get a job by ID, or None when it does not exist."""
        try:
            doc = await self.collection.find_one({"_id": job_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to load crawl job {job_id}: {e}") from e
        return CrawlJob.model_validate(doc) if doc else None

    async def get_job(self, job_id: str) -> CrawlJob:
        """Get a job by ID."""
        job = await self.find_job(job_id)
        if job is None:
            raise CrawlJobNotFoundError(job_id)
        return job

    async def exists_with_status(self, status: CrawlJobStatus) -> bool:
        """Check whether any job currently has the given status."""
        try:
            count = await self.collection.count_documents(
                {"status": CrawlJobStatus(status).value},
                limit=1
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to query crawl jobs: {e}") from e
        return count > 0

    async def update_job(self, job: CrawlJob, expected_status: CrawlJobStatus) -> CrawlJob:
        """
        Persist a transitioned job.

        The write only applies while the stored status still equals
        `expected_status`, so two writers cannot both move the same job.
        """
        now = get_utc_now()
        status = CrawlJobStatus(job.status)

        fields = {
            "status": status.value,
            "total_articles": job.total_articles,
            "media_results": job.media_results,
            "error_message": job.error_message,
            "completed_at": job.completed_at,
            "updated_at": now
        }
        update = {"$set": fields}
        if status == CrawlJobStatus.RUNNING:
            fields["running_lock"] = RUNNING_LOCK
        else:
            update["$unset"] = {"running_lock": ""}

        try:
            result = await self.collection.update_one(
                {"_id": job.id, "status": CrawlJobStatus(expected_status).value},
                update
            )
        except DuplicateKeyError as e:
            logger.warning(f"Rejected RUNNING transition for job {job.id}: another job holds the lock")
            raise ConflictError("A crawl job is already running") from e
        except PyMongoError as e:
            raise StorageError(f"Failed to update crawl job {job.id}: {e}") from e

        if result.matched_count == 0:
            current = await self.find_job(job.id)
            if current is None:
                raise CrawlJobNotFoundError(job.id)
            raise InvalidTransitionError(job.id, current.status.value, status.value)

        return job.model_copy(update={"updated_at": now})

    async def list_jobs(
        self,
        status: Optional[CrawlJobStatus] = None,
        limit: int = 50,
        skip: int = 0
    ) -> List[CrawlJob]:
        """List jobs with optional status filter, newest first."""
        query = {}
        if status:
            query["status"] = CrawlJobStatus(status).value

        try:
            cursor = self.collection.find(query).sort("created_at", -1).skip(skip).limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise StorageError(f"Failed to list crawl jobs: {e}") from e
        return [CrawlJob.model_validate(doc) for doc in docs]
