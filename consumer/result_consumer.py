"""Consumer applying crawler worker reports to crawl jobs."""
import asyncio
import logging
from typing import Optional

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from api.schemas.messages import CrawlResultMessage
from api.services.crawl_job_service import CrawlJobService
from shared.config import settings
from shared.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    StorageError,
)
from shared.utils import calculate_exponential_backoff

logger = logging.getLogger(__name__)


class CrawlResultConsumer:
    """Reads the crawl.result queue and dispatches each report by job id."""

    def __init__(
        self,
        service: CrawlJobService,
        redis_client: redis.Redis,
        queue_name: str = None
    ):
        self.service = service
        self.redis = redis_client
        self.queue_name = queue_name or settings.crawl_result_queue
        self.running = True

    async def start(self):
        """Start the consumer loop."""
        logger.info(f"Result consumer listening on {self.queue_name}")

        while self.running:
            try:
                item = await self.redis.brpop(self.queue_name, timeout=settings.consumer_block_timeout)
            except RedisError as e:
                logger.error(f"Failed to read from {self.queue_name}: {e}")
                await asyncio.sleep(settings.consumer_retry_delay)
                continue

            if item:
                _, raw = item
                await self.handle_message(raw)

    async def stop(self):
        """Stop the consumer gracefully."""
        logger.info("Result consumer stopping...")
        self.running = False

    async def handle_message(self, raw: str) -> Optional[CrawlJob]:
        """
        Apply one worker report.

        Returns the updated job, or None when the message was dropped or
        re-queued.
        """
        try:
            message = CrawlResultMessage.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Dropping malformed crawl result: {raw!r} ({e.error_count()} errors)")
            return None

        try:
            return await self.dispatch(message)
        except (NotFoundError, InvalidTransitionError, ConflictError) as e:
            # Redelivered or stale report; nothing left to do
            logger.warning(f"Ignoring crawl result for job {message.job_id}: {e.message}")
        except StorageError as e:
            await self._requeue(message, e)
        except Exception:
            logger.exception(f"Dropping crawl result for job {message.job_id} after unexpected error")
        return None

    async def dispatch(self, message: CrawlResultMessage) -> CrawlJob:
        """Route a report to the matching job transition."""
        if message.status == CrawlJobStatus.RUNNING:
            return await self.service.mark_running(message.job_id)
        if message.status == CrawlJobStatus.COMPLETED:
            return await self.service.mark_completed(
                message.job_id,
                message.total_articles,
                message.media_results
            )
        return await self.service.mark_failed(
            message.job_id,
            message.error_message or "Crawler reported failure without a message"
        )

    async def _requeue(self, message: CrawlResultMessage, error: StorageError):
        """Put a report back on the queue after a storage fault."""
        if message.attempt >= settings.max_retry_attempts:
            logger.error(
                f"Dropping crawl result for job {message.job_id} after "
                f"{message.attempt + 1} attempts: {error.message}"
            )
            return

        delay = calculate_exponential_backoff(message.attempt, base_delay=settings.consumer_retry_delay)
        logger.warning(
            f"Storage error for job {message.job_id}, retrying in {delay}s "
            f"(attempt {message.attempt + 1}): {error.message}"
        )
        await asyncio.sleep(delay)

        retry = message.model_copy(update={"attempt": message.attempt + 1})
        try:
            await self.redis.lpush(self.queue_name, retry.model_dump_json(by_alias=True))
        except RedisError as e:
            logger.error(f"Lost crawl result for job {message.job_id}, re-queue failed: {e}")
