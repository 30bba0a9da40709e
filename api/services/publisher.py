"""Publisher service for pushing crawl requests to the Redis queue."""
import logging
import redis.asyncio as redis
from redis.exceptions import RedisError

from api.schemas.messages import CrawlRequestMessage
from shared.config import settings
from shared.exceptions import PublishError

logger = logging.getLogger(__name__)


class CrawlRequestPublisher:
    """Hands crawl jobs to the external crawler worker."""

    def __init__(self, redis_client: redis.Redis, queue_name: str = None):
        self.redis = redis_client
        self.queue_name = queue_name or settings.crawl_request_queue

    async def publish(self, job_id: str, max_articles: int):
        """
        Push a crawl request onto the request queue.

        Returns once Redis has accepted the message; it does not wait for
        the worker to pick it up.
        """
        message = CrawlRequestMessage(job_id=job_id, max_articles=max_articles)

        try:
            # LPUSH + worker BRPOP gives FIFO delivery
            await self.redis.lpush(self.queue_name, message.model_dump_json(by_alias=True))
        except RedisError as e:
            logger.error(f"Failed to publish crawl request for job {job_id}: {e}")
            raise PublishError(
                f"Failed to publish crawl request: {e}",
                details={"job_id": job_id, "queue": self.queue_name}
            ) from e

        logger.info(f"Published crawl request: job_id={job_id}, max_articles={max_articles}")
