"""Main consumer entry point."""
import asyncio
import signal
import logging

from api.services.crawl_job_service import CrawlJobService
from api.services.publisher import CrawlRequestPublisher
from consumer.result_consumer import CrawlResultConsumer
from database.connection import DatabaseConnection
from database.repositories.crawl_job_repo import CrawlJobRepository
from shared.config import settings
from shared.utils import configure_logging

logger = logging.getLogger(__name__)


async def main():
    """Main entry point for the crawl result consumer."""
    configure_logging(settings.log_level)
    logger.info("Starting crawl result consumer")

    # Initialize database connections
    db = await DatabaseConnection.init_mongo()
    redis_client = await DatabaseConnection.init_redis()

    service = CrawlJobService(CrawlJobRepository(db), CrawlRequestPublisher(redis_client))
    consumer = CrawlResultConsumer(service, redis_client)

    # Setup signal handlers for graceful shutdown
    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.info("Received shutdown signal")
        asyncio.create_task(consumer.stop())

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    try:
        await consumer.start()
    except Exception:
        logger.exception("Consumer error")
        raise
    finally:
        # Cleanup
        await DatabaseConnection.close_connections()
        logger.info("Consumer shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
