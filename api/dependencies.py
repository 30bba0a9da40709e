"""FastAPI dependencies wiring repositories and services."""
from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
import redis.asyncio as redis

from database.connection import get_db, get_redis
from database.repositories.crawl_job_repo import CrawlJobRepository
from database.repositories.news_repo import NewsRepository
from api.services.crawl_job_service import CrawlJobService
from api.services.news_service import NewsService
from api.services.publisher import CrawlRequestPublisher


async def get_crawl_job_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    redis_client: redis.Redis = Depends(get_redis)
) -> CrawlJobService:
    """Coordinator bound to the request's database and broker clients."""
    return CrawlJobService(CrawlJobRepository(db), CrawlRequestPublisher(redis_client))


async def get_news_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> NewsService:
    return NewsService(NewsRepository(db))
