"""News repository for CRUD operations on the news collection."""
from typing import Optional, List, Dict, Any, Tuple
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from api.models.news import NewsModel
from shared.exceptions import DuplicateResourceError, StorageError
from shared.utils import get_utc_now, normalize_url


class NewsRepository:
    """Repository for News CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.news

    async def create_news(self, news: Dict[str, Any]) -> NewsModel:
        """Insert a prepared news document."""
        try:
            await self.collection.insert_one(news)
        except DuplicateKeyError as e:
            raise DuplicateResourceError.duplicate_news_url(news["url"]) from e
        except PyMongoError as e:
            raise StorageError(f"Failed to create news: {e}") from e
        return NewsModel.model_validate(news)

    async def get_news(self, news_id: str) -> Optional[NewsModel]:
        """Get a news article by ID."""
        try:
            doc = await self.collection.find_one({"_id": news_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to load news {news_id}: {e}") from e
        return NewsModel.model_validate(doc) if doc else None

    async def exists_by_url(self, url: str) -> bool:
        """Check if a news article with the given URL exists."""
        try:
            count = await self.collection.count_documents({"url": normalize_url(url)}, limit=1)
        except PyMongoError as e:
            raise StorageError(f"Failed to query news: {e}") from e
        return count > 0

    async def update_news(self, news_id: str, fields: Dict[str, Any]) -> Optional[NewsModel]:
        """Set the given fields and return the updated article."""
        update = dict(fields)
        update["updated_at"] = get_utc_now()

        try:
            doc = await self.collection.find_one_and_update(
                {"_id": news_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to update news {news_id}: {e}") from e
        return NewsModel.model_validate(doc) if doc else None

    async def delete_news(self, news_id: str) -> bool:
        """Delete a news article. Returns False if nothing was deleted."""
        try:
            result = await self.collection.delete_one({"_id": news_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete news {news_id}: {e}") from e
        return result.deleted_count > 0

    async def increment_view_count(self, news_id: str, high_view_threshold: int) -> Optional[NewsModel]:
        """Atomically bump the view count and refresh the high-view flag."""
        pipeline = [
            {"$set": {"view_count": {"$add": [{"$ifNull": ["$view_count", 0]}, 1]}}},
            {"$set": {
                "is_high_view": {"$gte": ["$view_count", high_view_threshold]},
                "updated_at": get_utc_now()
            }}
        ]

        try:
            doc = await self.collection.find_one_and_update(
                {"_id": news_id},
                pipeline,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to update view count for {news_id}: {e}") from e
        return NewsModel.model_validate(doc) if doc else None

    async def find_page(
        self,
        query: Dict[str, Any],
        sort: List[Tuple[str, int]],
        skip: int,
        limit: int
    ) -> Tuple[List[NewsModel], int]:
        """Return one page of matching articles plus the total match count."""
        try:
            total = await self.collection.count_documents(query)
            cursor = self.collection.find(query).sort(sort).skip(skip).limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise StorageError(f"Failed to query news: {e}") from e
        return [NewsModel.model_validate(doc) for doc in docs], total
