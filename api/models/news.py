"""News article model definitions."""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class NewsModel(BaseModel):
    """News article as stored in the news collection."""
    id: str = Field(alias="_id")
    title: str
    content: Optional[str] = None
    source: str
    url: str
    view_count: int = 0
    published_at: Optional[datetime] = None
    crawled_at: Optional[datetime] = None
    sentiment_score: Optional[float] = None
    is_high_view: bool = False
    created_at: datetime
    updated_at: datetime

    class Config:
        populate_by_name = True
