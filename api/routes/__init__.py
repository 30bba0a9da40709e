# Routes module
from .admin import router as admin_router
from .news import router as news_router

__all__ = ["admin_router", "news_router"]
