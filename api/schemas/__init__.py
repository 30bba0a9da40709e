# Schemas module
from .messages import CrawlRequestMessage, CrawlResultMessage
from .requests import NewsCreateRequest, NewsUpdateRequest, NewsSearchRequest
from .responses import (
    CrawlJobResponse,
    NewsResponse,
    NewsDetailResponse,
    PageResponse,
    UrlExistsResponse,
    MessageResponse,
    ErrorResponse
)

__all__ = [
    "CrawlRequestMessage",
    "CrawlResultMessage",
    "NewsCreateRequest",
    "NewsUpdateRequest",
    "NewsSearchRequest",
    "CrawlJobResponse",
    "NewsResponse",
    "NewsDetailResponse",
    "PageResponse",
    "UrlExistsResponse",
    "MessageResponse",
    "ErrorResponse"
]
