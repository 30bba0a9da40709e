"""News routes for the REST API."""
from typing import Annotated
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_news_service
from api.schemas.requests import NewsCreateRequest, NewsSearchRequest, NewsUpdateRequest
from api.schemas.responses import (
    ErrorResponse,
    MessageResponse,
    NewsDetailResponse,
    NewsResponse,
    PageResponse,
    UrlExistsResponse,
)
from api.services.news_service import NewsService
from shared.config import settings


router = APIRouter(prefix="/api/v1/news", tags=["news"])

NOT_FOUND = {404: {"model": ErrorResponse}}


PageParam = Annotated[int, Query(ge=0, description="Zero-based page number")]
SizeParam = Annotated[int, Query(ge=1, le=settings.news_max_page_size)]


@router.post(
    "",
    response_model=NewsDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}}
)
async def create_news(
    request: NewsCreateRequest,
    service: NewsService = Depends(get_news_service)
):
    """Store a news article. The URL must not already exist."""
    return await service.create_news(request)


@router.get("", response_model=PageResponse[NewsResponse])
async def list_news(
    page: PageParam = 0,
    size: SizeParam = settings.news_default_page_size,
    service: NewsService = Depends(get_news_service)
):
    """List news articles, newest first."""
    return await service.list_news(page, size)


@router.get("/popular", response_model=PageResponse[NewsResponse])
async def get_popular_news(
    page: PageParam = 0,
    size: SizeParam = settings.news_default_page_size,
    service: NewsService = Depends(get_news_service)
):
    """List news articles by view count."""
    return await service.get_popular_news(page, size)


@router.get("/recent", response_model=PageResponse[NewsResponse])
async def get_recent_news(
    page: PageParam = 0,
    size: SizeParam = settings.news_default_page_size,
    service: NewsService = Depends(get_news_service)
):
    """List the most recently stored news articles."""
    return await service.get_recent_news(page, size)


@router.get("/search", response_model=PageResponse[NewsResponse])
async def search_by_keyword(
    keyword: str = Query(..., min_length=1, pattern=r"\S", description="Must contain a non-space character"),
    page: PageParam = 0,
    size: SizeParam = settings.news_default_page_size,
    service: NewsService = Depends(get_news_service)
):
    """Find articles whose title or content contains the keyword."""
    return await service.search_by_keyword(keyword, page, size)


@router.post("/search/advanced", response_model=PageResponse[NewsResponse])
async def advanced_search(
    request: NewsSearchRequest,
    service: NewsService = Depends(get_news_service)
):
    """Search with any combination of keyword, source, views, sentiment and dates."""
    return await service.search_news(request)


@router.get("/exists", response_model=UrlExistsResponse)
async def check_url_exists(
    url: str = Query(..., min_length=1),
    service: NewsService = Depends(get_news_service)
):
    """Check whether an article URL is already stored."""
    exists = await service.exists_by_url(url)
    message = "URL already exists" if exists else "URL is available"
    return UrlExistsResponse(url=url, exists=exists, message=message)


@router.get("/source/{source}", response_model=PageResponse[NewsResponse])
async def get_news_by_source(
    source: str,
    page: PageParam = 0,
    size: SizeParam = settings.news_default_page_size,
    service: NewsService = Depends(get_news_service)
):
    """List one source's articles, latest published first."""
    return await service.get_news_by_source(source, page, size)


@router.get("/{news_id}", response_model=NewsDetailResponse, responses=NOT_FOUND)
async def get_news(
    news_id: str,
    service: NewsService = Depends(get_news_service)
):
    return await service.get_news(news_id)


@router.put("/{news_id}", response_model=NewsDetailResponse, responses=NOT_FOUND)
async def update_news(
    news_id: str,
    request: NewsUpdateRequest,
    service: NewsService = Depends(get_news_service)
):
    """Partially update an article."""
    return await service.update_news(news_id, request)


@router.delete("/{news_id}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_news(
    news_id: str,
    service: NewsService = Depends(get_news_service)
):
    await service.delete_news(news_id)
    return MessageResponse(message=f"News {news_id} deleted")


@router.post("/{news_id}/view", response_model=NewsDetailResponse, responses=NOT_FOUND)
async def increment_view_count(
    news_id: str,
    service: NewsService = Depends(get_news_service)
):
    """Count one view of an article."""
    return await service.increment_view_count(news_id)
