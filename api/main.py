"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database.connection import DatabaseConnection
from api.routes import admin_router, news_router
from shared.config import settings
from shared.exceptions import AppError
from shared.utils import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging(settings.log_level)

    # Startup
    await DatabaseConnection.init_mongo()
    await DatabaseConnection.init_redis()
    logger.info("API started")

    yield

    # Shutdown
    await DatabaseConnection.close_connections()


# Create FastAPI app
app = FastAPI(
    title="Lucr Financial News API",
    description="Financial news storage and search, with an admin surface for crawl jobs",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(AppError)
async def app_exception_handler(request: Request, exc: AppError):
    """Map application errors to their HTTP status."""
    if exc.retryable:
        # Infrastructure fault: full context goes to the log, not the client
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.code, "error": "Service temporarily unavailable", "detail": None}
        )

    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "error": exc.message, "detail": exc.details}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"code": "E500001", "error": "Internal server error", "detail": None}
    )


# Include routers
app.include_router(admin_router)
app.include_router(news_router)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Lucr Financial News API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug
    )
