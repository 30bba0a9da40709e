"""Shared configuration for all services."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Redis Configuration
    redis_url: str = "redis://localhost:6379"
    crawl_request_queue: str = "crawl.request"
    crawl_result_queue: str = "crawl.result"

    # MongoDB Configuration
    mongo_url: str = "mongodb://localhost:27017"
    mongo_db_name: str = "lucr"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    log_level: str = "INFO"

    # Crawl Configuration
    crawl_default_max_articles: int = 50
    crawl_max_articles_limit: int = 500

    # Consumer Configuration
    consumer_block_timeout: int = 5
    consumer_retry_delay: float = 1.0
    max_retry_attempts: int = 3

    # News Configuration
    news_default_page_size: int = 20
    news_max_page_size: int = 100
    news_high_view_threshold: int = 1000
    news_summary_length: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
