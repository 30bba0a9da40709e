"""Shared utility functions."""
import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse


def configure_logging(level: str = "INFO"):
    """Configure root logging for a service process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def generate_job_id() -> str:
    """Generate a unique crawl job ID."""
    return str(uuid.uuid4())


def generate_news_id() -> str:
    """Generate a unique news article ID."""
    return str(uuid.uuid4())


def get_utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_url(url: str) -> str:
    """Normalize URL for consistent comparison."""
    parsed = urlparse(url.strip())
    # Remove trailing slash and lowercase scheme and host
    normalized = f"{parsed.scheme.lower()}://{parsed.netloc.lower()}{parsed.path.rstrip('/')}"
    if parsed.query:
        normalized += f"?{parsed.query}"
    return normalized


def validate_url(url: str) -> bool:
    """Validate that a URL is properly formatted."""
    try:
        result = urlparse(url)
        return all([result.scheme in ('http', 'https'), result.netloc])
    except ValueError:
        return False


def calculate_exponential_backoff(attempt: int, base_delay: float = 1.0, max_delay: float = 60.0) -> float:
    """Calculate exponential backoff delay."""
    delay = base_delay * (2 ** attempt)
    return min(delay, max_delay)


def count_pages(total: int, size: int) -> int:
    """Number of pages needed to hold `total` items."""
    if size <= 0:
        return 0
    return math.ceil(total / size)


def truncate(text: Optional[str], length: int, suffix: str = "...") -> str:
    """Cut text down to `length` characters, appending a suffix when cut."""
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + suffix
