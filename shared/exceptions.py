"""Domain exceptions shared by the API and the result consumer."""
from typing import Any, Dict


class AppError(Exception):
    """Base exception for application errors."""

    code = "E500001"
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: Dict[str, Any] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidRequestError(AppError):
    """Caller supplied an argument outside its allowed range."""

    code = "E400001"
    status_code = 400


class NotFoundError(AppError):
    """Requested resource does not exist."""

    code = "E404001"
    status_code = 404


class CrawlJobNotFoundError(NotFoundError):
    """Crawl job id is unknown."""

    code = "E404003"

    def __init__(self, job_id: str):
        super().__init__(f"Crawl job not found: {job_id}", details={"job_id": job_id})


class NewsNotFoundError(NotFoundError):
    """News article id is unknown."""

    code = "E404002"

    def __init__(self, news_id: str):
        super().__init__(f"News not found: {news_id}", details={"news_id": news_id})


class ConflictError(AppError):
    """A crawl job is already running."""

    code = "E409003"
    status_code = 409


class DuplicateResourceError(AppError):
    """Resource with the same unique key already exists."""

    code = "E409002"
    status_code = 409

    @classmethod
    def duplicate_news_url(cls, url: str) -> "DuplicateResourceError":
        return cls(f"News URL already exists: {url}", details={"url": url})


class InvalidTransitionError(AppError):
    """Job status change not allowed from its current status."""

    code = "E409004"
    status_code = 409

    def __init__(self, job_id: str, from_status: str, to_status: str):
        super().__init__(
            f"Invalid crawl job transition {from_status} -> {to_status} for job {job_id}",
            details={"job_id": job_id, "from_status": from_status, "to_status": to_status}
        )


class StorageError(AppError):
    """Database read or write failed."""

    code = "E500002"
    status_code = 500
    retryable = True


class PublishError(AppError):
    """Message could not be handed to the broker."""

    code = "E500003"
    status_code = 500
    retryable = True
