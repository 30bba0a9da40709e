"""Crawl job lifecycle transitions.

Each transition takes a CrawlJob and returns an updated copy; persisting the
result is the caller's job. Status only moves forward:

    PENDING -> RUNNING -> COMPLETED | FAILED

A PENDING job may also go straight to a terminal status, for workers that
report completion without a separate start signal.
"""
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from shared.exceptions import InvalidTransitionError
from shared.utils import get_utc_now


ALLOWED_TRANSITIONS: Dict[CrawlJobStatus, FrozenSet[CrawlJobStatus]] = {
    CrawlJobStatus.PENDING: frozenset({
        CrawlJobStatus.RUNNING,
        CrawlJobStatus.COMPLETED,
        CrawlJobStatus.FAILED,
    }),
    CrawlJobStatus.RUNNING: frozenset({
        CrawlJobStatus.COMPLETED,
        CrawlJobStatus.FAILED,
    }),
    CrawlJobStatus.COMPLETED: frozenset(),
    CrawlJobStatus.FAILED: frozenset(),
}


def can_transition(from_status: CrawlJobStatus, to_status: CrawlJobStatus) -> bool:
    """Check whether a job in `from_status` may move to `to_status`."""
    return to_status in ALLOWED_TRANSITIONS.get(from_status, frozenset())


def _ensure_transition(job: CrawlJob, to_status: CrawlJobStatus):
    if not can_transition(job.status, to_status):
        raise InvalidTransitionError(job.id, job.status.value, to_status.value)


def mark_running(job: CrawlJob) -> CrawlJob:
    """Move a pending job to RUNNING."""
    _ensure_transition(job, CrawlJobStatus.RUNNING)
    return job.model_copy(update={"status": CrawlJobStatus.RUNNING})


def mark_completed(
    job: CrawlJob,
    total_articles: int,
    media_results: Optional[str],
    now: Optional[datetime] = None
) -> CrawlJob:
    """Finish a job successfully, recording the collected article counts."""
    if total_articles < 0:
        raise ValueError("total_articles must be non-negative")
    _ensure_transition(job, CrawlJobStatus.COMPLETED)
    return job.model_copy(update={
        "status": CrawlJobStatus.COMPLETED,
        "total_articles": total_articles,
        "media_results": media_results,
        "completed_at": now or get_utc_now()
    })


def mark_failed(
    job: CrawlJob,
    error_message: str,
    now: Optional[datetime] = None
) -> CrawlJob:
    """Finish a job with an error. Result fields keep their prior values."""
    _ensure_transition(job, CrawlJobStatus.FAILED)
    return job.model_copy(update={
        "status": CrawlJobStatus.FAILED,
        "error_message": error_message,
        "completed_at": now or get_utc_now()
    })
