"""Crawl job state machine tests."""
import itertools
from datetime import datetime, timezone

import pytest

from api.models.crawl_job import CrawlJob, CrawlJobStatus
from api.services import job_state_machine
from api.services.job_state_machine import can_transition
from shared.exceptions import InvalidTransitionError

ORDER = {
    CrawlJobStatus.PENDING: 0,
    CrawlJobStatus.RUNNING: 1,
    CrawlJobStatus.COMPLETED: 2,
    CrawlJobStatus.FAILED: 2,
}


@pytest.fixture
def pending_job(sample_crawl_job):
    return CrawlJob.model_validate(sample_crawl_job)


class TestTransitions:
    """Tests for individual transition functions."""

    def test_mark_running_from_pending(self, pending_job):
        job = job_state_machine.mark_running(pending_job)
        assert job.status == CrawlJobStatus.RUNNING
        assert job.completed_at is None
        assert not job.is_terminal

    def test_transition_returns_copy(self, pending_job):
        job_state_machine.mark_running(pending_job)
        assert pending_job.status == CrawlJobStatus.PENDING

    def test_mark_running_twice_rejected(self, pending_job):
        running = job_state_machine.mark_running(pending_job)
        with pytest.raises(InvalidTransitionError):
            job_state_machine.mark_running(running)

    def test_mark_completed(self, pending_job):
        running = job_state_machine.mark_running(pending_job)
        done = job_state_machine.mark_completed(running, 143, '{"hankyung": 50}')

        assert done.status == CrawlJobStatus.COMPLETED
        assert done.total_articles == 143
        assert done.media_results == '{"hankyung": 50}'
        assert done.completed_at is not None
        assert done.error_message is None

    def test_mark_completed_uses_given_time(self, pending_job):
        now = datetime(2026, 2, 6, 11, 0, tzinfo=timezone.utc)
        done = job_state_machine.mark_completed(pending_job, 1, None, now=now)
        assert done.completed_at == now

    def test_mark_failed_keeps_result_defaults(self, pending_job):
        running = job_state_machine.mark_running(pending_job)
        failed = job_state_machine.mark_failed(running, "crawler crashed")

        assert failed.status == CrawlJobStatus.FAILED
        assert failed.error_message == "crawler crashed"
        assert failed.completed_at is not None
        assert failed.total_articles == 0
        assert failed.media_results is None

    def test_pending_may_finish_directly(self, pending_job):
        done = job_state_machine.mark_completed(pending_job, 10, None)
        assert done.status == CrawlJobStatus.COMPLETED

    def test_negative_total_rejected(self, pending_job):
        with pytest.raises(ValueError):
            job_state_machine.mark_completed(pending_job, -1, None)

    @pytest.mark.parametrize("finish", [
        lambda job: job_state_machine.mark_completed(job, 5, None),
        lambda job: job_state_machine.mark_failed(job, "boom"),
    ])
    def test_terminal_jobs_cannot_move(self, pending_job, finish):
        terminal = finish(pending_job)
        assert terminal.is_terminal

        with pytest.raises(InvalidTransitionError):
            job_state_machine.mark_running(terminal)
        with pytest.raises(InvalidTransitionError):
            job_state_machine.mark_completed(terminal, 1, None)
        with pytest.raises(InvalidTransitionError):
            job_state_machine.mark_failed(terminal, "again")

    def test_completed_at_set_once(self, pending_job):
        done = job_state_machine.mark_completed(pending_job, 5, None)
        with pytest.raises(InvalidTransitionError):
            job_state_machine.mark_failed(done, "late failure")
        assert done.completed_at is not None


class TestTransitionTable:
    """Tests for the allowed transition table."""

    def test_status_never_regresses(self):
        for from_status, to_status in itertools.product(CrawlJobStatus, repeat=2):
            if can_transition(from_status, to_status):
                assert ORDER[to_status] > ORDER[from_status]

    def test_terminal_statuses_have_no_exits(self):
        for status in (CrawlJobStatus.COMPLETED, CrawlJobStatus.FAILED):
            assert not any(can_transition(status, target) for target in CrawlJobStatus)
