import asyncio

import pytest

from iris_sdk import AsyncJobPoller, JobFailed, JobPoller, JobStatus, JobTimeout


class _FakeTime:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def _scripted(statuses):
    calls = []

    def fetch(job_id):
        calls.append(job_id)
        return statuses[min(len(calls), len(statuses)) - 1]

    return fetch, calls


def test_returns_completed_snapshot_after_three_fetches():
    fake = _FakeTime()
    fetch, calls = _scripted(
        [
            {"status": "running", "progress_percent": 10},
            {"status": "running", "progress_percent": 60},
            {"status": "completed", "progress_percent": 100, "total_files": 4, "processed_files": 4},
        ]
    )
    updates = []
    poller = JobPoller(fetch, sleep=fake.sleep, clock=fake.clock)

    final = poller.wait_for(42, on_update=updates.append)

    assert final.status == "completed"
    assert final.processed_units == 4
    assert calls == [42, 42, 42]
    assert [u.progress_percent for u in updates] == [10, 60, 100]
    assert fake.sleeps == [2.0, 2.0]


def test_partial_is_terminal():
    fake = _FakeTime()
    fetch, calls = _scripted([{"status": "partial", "error_log": [{"file": "a.pdf", "error": "skipped"}]}])
    final = JobPoller(fetch, sleep=fake.sleep, clock=fake.clock).wait_for("job-1")
    assert final.status == "partial"
    assert final.error_summary() == "a.pdf: skipped"
    assert fake.sleeps == []


def test_failed_job_raises_with_error_summary():
    fake = _FakeTime()
    fetch, _ = _scripted(
        [
            {"status": "running"},
            {
                "status": "failed",
                "error_log": [{"unit": "f1.pdf", "error": "corrupt"}, {"file": "f2.pdf", "error": "too large"}],
            },
        ]
    )
    with pytest.raises(JobFailed) as info:
        JobPoller(fetch, sleep=fake.sleep, clock=fake.clock).wait_for(7)
    assert "f1.pdf: corrupt" in str(info.value)
    assert info.value.summary == "f1.pdf: corrupt, f2.pdf: too large"
    assert info.value.job_id == 7
    assert info.value.status.failed


def test_timeout_only_after_budget_elapsed():
    fake = _FakeTime()
    fetch, calls = _scripted([{"status": "running"}])

    with pytest.raises(JobTimeout) as info:
        JobPoller(fetch, sleep=fake.sleep, clock=fake.clock).wait_for(9, poll_interval=2, timeout=5)

    # fetched at t=0, 2, 4 and 6; gives up at the first check past 5 seconds
    assert len(calls) == 4
    assert fake.now == 6
    assert info.value.timeout == 5
    assert info.value.status.status == "running"


def test_terminal_status_wins_over_elapsed_timeout():
    fake = _FakeTime()
    fetch, _ = _scripted([{"status": "running"}, {"status": "completed"}])
    final = JobPoller(fetch, sleep=fake.sleep, clock=fake.clock).wait_for(1, poll_interval=10, timeout=5)
    assert final.status == "completed"


def test_callback_errors_propagate():
    fake = _FakeTime()
    fetch, calls = _scripted([{"status": "running"}])

    def boom(status):
        raise RuntimeError("stop")

    with pytest.raises(RuntimeError):
        JobPoller(fetch, sleep=fake.sleep, clock=fake.clock).wait_for(1, on_update=boom)
    assert len(calls) == 1


def test_status_from_payload_normalizes_fields():
    status = JobStatus.from_payload(
        {
            "id": 12,
            "status": "RUNNING",
            "progress_percent": "45.5",
            "current_file": "b.pdf",
            "total_files": "10",
            "processed_files": None,
            "error_log": ["plain message"],
        }
    )
    assert status.job_id == 12
    assert status.status == "running"
    assert status.progress_percent == 45.5
    assert status.total_units == 10
    assert status.processed_units == 0
    assert str(status.error_log[0]) == ": plain message"
    assert not status.is_terminal


def test_async_poller_completes():
    fake = _FakeTime()
    statuses = iter([{"status": "pending"}, {"status": "running"}, {"status": "completed"}])

    async def fetch(job_id):
        return next(statuses)

    async def sleep(seconds):
        fake.sleep(seconds)

    updates = []

    async def run():
        poller = AsyncJobPoller(fetch, sleep=sleep, clock=fake.clock)
        return await poller.wait_for("abc", on_update=updates.append, poll_interval=1)

    final = asyncio.run(run())
    assert final.status == "completed"
    assert [u.status for u in updates] == ["pending", "running", "completed"]
    assert fake.sleeps == [1, 1]


def test_async_poller_timeout():
    fake = _FakeTime()

    async def fetch(job_id):
        return JobStatus(status="running")

    async def sleep(seconds):
        fake.sleep(seconds)

    async def run():
        poller = AsyncJobPoller(fetch, sleep=sleep, clock=fake.clock)
        return await poller.wait_for("abc", poll_interval=2, timeout=5)

    with pytest.raises(JobTimeout):
        asyncio.run(run())
    assert fake.now == 6


def test_async_poller_awaits_coroutine_callback():
    fake = _FakeTime()
    statuses = iter([{"status": "running"}, {"status": "completed"}])

    async def fetch(job_id):
        return next(statuses)

    async def sleep(seconds):
        fake.sleep(seconds)

    seen = []

    async def on_update(status):
        seen.append(status.status)

    async def run():
        poller = AsyncJobPoller(fetch, sleep=sleep, clock=fake.clock)
        return await poller.wait_for("abc", on_update=on_update)

    assert asyncio.run(run()).status == "completed"
    assert seen == ["running", "completed"]
