"""Waiting on server-side asynchronous jobs.

A job is identified by an opaque handle (int or str). Its status endpoint is
polled until the job reports a terminal state:

- completed / partial: the final `JobStatus` is returned
- failed: `JobFailed` is raised with a "<unit>: <error>" summary of the error log
- still pending/running once the timeout has elapsed: `JobTimeout` is raised

`JobPoller` blocks the calling thread; `AsyncJobPoller` suspends only in
`asyncio.sleep` between polls, so task cancellation propagates normally.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple, Union

from .errors import JobFailed, JobTimeout

JobHandle = Union[int, str]


class JobState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    PARTIAL = "partial"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({JobState.COMPLETED.value, JobState.PARTIAL.value, JobState.FAILED.value})


@dataclass(frozen=True)
class JobError:
    unit: str
    error: str

    def __str__(self) -> str:
        return f"{self.unit}: {self.error}"


def _coerce_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _coerce_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class JobStatus:
    status: str
    job_id: Optional[JobHandle] = None
    progress_percent: float = 0.0
    current_file: Optional[str] = None
    current_step: Optional[str] = None
    total_units: int = 0
    processed_units: int = 0
    error_log: Tuple[JobError, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "JobStatus":
        """Build a snapshot from a status response body.

        Ingestion endpoints report `total_files`/`processed_files` and error
        entries keyed by `file`; the generic `*_units`/`unit` names are accepted too.
        """
        errors = []
        for entry in payload.get("error_log") or []:
            if isinstance(entry, Mapping):
                unit = entry.get("unit", entry.get("file", ""))
                errors.append(JobError(unit=str(unit), error=str(entry.get("error", ""))))
            else:
                errors.append(JobError(unit="", error=str(entry)))
        return cls(
            status=str(payload.get("status", "")).lower(),
            job_id=payload.get("job_id", payload.get("id")),
            progress_percent=_coerce_float(payload.get("progress_percent")),
            current_file=payload.get("current_file"),
            current_step=payload.get("current_step"),
            total_units=_coerce_int(payload.get("total_units", payload.get("total_files"))),
            processed_units=_coerce_int(payload.get("processed_units", payload.get("processed_files"))),
            error_log=tuple(errors),
            raw=dict(payload),
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    @property
    def failed(self) -> bool:
        return self.status == JobState.FAILED.value

    def error_summary(self) -> str:
        return ", ".join(str(err) for err in self.error_log)


StatusLike = Union[JobStatus, Mapping[str, Any]]
# AsyncJobPoller awaits the callback result when it is awaitable
UpdateCallback = Callable[[JobStatus], Any]


def _as_status(value: StatusLike) -> JobStatus:
    if isinstance(value, JobStatus):
        return value
    return JobStatus.from_payload(value)


def _check_terminal(job_id: JobHandle, status: JobStatus) -> bool:
    if not status.is_terminal:
        return False
    if status.failed:
        raise JobFailed(job_id, status.error_summary(), status=status)
    return True


class JobPoller:
    def __init__(
        self,
        fetch_status: Callable[[JobHandle], StatusLike],
        *,
        sleep: Optional[Callable[[float], Any]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._fetch_status = fetch_status
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic

    def wait_for(
        self,
        job_id: JobHandle,
        on_update: Optional[UpdateCallback] = None,
        poll_interval: float = 2.0,
        timeout: float = 3600.0,
    ) -> JobStatus:
        start = self._clock()
        while True:
            status = _as_status(self._fetch_status(job_id))
            if on_update is not None:
                on_update(status)
            if _check_terminal(job_id, status):
                return status
            if self._clock() - start >= timeout:
                raise JobTimeout(job_id, timeout, status=status)
            self._sleep(poll_interval)


class AsyncJobPoller:
    def __init__(
        self,
        fetch_status: Callable[[JobHandle], Awaitable[StatusLike]],
        *,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._fetch_status = fetch_status
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

    async def wait_for(
        self,
        job_id: JobHandle,
        on_update: Optional[UpdateCallback] = None,
        poll_interval: float = 2.0,
        timeout: float = 3600.0,
    ) -> JobStatus:
        start = self._clock()
        while True:
            status = _as_status(await self._fetch_status(job_id))
            if on_update is not None:
                result = on_update(status)
                if inspect.isawaitable(result):
                    await result
            if _check_terminal(job_id, status):
                return status
            if self._clock() - start >= timeout:
                raise JobTimeout(job_id, timeout, status=status)
            await self._sleep(poll_interval)
