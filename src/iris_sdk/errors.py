from __future__ import annotations

from typing import Any, Dict, List, Optional


class SDKError(Exception):
    """Base error for SDK exceptions (transport/runtime)."""

    def __init__(
        self,
        message: str = "",
        code: str | None = None,
        details: dict | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.status_code = status_code


class TransportError(SDKError):
    """Network/connection failure."""

    pass


class TimeoutError(SDKError):
    """Deadline exceeded."""

    pass


class AuthError(SDKError):
    """Authentication/authorization failure."""

    pass


class RateLimitError(SDKError):
    """429 Too Many Requests; retry_after is exposed in details."""

    def __init__(self, message: str = "", retry_after: float | None = None, **kw) -> None:
        details = kw.get("details", {})
        if retry_after is not None:
            details["retry_after"] = retry_after
        super().__init__(message, code="rate_limit", details=details, status_code=429)

    @property
    def retry_after(self) -> float | None:
        return self.details.get("retry_after")


class ServerError(SDKError):
    """5xx or invalid server response."""

    pass


class BadRequestError(SDKError):
    """4xx client-side invalid request."""

    pass


class NotFoundError(BadRequestError):
    """404 or a missing sub-resource (e.g. a page component)."""

    pass


class ValidationError(BadRequestError):
    """422 with per-field error messages."""

    def __init__(self, message: str = "", errors: Dict[str, List[str]] | None = None, **kw) -> None:
        details = kw.get("details", {})
        details["errors"] = errors or {}
        super().__init__(message, code="validation", details=details, status_code=422)

    @property
    def errors(self) -> Dict[str, List[str]]:
        return self.details["errors"]

    def field_errors(self, field: str) -> List[str]:
        return list(self.errors.get(field) or [])

    def messages(self) -> List[str]:
        out: List[str] = []
        for field, errs in self.errors.items():
            if isinstance(errs, str):
                errs = [errs]
            out.extend(f"{field}: {err}" for err in errs)
        return out


class ConfigurationError(SDKError):
    """Missing or invalid local configuration (api key, user id)."""

    pass


class InvalidPath(SDKError):
    """Malformed dot-path, bad index segment, or traversal through a scalar."""

    def __init__(self, message: str = "", path: str | None = None) -> None:
        super().__init__(message, code="invalid_path", details={"path": path})
        self.path = path


class TemplateNotFound(SDKError):
    """Unknown template name in a template registry."""

    def __init__(self, name: str, available: List[str] | None = None) -> None:
        available = list(available or [])
        message = f"Template '{name}' not found. Available: {', '.join(available)}"
        super().__init__(message, code="template_not_found", details={"available": available})
        self.name = name
        self.available = available


class JobFailed(SDKError):
    """The remote job reported a terminal failure."""

    def __init__(self, job_id: Any, summary: str, status: Optional[Any] = None) -> None:
        super().__init__(f"Job {job_id} failed: {summary}", code="job_failed")
        self.job_id = job_id
        self.summary = summary
        self.status = status


class JobTimeout(SDKError):
    """The job was still running when the client stopped waiting."""

    def __init__(self, job_id: Any, timeout: float, status: Optional[Any] = None) -> None:
        super().__init__(f"Job {job_id} timed out after {timeout} seconds", code="job_timeout")
        self.job_id = job_id
        self.timeout = timeout
        self.status = status
