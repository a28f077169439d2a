"""HTTP client for the IRIS REST API.

Endpoints are routed to one of three hosts from `Settings`:
- fl_api_url: user-scoped resources (users, bloqs, pages, integrations, leads, ...)
- iris_url: workflow and chat endpoints (`/iris/`, `/chat/`, `/workflows/`)
- base_url: everything else

Responses are JSON. A top-level `{"data": ...}` envelope is unwrapped and an
empty body decodes to `{"success": True}`. Non-2xx responses raise the typed
errors from `iris_sdk.errors`; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import httpx
import requests

from . import __version__
from .config import Settings, settings
from .errors import (
    SDKError,
    TransportError,
    TimeoutError,
    AuthError,
    RateLimitError,
    ServerError,
    BadRequestError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_FL_API_MARKERS = (
    "/users/",
    "/user/",
    "/leads",
    "/deliverables",
    "/profile",
    "/services",
    "/integrations",
    "/cloud-files",
    "/articles",
    "/bloqs/",
    "/ingestion-jobs",
    "/programs",
    "/program-enrollments",
    "/user-programs",
    "/courses",
    "/pages",
    "/videos",
    "/collections",
    "/a2p/",
)

_IRIS_MARKERS = ("/iris/", "/chat/", "/workflows/")
_URL_SETTINGS = ("base_url", "iris_url", "fl_api_url")


def _build_url(s: Settings, endpoint: str) -> str:
    # /users/ is checked first so /users/{id}/bloqs/agents lands on FL-API
    if any(marker in endpoint for marker in _FL_API_MARKERS):
        base = s.fl_api_url
    elif any(marker in endpoint for marker in _IRIS_MARKERS):
        base = s.iris_url
    else:
        base = s.base_url
    return f"{base}/{endpoint.lstrip('/')}"


def _headers(s: Settings) -> Dict[str, str]:
    if not s.api_key:
        raise AuthError("API key required. Set IRIS_API_KEY or pass api_key=...")
    return {
        "Authorization": f"Bearer {s.api_key}",
        "Accept": "application/json",
        "User-Agent": f"iris-python-sdk/{__version__}",
    }


def _decode_body(resp: Any) -> Any:
    try:
        return resp.json()
    except Exception:
        return {}


def _error_message(data: Any, fallback: str) -> str:
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if isinstance(message, (dict, list)):
            return json.dumps(message)
        if message:
            return str(message)
    return fallback


def _map_http_error(resp: Any) -> SDKError:
    data = _decode_body(resp)
    status = resp.status_code
    message = _error_message(data, getattr(resp, "text", "") or f"HTTP {status}")
    details = {"body": data}
    if status in (401, 403):
        return AuthError(message or "authentication failed", details=details, status_code=status)
    if status == 404:
        return NotFoundError(message or "not found", details=details, status_code=status)
    if status == 422:
        errors = data.get("errors") if isinstance(data, dict) else None
        return ValidationError(message, errors=errors, details=details)
    if status == 429:
        retry_after = 60.0
        try:
            retry_after = float(resp.headers.get("Retry-After") or 60)
        except (TypeError, ValueError):
            pass
        return RateLimitError(message or "rate limited", retry_after=retry_after, details=details)
    if 400 <= status < 500:
        return BadRequestError(message, details=details, status_code=status)
    return ServerError(f"server error: {status}", details=details, status_code=status)


def _parse_response(resp: Any) -> Any:
    content = resp.content
    if not content:
        return {"success": True}
    try:
        data = json.loads(content)
    except ValueError as e:
        raise ServerError(f"Invalid JSON response: {e}", status_code=resp.status_code) from e
    if isinstance(data, dict) and data.get("data") is not None:
        return data["data"]
    return data


def _multipart_fields(fields: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in (fields or {}).items():
        out[key] = json.dumps(value) if isinstance(value, (dict, list)) else str(value)
    return out


class Client:
    def __init__(self, **overrides: Any) -> None:
        self._settings = settings()
        for k, v in overrides.items():
            if k in _URL_SETTINGS and isinstance(v, str):
                v = v.rstrip("/")
            if hasattr(self._settings, k):
                setattr(self._settings, k, v)

    @property
    def settings(self) -> Settings:
        return self._settings

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        s = self._settings
        url = _build_url(s, endpoint)
        headers = _headers(s)
        logger.debug("%s %s", method, url)
        try:
            resp = requests.request(method, url, headers=headers, timeout=s.timeout, **kwargs)
        except requests.Timeout as e:
            raise TimeoutError("request timed out") from e
        except requests.RequestException as e:
            raise TransportError(str(e)) from e
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if not 200 <= resp.status_code < 300:
            raise _map_http_error(resp)
        return _parse_response(resp)

    def get(self, endpoint: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("GET", endpoint, params=dict(query or {}))

    def post(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("POST", endpoint, json=dict(body or {}))

    def put(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("PUT", endpoint, json=dict(body or {}))

    def patch(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("PATCH", endpoint, json=dict(body or {}))

    def delete(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        if body is None:
            return self._request("DELETE", endpoint)
        return self._request("DELETE", endpoint, json=dict(body))

    def upload(self, endpoint: str, file_path: str | Path, fields: Optional[Mapping[str, Any]] = None) -> Any:
        """POST a file as multipart form data along with extra form fields."""
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "rb") as fh:
            return self._request(
                "POST",
                endpoint,
                files={"file": (path.name, fh)},
                data=_multipart_fields(fields),
            )


class AsyncClient(Client):
    """Asynchronous variant using httpx.AsyncClient."""

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        s = self._settings
        url = _build_url(s, endpoint)
        headers = _headers(s)
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(timeout=s.timeout) as session:
                resp = await session.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise TimeoutError("request timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if not 200 <= resp.status_code < 300:
            raise _map_http_error(resp)
        return _parse_response(resp)

    async def get(self, endpoint: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("GET", endpoint, params=dict(query or {}))

    async def post(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("POST", endpoint, json=dict(body or {}))

    async def put(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("PUT", endpoint, json=dict(body or {}))

    async def patch(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("PATCH", endpoint, json=dict(body or {}))

    async def delete(self, endpoint: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        if body is None:
            return await self._request("DELETE", endpoint)
        return await self._request("DELETE", endpoint, json=dict(body))

    async def upload(self, endpoint: str, file_path: str | Path, fields: Optional[Mapping[str, Any]] = None) -> Any:
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return await self._request(
            "POST",
            endpoint,
            files={"file": (path.name, path.read_bytes())},
            data=_multipart_fields(fields),
        )
