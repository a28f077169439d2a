from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Any
import os

from .errors import ConfigurationError

PRODUCTION_BASE_URL = "https://apiv2.heyiris.io"
PRODUCTION_IRIS_URL = "https://heyiris.io"
LOCAL_IRIS_URL = "https://local.iris.freelabel.net"
LOCAL_FL_API_URL = "https://local.raichu.freelabel.net"


@dataclass
class Settings:
    """SDK configuration with environment overlay.

    Endpoints are split across three hosts: `base_url` for the main API,
    `iris_url` for workflow/chat traffic and `fl_api_url` for user-scoped
    resources (bloqs, pages, integrations, ...).
    """

    api_key: str | None = None
    user_id: int | None = None

    base_url: str | None = None
    iris_url: str | None = None
    fl_api_url: str | None = None
    environment: str = "production"  # "production" or "local"

    timeout: float = 30.0
    debug: bool = False

    # job polling defaults
    poll_interval: float = 2.0
    poll_timeout: float = 3600.0

    def require_user_id(self) -> int:
        if self.user_id is None:
            raise ConfigurationError(
                "user_id is required for this operation. Set IRIS_USER_ID or pass user_id=..."
            )
        return self.user_id


_global_settings = Settings()
_stack: list[Settings] = []


def _env_user_id(default: int | None) -> int | None:
    raw = os.getenv("IRIS_USER_ID")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"IRIS_USER_ID must be an integer, got {raw!r}") from exc


def _from_env(s: Settings) -> Settings:
    environment = os.getenv("IRIS_ENV", s.environment) or "production"
    # Environment-specific keys win over the generic one
    if environment == "local":
        api_key = os.getenv("IRIS_LOCAL_API_KEY") or os.getenv("IRIS_API_KEY") or s.api_key
        base_url = os.getenv("IRIS_LOCAL_URL") or s.base_url or LOCAL_IRIS_URL
        iris_url = os.getenv("IRIS_LOCAL_URL") or s.iris_url or LOCAL_IRIS_URL
        fl_api_url = os.getenv("FL_API_LOCAL_URL") or s.fl_api_url or LOCAL_FL_API_URL
    else:
        api_key = os.getenv("IRIS_PROD_API_KEY") or os.getenv("IRIS_API_KEY") or s.api_key
        base_url = os.getenv("IRIS_API_URL") or s.base_url or PRODUCTION_BASE_URL
        iris_url = os.getenv("IRIS_URL") or s.iris_url or PRODUCTION_IRIS_URL
        fl_api_url = os.getenv("FL_API_URL") or os.getenv("IRIS_API_URL") or s.fl_api_url or PRODUCTION_BASE_URL
    return Settings(
        api_key=api_key,
        user_id=_env_user_id(s.user_id),
        base_url=base_url.rstrip("/"),
        iris_url=iris_url.rstrip("/"),
        fl_api_url=fl_api_url.rstrip("/"),
        environment=environment,
        timeout=s.timeout,
        debug=s.debug,
        poll_interval=s.poll_interval,
        poll_timeout=s.poll_timeout,
    )


def configure(**kwargs: Any) -> None:
    """Configure global SDK defaults.

    Example:
        configure(api_key="...", user_id=193, timeout=60)
    """
    global _global_settings
    for k, v in kwargs.items():
        if not hasattr(_global_settings, k):
            raise AttributeError(f"Unknown setting: {k}")
        setattr(_global_settings, k, v)


@contextmanager
def config(**kwargs: Any):
    """Temporarily apply settings within a context."""
    global _global_settings
    _stack.append(Settings(**asdict(_global_settings)))
    try:
        configure(**kwargs)
        yield
    finally:
        prev = _stack.pop()
        _global_settings = prev


def settings() -> Settings:
    """Return the effective merged settings (env overlaid on current)."""
    return _from_env(_global_settings)
