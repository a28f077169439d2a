"""
iris_sdk – Python SDK for the IRIS platform

Public surface:
- Facade: IRIS (agents, bloqs, pages, servis_ai)
- Transport: Client, AsyncClient
- Nested data: get_path, set_path, merge_updates, deep_merge
- Templates: TemplateRegistry, resolve_template, default_agent_templates
- Jobs: JobPoller, AsyncJobPoller, JobStatus
- Remote functions: RemoteFunctionProxy, remote_function
- Config: configure, config (context manager), settings
"""

__version__ = "0.3.0"

from .config import configure, config, settings, Settings
from .client import Client, AsyncClient
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
    ConfigurationError,
    InvalidPath,
    TemplateNotFound,
    JobFailed,
    JobTimeout,
)
from .paths import NOT_FOUND, get_path, set_path, merge_updates
from .merge import deep_merge
from .templates import TemplateRegistry, resolve_template, default_agent_templates
from .proxy import RemoteFunctionProxy, remote_function, to_snake_case
from .jobs import JobPoller, AsyncJobPoller, JobStatus, JobState, JobError
from .resources import Agent, AgentsResource, BloqsResource, AsyncBloqsResource, PagesResource, ServisAiResource
from .iris import IRIS

__all__ = [
    # Config
    "configure",
    "config",
    "settings",
    "Settings",
    "Client",
    "AsyncClient",
    "IRIS",
    # Errors
    "SDKError",
    "TransportError",
    "TimeoutError",
    "AuthError",
    "RateLimitError",
    "ServerError",
    "BadRequestError",
    "NotFoundError",
    "ValidationError",
    "ConfigurationError",
    "InvalidPath",
    "TemplateNotFound",
    "JobFailed",
    "JobTimeout",
    # Nested data
    "NOT_FOUND",
    "get_path",
    "set_path",
    "merge_updates",
    "deep_merge",
    # Templates
    "TemplateRegistry",
    "resolve_template",
    "default_agent_templates",
    # Remote functions
    "RemoteFunctionProxy",
    "remote_function",
    "to_snake_case",
    # Jobs
    "JobPoller",
    "AsyncJobPoller",
    "JobStatus",
    "JobState",
    "JobError",
    # Resources
    "Agent",
    "AgentsResource",
    "BloqsResource",
    "AsyncBloqsResource",
    "PagesResource",
    "ServisAiResource",
]
