from .agents import Agent, AgentsResource
from .bloqs import INGESTION_SOURCES, AsyncBloqsResource, BloqsResource
from .pages import PagesResource, page_template
from .servis_ai import ServisAiResource

__all__ = [
    "Agent",
    "AgentsResource",
    "AsyncBloqsResource",
    "BloqsResource",
    "INGESTION_SOURCES",
    "PagesResource",
    "ServisAiResource",
    "page_template",
]
