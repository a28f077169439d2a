"""Entry point bundling a configured `Client` with the resource groups.

    from iris_sdk import IRIS

    iris = IRIS(api_key="...", user_id=193)
    agent = iris.agents.create_from_template("customer-support", {"name": "Helpdesk"})
    iris.bloqs.wait_for_ingestion(job["job_id"], on_update=print)
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Optional

from .client import Client
from .resources import AgentsResource, BloqsResource, PagesResource, ServisAiResource
from .templates import TemplateRegistry


class IRIS:
    def __init__(
        self,
        client: Optional[Client] = None,
        templates: Optional[TemplateRegistry] = None,
        **overrides: Any,
    ) -> None:
        self.client = client if client is not None else Client(**overrides)
        self.agents = AgentsResource(self.client, templates)
        self.bloqs = BloqsResource(self.client)
        self.pages = PagesResource(self.client)
        self.servis_ai = ServisAiResource(self.client)

    @property
    def settings(self):
        return self.client.settings

    def as_user(self, user_id: int) -> "IRIS":
        """Return a new facade acting on behalf of `user_id`; this one is unchanged."""
        client = Client(**{**asdict(self.client.settings), "user_id": user_id})
        return IRIS(client=client, templates=self.agents.templates)
