from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..templates import TemplateRegistry, default_agent_templates, resolve_template


@dataclass
class Agent:
    id: Any
    name: str
    type: str | None = None
    description: str | None = None
    initial_prompt: str | None = None
    config: Dict[str, Any] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Agent":
        return cls(
            id=payload.get("id"),
            name=payload.get("name", ""),
            type=payload.get("type"),
            description=payload.get("description"),
            initial_prompt=payload.get("initial_prompt"),
            config=dict(payload.get("config") or {}),
            settings=dict(payload.get("settings") or {}),
            raw=dict(payload),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


def _items(response: Any) -> List[Any]:
    if isinstance(response, Mapping):
        return list(response.get("data") or [])
    return list(response or [])


class AgentsResource:
    """Agents are stored as bloq agents under the configured user."""

    def __init__(self, client: Any, templates: Optional[TemplateRegistry] = None) -> None:
        self._client = client
        self.templates = templates if templates is not None else default_agent_templates()

    def _base(self) -> str:
        user_id = self._client.settings.require_user_id()
        return f"/api/v1/users/{user_id}/bloqs/agents"

    def list(self, **options: Any) -> List[Agent]:
        response = self._client.get(self._base(), options)
        return [Agent.from_payload(item) for item in _items(response)]

    def search(self, query: str, **options: Any) -> List[Agent]:
        return self.list(search=query, **options)

    def get(self, agent_id: int | str) -> Agent:
        return Agent.from_payload(self._client.get(f"{self._base()}/{agent_id}"))

    def create_from_config(self, config: Mapping[str, Any]) -> Agent:
        payload = dict(config)
        payload.setdefault("type", "content")
        return Agent.from_payload(self._client.post(self._base(), payload))

    def build_from_template(self, template: str, customizations: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return the payload `create_from_template` would send, without sending it."""
        return resolve_template(self.templates.get(template), customizations)

    def create_from_template(self, template: str, customizations: Optional[Mapping[str, Any]] = None) -> Agent:
        """Create an agent from a named template.

        Customizations are deep-merged over the template, so nested settings
        you leave out keep their template values:

            iris.agents.create_from_template("elderly-care", {
                "name": "Grandma Helper",
                "settings": {"schedule": {"timezone": "America/Chicago"}},
            })
        """
        return self.create_from_config(self.build_from_template(template, customizations))

    def list_templates(self) -> Dict[str, Dict[str, str]]:
        return self.templates.summaries()

    def update(self, agent_id: int | str, data: Mapping[str, Any]) -> Agent:
        return Agent.from_payload(self._client.put(f"{self._base()}/{agent_id}", dict(data)))

    def patch(self, agent_id: int | str, data: Mapping[str, Any]) -> Agent:
        """Fetch the agent, overlay top-level fields from `data` and save."""
        current = self.get(agent_id)
        return self.update(agent_id, {**current.to_dict(), **data})

    def delete(self, agent_id: int | str) -> bool:
        self._client.delete(f"{self._base()}/{agent_id}")
        return True

    # -- schedule -----------------------------------------------------------

    def _set_setting(self, agent_id: int | str, key: str, value: Any) -> Agent:
        agent = self.get(agent_id)
        settings = dict(agent.settings)
        settings[key] = value
        return self.update(agent_id, {**agent.to_dict(), "settings": settings})

    def get_schedule(self, agent_id: int | str) -> Dict[str, Any]:
        return dict(self.get(agent_id).settings.get("schedule") or {})

    def set_schedule(self, agent_id: int | str, schedule: Mapping[str, Any]) -> Agent:
        return self._set_setting(agent_id, "schedule", dict(schedule))

    def add_scheduled_task(self, agent_id: int | str, task: Mapping[str, Any]) -> Agent:
        schedule = self.get_schedule(agent_id)
        schedule["recurring_tasks"] = list(schedule.get("recurring_tasks") or []) + [dict(task)]
        schedule.setdefault("enabled", True)
        return self.set_schedule(agent_id, schedule)

    def remove_scheduled_task(self, agent_id: int | str, task_name: str) -> Agent:
        schedule = self.get_schedule(agent_id)
        schedule["recurring_tasks"] = [
            task for task in schedule.get("recurring_tasks") or [] if task.get("name") != task_name
        ]
        return self.set_schedule(agent_id, schedule)

    # -- integrations & functions ---------------------------------------------

    def get_integrations(self, agent_id: int | str) -> Dict[str, bool]:
        return dict(self.get(agent_id).settings.get("agentIntegrations") or {})

    def set_integrations(self, agent_id: int | str, integrations: Mapping[str, bool]) -> Agent:
        return self._set_setting(agent_id, "agentIntegrations", dict(integrations))

    def enable_integration(self, agent_id: int | str, integration: str) -> Agent:
        integrations = self.get_integrations(agent_id)
        integrations[integration] = True
        return self.set_integrations(agent_id, integrations)

    def disable_integration(self, agent_id: int | str, integration: str) -> Agent:
        integrations = self.get_integrations(agent_id)
        integrations[integration] = False
        return self.set_integrations(agent_id, integrations)

    def get_enabled_functions(self, agent_id: int | str) -> Dict[str, bool]:
        return dict(self.get(agent_id).settings.get("enabledFunctions") or {})

    def set_enabled_functions(self, agent_id: int | str, functions: Mapping[str, bool]) -> Agent:
        return self._set_setting(agent_id, "enabledFunctions", dict(functions))
