"""Named configuration templates and customization.

A `TemplateRegistry` maps template names to base configuration trees.
`resolve_template` layers caller customizations on top of a base tree with
`deep_merge`, so nested keys the caller leaves out keep their template value.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import TemplateNotFound
from .merge import deep_merge


def resolve_template(template: Mapping[str, Any], customizations: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    return deep_merge(template, customizations or {})


class TemplateRegistry:
    def __init__(self, templates: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._templates: Dict[str, Dict[str, Any]] = {}
        for name, tree in (templates or {}).items():
            self.register(name, tree)

    def register(self, name: str, tree: Mapping[str, Any]) -> None:
        self._templates[name] = copy.deepcopy(dict(tree))

    def names(self) -> List[str]:
        return list(self._templates)

    def get(self, name: str) -> Dict[str, Any]:
        """Return a copy of the named base tree; raises TemplateNotFound."""
        if name not in self._templates:
            raise TemplateNotFound(name, self.names())
        return copy.deepcopy(self._templates[name])

    def resolve(self, name: str, customizations: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return resolve_template(self.get(name), customizations)

    def summaries(self) -> Dict[str, Dict[str, str]]:
        return {
            name: {
                "name": tree.get("name", name),
                "description": tree.get("description", ""),
                "icon": tree.get("icon", "fas fa-robot"),
            }
            for name, tree in self._templates.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


# ---------------------------------------------------------------------------
# Built-in agent templates
# ---------------------------------------------------------------------------

_ALL_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _elderly_care() -> Dict[str, Any]:
    return {
        "name": "Elderly Care Assistant",
        "type": "content",
        "icon": "fas fa-heart",
        "description": "Caring assistant for elderly individuals with medication reminders and safety monitoring",
        "initial_prompt": (
            "You are a gentle, patient and caring assistant for elderly individuals. "
            "Remind them about medication and meal times, help organize daily routines, "
            "offer warm companionship and simple technical help, and give safety reminders. "
            "Use simple, clear language. In an emergency, suggest contacting a doctor or family."
        ),
        "config": {"model": "gpt-4o-mini", "temperature": 0.7, "maxTokens": 2048},
        "settings": {
            "schedule": {
                "enabled": True,
                "timezone": "America/New_York",
                "frequency": "always_on",
                "working_days": list(_ALL_DAYS),
                "active_hours": {"start": "07:00", "end": "22:00"},
                "recurring_tasks": [
                    {"name": "Morning Medication", "time": "08:00", "message": "Good morning! Time for your morning medications"},
                    {"name": "Lunch Medication", "time": "12:00", "message": "It's lunchtime. Remember your medications"},
                    {"name": "Afternoon Water Reminder", "time": "15:00", "message": "Time to drink some water to stay hydrated"},
                    {"name": "Evening Medication", "time": "18:00", "message": "Good evening! Time for your dinner medications"},
                    {"name": "Bedtime Medication", "time": "21:00", "message": "Time for your bedtime medications. Sleep well!"},
                ],
            },
            "agentIntegrations": {"gmail": True, "google-calendar": True, "slack": False, "google-drive": False},
            "enabledFunctions": {"manageLeads": False, "deepResearch": False, "marketResearch": False},
            "responseMode": "balanced",
            "communicationStyle": "professional",
            "responseLength": "concise",
            "memoryPersistence": True,
            "useKnowledgeBase": True,
        },
    }


def _customer_support() -> Dict[str, Any]:
    return {
        "name": "Customer Support Assistant",
        "type": "content",
        "icon": "fas fa-headset",
        "description": "Professional customer support agent with knowledge base integration",
        "initial_prompt": (
            "You are a professional customer support assistant. Answer product questions "
            "accurately, troubleshoot common issues, guide customers step by step and "
            "escalate complex issues. Be friendly, patient and jargon-free."
        ),
        "config": {"model": "gpt-4o-mini", "temperature": 0.7},
        "settings": {
            "agentIntegrations": {"gmail": True, "slack": True, "google-drive": True},
            "enabledFunctions": {"manageLeads": True, "deepResearch": True},
            "responseMode": "balanced",
            "communicationStyle": "professional",
            "useKnowledgeBase": True,
        },
    }


def _sales_assistant() -> Dict[str, Any]:
    return {
        "name": "Sales Assistant",
        "type": "content",
        "icon": "fas fa-chart-line",
        "description": "Sales and lead qualification assistant",
        "initial_prompt": (
            "You are a sales assistant focused on qualifying leads and supporting sales "
            "processes. Ask discovery questions, identify decision makers and budget, "
            "schedule demos and follow up on proposals. Stay consultative and value-focused."
        ),
        "config": {"model": "gpt-4o-mini", "temperature": 0.8},
        "settings": {
            "agentIntegrations": {"gmail": True, "google-calendar": True, "slack": True},
            "enabledFunctions": {"manageLeads": True, "marketResearch": True},
            "responseMode": "balanced",
            "communicationStyle": "professional",
        },
    }


def _research_agent() -> Dict[str, Any]:
    return {
        "name": "Research Agent",
        "type": "content",
        "icon": "fas fa-search",
        "description": "Deep research and analysis assistant",
        "initial_prompt": (
            "You are a research assistant specialized in gathering, analyzing and "
            "synthesizing information. Be thorough and methodical, cite sources when "
            "possible, acknowledge limitations and present balanced perspectives."
        ),
        "config": {"model": "gpt-4o", "temperature": 0.3},
        "settings": {
            "agentIntegrations": {"google-drive": True},
            "enabledFunctions": {"deepResearch": True, "marketResearch": True},
            "responseMode": "detailed",
            "communicationStyle": "professional",
            "responseLength": "detailed",
        },
    }


def _leadership_coach() -> Dict[str, Any]:
    return {
        "name": "Leadership Coach",
        "type": "content",
        "icon": "fas fa-user-tie",
        "description": "Executive and leadership coach for professional development and team management",
        "initial_prompt": (
            "You are an experienced leadership coach. Help leaders with strategic thinking, "
            "delegation, communication, conflict resolution and building high-performing "
            "teams. Ask powerful questions and guide them to their own insights."
        ),
        "config": {"model": "gpt-4o-mini", "temperature": 0.7},
        "settings": {
            "agentIntegrations": {"google-calendar": True, "gmail": True, "slack": False},
            "enabledFunctions": {"deepResearch": True},
            "responseMode": "reflective",
            "communicationStyle": "thought-provoking",
            "memoryPersistence": True,
            "useKnowledgeBase": True,
        },
    }


def default_agent_templates() -> TemplateRegistry:
    """Build a registry holding the built-in agent templates."""
    return TemplateRegistry(
        {
            "elderly-care": _elderly_care(),
            "customer-support": _customer_support(),
            "sales-assistant": _sales_assistant(),
            "research-agent": _research_agent(),
            "leadership-coach": _leadership_coach(),
        }
    )
