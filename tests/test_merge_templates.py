import pytest

from iris_sdk import (
    TemplateNotFound,
    TemplateRegistry,
    deep_merge,
    default_agent_templates,
    resolve_template,
)


def test_deep_merge_preserves_nested_base_keys():
    assert deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 9}}) == {"a": {"x": 1, "y": 9}}


def test_deep_merge_replaces_sequences_and_scalars():
    assert deep_merge({"tags": ["a", "b"]}, {"tags": ["c"]}) == {"tags": ["c"]}
    assert deep_merge({"a": {"x": 1}}, {"a": 3}) == {"a": 3}
    assert deep_merge({"a": 3}, {"a": {"x": 1}}) == {"a": {"x": 1}}


def test_deep_merge_empty_override_is_copy():
    base = {"a": {"b": [1, 2]}, "c": None}
    result = deep_merge(base, {})
    assert result == base
    result["a"]["b"].append(3)
    assert base["a"]["b"] == [1, 2]


def test_deep_merge_does_not_alias_override():
    override = {"settings": {"tasks": [{"name": "x"}]}}
    result = deep_merge({}, override)
    result["settings"]["tasks"][0]["name"] = "changed"
    assert override["settings"]["tasks"][0]["name"] == "x"


def test_resolve_template_scenario():
    template = {"name": "Agent", "settings": {"schedule": {"enabled": False}}}
    result = resolve_template(template, {"settings": {"schedule": {"enabled": True, "timezone": "UTC"}}})
    assert result == {"name": "Agent", "settings": {"schedule": {"enabled": True, "timezone": "UTC"}}}
    assert template == {"name": "Agent", "settings": {"schedule": {"enabled": False}}}


def test_registry_lookup_and_resolve():
    registry = TemplateRegistry({"basic": {"name": "Basic", "config": {"temperature": 0.5}}})
    assert "basic" in registry
    assert len(registry) == 1
    assert registry.resolve("basic", {"config": {"model": "m"}}) == {
        "name": "Basic",
        "config": {"temperature": 0.5, "model": "m"},
    }
    # callers cannot corrupt the registry through returned trees
    registry.get("basic")["name"] = "mutated"
    assert registry.get("basic")["name"] == "Basic"


def test_registry_unknown_name():
    registry = TemplateRegistry({"a": {}, "b": {}})
    with pytest.raises(TemplateNotFound) as info:
        registry.get("missing")
    assert info.value.available == ["a", "b"]
    assert "missing" in str(info.value)


def test_default_agent_templates():
    registry = default_agent_templates()
    assert set(registry) == {
        "elderly-care",
        "customer-support",
        "sales-assistant",
        "research-agent",
        "leadership-coach",
    }
    summaries = registry.summaries()
    assert summaries["customer-support"]["icon"] == "fas fa-headset"

    agent = registry.resolve("elderly-care", {"name": "Grandma Helper", "settings": {"schedule": {"timezone": "UTC"}}})
    schedule = agent["settings"]["schedule"]
    assert agent["name"] == "Grandma Helper"
    assert schedule["timezone"] == "UTC"
    assert schedule["enabled"] is True
    assert len(schedule["recurring_tasks"]) == 5
