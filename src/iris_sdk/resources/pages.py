"""Composable landing pages.

A page's `json_content` holds a `theme` mapping and an ordered `components`
list (each component has `type`, `id` and `props`). The component helpers fetch
the page, edit `json_content` locally and PUT it back:

    iris.pages.update_component_by_id(12, "hero-main", {"props.title": "Hello"})
    iris.pages.update_theme(12, {"mode": "light", "branding.primaryColor": "#10b981"})
    iris.pages.update_path(12, "components.0.props.subtitle", "New subtitle")
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional

from ..errors import NotFoundError, TemplateNotFound
from ..paths import NOT_FOUND, get_path, merge_updates, set_path


def _split_json_content(data: Mapping[str, Any]) -> Dict[str, Any]:
    payload = dict(data)
    json_content: Dict[str, Any] = {}
    for key in ("theme", "components"):
        if key in payload:
            json_content[key] = payload.pop(key)
    if json_content:
        payload["json_content"] = json_content
    return payload


def page_template(name: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the `theme` and `components` of a built-in page template."""
    title = data.get("title")
    subtitle = data.get("subtitle")
    templates = {
        "landing": {
            "theme": {
                "mode": "dark",
                "branding": {
                    "name": title or "My Landing Page",
                    "primaryColor": "#6366f1",
                    "secondaryColor": "#8b5cf6",
                },
            },
            "components": [
                {
                    "type": "Hero",
                    "id": "hero-main",
                    "props": {
                        "title": title or "Welcome to Our Platform",
                        "subtitle": subtitle or "Build amazing experiences",
                        "backgroundGradient": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
                        "titleColor": "#ffffff",
                        "subtitleColor": "rgba(255, 255, 255, 0.9)",
                        "textAlign": "center",
                        "minHeight": "600px",
                    },
                },
                {
                    "type": "TextBlock",
                    "id": "intro",
                    "props": {
                        "content": data.get("intro") or "## Why Choose Us\n\nWe provide cutting-edge solutions.",
                        "markdown": True,
                        "textAlign": "center",
                        "maxWidth": "4xl",
                        "themeMode": "dark",
                    },
                },
            ],
        },
        "product": {
            "theme": {
                "mode": "light",
                "branding": {
                    "name": title or "Product Page",
                    "primaryColor": "#10b981",
                    "secondaryColor": "#3b82f6",
                },
            },
            "components": [
                {
                    "type": "Hero",
                    "id": "hero-product",
                    "props": {
                        "title": title or "Our Product",
                        "subtitle": subtitle or "Powerful features for your needs",
                        "backgroundGradient": "linear-gradient(135deg, #10b981 0%, #3b82f6 100%)",
                        "titleColor": "#ffffff",
                        "subtitleColor": "rgba(255, 255, 255, 0.85)",
                        "textAlign": "center",
                        "minHeight": "400px",
                    },
                },
            ],
        },
    }
    if name not in templates:
        raise TemplateNotFound(name, list(templates))
    return templates[name]


class PagesResource:
    def __init__(self, client: Any) -> None:
        self._client = client

    def list(self, **params: Any) -> Any:
        return self._client.get("/api/v1/pages", params)

    def get(self, page_id: int, include_json: bool = True) -> Dict[str, Any]:
        return self._client.get(f"/api/v1/pages/{page_id}", {"include_json": int(include_json)})

    def get_by_slug(self, slug: str, include_json: bool = True, include_drafts: bool = True) -> Dict[str, Any]:
        return self._client.get(
            f"/api/v1/pages/by-slug/{slug}",
            {"include_json": int(include_json), "include_drafts": int(include_drafts)},
        )

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a page; top-level `theme`/`components` are folded into `json_content`."""
        payload = dict(data)
        payload.setdefault("owner_type", "user")
        user_id = self._client.settings.user_id
        if "owner_id" not in payload and user_id:
            payload["owner_id"] = user_id
        return self._client.post("/api/v1/pages", _split_json_content(payload))

    def update(self, page_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._client.put(f"/api/v1/pages/{page_id}", _split_json_content(data))

    def delete(self, page_id: int) -> Any:
        return self._client.delete(f"/api/v1/pages/{page_id}")

    def publish(self, page_id: int) -> Dict[str, Any]:
        return self._client.post(f"/api/v1/pages/{page_id}/publish")

    def unpublish(self, page_id: int) -> Dict[str, Any]:
        return self._client.post(f"/api/v1/pages/{page_id}/unpublish")

    def archive(self, page_id: int) -> Dict[str, Any]:
        return self._client.post(f"/api/v1/pages/{page_id}/archive")

    def duplicate(self, page_id: int, new_slug: Optional[str] = None) -> Dict[str, Any]:
        body = {"slug": new_slug} if new_slug else {}
        return self._client.post(f"/api/v1/pages/{page_id}/duplicate", body)

    def versions(self, page_id: int) -> Any:
        return self._client.get(f"/api/v1/pages/{page_id}/versions")

    def get_version(self, page_id: int, version: int) -> Dict[str, Any]:
        return self._client.get(f"/api/v1/pages/{page_id}/versions/{version}")

    def rollback(self, page_id: int, version: int) -> Dict[str, Any]:
        return self._client.post(f"/api/v1/pages/{page_id}/rollback/{version}")

    def create_from_template(self, template: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        payload = dict(data)
        payload.update(page_template(template, data))
        return self.create(payload)

    # -- json_content editing -------------------------------------------------

    def _content(self, page_id: int) -> Dict[str, Any]:
        page = self.get(page_id, include_json=True)
        return dict(page.get("json_content") or {})

    def _save(self, page_id: int, content: Mapping[str, Any]) -> Dict[str, Any]:
        return self._client.put(f"/api/v1/pages/{page_id}", {"json_content": dict(content)})

    def get_components(self, page_id: int) -> List[Dict[str, Any]]:
        return list(self._content(page_id).get("components") or [])

    def find_component_by_id(self, page_id: int, component_id: str) -> Optional[Dict[str, Any]]:
        for component in self.get_components(page_id):
            if component.get("id") == component_id:
                return component
        return None

    def add_component(self, page_id: int, component: Mapping[str, Any], position: Optional[int] = None) -> Dict[str, Any]:
        content = self._content(page_id)
        components = list(content.get("components") or [])
        new = dict(component)
        if "id" not in new:
            new["id"] = f"{new.get('type', 'component')}-{uuid.uuid4().hex[:13]}"
        if position is None:
            components.append(new)
        else:
            components.insert(position, new)
        content["components"] = components
        return self._save(page_id, content)

    def update_component_by_id(self, page_id: int, component_id: str, updates: Mapping[str, Any]) -> Dict[str, Any]:
        content = self._content(page_id)
        components = content.get("components")
        if not components:
            raise NotFoundError(f"Page {page_id} has no components")
        for idx, component in enumerate(components):
            if component.get("id") == component_id:
                components[idx] = merge_updates(component, updates)
                return self._save(page_id, content)
        raise NotFoundError(f"Component with ID '{component_id}' not found")

    def update_component_by_index(self, page_id: int, index: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
        content = self._content(page_id)
        components = content.get("components") or []
        if not 0 <= index < len(components):
            raise NotFoundError(f"Component at index {index} not found")
        components[index] = merge_updates(components[index], updates)
        return self._save(page_id, content)

    def remove_component_by_id(self, page_id: int, component_id: str) -> Dict[str, Any]:
        content = self._content(page_id)
        components = content.get("components")
        if not components:
            raise NotFoundError(f"Page {page_id} has no components")
        remaining = [c for c in components if c.get("id") != component_id]
        if len(remaining) == len(components):
            raise NotFoundError(f"Component with ID '{component_id}' not found")
        content["components"] = remaining
        return self._save(page_id, content)

    def remove_component_by_index(self, page_id: int, index: int) -> Dict[str, Any]:
        content = self._content(page_id)
        components = content.get("components") or []
        if not 0 <= index < len(components):
            raise NotFoundError(f"Component at index {index} not found")
        del components[index]
        return self._save(page_id, content)

    def update_theme(self, page_id: int, theme_updates: Mapping[str, Any]) -> Dict[str, Any]:
        content = self._content(page_id)
        content["theme"] = merge_updates(content.get("theme") or {}, theme_updates)
        return self._save(page_id, content)

    def update_path(self, page_id: int, path: str, value: Any) -> Dict[str, Any]:
        content = self._content(page_id)
        set_path(content, path, value)
        return self._save(page_id, content)

    def get_path(self, page_id: int, path: str, default: Any = None) -> Any:
        value = get_path(self._content(page_id), path)
        return default if value is NOT_FOUND else value
