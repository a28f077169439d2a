"""Servis.ai CRM functions executed through the IRIS integrations endpoint.

    iris.servis_ai.get_case_details({"case_id": "CAS102377"})
    iris.servis_ai.list_account_users(limit=10)
    iris.servis_ai.listChanges({"limit": 5})   # any other function, camelCase ok
"""

from __future__ import annotations

from typing import Any, Dict

from ..errors import SDKError
from ..proxy import RemoteFunctionProxy, remote_function


class ServisAiResource(RemoteFunctionProxy):
    integration_name = "servis-ai"

    def __init__(self, client: Any) -> None:
        super().__init__(client, endpoint="", integration=self.integration_name)

    @property
    def endpoint(self) -> str:
        user_id = self._client.settings.require_user_id()
        return f"/api/v1/users/{user_id}/integrations/execute"

    list_apps = remote_function("list_apps", "List Servis.ai apps.")
    list_activities = remote_function("list_activities")
    list_account_users = remote_function("list_account_users")
    list_changes = remote_function("list_changes")
    list_app_fields = remote_function("list_app_fields")
    list_phone_calls = remote_function("list_phone_calls")
    list_services = remote_function("list_services")
    list_event_logs = remote_function("list_event_logs")
    get_case_details = remote_function("get_case_details", "Fetch a case by `case_id`.")
    get_case_fields = remote_function("get_case_fields")
    analyze_case_comprehensive = remote_function(
        "analyze_case_comprehensive", "Run a full AI analysis of a case (`case_id`)."
    )
    summarize_case = remote_function("summarize_case")
    get_user_profile = remote_function("get_user_profile")
    search_global = remote_function("search_global")

    def case(self, case_id: str) -> Any:
        return self.execute("get_case_details", {"case_id": case_id})

    def analyze(self, case_id: str) -> Any:
        return self.execute("analyze_case_comprehensive", {"case_id": case_id})

    def apps(self) -> Any:
        return self.execute("list_apps")

    def fields(self, entity: str = "case_record") -> Any:
        return self.execute("get_case_fields", {"entity": entity})

    def test(self) -> Dict[str, Any]:
        """Check the connection by listing apps; never raises `SDKError`."""
        try:
            apps = self.execute("list_apps")
        except SDKError as e:
            return {"success": False, "error": str(e)}
        return {
            "success": True,
            "message": "Connected",
            "app_count": len(apps) if isinstance(apps, list) else 0,
        }
