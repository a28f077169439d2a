import pytest

from iris_sdk import RemoteFunctionProxy, ServisAiResource, Settings, TransportError, to_snake_case
from iris_sdk.errors import ConfigurationError


class _RecordingClient:
    def __init__(self, response=None, error=None, user_id=193):
        self.settings = Settings(api_key="k", user_id=user_id)
        self.calls = []
        self._response = {"ok": True} if response is None else response
        self._error = error

    def post(self, endpoint, body=None):
        self.calls.append((endpoint, body))
        if self._error is not None:
            raise self._error
        return self._response


@pytest.mark.parametrize(
    "name, expected",
    [
        ("listAccountUsers", "list_account_users"),
        ("getCaseDetails", "get_case_details"),
        ("test", "test"),
        ("list_apps", "list_apps"),
        ("ListApps", "list_apps"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_execute_builds_generic_request():
    client = _RecordingClient()
    proxy = RemoteFunctionProxy(client, "/api/v1/execute", "crm")
    assert proxy.execute("list_apps", {"limit": 5}) == {"ok": True}
    assert client.calls == [
        ("/api/v1/execute", {"integration": "crm", "action": "list_apps", "parameters": {"limit": 5}})
    ]


def test_dynamic_attribute_calls():
    client = _RecordingClient()
    proxy = RemoteFunctionProxy(client, "/x", "crm")
    proxy.listPhoneCalls({"limit": 2})
    proxy.summarizeCase()
    assert [body["action"] for _, body in client.calls] == ["list_phone_calls", "summarize_case"]
    assert client.calls[1][1]["parameters"] == {}


def test_private_attributes_are_not_proxied():
    proxy = RemoteFunctionProxy(_RecordingClient(), "/x", "crm")
    with pytest.raises(AttributeError):
        proxy._secret
    assert not hasattr(proxy, "__missing_dunder__")


def test_remote_error_payload_is_returned_as_data():
    client = _RecordingClient(response={"error": "unknown function"})
    proxy = RemoteFunctionProxy(client, "/x", "crm")
    assert proxy.execute("nope") == {"error": "unknown function"}


def test_transport_errors_propagate():
    client = _RecordingClient(error=TransportError("down"))
    with pytest.raises(TransportError):
        RemoteFunctionProxy(client, "/x", "crm").execute("list_apps")


def test_servis_wrappers_and_shortcuts():
    client = _RecordingClient()
    servis = ServisAiResource(client)

    servis.list_account_users(limit=10)
    servis.get_case_details({"case_id": "CAS1"})
    servis.case("CAS2")
    servis.analyze("CAS3")
    servis.fields()
    servis.listChanges({"limit": 1})

    endpoints = {endpoint for endpoint, _ in client.calls}
    assert endpoints == {"/api/v1/users/193/integrations/execute"}
    bodies = [body for _, body in client.calls]
    assert all(body["integration"] == "servis-ai" for body in bodies)
    assert [(b["action"], b["parameters"]) for b in bodies] == [
        ("list_account_users", {"limit": 10}),
        ("get_case_details", {"case_id": "CAS1"}),
        ("get_case_details", {"case_id": "CAS2"}),
        ("analyze_case_comprehensive", {"case_id": "CAS3"}),
        ("get_case_fields", {"entity": "case_record"}),
        ("list_changes", {"limit": 1}),
    ]


def test_servis_requires_user_id():
    servis = ServisAiResource(_RecordingClient(user_id=None))
    with pytest.raises(ConfigurationError):
        servis.apps()


def test_servis_connection_test():
    ok = ServisAiResource(_RecordingClient(response=[{"id": 1}, {"id": 2}])).test()
    assert ok == {"success": True, "message": "Connected", "app_count": 2}

    failed = ServisAiResource(_RecordingClient(error=TransportError("boom"))).test()
    assert failed == {"success": False, "error": "boom"}
