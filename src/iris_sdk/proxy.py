"""Generic remote-function dispatch.

Some integrations expose an open-ended set of functions behind a single
"execute" endpoint. `RemoteFunctionProxy` turns method-style calls into that
request shape:

    proxy.execute("list_apps", {"limit": 10})
    proxy.listAccountUsers({"limit": 10})   # -> action "list_account_users"

Known functions get explicit wrappers via `remote_function`; any other public
attribute falls back to `dynamic_call`.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

_UPPER_RE = re.compile(r"(?<!^)([A-Z])")


def to_snake_case(identifier: str) -> str:
    return _UPPER_RE.sub(r"_\1", identifier).lower()


class RemoteFunctionProxy:
    def __init__(self, client: Any, endpoint: str, integration: str) -> None:
        self._client = client
        self._endpoint = endpoint
        self._integration = integration

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def integration(self) -> str:
        return self._integration

    def execute(self, function_name: str, parameters: Optional[Mapping[str, Any]] = None) -> Any:
        """POST a single execute request and return the decoded body.

        Error payloads from the remote function are returned as-is; transport
        errors propagate from the client.
        """
        body = {
            "integration": self._integration,
            "action": function_name,
            "parameters": dict(parameters or {}),
        }
        return self._client.post(self.endpoint, body)

    def dynamic_call(self, method_name: str, args: Sequence[Any] = ()) -> Any:
        parameters = args[0] if args and args[0] is not None else {}
        return self.execute(to_snake_case(method_name), parameters)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached for attributes not found normally.
        if name.startswith("_"):
            raise AttributeError(name)

        def _call(*args: Any) -> Any:
            return self.dynamic_call(name, args)

        _call.__name__ = name
        return _call


def remote_function(name: str, doc: str | None = None) -> Callable[..., Any]:
    """Build an explicit proxy method bound to the remote function `name`."""

    def method(self: RemoteFunctionProxy, params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Any:
        parameters = dict(params or {})
        parameters.update(kwargs)
        return self.execute(name, parameters)

    method.__name__ = name
    method.__doc__ = doc or f"Execute the remote `{name}` function."
    return method
