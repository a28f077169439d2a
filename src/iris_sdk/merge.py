from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` onto `base` and return a new dict.

    Mappings present on both sides are merged key by key; any other override
    value (lists included) replaces the base value. Keys only in `base` are
    kept. Neither input is mutated.
    """
    result: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result
