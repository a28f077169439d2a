"""Dot-notation access to nested JSON-like data.

Paths are dot-separated strings such as ``components.0.props.title``. A segment
addresses a mapping key, or a list index when the container at that point is a
list (index segments must match ``^\\d+$``).

- get_path: read a value; missing keys and out-of-range indices yield NOT_FOUND
- set_path: write a value in place, creating intermediate mappings on demand
- merge_updates: one-level partial update with dotted-key shortcuts
"""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, List, Mapping, MutableMapping, Union

from .errors import InvalidPath

NestedValue = Union[None, bool, int, float, str, List["NestedValue"], Dict[str, "NestedValue"]]

_INDEX_RE = re.compile(r"^\d+$")


class _NotFound:
    """Sentinel returned by `get_path` for absent keys/indices."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


def split_path(path: str) -> tuple[str, ...]:
    if not isinstance(path, str) or path == "":
        raise InvalidPath("path must be a non-empty string", path=path)
    segments = tuple(path.split("."))
    if any(seg == "" for seg in segments):
        raise InvalidPath(f"empty segment in path {path!r}", path=path)
    return segments


def _index(segment: str, path: str) -> int:
    if not _INDEX_RE.match(segment):
        raise InvalidPath(f"segment {segment!r} is not a list index in path {path!r}", path=path)
    return int(segment)


def get_path(root: NestedValue, path: str) -> Any:
    """Return the value at `path` or NOT_FOUND.

    A null on the way counts as missing, matching `set_path`. Raises
    InvalidPath for malformed paths and for walks that run into a scalar
    where a container was expected.
    """
    current: Any = root
    for segment in split_path(path):
        if current is None:
            return NOT_FOUND
        if isinstance(current, Mapping):
            if segment not in current:
                return NOT_FOUND
            current = current[segment]
        elif isinstance(current, list):
            if not _INDEX_RE.match(segment):
                return NOT_FOUND
            idx = int(segment)
            if idx >= len(current):
                return NOT_FOUND
            current = current[idx]
        else:
            raise InvalidPath(f"cannot descend into {type(current).__name__} at {segment!r}", path=path)
    return current


def set_path(root: MutableMapping[str, Any] | list, path: str, value: NestedValue) -> Any:
    """Write `value` at `path`, mutating `root` in place and returning it.

    Missing (or null) mapping entries along the way become empty dicts. Lists
    are never created or extended; an out-of-range index is an InvalidPath.
    """
    segments = split_path(path)
    current: Any = root
    for segment in segments[:-1]:
        if isinstance(current, MutableMapping):
            nxt = current.get(segment)
            if nxt is None:
                nxt = {}
                current[segment] = nxt
            current = nxt
        elif isinstance(current, list):
            idx = _index(segment, path)
            if idx >= len(current):
                raise InvalidPath(f"index {idx} out of range in path {path!r}", path=path)
            current = current[idx]
        else:
            raise InvalidPath(f"cannot descend into {type(current).__name__} at {segment!r}", path=path)

    last = segments[-1]
    if isinstance(current, MutableMapping):
        current[last] = value
    elif isinstance(current, list):
        idx = _index(last, path)
        if idx >= len(current):
            raise InvalidPath(f"index {idx} out of range in path {path!r}", path=path)
        current[idx] = value
    else:
        raise InvalidPath(f"cannot set {last!r} on {type(current).__name__}", path=path)
    return root


def merge_updates(target: Mapping[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply a partial update to `target` and return the result as a new dict.

    Keys containing a dot are written with `set_path`. A mapping update over an
    existing mapping is merged one level deep only; anything else replaces.
    """
    result: Dict[str, Any] = copy.deepcopy(dict(target))
    for key, value in updates.items():
        if "." in key:
            set_path(result, key, copy.deepcopy(value))
        elif isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = {**result[key], **copy.deepcopy(dict(value))}
        else:
            result[key] = copy.deepcopy(value)
    return result
