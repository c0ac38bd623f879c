# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Field path resolution against a single request location.

Paths are dot-separated keys, each optionally followed by one or more
bracketed indexes:

    foo          -> ["foo"]
    foo[0]       -> ["foo", 0]
    a.b[2].c     -> ["a", "b", 2, "c"]
    grid[1][0]   -> ["grid", 1, 0]

Traversal is flat (no wildcards). A missing key anywhere along the path
means "not found", never an exception.
"""

import re
from dataclasses import dataclass
from typing import Any, List, MutableMapping, MutableSequence, Union

_SEGMENT_RE = re.compile(r"([^.\[\]]*)((?:\[[^\]]*\])*)")
_INDEX_RE = re.compile(r"\[([^\]]*)\]")

PathKey = Union[str, int]


class _Missing:
    """Marker for a value absent from its location."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Located:
    """Result of a lookup: whether the path exists and the value found there."""

    found: bool
    value: Any = MISSING


def parse_path(path: str) -> List[PathKey]:
    """
    Split a field path into its keys.

    Bracketed non-negative integers become int indexes; anything else stays a string key.

    Args:
        path: Field path such as "a.b[2].c"

    Returns:
        List of keys in traversal order
    """
    keys: List[PathKey] = []
    for part in path.split("."):
        match = _SEGMENT_RE.fullmatch(part)
        if match is None:
            # Unbalanced brackets: treat the whole segment as a literal key
            keys.append(part)
            continue

        name, indexes = match.groups()
        if name or not indexes:
            keys.append(name)
        for raw in _INDEX_RE.findall(indexes):
            raw = raw.strip("'\"")
            keys.append(int(raw) if raw.isdigit() else raw)
    return keys


def _step(container: Any, key: PathKey) -> Located:
    """Resolve one key against one container."""
    if isinstance(container, MutableMapping) or hasattr(container, "keys"):
        try:
            if key in container:
                return Located(True, container[key])
        except TypeError:
            return Located(False)
        # "foo[0]" on a mapping keyed by strings
        if isinstance(key, int) and str(key) in container:
            return Located(True, container[str(key)])
        return Located(False)

    if isinstance(container, (list, tuple)):
        if isinstance(key, str):
            if not key.isdigit():
                return Located(False)
            key = int(key)
        if 0 <= key < len(container):
            return Located(True, container[key])
        return Located(False)

    return Located(False)


def locate(container: Any, path: str) -> Located:
    """
    Resolve a field path against a location container.

    Args:
        container: Mapping (or list) holding the request values, may be None
        path: Field path

    Returns:
        Located(found, value); value is MISSING when not found
    """
    if container is None:
        return Located(False)

    current = Located(True, container)
    for key in parse_path(path):
        current = _step(current.value, key)
        if not current.found:
            return current
    return current


def assign(container: Any, path: str, value: Any) -> bool:
    """
    Write a value back at an existing path.

    Only the final key may be new for mappings; intermediate containers must
    already exist. Tuples and other immutable containers are left untouched.

    Args:
        container: Mapping (or list) holding the request values
        path: Field path
        value: New value

    Returns:
        True if the value was written
    """
    keys = parse_path(path)
    if container is None or not keys:
        return False

    parent = container
    for key in keys[:-1]:
        step = _step(parent, key)
        if not step.found:
            return False
        parent = step.value

    last = keys[-1]
    if isinstance(parent, MutableMapping):
        if isinstance(last, int) and last not in parent and str(last) in parent:
            last = str(last)
        parent[last] = value
        return True

    if isinstance(parent, MutableSequence):
        if isinstance(last, str):
            if not last.isdigit():
                return False
            last = int(last)
        if 0 <= last < len(parent):
            parent[last] = value
            return True

    return False
