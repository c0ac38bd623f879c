# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
String canonicalization for the predicate library.

Built-in validators and sanitizers operate on strings. Request values can be
anything a JSON body or form decoder produces, so they are reduced to a single
string before a built-in predicate sees them:

    "bar"                    -> "bar"
    None / MISSING / NaN     -> ""
    [] / ()                  -> ""
    True / False             -> "true" / "false"
    123                      -> "123"
    ["foo", "foo"]           -> "foo"           (first element only)
    [["a", "b"], ["c"]]      -> "a,b"           (nested list is comma-joined)
    datetime(2012, 12, 12)   -> "2012-12-12T00:00:00.000Z"
    {} / other objects       -> str(value)
"""

import math
from datetime import date, datetime, timezone
from typing import Any

from reqcheck.field_locator import MISSING


def _scalar_string(value: Any) -> str:
    """String form of a single non-list value."""
    if value is None or value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _joined_string(value: Any) -> str:
    """Comma-joined form of a list, recursively (JSON array style)."""
    if isinstance(value, (list, tuple)):
        return ",".join(_joined_string(item) for item in value)
    return _scalar_string(value)


def to_string(value: Any) -> str:
    """
    Reduce a request value to the string a built-in predicate receives.

    Lists are shallow: only the first element counts, and a list in that
    position is comma-joined rather than unwrapped again.

    Args:
        value: Raw request value

    Returns:
        Canonical string form
    """
    if isinstance(value, (list, tuple)):
        if not value:
            return ""
        return _joined_string(value[0])
    return _scalar_string(value)
