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
String sanitizer library.

Every public function takes the value first, then optional positional options,
and returns the transformed value. Input is canonicalized with to_string(), so
a sanitizer applied to a number or a list behaves like it would on the string
a form decoder would have produced.

Conversions that cannot parse their input return None.
"""

import re
from datetime import datetime
from typing import Any, Mapping, Optional

from reqcheck.coerce import to_string

_INT_PREFIX_RE = re.compile(r"^\s*([-+]?[0-9a-zA-Z]+)")
_FLOAT_PREFIX_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_LOW_CHARS_RE = re.compile(r"[\x00-\x1F\x7F]")
_LOW_CHARS_KEEP_NEWLINES_RE = re.compile(r"[\x00-\x09\x0B\x0C\x0E-\x1F\x7F]")

_ESCAPES = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("/", "&#x2F;"),
    ("\\", "&#x5C;"),
    ("`", "&#96;"),
)

_GMAIL_DOMAINS = ("gmail.com", "googlemail.com")


# ==================================================================================================
# Type conversions
# ==================================================================================================


def to_boolean(value: Any, strict: bool = False) -> bool:
    """
    Convert the string to a boolean.

    Non-strict: everything except "0", "false" and "" is True.
    Strict: only "1" and "true" are True.
    """
    text = to_string(value)
    if strict:
        return text in ("1", "true")
    return text not in ("0", "false", "")


def to_date(value: Any) -> Optional[datetime]:
    """Convert an ISO-8601 string to a datetime, or None if it can't be parsed."""
    if isinstance(value, datetime):
        return value
    text = to_string(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_float(value: Any) -> Optional[float]:
    """Parse the leading float of the string, or None."""
    match = _FLOAT_PREFIX_RE.match(to_string(value))
    if not match:
        return None
    return float(match.group(1))


def to_int(value: Any, radix: int = 10) -> Optional[int]:
    """Parse the leading integer of the string in the given radix, or None."""
    match = _INT_PREFIX_RE.match(to_string(value))
    if not match:
        return None

    digits = match.group(1)
    # Longest prefix that is valid in this radix
    for end in range(len(digits), 0, -1):
        try:
            return int(digits[:end], radix)
        except ValueError:
            continue
    return None


# ==================================================================================================
# Whitespace and character filters
# ==================================================================================================


def trim(value: Any, chars: Optional[str] = None) -> str:
    """Trim characters (whitespace by default) from both sides."""
    return to_string(value).strip(chars)


def ltrim(value: Any, chars: Optional[str] = None) -> str:
    return to_string(value).lstrip(chars)


def rtrim(value: Any, chars: Optional[str] = None) -> str:
    return to_string(value).rstrip(chars)


def blacklist(value: Any, chars: str) -> str:
    """Remove every character that appears in chars."""
    banned = set(chars)
    return "".join(char for char in to_string(value) if char not in banned)


def whitelist(value: Any, chars: str) -> str:
    """Remove every character that does not appear in chars."""
    allowed = set(chars)
    return "".join(char for char in to_string(value) if char in allowed)


def strip_low(value: Any, keep_new_lines: bool = False) -> str:
    """Remove ASCII control characters, optionally keeping \\n and \\r."""
    pattern = _LOW_CHARS_KEEP_NEWLINES_RE if keep_new_lines else _LOW_CHARS_RE
    return pattern.sub("", to_string(value))


# ==================================================================================================
# HTML entities
# ==================================================================================================


def escape(value: Any) -> str:
    """Replace <, >, &, ', ", /, \\ and ` with HTML entities."""
    text = to_string(value)
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def unescape(value: Any) -> str:
    """Reverse escape()."""
    text = to_string(value)
    # &amp; last so "&amp;lt;" becomes "&lt;", not "<"
    for char, entity in reversed(_ESCAPES):
        text = text.replace(entity, char)
    return text


# ==================================================================================================
# Email
# ==================================================================================================


def normalize_email(value: Any, options: Optional[Mapping[str, Any]] = None) -> str:
    """
    Canonicalize an email address.

    The domain is always lowercased. For Gmail addresses dots and "+tag"
    sub-addresses are removed from the local part and googlemail.com becomes
    gmail.com. Strings without "@" are returned unchanged.

    Args:
        value: Email address
        options: {"all_lowercase": True, "gmail_remove_dots": True,
                  "gmail_remove_subaddress": True,
                  "gmail_convert_googlemaildotcom": True}
    """
    opts = {
        "all_lowercase": True,
        "gmail_remove_dots": True,
        "gmail_remove_subaddress": True,
        "gmail_convert_googlemaildotcom": True,
    }
    if isinstance(options, Mapping):
        opts.update(options)

    text = to_string(value)
    if "@" not in text:
        return text

    local, _, domain = text.rpartition("@")
    domain = domain.lower()

    if domain in _GMAIL_DOMAINS:
        local = local.lower()
        if opts["gmail_remove_subaddress"]:
            local = local.split("+", 1)[0]
        if opts["gmail_remove_dots"]:
            local = local.replace(".", "")
        if opts["gmail_convert_googlemaildotcom"]:
            domain = "gmail.com"
    elif opts["all_lowercase"]:
        local = local.lower()

    return f"{local}@{domain}"
