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
String predicate library.

Every public function here is a validator: it takes the value as its first
argument, followed by optional positional options, and returns a bool. Values
are canonicalized with to_string() first, so the predicates are safe to call
on raw request values.

Options follow a single-mapping convention, e.g.
    is_length(value, {"min": 1, "max": 5})
    is_int(value, {"allow_leading_zeroes": False})

The registry picks up every function whose name starts with "is_", plus
contains, equals and matches.
"""

import ipaddress
import json
import re
import uuid
from typing import Any, Iterable, Mapping, Optional, Union
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

from reqcheck.coerce import to_string

_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_ALPHANUMERIC_RE = re.compile(r"^[0-9A-Za-z]+$")
_ASCII_RE = re.compile(r"^[\x00-\x7F]+$")
_BASE64_RE = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{4})$")
_DECIMAL_RE = re.compile(r"^[-+]?([0-9]+)?(\.[0-9]+)?$")
_FLOAT_RE = re.compile(r"^(?:[-+])?(?:[0-9]+)?(?:\.[0-9]*)?(?:[eE][+-]?(?:[0-9]+))?$")
_HEX_RE = re.compile(r"^(0x|0h)?[0-9A-Fa-f]+$")
_INT_RE = re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*))$")
_INT_LEADING_ZEROES_RE = re.compile(r"^[-+]?[0-9]+$")
_ISO8601_RE = re.compile(
    r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])"
    r"([T ]([01]\d|2[0-3]):[0-5]\d(:[0-5]\d([.,]\d+)?)?([zZ]|[+-]([01]\d|2[0-3]):?[0-5]\d)?)?$"
)
_MONGO_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_NUMERIC_NO_SYMBOLS_RE = re.compile(r"^[0-9]+$")
_TLD_RE = re.compile(r"^([a-z¡-￿]{2,}|xn[a-z0-9-]{2,})$", re.IGNORECASE)
_HOST_LABEL_RE = re.compile(r"^[a-z¡-￿0-9-]+$", re.IGNORECASE)

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _options(options: Optional[Mapping[str, Any]], **defaults: Any) -> dict:
    """Merge caller options over defaults, ignoring non-mapping input."""
    merged = dict(defaults)
    if isinstance(options, Mapping):
        merged.update(options)
    return merged


def _in_bounds(number: float, opts: Mapping[str, Any]) -> bool:
    """Check min/max (inclusive) and gt/lt (exclusive) bounds."""
    if opts.get("min") is not None and number < opts["min"]:
        return False
    if opts.get("max") is not None and number > opts["max"]:
        return False
    if opts.get("gt") is not None and number <= opts["gt"]:
        return False
    if opts.get("lt") is not None and number >= opts["lt"]:
        return False
    return True


# ==================================================================================================
# Comparison predicates
# ==================================================================================================


def contains(value: Any, seed: Any) -> bool:
    """Check if the string contains the seed."""
    return to_string(seed) in to_string(value)


def equals(value: Any, comparison: Any) -> bool:
    """Check if the string matches the comparison."""
    return to_string(value) == to_string(comparison)


def matches(value: Any, pattern: Union[str, re.Pattern], modifiers: Optional[str] = None) -> bool:
    """
    Check if the string matches the pattern.

    Args:
        value: Value to test
        pattern: Regular expression (string or compiled)
        modifiers: Optional flag letters ("i", "m", "s", "x")
    """
    if not isinstance(pattern, re.Pattern):
        flags = 0
        for letter in modifiers or "":
            flags |= _REGEX_FLAGS.get(letter, 0)
        pattern = re.compile(pattern, flags)
    return pattern.search(to_string(value)) is not None


# ==================================================================================================
# Character class predicates
# ==================================================================================================


def is_alpha(value: Any) -> bool:
    """Check if the string contains only letters (a-zA-Z)."""
    return bool(_ALPHA_RE.match(to_string(value)))


def is_alphanumeric(value: Any) -> bool:
    """Check if the string contains only letters and numbers."""
    return bool(_ALPHANUMERIC_RE.match(to_string(value)))


def is_ascii(value: Any) -> bool:
    return bool(_ASCII_RE.match(to_string(value)))


def is_hexadecimal(value: Any) -> bool:
    return bool(_HEX_RE.match(to_string(value)))


def is_lowercase(value: Any) -> bool:
    text = to_string(value)
    return text == text.lower()


def is_uppercase(value: Any) -> bool:
    text = to_string(value)
    return text == text.upper()


def is_empty(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """Check if the string has a length of zero."""
    opts = _options(options, ignore_whitespace=False)
    text = to_string(value)
    if opts["ignore_whitespace"]:
        text = text.strip()
    return len(text) == 0


def is_length(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Check if the string's length falls in a range.

    Args:
        value: Value to test
        options: {"min": int (default 0), "max": int or None}
    """
    opts = _options(options, min=0, max=None)
    length = len(to_string(value))
    if length < (opts["min"] or 0):
        return False
    return opts["max"] is None or length <= opts["max"]


# ==================================================================================================
# Numeric predicates
# ==================================================================================================


def is_int(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Check if the string is an integer.

    Args:
        value: Value to test
        options: {"allow_leading_zeroes": bool (default True),
                  "min", "max", "gt", "lt": bounds}
    """
    opts = _options(options, allow_leading_zeroes=True)
    text = to_string(value)
    pattern = _INT_LEADING_ZEROES_RE if opts["allow_leading_zeroes"] else _INT_RE
    if not pattern.match(text):
        return False
    return _in_bounds(int(text), opts)


def is_float(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """Check if the string is a float, optionally within min/max/gt/lt bounds."""
    opts = _options(options)
    text = to_string(value)
    if text in ("", ".", "+", "-") or not _FLOAT_RE.match(text):
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    return _in_bounds(number, opts)


def is_decimal(value: Any) -> bool:
    text = to_string(value)
    return text not in ("", ".", "+", "-") and bool(_DECIMAL_RE.match(text))


def is_numeric(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """Check if the string contains only numbers (optionally no sign/dot)."""
    opts = _options(options, no_symbols=False)
    pattern = _NUMERIC_NO_SYMBOLS_RE if opts["no_symbols"] else _NUMERIC_RE
    return bool(pattern.match(to_string(value)))


def is_port(value: Any) -> bool:
    return is_int(value, {"allow_leading_zeroes": False, "min": 0, "max": 65535})


def is_boolean(value: Any) -> bool:
    return to_string(value) in ("true", "false", "1", "0")


def is_credit_card(value: Any) -> bool:
    """Check if the string is a credit card number (Luhn checksum)."""
    digits = re.sub(r"[- ]+", "", to_string(value))
    if not re.match(r"^\d{12,19}$", digits):
        return False

    total = 0
    double = False
    for char in reversed(digits):
        digit = int(char)
        if double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double = not double
    return total % 10 == 0


# ==================================================================================================
# Format predicates
# ==================================================================================================


def is_base64(value: Any) -> bool:
    text = to_string(value)
    return len(text) % 4 == 0 and bool(_BASE64_RE.match(text))


def is_email(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Check if the string is an email address.

    Syntax only; no DNS deliverability lookups are made.

    Args:
        value: Value to test
        options: {"allow_smtputf8": bool (default True)}
    """
    opts = _options(options, allow_smtputf8=True)
    try:
        validate_email(
            to_string(value),
            check_deliverability=False,
            allow_smtputf8=opts["allow_smtputf8"],
        )
    except EmailNotValidError:
        return False
    return True


def is_in(value: Any, values: Iterable[Any]) -> bool:
    """Check if the string is in an iterable of allowed values."""
    if isinstance(values, Mapping):
        values = values.keys()
    elif isinstance(values, str):
        return to_string(value) in values
    return to_string(value) in {to_string(item) for item in values}


def is_ip(value: Any, version: Optional[Union[int, str]] = None) -> bool:
    """Check if the string is an IP address (version 4 or 6, or either)."""
    try:
        address = ipaddress.ip_address(to_string(value))
    except ValueError:
        return False
    return version in (None, "") or str(address.version) == str(version)


def is_iso8601(value: Any) -> bool:
    return bool(_ISO8601_RE.match(to_string(value)))


def is_json(value: Any) -> bool:
    """Check if the string is a JSON object or array."""
    try:
        parsed = json.loads(to_string(value))
    except ValueError:
        return False
    return isinstance(parsed, (dict, list))


def is_mongo_id(value: Any) -> bool:
    return bool(_MONGO_ID_RE.match(to_string(value)))


def is_url(value: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
    """
    Check if the string is a URL.

    Args:
        value: Value to test
        options: {"protocols": list (default http/https/ftp),
                  "require_protocol": bool (default False),
                  "require_tld": bool (default True)}
    """
    opts = _options(
        options,
        protocols=("http", "https", "ftp"),
        require_protocol=False,
        require_tld=True,
    )
    text = to_string(value)
    if not text or len(text) >= 2083 or re.search(r"\s", text):
        return False

    if "://" not in text:
        if opts["require_protocol"]:
            return False
        text = "http://" + text

    try:
        parts = urlsplit(text)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return False

    if parts.scheme.lower() not in opts["protocols"] or not host:
        return False
    if port is not None and port <= 0:
        return False

    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    labels = host.split(".")
    if opts["require_tld"]:
        if len(labels) < 2 or not _TLD_RE.match(labels[-1]):
            return False
    return all(
        label and _HOST_LABEL_RE.match(label) and not label.startswith("-") and not label.endswith("-")
        for label in labels
    )


def is_uuid(value: Any, version: Optional[Union[int, str]] = None) -> bool:
    """Check if the string is a UUID (optionally of a specific version)."""
    text = to_string(value)
    if len(text) != 36:
        return False
    try:
        parsed = uuid.UUID(text)
    except ValueError:
        return False
    if str(parsed) != text.lower():
        return False
    if version in (None, "", "all"):
        return True
    return str(parsed.version) == str(version)
