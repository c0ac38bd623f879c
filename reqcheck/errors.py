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
Validation error records and message resolution.

Failed validators never raise out of the runner. Each failure becomes a
FieldError record; ValidationFailed exists only for callers that want to turn
a non-empty result into an exception (Result.throw()).

Message priority for a failed validator:
    1. the validator's own message (with_message)
    2. the chain's default message
    3. the payload of the exception the validator raised
    4. DEFAULT_ERROR_MESSAGE ("Invalid value")

Example:
    >>> resolve_message(spec, context, "foo", meta, ValueError("wat"))
    'wat'
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from reqcheck.config import DEFAULT_ERROR_MESSAGE
from reqcheck.context import Context, Meta, ValidatorSpec


@dataclass
class FieldError:
    """
    One failed validator for one field instance.

    Attributes:
        location: Request location the value came from ("body", "query", ...)
        param: Field path as declared, e.g. "foo[0]"
        value: Original value, before any sanitizer ran
        msg: Resolved message; usually a string but may be any value
    """

    location: str
    param: str
    value: Any
    msg: Any

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ValidationFailed(Exception):
    """Raised by Result.throw() when a request has validation errors."""

    def __init__(self, errors: Sequence[Any]):
        self.errors: List[Any] = list(errors)
        super().__init__(f"Validation failed with {len(self.errors)} error(s)")

    def mapped(self) -> Dict[str, Any]:
        """First error per param (same shape as Result.mapped())."""
        mapped: Dict[str, Any] = {}
        for error in self.errors:
            param = error.param if isinstance(error, FieldError) else error.get("param")
            mapped.setdefault(param, error)
        return mapped


def _render(message: Any, value: Any, meta: Meta) -> Any:
    """Call dynamic messages with (value, meta); return static ones as-is."""
    if callable(message):
        return message(value, meta)
    return message


def exception_payload(exc: Optional[BaseException]) -> Any:
    """
    Message carried by a validator exception.

    A single argument is returned as-is (it need not be a string), so
    `raise ValueError({"value": v})` yields the dict. Empty payloads are None.
    """
    if exc is None:
        return None
    if len(exc.args) == 1:
        payload = exc.args[0]
    else:
        payload = str(exc)
    if payload is None or payload == "":
        return None
    return payload


def resolve_message(
    spec: ValidatorSpec,
    context: Context,
    value: Any,
    meta: Meta,
    exc: Optional[BaseException] = None,
) -> Any:
    """
    Pick the message for a failed validator.

    Args:
        spec: The validator that failed
        context: Context the validator belongs to
        value: Original (pre-sanitization) value
        meta: Request, location and path of the failing instance
        exc: Exception raised by the validator, if any

    Returns:
        The message to record
    """
    if spec.message is not None:
        return _render(spec.message, value, meta)
    if context.message is not None:
        return _render(context.message, value, meta)

    payload = exception_payload(exc)
    if payload is not None:
        return payload
    return DEFAULT_ERROR_MESSAGE
