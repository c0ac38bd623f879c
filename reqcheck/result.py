# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Read-side helpers over a validated request.

validation_result(req) wraps the request's accumulated errors:

    result = validation_result(req)
    if not result.is_empty():
        return {"errors": result.mapped()}

matched_data(req) returns the values of validated fields that passed.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from reqcheck.errors import FieldError, ValidationFailed
from reqcheck.field_locator import locate, parse_path
from reqcheck.request import get_contexts, get_errors, get_location


def _param_of(error: Any) -> Any:
    return error.param if isinstance(error, FieldError) else error.get("param")


class Result:
    """
    Snapshot of a request's validation errors.

    Errors are FieldError records unless a formatter was applied with
    format_with(), in which case they are whatever the formatter returns.
    """

    def __init__(self, errors: Sequence[Any], formatter: Optional[Callable[[FieldError], Any]] = None):
        self._errors: List[FieldError] = list(errors)
        self._formatter = formatter

    def _format(self, error: FieldError) -> Any:
        return self._formatter(error) if self._formatter else error

    def is_empty(self) -> bool:
        return not self._errors

    def array(self, only_first_error: bool = False) -> List[Any]:
        """
        Errors in recorded order.

        Args:
            only_first_error: Keep only the first error per param
        """
        if not only_first_error:
            return [self._format(error) for error in self._errors]

        seen = set()
        first: List[Any] = []
        for error in self._errors:
            param = _param_of(error)
            if param in seen:
                continue
            seen.add(param)
            first.append(self._format(error))
        return first

    def mapped(self) -> Dict[str, Any]:
        """First error per param, keyed by param."""
        mapped: Dict[str, Any] = {}
        for error in self._errors:
            mapped.setdefault(_param_of(error), self._format(error))
        return mapped

    def format_with(self, formatter: Callable[[FieldError], Any]) -> "Result":
        """Return a new Result whose errors are passed through formatter."""
        return Result(self._errors, formatter)

    def throw(self) -> None:
        """Raise ValidationFailed if there are errors."""
        if self._errors:
            raise ValidationFailed(self.array())

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"Result(errors={len(self._errors)})"


def validation_result(req: Any) -> Result:
    """Wrap the errors accumulated on the request."""
    return Result(get_errors(req))


def matched_data(req: Any, locations: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """
    Collect the (sanitized) values of validated fields that have no errors.

    Only fields checked by a chain on this request are considered, and only
    where they were found. Nested paths are rebuilt as nested dicts.

    Args:
        req: Request the chains ran on
        locations: Restrict to these locations (default: all)

    Returns:
        Mapping of matched values
    """
    failed = {(error.location, error.param) for error in get_errors(req) if isinstance(error, FieldError)}
    data: Dict[str, Any] = {}

    for context in get_contexts(req):
        for field in context.fields:
            for location in context.locations:
                if locations is not None and location not in locations:
                    continue
                if (location, field) in failed:
                    continue
                located = locate(get_location(req, location), field)
                if not located.found:
                    continue
                _set_nested(data, field, located.value)
    return data


def _set_nested(data: Dict[str, Any], field: str, value: Any) -> None:
    """Set a value at a path, creating intermediate dicts (indexes become keys)."""
    keys = parse_path(field)
    current = data
    for key in keys[:-1]:
        nxt = current.get(key)
        if not isinstance(nxt, dict):
            nxt = {}
            current[key] = nxt
        current = nxt
    current[keys[-1]] = value
