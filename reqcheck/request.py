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
Request access for the validation core.

The runner accepts any request-like object: either a mapping with location
keys ({"body": {...}, "query": {...}}) or an object with location attributes.
ValidationRequest is the concrete container used by the FastAPI integration;
from_starlette() copies a Starlette/FastAPI request into one.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence

from loguru import logger

from reqcheck.config import CONTEXTS_ATTRIBUTE, ERRORS_ATTRIBUTE


def get_location(req: Any, location: str) -> Any:
    """Return the container for a location, or None if the request has none."""
    if isinstance(req, Mapping):
        return req.get(location)
    return getattr(req, location, None)


def _get_list(req: Any, name: str) -> Optional[List[Any]]:
    if isinstance(req, Mapping):
        return req.get(name)
    return getattr(req, name, None)


def _ensure_list(req: Any, name: str) -> List[Any]:
    """Return the named list on the request, creating it if absent."""
    current = _get_list(req, name)
    if current is None:
        current = []
        if isinstance(req, MutableMapping):
            req[name] = current
        else:
            setattr(req, name, current)
    return current


def get_errors(req: Any) -> List[Any]:
    """Errors accumulated on the request so far (empty list if none)."""
    return list(_get_list(req, ERRORS_ATTRIBUTE) or [])


def append_errors(req: Any, errors: Sequence[Any]) -> List[Any]:
    """
    Append errors to the request accumulator, creating it if absent.

    The accumulator is shared by every chain run on the request and is
    never reset here.

    Returns:
        The accumulator list
    """
    accumulator = _ensure_list(req, ERRORS_ATTRIBUTE)
    accumulator.extend(errors)
    return accumulator


def record_context(req: Any, context: Any) -> None:
    """Remember a context that ran on the request (used by matched_data)."""
    _ensure_list(req, CONTEXTS_ATTRIBUTE).append(context)


def get_contexts(req: Any) -> List[Any]:
    return list(_get_list(req, CONTEXTS_ATTRIBUTE) or [])


@dataclass
class ValidationRequest:
    """
    Plain request container with the five validated locations.

    Attributes:
        body: Decoded request body (JSON object or form fields)
        cookies: Cookie values
        headers: Header values, keys lowercased
        params: Path parameters
        query: Query string values (repeated keys become lists)
        validation_errors: Accumulated FieldError records
        validation_contexts: Contexts of every chain run on this request
    """

    body: Any = field(default_factory=dict)
    cookies: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    validation_errors: List[Any] = field(default_factory=list)
    validation_contexts: List[Any] = field(default_factory=list)

    @classmethod
    async def from_starlette(cls, request: Any) -> "ValidationRequest":
        """
        Copy a Starlette/FastAPI request into a ValidationRequest.

        The body is decoded as JSON for JSON content types and as form data
        for form content types; anything else (or an undecodable body) gives {}.

        Args:
            request: starlette.requests.Request

        Returns:
            ValidationRequest with copies of every location
        """
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        body: Any = {}

        if content_type == "application/json" or content_type.endswith("+json"):
            raw = await request.body()
            if raw:
                try:
                    body = json.loads(raw)
                except ValueError as e:
                    logger.warning("[ValidationRequest] Ignoring undecodable JSON body: {}", e)
                    body = {}
        elif content_type in ("application/x-www-form-urlencoded", "multipart/form-data"):
            form = await request.form()
            body = _multi_to_dict(form)

        return cls(
            body=body,
            cookies=dict(request.cookies),
            headers={key.lower(): value for key, value in request.headers.items()},
            params=dict(request.path_params),
            query=_multi_to_dict(request.query_params),
        )


def _multi_to_dict(multi: Any) -> Dict[str, Any]:
    """Flatten a multi-dict; keys given more than once keep every value as a list."""
    result: Dict[str, Any] = {}
    for key in multi.keys():
        values = multi.getlist(key)
        result[key] = values[0] if len(values) == 1 else list(values)
    return result
