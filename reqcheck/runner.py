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
Context runner.

Executes a Context against a request and returns the FieldError records it
produced. The runner does not touch the request's error accumulator; the
chain middleware does that.

Execution order:
  1. Instances are fields x locations, field-major.
  2. Absent instances are skipped. If the context has a presence check
     (exists()) and the field is absent from every location, one instance
     for the first location is kept and its validators see MISSING.
  3. Sanitizers run in declared order; each result is written back to the
     request so later sanitizers see the cumulative value.
  4. Optional instances skip their validators (presence checks still run).
  5. Validators run in declared order, one at a time. Awaitables are awaited
     before the next validator starts.

Any exception a validator raises becomes an error for that instance; nothing
escapes run().
"""

import inspect
import math
from dataclasses import dataclass
from typing import Any, List

from loguru import logger

from reqcheck.coerce import to_string
from reqcheck.context import Context, Meta, OptionalSpec, SanitizerSpec, ValidatorSpec
from reqcheck.errors import FieldError, resolve_message
from reqcheck.field_locator import MISSING, assign, locate
from reqcheck.request import get_location

__all__ = ["run", "to_string"]


@dataclass
class _Instance:
    """One (field, location) pair found in the request."""

    field: str
    location: str
    container: Any
    found: bool
    original: Any
    value: Any


def _select_instances(req: Any, context: Context) -> List[_Instance]:
    instances: List[_Instance] = []
    for field in context.fields:
        field_instances: List[_Instance] = []
        for location in context.locations:
            container = get_location(req, location)
            located = locate(container, field)
            field_instances.append(
                _Instance(
                    field=field,
                    location=location,
                    container=container,
                    found=located.found,
                    original=located.value,
                    value=located.value,
                )
            )

        found = [instance for instance in field_instances if instance.found]
        if found:
            instances.extend(found)
        elif context.checks_presence and field_instances:
            # Absent everywhere: report it once, against the first location
            instances.append(field_instances[0])
    return instances


async def _resolve(result: Any) -> Any:
    """Await awaitable results; an awaitable that resolves to None counts as a pass."""
    if inspect.isawaitable(result):
        result = await result
        if result is None:
            return True
    return result


async def _sanitize(instance: _Instance, spec: SanitizerSpec, meta: Meta) -> None:
    if spec.custom:
        result = spec.sanitizer(instance.value, meta)
    else:
        result = spec.sanitizer(instance.value, *spec.options)
    if inspect.isawaitable(result):
        result = await result

    instance.value = result
    if not assign(instance.container, instance.field, result):
        logger.debug(
            "[Runner] Could not persist sanitized value at {}.{}",
            instance.location,
            instance.field,
        )


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _is_optional_skip(optional: OptionalSpec, instance: _Instance) -> bool:
    value = instance.original
    if not instance.found or value is MISSING:
        return True
    if optional.check_falsy and (not value or _is_nan(value)):
        return True
    if optional.nullable and value is None:
        return True
    return False


async def _validate(
    instance: _Instance,
    spec: ValidatorSpec,
    context: Context,
    meta: Meta,
) -> List[FieldError]:
    error = None
    try:
        if spec.custom:
            result = spec.validator(instance.value, meta)
        else:
            result = spec.validator(to_string(instance.value), *spec.options)
        result = await _resolve(result)
        passed = bool(result) != spec.negated
    except Exception as e:
        # Thrown or rejected: always a failure, negated or not
        error = e
        passed = False

    if passed:
        return []

    reported = None if instance.original is MISSING else instance.original
    return [
        FieldError(
            location=instance.location,
            param=instance.field,
            value=reported,
            msg=resolve_message(spec, context, reported, meta, error),
        )
    ]


async def run(req: Any, context: Context) -> List[FieldError]:
    """
    Run a context against a request.

    Args:
        req: Request-like object (mapping or object with location attributes)
        context: Frozen declarations to execute

    Returns:
        FieldError records in field-major, location-minor, declaration order
    """
    errors: List[FieldError] = []

    for instance in _select_instances(req, context):
        meta = Meta(req=req, location=instance.location, path=instance.field)

        if instance.found:
            for sanitizer in context.sanitizers:
                try:
                    await _sanitize(instance, sanitizer, meta)
                except Exception as e:
                    logger.warning(
                        "[Runner] Sanitizer {} failed on {}.{}: {}",
                        getattr(sanitizer.sanitizer, "__name__", sanitizer.sanitizer),
                        instance.location,
                        instance.field,
                        e,
                    )

        validators = context.validators
        if context.optional is not None and _is_optional_skip(context.optional, instance):
            validators = tuple(spec for spec in validators if spec.checks_presence)

        for spec in validators:
            errors.extend(await _validate(instance, spec, context, meta))

    return errors
