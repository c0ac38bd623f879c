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
Validation chain builder and middleware.

A Chain collects validators and sanitizers for one or more fields through a
fluent API, then runs them against a request when awaited as middleware:

    chain = check("email", ["body"]).trim().is_email().with_message("Bad email")
    errors = await chain(req)

Every validator in reqcheck.validators and every sanitizer in
reqcheck.sanitizers is available as a chain method (resolved through
reqcheck.registry). Chain-level built-ins (exists, is_string, is_array) and
the custom/custom_sanitizer hooks receive the raw value and a Meta.
"""

import inspect
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from loguru import logger

from reqcheck import registry
from reqcheck.context import Context, ContextBuilder, Meta, OptionalSpec
from reqcheck.errors import FieldError
from reqcheck.field_locator import MISSING
from reqcheck.request import append_errors, record_context
from reqcheck.runner import run

Fields = Union[str, Sequence[str]]
Locations = Optional[Union[str, Sequence[str]]]

# Chain methods usable from a schema besides the registry names
BUILTIN_VALIDATORS = ("custom", "exists", "is_array", "is_string")
BUILTIN_SANITIZERS = ("custom_sanitizer",)


def _exists(value: Any, meta: Optional[Meta] = None) -> bool:
    """Present at all, even if None."""
    return value is not MISSING


def _is_string(value: Any, meta: Optional[Meta] = None) -> bool:
    return isinstance(value, str)


def _is_array(value: Any, meta: Optional[Meta] = None) -> bool:
    return isinstance(value, (list, tuple))


def method_kind(name: str) -> Optional[str]:
    """
    Classify a chain method name for the schema compiler.

    Returns:
        registry.VALIDATOR, registry.SANITIZER, or None if the name is not a
        chainable validator/sanitizer method
    """
    if name in BUILTIN_VALIDATORS:
        return registry.VALIDATOR
    if name in BUILTIN_SANITIZERS:
        return registry.SANITIZER
    descriptor = registry.lookup(name)
    return descriptor.kind if descriptor else None


class Chain:
    """
    Fluent builder for one validation context, callable as middleware.

    Attributes:
        context: Frozen Context built from the declarations so far

    Example:
        >>> chain = check(["foo", "bar"], ["body"]).not_().is_empty()
        >>> await chain(req)
    """

    def __init__(self, fields: Fields, locations: Locations = None, message: Any = None):
        self._builder = ContextBuilder.create(fields, locations, message)

    # ----------------------------------------------------------------------------------------------
    # Registry-backed methods
    # ----------------------------------------------------------------------------------------------

    def __getattr__(self, name: str) -> Callable[..., "Chain"]:
        descriptor = registry.lookup(name)
        if descriptor is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        def method(*options: Any) -> "Chain":
            return self.add_method(name, options)

        method.__name__ = name
        method.__doc__ = descriptor.function.__doc__
        return method

    def add_method(self, name: str, options: Sequence[Any] = (), strict: bool = True) -> "Chain":
        """
        Append the registry primitive called name.

        Args:
            name: Registry method name
            options: Positional options passed after the value
            strict: Reject more options than the primitive accepts

        Raises:
            AttributeError: name is not registered
            TypeError: strict and too many options
        """
        descriptor = registry.lookup(name)
        if descriptor is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        if strict and descriptor.arity is not None and len(options) > descriptor.arity:
            raise TypeError(f"{name}() takes at most {descriptor.arity} option(s), got {len(options)}")

        if descriptor.kind == registry.VALIDATOR:
            self._builder.add_validator(descriptor.function, options)
        else:
            self._builder.add_sanitizer(descriptor.function, options)
        return self

    def __dir__(self) -> List[str]:
        return sorted(
            set(super().__dir__()) | set(registry.validator_names()) | set(registry.sanitizer_names())
        )

    # ----------------------------------------------------------------------------------------------
    # Custom hooks and built-ins
    # ----------------------------------------------------------------------------------------------

    def custom(self, validator: Callable[..., Any]) -> "Chain":
        """Add an inline validator called as validator(value, meta)."""
        self._builder.add_validator(validator, custom=True)
        return self

    def custom_sanitizer(self, sanitizer: Callable[..., Any]) -> "Chain":
        """Add an inline sanitizer called as sanitizer(value, meta)."""
        self._builder.add_sanitizer(sanitizer, custom=True)
        return self

    def exists(self) -> "Chain":
        """Fail when the field is absent; None counts as present."""
        self._builder.add_validator(_exists, custom=True, checks_presence=True)
        return self

    def is_string(self) -> "Chain":
        self._builder.add_validator(_is_string, custom=True)
        return self

    def is_array(self) -> "Chain":
        self._builder.add_validator(_is_array, custom=True)
        return self

    # ----------------------------------------------------------------------------------------------
    # Modifiers
    # ----------------------------------------------------------------------------------------------

    def not_(self) -> "Chain":
        """Negate the next validator added to the chain."""
        self._builder.negate_next = True
        return self

    def with_message(self, message: Any) -> "Chain":
        """Set the error message of the last validator (static or (value, meta) -> message)."""
        self._builder.set_last_message(message)
        return self

    def optional(self, options: Union[OptionalSpec, Mapping[str, Any], None] = None) -> "Chain":
        """
        Skip validators when the field is absent.

        Args:
            options: {"check_falsy": bool, "nullable": bool} or an OptionalSpec
        """
        self._builder.optional = OptionalSpec.from_value(options)
        return self

    # ----------------------------------------------------------------------------------------------
    # Execution
    # ----------------------------------------------------------------------------------------------

    @property
    def context(self) -> Context:
        return self._builder.build()

    async def run(self, req: Any) -> List[FieldError]:
        """Run the chain without touching the request's error accumulator."""
        return await run(req, self.context)

    async def __call__(
        self,
        req: Any,
        res: Any = None,
        call_next: Optional[Callable[[], Any]] = None,
    ) -> List[FieldError]:
        """
        Middleware entry point.

        Runs the chain, appends its errors to the request accumulator (created
        if absent) and then calls call_next, awaiting it if needed.

        Args:
            req: Request-like object
            res: Unused; accepted for (req, res, next) style hosts
            call_next: Continuation invoked with no arguments

        Returns:
            The errors produced by this invocation
        """
        context = self.context
        errors = await run(req, context)
        append_errors(req, errors)
        record_context(req, context)

        if errors:
            logger.debug(
                "[Chain] {} error(s) for fields {} in {}",
                len(errors),
                list(context.fields),
                list(context.locations),
            )

        if call_next is not None:
            result = call_next()
            if inspect.isawaitable(result):
                await result
        return errors

    def __repr__(self) -> str:
        context = self.context
        return (
            f"Chain(fields={list(context.fields)!r}, locations={list(context.locations)!r}, "
            f"validators={len(context.validators)}, sanitizers={len(context.sanitizers)})"
        )


def check(fields: Fields, locations: Locations = None, message: Any = None) -> Chain:
    """
    Create a chain for one field or several fields sharing one context.

    Args:
        fields: Field path or ordered sequence of paths
        locations: Locations to search (default: all five, body first)
        message: Default error message for the chain's validators

    Returns:
        A new Chain
    """
    return Chain(fields, locations, message)


def body(fields: Fields, message: Any = None) -> Chain:
    return Chain(fields, ["body"], message)


def cookie(fields: Fields, message: Any = None) -> Chain:
    return Chain(fields, ["cookies"], message)


def header(fields: Fields, message: Any = None) -> Chain:
    """Chain over headers; names are lowercased to match ValidationRequest.headers."""
    if isinstance(fields, str):
        fields = fields.lower()
    else:
        fields = [name.lower() for name in fields]
    return Chain(fields, ["headers"], message)


def param(fields: Fields, message: Any = None) -> Chain:
    return Chain(fields, ["params"], message)


def query(fields: Fields, message: Any = None) -> Chain:
    return Chain(fields, ["query"], message)
