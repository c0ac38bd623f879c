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
Declarative validation context.

A Context is the frozen description of what to check: which fields, where to
look for them, and the ordered validators and sanitizers to apply. Chains
accumulate declarations in a ContextBuilder and hand the runner the Context
produced by build().

Architecture:
- ValidatorSpec / SanitizerSpec: one declared operation each
- OptionalSpec: when a field may be skipped
- Context: immutable payload consumed by the runner
- ContextBuilder: mutable accumulator behind the fluent chain API
- Meta: what custom validators, sanitizers and message callables receive
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from reqcheck.config import DEFAULT_LOCATIONS


@dataclass(frozen=True)
class ValidatorSpec:
    """
    One declared validator.

    Attributes:
        validator: Callable returning a bool or an awaitable
        options: Extra positional arguments for non-custom validators
        negated: Pass when the validator fails instead of when it succeeds
        custom: Called as validator(value, meta) instead of validator(str, *options)
        message: Static error message or callable (value, meta) -> message
        checks_presence: Runs even when the field is absent (exists())
    """

    validator: Callable[..., Any]
    options: Tuple[Any, ...] = ()
    negated: bool = False
    custom: bool = False
    message: Any = None
    checks_presence: bool = False


@dataclass(frozen=True)
class SanitizerSpec:
    """One declared sanitizer; custom sanitizers are called as sanitizer(value, meta)."""

    sanitizer: Callable[..., Any]
    options: Tuple[Any, ...] = ()
    custom: bool = False


@dataclass(frozen=True)
class OptionalSpec:
    """
    Rules for skipping validators on an optional field.

    Absent values are always skipped. With check_falsy, any falsy value is
    skipped too; with nullable, None is.
    """

    check_falsy: bool = False
    nullable: bool = False

    @classmethod
    def from_value(cls, value: Any) -> "OptionalSpec":
        """Build from an OptionalSpec, a mapping of flags, or anything else (defaults)."""
        if isinstance(value, OptionalSpec):
            return value
        if isinstance(value, Mapping):
            return cls(
                check_falsy=bool(value.get("check_falsy", False)),
                nullable=bool(value.get("nullable", False)),
            )
        return cls()


@dataclass(frozen=True)
class Meta:
    """Request context handed to custom validators and message callables."""

    req: Any
    location: str
    path: str


@dataclass(frozen=True)
class Context:
    """Frozen set of declarations the runner executes."""

    fields: Tuple[str, ...]
    locations: Tuple[str, ...] = DEFAULT_LOCATIONS
    message: Any = None
    optional: Optional[OptionalSpec] = None
    validators: Tuple[ValidatorSpec, ...] = ()
    sanitizers: Tuple[SanitizerSpec, ...] = ()

    @property
    def checks_presence(self) -> bool:
        """True if any validator must run against absent fields."""
        return any(spec.checks_presence for spec in self.validators)


def _as_tuple(value: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass
class ContextBuilder:
    """
    Mutable accumulator for a Context.

    Holds the pending negation flag consumed by the next validator.
    """

    fields: Tuple[str, ...]
    locations: Tuple[str, ...] = DEFAULT_LOCATIONS
    message: Any = None
    optional: Optional[OptionalSpec] = None
    validators: List[ValidatorSpec] = field(default_factory=list)
    sanitizers: List[SanitizerSpec] = field(default_factory=list)
    negate_next: bool = False

    @classmethod
    def create(
        cls,
        fields: Union[str, Sequence[str]],
        locations: Optional[Union[str, Sequence[str]]] = None,
        message: Any = None,
    ) -> "ContextBuilder":
        """
        Start a builder for one field or an ordered sequence of fields.

        Args:
            fields: Field path or sequence of paths sharing the context
            locations: Location name(s); None means DEFAULT_LOCATIONS
            message: Default error message for every validator
        """
        return cls(
            fields=_as_tuple(fields),
            locations=DEFAULT_LOCATIONS if locations is None else _as_tuple(locations),
            message=message,
        )

    def add_validator(
        self,
        validator: Callable[..., Any],
        options: Sequence[Any] = (),
        custom: bool = False,
        checks_presence: bool = False,
    ) -> ValidatorSpec:
        spec = ValidatorSpec(
            validator=validator,
            options=tuple(options),
            negated=self.negate_next,
            custom=custom,
            checks_presence=checks_presence,
        )
        self.negate_next = False
        self.validators.append(spec)
        return spec

    def add_sanitizer(
        self,
        sanitizer: Callable[..., Any],
        options: Sequence[Any] = (),
        custom: bool = False,
    ) -> SanitizerSpec:
        spec = SanitizerSpec(sanitizer=sanitizer, options=tuple(options), custom=custom)
        self.sanitizers.append(spec)
        return spec

    def set_last_message(self, message: Any) -> None:
        """Attach a message to the most recent validator; no-op if there is none."""
        if self.validators:
            self.validators[-1] = replace(self.validators[-1], message=message)

    def set_last_negated(self, negated: bool = True) -> None:
        """Change the negation of the most recent validator; no-op if there is none."""
        if self.validators:
            self.validators[-1] = replace(self.validators[-1], negated=negated)

    def build(self) -> Context:
        return Context(
            fields=self.fields,
            locations=self.locations,
            message=self.message,
            optional=self.optional,
            validators=tuple(self.validators),
            sanitizers=tuple(self.sanitizers),
        )
