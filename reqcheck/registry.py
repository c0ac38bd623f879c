# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Static method registry for validation chains.

Maps every chainable name to a descriptor saying whether it is a validator or
a sanitizer, which primitive it wraps, and how many positional options it
accepts. Chains resolve their dynamic methods through this table.

Naming rules:
    validators  - every function in reqcheck.validators starting with "is_",
                  plus contains, equals, matches
    sanitizers  - every function in reqcheck.sanitizers starting with "to_",
                  plus a fixed allowlist (trim, escape, normalize_email, ...)
"""

import inspect
from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Dict, Iterable, List, Optional

from reqcheck import sanitizers, validators

VALIDATOR = "validator"
SANITIZER = "sanitizer"

_EXTRA_VALIDATORS = ("contains", "equals", "matches")
_EXTRA_SANITIZERS = (
    "blacklist",
    "escape",
    "unescape",
    "normalize_email",
    "ltrim",
    "rtrim",
    "trim",
    "strip_low",
    "whitelist",
)


@dataclass(frozen=True)
class MethodDescriptor:
    """
    Registry entry for one chainable primitive.

    Attributes:
        name: Chain method name
        kind: VALIDATOR or SANITIZER
        function: Primitive called as function(value, *options)
        arity: Maximum number of positional options accepted (None = unbounded)
    """

    name: str
    kind: str
    function: Callable
    arity: Optional[int]


def _option_arity(function: Callable) -> Optional[int]:
    """Count positional parameters after the value."""
    params = list(inspect.signature(function).parameters.values())[1:]
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return None
    return sum(
        1
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


def _collect(module: ModuleType, prefix: str, extras: Iterable[str], kind: str) -> Dict[str, MethodDescriptor]:
    table: Dict[str, MethodDescriptor] = {}
    for name, function in vars(module).items():
        if not inspect.isfunction(function) or function.__module__ != module.__name__:
            continue
        if name.startswith(prefix) or name in extras:
            table[name] = MethodDescriptor(name, kind, function, _option_arity(function))
    return table


_REGISTRY: Dict[str, MethodDescriptor] = {
    **_collect(validators, "is_", _EXTRA_VALIDATORS, VALIDATOR),
    **_collect(sanitizers, "to_", _EXTRA_SANITIZERS, SANITIZER),
}


def lookup(name: str) -> Optional[MethodDescriptor]:
    """Return the descriptor registered under name, or None."""
    return _REGISTRY.get(name)


def is_validator(name: str) -> bool:
    descriptor = _REGISTRY.get(name)
    return descriptor is not None and descriptor.kind == VALIDATOR


def is_sanitizer(name: str) -> bool:
    descriptor = _REGISTRY.get(name)
    return descriptor is not None and descriptor.kind == SANITIZER


def validator_names() -> List[str]:
    return sorted(name for name, d in _REGISTRY.items() if d.kind == VALIDATOR)


def sanitizer_names() -> List[str]:
    return sorted(name for name, d in _REGISTRY.items() if d.kind == SANITIZER)
