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
Declarative schema compiler.

Turns a schema into one Chain per field, in declaration order:

    check_schema({
        "email": {
            "in": ["body"],
            "error_message": "Invalid email",
            "trim": True,
            "is_email": True,
        },
        "age": {
            "optional": {"nullable": True},
            "is_int": {"options": {"min": 0}, "error_message": "Bad age"},
        },
    })

Recognized entry keys:
    in             - location name or list of names (default: default_locations)
    error_message  - chain default message
    optional       - truthy makes the field optional; a mapping gives its flags
    <method>       - any chain validator/sanitizer; True, or a mapping with
                     "options" (single value or list), "negated" and
                     "error_message" (validators only)

Unknown keys are ignored.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger

from reqcheck import registry
from reqcheck.chain import Chain, method_kind
from reqcheck.config import DEFAULT_LOCATIONS

_RESERVED_KEYS = ("in", "error_message", "optional")

Schema = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]
ChainFactory = Callable[[str, List[str], Any], Any]


def _entries(schema: Schema) -> List[Tuple[str, Any]]:
    """Schema fields as an ordered list of (field, entry) pairs."""
    if isinstance(schema, Mapping):
        return list(schema.items())
    return [(field, entry) for field, entry in schema]


def _locations(entry: Mapping[str, Any], default_locations: Sequence[str]) -> List[str]:
    where = entry.get("in")
    if where is None:
        return list(default_locations)
    if isinstance(where, str):
        return [where]
    return list(where)


def _options(config: Mapping[str, Any]) -> List[Any]:
    """'options' as positional arguments: lists/tuples spread, other values wrapped."""
    if "options" not in config or config["options"] is None:
        return []
    options = config["options"]
    if isinstance(options, (list, tuple)):
        return list(options)
    return [options]


def _apply_method(chain: Chain, field: str, name: str, config: Any) -> None:
    kind = method_kind(name)
    settings: Mapping[str, Any] = config if isinstance(config, Mapping) else {}
    options = _options(settings)

    if name in ("custom", "custom_sanitizer") and (not options or not callable(options[0])):
        logger.debug("[Schema] {}: '{}' needs a callable in 'options', ignoring", field, name)
        return

    # Negation is set only once the method is known to be appended
    if settings.get("negated") and kind == registry.VALIDATOR:
        chain.not_()

    if name in ("custom", "custom_sanitizer"):
        getattr(chain, name)(options[0])
    elif registry.lookup(name) is not None:
        # Options are recorded as given; the primitive sees them at run time
        chain.add_method(name, options, strict=False)
    else:
        getattr(chain, name)()

    if kind == registry.VALIDATOR and settings.get("error_message") is not None:
        chain.with_message(settings["error_message"])


def check_schema(
    schema: Schema,
    default_locations: Optional[Sequence[str]] = None,
    chain_factory: Optional[ChainFactory] = None,
) -> List[Any]:
    """
    Compile a schema into chains.

    Args:
        schema: Mapping of field -> entry, or ordered (field, entry) pairs
        default_locations: Locations for entries without "in"
                           (default: all five)
        chain_factory: Optional replacement for Chain construction, called as
                       chain_factory(field, locations, message); its results
                       are returned as-is and only Chain results get the
                       entry's methods applied

    Returns:
        One chain (or factory result) per schema field, in schema order
    """
    if default_locations is None:
        default_locations = DEFAULT_LOCATIONS

    chains: List[Any] = []
    for field, entry in _entries(schema):
        entry = entry if isinstance(entry, Mapping) else {}
        locations = _locations(entry, default_locations)
        message = entry.get("error_message")

        if chain_factory is not None:
            chain = chain_factory(field, locations, message)
        else:
            chain = Chain(field, locations, message)
        chains.append(chain)

        if not isinstance(chain, Chain):
            continue

        for name, config in entry.items():
            if name in _RESERVED_KEYS or config is None or config is False:
                continue
            if method_kind(name) is None:
                logger.debug("[Schema] {}: ignoring unknown key '{}'", field, name)
                continue
            _apply_method(chain, field, name, config)

        if entry.get("optional"):
            chain.optional(entry["optional"] if isinstance(entry["optional"], Mapping) else None)

    return chains
