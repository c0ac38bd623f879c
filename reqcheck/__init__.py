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
ReqCheck - request field validation and sanitization chains.

This package lets an application declare, per request field, an ordered
chain of validators and sanitizers and run it against incoming requests,
collecting structured errors on the request.

Modules:
    - config: Configuration and constants
    - field_locator: Dot/bracket path resolution inside a request location
    - validators / sanitizers: String predicate and sanitizer primitives
    - registry: Static name -> primitive table used by chains
    - context: Frozen declarations consumed by the runner
    - runner: Sequential async execution of a context
    - chain: Fluent chain builder and middleware
    - schema: Declarative schema compiler
    - result: validation_result() and matched_data()
    - request / integration: Starlette request adapter and FastAPI dependencies
"""

from reqcheck.config import APP_VERSION as __version__

__author__ = "Jwadow"

# Chain building
from reqcheck.chain import Chain, body, check, cookie, header, param, query
from reqcheck.schema import check_schema

# Core model
from reqcheck.context import Context, Meta, OptionalSpec, SanitizerSpec, ValidatorSpec
from reqcheck.errors import FieldError, ValidationFailed
from reqcheck.field_locator import MISSING, locate
from reqcheck.runner import run

# Results
from reqcheck.request import ValidationRequest
from reqcheck.result import Result, matched_data, validation_result

__all__ = [
    # Chain building
    "Chain",
    "check",
    "body",
    "cookie",
    "header",
    "param",
    "query",
    "check_schema",
    # Core model
    "Context",
    "Meta",
    "OptionalSpec",
    "SanitizerSpec",
    "ValidatorSpec",
    "FieldError",
    "ValidationFailed",
    "MISSING",
    "locate",
    "run",
    # Results
    "ValidationRequest",
    "Result",
    "matched_data",
    "validation_result",
]
