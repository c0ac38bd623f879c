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
ReqCheck Configuration.

Centralized storage for all settings and constants.
Loads environment variables and provides typed access to them.
"""

import os
from typing import Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# ==================================================================================================
# Request Locations
# ==================================================================================================

# Every request container a chain may search, in the order used when a chain
# does not declare its own locations.
DEFAULT_LOCATIONS: Tuple[str, ...] = ("body", "cookies", "headers", "params", "query")

# ==================================================================================================
# Error Reporting
# ==================================================================================================

# Message used when neither the validator, the chain nor the raised
# exception provides one.
DEFAULT_ERROR_MESSAGE: str = os.getenv("REQCHECK_DEFAULT_MESSAGE", "Invalid value")

# Attribute (or mapping key) on the request where errors accumulate.
# Shared by every chain invocation on the same request.
ERRORS_ATTRIBUTE: str = "validation_errors"

# Attribute (or mapping key) on the request where chains record the
# contexts they ran. Used by matched_data().
CONTEXTS_ATTRIBUTE: str = "validation_contexts"

# HTTP status returned by the FastAPI integration when validation fails.
# Default: 422 (Unprocessable Entity, same as FastAPI's own body validation)
VALIDATION_ERROR_STATUS: int = int(os.getenv("REQCHECK_ERROR_STATUS", "422"))

# ==================================================================================================
# Logging Settings
# ==================================================================================================

# Log level for the package
# Available levels: TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL
# Default: INFO
# Set to DEBUG to see every recorded validation error
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ==================================================================================================
# Application Version
# ==================================================================================================

APP_VERSION: str = "1.0"
APP_TITLE: str = "ReqCheck"
