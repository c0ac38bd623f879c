# -*- coding: utf-8 -*-

# ReqCheck
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Loguru sink setup for applications embedding ReqCheck."""

import sys
from typing import Optional

from loguru import logger

from reqcheck.config import LOG_LEVEL

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> int:
    """
    Replace loguru's default sink with a stderr sink at the configured level.

    Args:
        level: Log level name (default: LOG_LEVEL from config)

    Returns:
        The loguru handler id of the new sink
    """
    logger.remove()
    return logger.add(sys.stderr, level=(level or LOG_LEVEL).upper(), format=_LOG_FORMAT)
