# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httpbuilder.

The library only emits records (URL warnings, DEBUG traces of dispatched
requests); it never configures handlers on import.
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "httpbuilder"
DEFAULT_LOG_LEVEL = os.getenv("HTTPBUILDER_LOG_LEVEL", "WARNING").upper()

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging and the package logger level for scripts embedding the library."""
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(effective_level)


__all__ = ["DEFAULT_LOG_LEVEL", "PACKAGE_LOGGER", "setup_logging"]
