# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup shared by the CLI and library callers."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "REQPROBE_LOG_LEVEL"
FALLBACK_LOG_LEVEL = logging.WARNING


def resolve_log_level(level: str | None = None) -> int:
    """
    Pick the effective level: an explicit ``level`` (``--log-level``) wins over
    ``REQPROBE_LOG_LEVEL``, which wins over WARNING. Unknown names fall through
    to the next source.
    """
    for candidate in (level, os.getenv(LOG_LEVEL_ENV)):
        if not candidate:
            continue
        value = logging.getLevelName(candidate.strip().upper())
        if isinstance(value, int):
            return value
    return FALLBACK_LOG_LEVEL


def setup_logging(level: str | None = None) -> int:
    """Configure root logging on stderr and return the level that was applied."""
    effective = resolve_log_level(level)
    logging.basicConfig(level=effective, format="%(levelname)s %(name)s: %(message)s")
    return effective


__all__ = ["resolve_log_level", "setup_logging"]
