# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
reqprobe package entrypoint.

reqprobe sends the same HTTP/1.1 request to a target N times over plain TCP sockets,
one connection at a time, and reports latency, response size and success rate.
Socket creation is injectable so the probe loop can run against fakes, and domain
objects are modeled with typed dataclasses for clarity.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ConfigurationError,
    ErrorCategory,
    InsufficientDataError,
    ProbeConnectionError,
    ReqProbeError,
    ResolutionError,
)
from .log import setup_logging
from .models import Endpoint, EndpointSet, IterationResult, RunStatistics, StatusClassification, Target
from .net import classify_status, parse_target, resolve
from .probe import ProbeRunner, StatisticsAggregator, format_summary
from .runtime import ReqProbe
from .version import __version__

__all__ = [
    "ConfigurationError",
    "Endpoint",
    "EndpointSet",
    "ErrorCategory",
    "InsufficientDataError",
    "IterationResult",
    "ProbeConnectionError",
    "ProbeRunner",
    "ProbeSettings",
    "ReqProbe",
    "ReqProbeError",
    "ResolutionError",
    "RunStatistics",
    "StatisticsAggregator",
    "StatusClassification",
    "Target",
    "__version__",
    "classify_status",
    "format_summary",
    "load_probe_settings",
    "parse_target",
    "resolve",
    "setup_logging",
]
