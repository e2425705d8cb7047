# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe loop, statistics and reporting."""

from .adapters import StubSocket, StubSocketFactory
from .report import format_iteration, format_status_code, format_summary
from .runner import ProbeRunner, build_request_header
from .stats import StatisticsAggregator, median

__all__ = [
    "ProbeRunner",
    "StatisticsAggregator",
    "StubSocket",
    "StubSocketFactory",
    "build_request_header",
    "format_iteration",
    "format_status_code",
    "format_summary",
    "median",
]
