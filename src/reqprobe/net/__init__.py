# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target parsing, name resolution and status classification."""

from .classifier import SUCCESS_STATUS, classify_status
from .resolver import describe_endpoint, format_address, resolve, resolve_endpoints
from .target import parse_target, strip_scheme

__all__ = [
    "SUCCESS_STATUS",
    "classify_status",
    "describe_endpoint",
    "format_address",
    "parse_target",
    "resolve",
    "resolve_endpoints",
    "strip_scheme",
]
