# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for reqprobe."""

from .probe import UNKNOWN_STATUS, IterationResult, StatusClassification
from .report import RunStatistics
from .target import Endpoint, EndpointSet, Target

__all__ = [
    "Endpoint",
    "EndpointSet",
    "IterationResult",
    "RunStatistics",
    "StatusClassification",
    "Target",
    "UNKNOWN_STATUS",
]
