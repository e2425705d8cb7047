# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Aggregate statistics for a probe run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RunStatistics:
    """Finalized, read-only report across all recorded iterations."""

    count: int
    success_count: int
    fastest_ms: float
    slowest_ms: float
    mean_ms: float
    median_ms: float
    largest_bytes: int
    smallest_bytes: int
    total_ms: float
    requested: int | None = None

    @property
    def success_rate(self) -> float:
        """Percentage of iterations answered with ``200``."""
        return self.success_count * 100 / self.count

    @property
    def interrupted(self) -> bool:
        return self.requested is not None and self.count < self.requested

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "requested": self.requested if self.requested is not None else self.count,
            "success_count": self.success_count,
            "success_rate": self.success_rate,
            "fastest_ms": self.fastest_ms,
            "slowest_ms": self.slowest_ms,
            "mean_ms": self.mean_ms,
            "median_ms": self.median_ms,
            "total_ms": self.total_ms,
            "largest_bytes": self.largest_bytes,
            "smallest_bytes": self.smallest_bytes,
        }


__all__ = ["RunStatistics"]
