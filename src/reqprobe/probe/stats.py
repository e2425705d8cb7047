# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Running statistics over probe iterations."""

from __future__ import annotations

from ..errors import InsufficientDataError
from ..models.probe import IterationResult
from ..models.report import RunStatistics


def median(sorted_samples: list[float]) -> float:
    """Median of an ascending sequence; averages the two middle values for even lengths."""
    n = len(sorted_samples)
    return (sorted_samples[(n - 1) // 2] + sorted_samples[n // 2]) / 2


class StatisticsAggregator:
    """
    Accumulates IterationResults and produces RunStatistics.

    Min/max/sum are kept incrementally. Every elapsed time is retained in arrival order
    because the exact median needs the full sample. Size extremes cover all iterations,
    including failures that read zero bytes.
    """

    def __init__(self, requested: int | None = None):
        self.requested = requested
        self._samples: list[float] = []
        self._success_count = 0
        self._total_ms = 0.0
        self._fastest_ms = float("inf")
        self._slowest_ms = float("-inf")
        self._largest_bytes = 0
        self._smallest_bytes: int | None = None

    @property
    def count(self) -> int:
        return len(self._samples)

    @property
    def success_count(self) -> int:
        return self._success_count

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    def record(self, result: IterationResult) -> None:
        elapsed = float(result.elapsed_ms)
        size = int(result.body_size_bytes)

        self._samples.append(elapsed)
        self._total_ms += elapsed
        if result.success:
            self._success_count += 1
        self._fastest_ms = min(self._fastest_ms, elapsed)
        self._slowest_ms = max(self._slowest_ms, elapsed)
        self._largest_bytes = max(self._largest_bytes, size)
        self._smallest_bytes = size if self._smallest_bytes is None else min(self._smallest_bytes, size)

    def finalize(self) -> RunStatistics:
        """Compute mean/median; retained samples are left untouched so repeated calls agree."""
        n = self.count
        if n == 0:
            raise InsufficientDataError("no iterations were recorded")
        ordered = sorted(self._samples)
        return RunStatistics(
            count=n,
            success_count=self._success_count,
            fastest_ms=self._fastest_ms,
            slowest_ms=self._slowest_ms,
            mean_ms=self._total_ms / n,
            median_ms=median(ordered),
            largest_bytes=self._largest_bytes,
            smallest_bytes=self._smallest_bytes or 0,
            total_ms=self._total_ms,
            requested=self.requested,
        )


__all__ = ["StatisticsAggregator", "median"]
