# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable formatting for probe results."""

from __future__ import annotations

from ..errors import error_category_to_reason
from ..models.probe import IterationResult
from ..models.report import RunStatistics
from ..net.classifier import SUCCESS_STATUS

BYTES_PER_KB = 1024


def format_status_code(result: IterationResult) -> str | None:
    """
    Brief-mode line for an answered iteration that did not succeed.

    Connection-level failures never got a status line and stay silent here. A
    ``200`` that failed afterwards (read error, deadline) names the failure.
    """
    if result.success or not result.connected or result.body_size_bytes == 0:
        return None
    if result.status_code is None:
        return "Code: ?"
    line = f"Code: {result.status_code}"
    if result.status_code == SUCCESS_STATUS:
        line = f"{line} ({error_category_to_reason(result.error_category)})"
    return line


def format_iteration(index: int, result: IterationResult) -> str:
    line = f"Run #{index}: {result.elapsed_ms:.3f} ms (success={int(result.success)})"
    if not result.success:
        reason = error_category_to_reason(result.error_category)
        if result.error:
            reason = f"{reason}: {result.error}" if reason else result.error
        if reason:
            line = f"{line} {reason}"
    return line


def format_summary(stats: RunStatistics, url: str) -> str:
    lines = [
        "",
        f"Finished testing url: {url}. Total time spent: {stats.total_ms / 1000:.4g} s.",
    ]
    if stats.interrupted:
        lines.append(f"Interrupted after {stats.count} of {stats.requested} request(s).")
    lines.extend(
        [
            "",
            "-------------- Connection Stats (ms) ------------------",
            " Fastest | Slowest |  Mean   | Median",
            f" {stats.fastest_ms:7.3f} | {stats.slowest_ms:7.3f} | {stats.mean_ms:7.3f} | {stats.median_ms:7.3f}",
            "----------------- Content Size (KB) -------------------",
            " Largest | Smallest | Success Rate",
            (
                f" {stats.largest_bytes / BYTES_PER_KB:7.3f} | {stats.smallest_bytes / BYTES_PER_KB:8.3f} |"
                f" {stats.success_rate:6.2f}%"
            ),
        ]
    )
    return "\n".join(lines)


__all__ = ["format_iteration", "format_status_code", "format_summary"]
