# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

from reqprobe.errors import ErrorCategory
from reqprobe.models import Endpoint, IterationResult, RunStatistics
from reqprobe.probe.report import format_iteration, format_status_code, format_summary

ENDPOINT = Endpoint(family=socket.AF_INET, socktype=socket.SOCK_STREAM, proto=socket.IPPROTO_TCP, sockaddr=("192.0.2.1", 80))


def _stats(**overrides):
    values = dict(
        count=4,
        success_count=3,
        fastest_ms=10.0,
        slowest_ms=40.0,
        mean_ms=25.0,
        median_ms=25.0,
        largest_bytes=2048,
        smallest_bytes=0,
        total_ms=100.0,
        requested=4,
    )
    values.update(overrides)
    return RunStatistics(**values)


def test_format_summary_contains_latency_size_and_rate():
    text = format_summary(_stats(), "http://example.com")
    assert "Finished testing url: http://example.com. Total time spent: 0.1 s." in text
    assert "  10.000 |  40.000 |  25.000 |  25.000" in text
    assert "   2.000 |    0.000 |  75.00%" in text
    assert "Interrupted" not in text


def test_format_summary_mentions_partial_runs():
    text = format_summary(_stats(count=2, success_count=2, requested=5), "example.com")
    assert "Interrupted after 2 of 5 request(s)." in text
    assert "100.00%" in text


def test_format_iteration_success_and_failure():
    ok = IterationResult(elapsed_ms=1.23456, success=True, status_code=200, body_size_bytes=10, endpoint=ENDPOINT)
    assert format_iteration(1, ok) == "Run #1: 1.235 ms (success=1)"

    failed = IterationResult(
        elapsed_ms=0.5,
        success=False,
        error_category=ErrorCategory.CONNECT_ERROR,
        error="could not connect to any endpoint (1 of 1 tried)",
    )
    line = format_iteration(2, failed)
    assert line.startswith("Run #2: 0.500 ms (success=0)")
    assert "Could not connect" in line
    assert "1 of 1 tried" in line


def test_format_status_code_only_for_answered_non_200():
    not_found = IterationResult(elapsed_ms=1, success=False, status_code=404, body_size_bytes=20, endpoint=ENDPOINT)
    assert format_status_code(not_found) == "Code: 404"

    garbled = IterationResult(elapsed_ms=1, success=False, status_code=None, body_size_bytes=5, endpoint=ENDPOINT)
    assert format_status_code(garbled) == "Code: ?"

    ok = IterationResult(elapsed_ms=1, success=True, status_code=200, body_size_bytes=20, endpoint=ENDPOINT)
    assert format_status_code(ok) is None

    refused = IterationResult(elapsed_ms=1, success=False, error_category=ErrorCategory.CONNECT_ERROR)
    assert format_status_code(refused) is None


def test_format_status_code_names_failures_after_a_200():
    broken = IterationResult(
        elapsed_ms=1,
        success=False,
        status_code=200,
        body_size_bytes=17,
        error_category=ErrorCategory.RECEIVE_ERROR,
        error="reset by peer",
        endpoint=ENDPOINT,
    )
    assert format_status_code(broken) == "Code: 200 (Connection failed while reading response)"

    timed_out = IterationResult(
        elapsed_ms=1,
        success=False,
        status_code=200,
        body_size_bytes=17,
        error_category=ErrorCategory.TIMEOUT,
        endpoint=ENDPOINT,
    )
    assert format_status_code(timed_out) == "Code: 200 (Deadline exceeded during probe)"
