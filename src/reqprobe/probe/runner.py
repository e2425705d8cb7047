# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Sequential connect/send/read probe loop."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import Callable
from contextlib import closing

from ..config import ProbeSettings, load_probe_settings
from ..errors import ErrorCategory, ProbeConnectionError, categorize_exception
from ..models.probe import IterationResult, StatusClassification
from ..models.target import Endpoint, EndpointSet, Target
from ..net.classifier import classify_status
from ..net.resolver import describe_endpoint
from .stats import StatisticsAggregator

logger = logging.getLogger(__name__)

SocketFactory = Callable[[int, int, int], socket.socket]
Clock = Callable[[], float]
ChunkCallback = Callable[[bytes], None]
ResultCallback = Callable[[int, IterationResult], None]


def build_request_header(target: Target) -> bytes:
    """The one request sent per iteration; ``Connection: close`` makes EOF the end of the response."""
    return (f"GET {target.path} HTTP/1.1\r\nHost: {target.host_header}\r\nConnection: close\r\n\r\n").encode("utf-8")


class _Deadline:
    def __init__(self, timeout: float, clock: Clock):
        self._clock = clock
        self._expires = clock() + timeout if timeout and timeout > 0 else None

    @property
    def expired(self) -> bool:
        return self._expires is not None and self._clock() >= self._expires

    def remaining(self) -> float | None:
        """Seconds left for the next socket call, or None when no deadline applies."""
        if self._expires is None:
            return None
        left = self._expires - self._clock()
        if left <= 0:
            raise TimeoutError("per-iteration deadline exceeded")
        return left


class ProbeRunner:
    """
    Runs probe iterations one at a time against a resolved EndpointSet.

    Each iteration opens a fresh connection, sends a single request and drains the
    response until the peer closes. The socket is always closed before the iteration
    returns, so iterations never overlap.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        socket_factory: SocketFactory | None = None,
        clock: Clock | None = None,
        echo: ChunkCallback | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self._socket_factory = socket_factory or socket.socket
        self._clock = clock or time.perf_counter
        self._echo = echo

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000.0

    def _connect(self, endpoints: EndpointSet, deadline: _Deadline) -> tuple[socket.socket, Endpoint]:
        last_category = ErrorCategory.CONNECT_ERROR
        attempted = 0
        for endpoint in endpoints:
            if deadline.expired:
                last_category = ErrorCategory.TIMEOUT
                break
            attempted += 1
            try:
                sock = self._socket_factory(endpoint.family, endpoint.socktype, endpoint.proto)
            except OSError as exc:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Cannot create socket for %s: %s", describe_endpoint(endpoint), exc)
                last_category = ErrorCategory.CONNECT_ERROR
                continue
            try:
                sock.settimeout(deadline.remaining())
                sock.connect(endpoint.sockaddr)
            except OSError as exc:
                sock.close()
                last_category = categorize_exception(exc)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Connect to %s failed: %s", describe_endpoint(endpoint), exc)
                continue
            except BaseException:
                sock.close()
                raise
            return sock, endpoint
        raise ProbeConnectionError(
            f"could not connect to any endpoint ({attempted} of {len(endpoints)} tried)",
            category=last_category,
        )

    def _drain(
        self,
        sock: socket.socket,
        deadline: _Deadline,
    ) -> tuple[StatusClassification | None, int, BaseException | None]:
        buffer = bytearray(self.settings.buffer_size)
        status: StatusClassification | None = None
        total = 0
        try:
            while True:
                sock.settimeout(deadline.remaining())
                received = sock.recv_into(buffer)
                if not received:
                    break
                total += received
                if status is None or self._echo is not None:
                    chunk = bytes(buffer[:received])
                    if self._echo is not None:
                        self._echo(chunk)
                    if status is None:
                        status = classify_status(chunk)
        except OSError as exc:
            return status, total, exc
        return status, total, None

    def run_iteration(
        self,
        target: Target,
        endpoints: EndpointSet,
        request_header: bytes | str | None = None,
    ) -> IterationResult:
        """Connect (with fallback), send one request, read to EOF and time the whole cycle."""
        if request_header is None:
            request_header = build_request_header(target)
        elif isinstance(request_header, str):
            request_header = request_header.encode("utf-8")

        start = self._clock()
        deadline = _Deadline(self.settings.timeout, self._clock)

        try:
            sock, endpoint = self._connect(endpoints, deadline)
        except ProbeConnectionError as exc:
            elapsed = self._elapsed_ms(start)
            logger.debug("Iteration failed before sending: %s", exc)
            return IterationResult(
                elapsed_ms=elapsed,
                success=False,
                error_category=exc.category,
                error=str(exc),
            )

        with closing(sock):
            try:
                sock.settimeout(deadline.remaining())
                sock.sendall(request_header)
            except OSError as exc:
                elapsed = self._elapsed_ms(start)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Send to %s failed: %s", describe_endpoint(endpoint), exc)
                return IterationResult(
                    elapsed_ms=elapsed,
                    success=False,
                    error_category=categorize_exception(exc, default=ErrorCategory.SEND_ERROR),
                    error=str(exc),
                    endpoint=endpoint,
                )

            status, size, read_error = self._drain(sock, deadline)
            elapsed = self._elapsed_ms(start)

        code = status.code if status is not None else None
        if read_error is not None:
            category = categorize_exception(read_error, default=ErrorCategory.RECEIVE_ERROR)
            error: str | None = str(read_error)
        elif status is None:
            category = ErrorCategory.EMPTY_RESPONSE
            error = "connection closed before any data was received"
        elif not status.success:
            category = ErrorCategory.HTTP_STATUS if code is not None else ErrorCategory.MALFORMED_STATUS
            error = None
        else:
            category = ErrorCategory.NONE
            error = None

        result = IterationResult(
            elapsed_ms=elapsed,
            success=category is ErrorCategory.NONE,
            status_code=code,
            body_size_bytes=size,
            error_category=category,
            error=error,
            endpoint=endpoint,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Probe via %s: status=%s bytes=%d elapsed=%.3fms category=%s",
                describe_endpoint(endpoint),
                code if code is not None else "?",
                size,
                elapsed,
                category.value,
            )
        return result

    def run(
        self,
        target: Target,
        endpoints: EndpointSet,
        repeat: int,
        *,
        aggregator: StatisticsAggregator | None = None,
        on_result: ResultCallback | None = None,
    ) -> StatisticsAggregator:
        """
        Run ``repeat`` iterations sequentially, feeding each result to the aggregator.

        A KeyboardInterrupt abandons the current iteration and returns the aggregator
        holding only the iterations that completed.
        """
        aggregator = aggregator if aggregator is not None else StatisticsAggregator(requested=repeat)
        request_header = build_request_header(target)
        try:
            for index in range(1, repeat + 1):
                result = self.run_iteration(target, endpoints, request_header)
                aggregator.record(result)
                if on_result is not None:
                    on_result(index, result)
        except KeyboardInterrupt:
            logger.warning("Interrupted after %d of %d iteration(s)", aggregator.count, repeat)
        return aggregator


__all__ = ["ProbeRunner", "build_request_header"]
