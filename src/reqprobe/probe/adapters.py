# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable socket stand-ins for driving ProbeRunner without a network."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

Chunk = bytes | BaseException


class StubSocket:
    """Deterministic socket double: scripted connect/send outcomes and receive chunks."""

    def __init__(
        self,
        chunks: Iterable[Chunk] = (),
        *,
        connect_error: BaseException | None = None,
        send_error: BaseException | None = None,
    ):
        self._chunks: list[Chunk] = list(chunks)
        self.connect_error = connect_error
        self.send_error = send_error
        self.connected_to: Any = None
        self.sent = b""
        self.timeouts: list[float | None] = []
        self.closed = False

    def settimeout(self, value: float | None) -> None:
        self.timeouts.append(value)

    def connect(self, address: Any) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.connected_to = address

    def sendall(self, data: bytes) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent += bytes(data)

    def recv_into(self, buffer: bytearray, nbytes: int = 0) -> int:
        if not self._chunks:
            return 0
        item = self._chunks.pop(0)
        if isinstance(item, BaseException):
            raise item
        limit = min(nbytes or len(buffer), len(buffer))
        n = min(len(item), limit)
        buffer[:n] = item[:n]
        if n < len(item):
            self._chunks.insert(0, item[n:])
        return n

    def close(self) -> None:
        self.closed = True


class StubSocketFactory:
    """
    Hands out queued StubSockets in order.

    Queued exceptions are raised from the factory call itself (socket creation
    failure). Once the queue is empty every new socket refuses to connect.
    """

    def __init__(self, sockets: Iterable[StubSocket | BaseException] = ()):
        self._queue: list[StubSocket | BaseException] = list(sockets)
        self.calls: list[tuple[int, int, int]] = []
        self.created: list[StubSocket] = []

    def add(self, sock: StubSocket | BaseException) -> None:
        self._queue.append(sock)

    def __call__(self, family: int, socktype: int, proto: int) -> StubSocket:
        self.calls.append((family, socktype, proto))
        item = self._queue.pop(0) if self._queue else StubSocket(connect_error=ConnectionRefusedError("refused"))
        if isinstance(item, BaseException):
            raise item
        self.created.append(item)
        return item


__all__ = ["StubSocket", "StubSocketFactory"]
