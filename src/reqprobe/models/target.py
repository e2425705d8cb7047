# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target and endpoint models."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_PORT


@dataclass(frozen=True)
class Target:
    """Host/path pair derived once from the user-supplied URL."""

    hostname: str
    path: str = "/"
    port: int = DEFAULT_PORT

    @property
    def host_header(self) -> str:
        host = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        if self.port == DEFAULT_PORT:
            return host
        return f"{host}:{self.port}"


@dataclass(frozen=True)
class Endpoint:
    """One resolved socket address (a single ``getaddrinfo`` entry)."""

    family: int
    socktype: int
    proto: int
    sockaddr: tuple[Any, ...]

    @property
    def ip(self) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
        # Scoped IPv6 addresses come back as "fe80::1%eth0".
        return ipaddress.ip_address(str(self.sockaddr[0]).split("%", 1)[0])

    @property
    def port(self) -> int:
        return int(self.sockaddr[1])

    @classmethod
    def from_addrinfo(cls, info: tuple[Any, ...]) -> Endpoint:
        family, socktype, proto, _canonname, sockaddr = info
        return cls(family=int(family), socktype=int(socktype), proto=int(proto), sockaddr=tuple(sockaddr))


@dataclass(frozen=True)
class EndpointSet:
    """Ordered connection candidates for a Target, resolved once per run."""

    target: Target
    endpoints: tuple[Endpoint, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self.endpoints)

    def __len__(self) -> int:
        return len(self.endpoints)

    def __bool__(self) -> bool:
        return bool(self.endpoints)


__all__ = ["Endpoint", "EndpointSet", "Target"]
