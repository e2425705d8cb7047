# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Name resolution for probe targets."""

from __future__ import annotations

import ipaddress
import logging
import socket
from collections.abc import Callable
from functools import singledispatch
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import ResolutionError
from ..models.target import Endpoint, EndpointSet, Target
from .target import parse_target

logger = logging.getLogger(__name__)

AddrInfoResolver = Callable[..., list[tuple[Any, ...]]]


@singledispatch
def format_address(ip: Any, port: int | None = None) -> str:
    """Render an address for diagnostics."""
    return str(ip) if port is None else f"{ip}:{port}"


@format_address.register(ipaddress.IPv4Address)
def _(ip: ipaddress.IPv4Address, port: int | None = None) -> str:
    return str(ip) if port is None else f"{ip}:{port}"


@format_address.register(ipaddress.IPv6Address)
def _(ip: ipaddress.IPv6Address, port: int | None = None) -> str:
    return str(ip) if port is None else f"[{ip}]:{port}"


def describe_endpoint(endpoint: Endpoint) -> str:
    return format_address(endpoint.ip, endpoint.port)


def resolve_endpoints(target: Target, *, resolver: AddrInfoResolver | None = None) -> EndpointSet:
    """
    Resolve a Target into its ordered connection candidates.

    Resolution is address-family agnostic and happens once per run; the resolver's
    ordering is preserved so the runner can fall back through it.
    """
    lookup = resolver or socket.getaddrinfo
    try:
        infos = lookup(
            target.hostname,
            target.port,
            socket.AF_UNSPEC,
            socket.SOCK_STREAM,
            socket.IPPROTO_TCP,
        )
    except (socket.gaierror, socket.herror) as exc:
        reason = exc.strerror or str(exc)
        raise ResolutionError(target.hostname, reason) from exc
    except (OSError, UnicodeError) as exc:
        raise ResolutionError(target.hostname, str(exc)) from exc

    endpoints = tuple(Endpoint.from_addrinfo(info) for info in infos or [])
    if not endpoints:
        raise ResolutionError(target.hostname, "no addresses returned")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resolved %s to %d endpoint(s): %s",
            target.hostname,
            len(endpoints),
            ", ".join(describe_endpoint(e) for e in endpoints),
        )
    return EndpointSet(target=target, endpoints=endpoints)


def resolve(
    raw_url: str,
    settings: ProbeSettings | None = None,
    *,
    resolver: AddrInfoResolver | None = None,
) -> tuple[Target, EndpointSet]:
    """Parse ``raw_url`` and resolve its hostname in one step."""
    target = parse_target(raw_url, settings or load_probe_settings())
    return target, resolve_endpoints(target, resolver=resolver)


__all__ = ["describe_endpoint", "format_address", "resolve", "resolve_endpoints"]
