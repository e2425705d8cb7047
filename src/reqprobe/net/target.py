# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL to Target parsing."""

from __future__ import annotations

import re

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError
from ..models.target import Target

SCHEME_PREFIXES = ("http://", "https://")

_BRACKETED_HOST_RE = re.compile(r"^\[(?P<host>[^\]]+)\](?::(?P<port>[0-9]+))?$")
_HOST_PORT_RE = re.compile(r"^(?P<host>[^:]+):(?P<port>[0-9]+)$")


def strip_scheme(raw_url: str) -> str:
    """Drop a literal ``http://`` or ``https://`` prefix (case-sensitive)."""
    for prefix in SCHEME_PREFIXES:
        if raw_url.startswith(prefix):
            return raw_url[len(prefix) :]
    return raw_url


def _split_authority(authority: str, default_port: int) -> tuple[str, int]:
    """
    Split an optional numeric ``:port`` off the authority.

    IPv6 literals must be bracketed to carry a port; a bare IPv6 literal is
    returned unchanged as the hostname.
    """
    match = _BRACKETED_HOST_RE.match(authority) or _HOST_PORT_RE.match(authority)
    if not match:
        return authority, default_port
    port_text = match.group("port")
    if port_text is None:
        return match.group("host"), default_port
    port = int(port_text)
    if not 0 < port < 65536:
        raise ConfigurationError(f"port out of range: {port_text}")
    return match.group("host"), port


def parse_target(raw_url: str, settings: ProbeSettings | None = None) -> Target:
    """
    Turn a user-supplied URL into a Target.

    Example:
      http://example.com/a/b -> Target(hostname="example.com", path="/a/b")
      example.com            -> Target(hostname="example.com", path="/")
    """
    settings = settings or load_probe_settings()
    remainder = strip_scheme(str(raw_url or "").strip())

    authority, slash, rest = remainder.partition("/")
    path = slash + rest if slash else "/"
    hostname, port = _split_authority(authority, settings.port)

    if not hostname:
        raise ConfigurationError(f"missing hostname in URL: {raw_url!r}")
    if len(hostname.encode("utf-8")) > settings.max_hostname_bytes:
        raise ConfigurationError(f"hostname exceeds {settings.max_hostname_bytes} bytes")
    if len(path.encode("utf-8")) > settings.max_path_bytes:
        raise ConfigurationError(f"path exceeds {settings.max_path_bytes} bytes")
    if any(ch in path for ch in ("\r", "\n", " ")):
        raise ConfigurationError("path must not contain whitespace or line breaks")

    return Target(hostname=hostname, path=path, port=port)


__all__ = ["SCHEME_PREFIXES", "parse_target", "strip_scheme"]
