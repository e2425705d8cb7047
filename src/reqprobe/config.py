# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for reqprobe."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

DEFAULT_PORT = 80
_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _env(name: str, parse: Callable[[str], T], default: T, accept: Callable[[T], bool] | None = None) -> T:
    """Parse ``name`` from the environment; unset, unparsable or rejected values give ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = parse(raw.strip())
    except ValueError:
        return default
    if accept is not None and not accept(value):
        return default
    return value


def _flag(raw: str) -> bool:
    return raw.lower() in _TRUTHY


def _positive(value: int) -> bool:
    return value > 0


def _valid_port(value: int) -> bool:
    return 0 < value < 65536


@dataclass(frozen=True)
class ProbeSettings:
    """
    Probe defaults.

    ``timeout`` is the per-iteration deadline in seconds covering connect, send and
    the full response read. A value ``<= 0`` disables it and every socket call blocks.
    """

    timeout: float = 30.0
    port: int = DEFAULT_PORT
    buffer_size: int = 2048
    max_hostname_bytes: int = 255
    max_path_bytes: int = 2048
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_env("REQPROBE_TIMEOUT", float, cls.timeout),
            port=_env("REQPROBE_PORT", int, cls.port, _valid_port),
            buffer_size=_env("REQPROBE_BUFFER_SIZE", int, cls.buffer_size, _positive),
            max_hostname_bytes=_env("REQPROBE_MAX_HOSTNAME_BYTES", int, cls.max_hostname_bytes, _positive),
            max_path_bytes=_env("REQPROBE_MAX_PATH_BYTES", int, cls.max_path_bytes, _positive),
            verbose=_env("REQPROBE_VERBOSE", _flag, cls.verbose),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
