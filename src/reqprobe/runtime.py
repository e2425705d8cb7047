# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level reqprobe facade: resolve once, probe N times, summarize."""

from __future__ import annotations

import logging

from .config import ProbeSettings, load_probe_settings
from .errors import ConfigurationError
from .models import EndpointSet, RunStatistics, Target
from .net.resolver import AddrInfoResolver, resolve
from .probe.runner import ProbeRunner, ResultCallback

logger = logging.getLogger(__name__)


class ReqProbe:
    """
    Convenience wrapper that wires settings, resolver and runner together.

    The same settings object is shared by target parsing and the runner so a run is
    fully described by the value passed in here.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        runner: ProbeRunner | None = None,
        resolver: AddrInfoResolver | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.runner = runner or ProbeRunner(self.settings)
        self._resolver = resolver

    def resolve(self, url: str) -> tuple[Target, EndpointSet]:
        return resolve(url, self.settings, resolver=self._resolver)

    def run(
        self,
        url: str,
        repeat: int,
        *,
        on_result: ResultCallback | None = None,
    ) -> RunStatistics:
        """
        Probe ``url`` ``repeat`` times and return the finalized statistics.

        Raises ConfigurationError for bad input, ResolutionError when the host does not
        resolve and InsufficientDataError when no iteration completed.
        """
        if repeat <= 0:
            raise ConfigurationError(f"repeat count must be positive, got {repeat}")
        target, endpoints = self.resolve(url)
        logger.info("Probing %s%s (%d endpoint(s), repeat=%d)", target.host_header, target.path, len(endpoints), repeat)
        aggregator = self.runner.run(target, endpoints, repeat, on_result=on_result)
        return aggregator.finalize()


__all__ = ["ReqProbe"]
