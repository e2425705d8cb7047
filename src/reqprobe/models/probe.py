# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-iteration probe models."""

from dataclasses import dataclass

from ..errors import ErrorCategory
from .target import Endpoint


@dataclass(frozen=True)
class StatusClassification:
    success: bool
    code: int | None = None


UNKNOWN_STATUS = StatusClassification(success=False, code=None)


@dataclass(frozen=True)
class IterationResult:
    """Outcome of one connect/send/read cycle; consumed once by the aggregator."""

    elapsed_ms: float
    success: bool
    status_code: int | None = None
    body_size_bytes: int = 0
    error_category: ErrorCategory = ErrorCategory.NONE
    error: str | None = None
    endpoint: Endpoint | None = None

    @property
    def connected(self) -> bool:
        return self.endpoint is not None
