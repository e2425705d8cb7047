# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
from enum import Enum


class ReqProbeError(Exception):
    """Base class for reqprobe failures."""


class ConfigurationError(ReqProbeError, ValueError):
    """Invalid user input detected before any network activity."""


class ResolutionError(ReqProbeError):
    """Name resolution produced no usable endpoints; the run cannot proceed."""

    def __init__(self, host: str, reason: str):
        super().__init__(f"cannot resolve {host}: {reason}")
        self.host = host
        self.reason = reason


class ProbeConnectionError(ReqProbeError, ConnectionError):
    """Every endpoint refused or failed the connection for one iteration."""

    def __init__(self, message: str, *, category: ErrorCategory | None = None):
        super().__init__(message)
        self.category = category or ErrorCategory.CONNECT_ERROR


class InsufficientDataError(ReqProbeError):
    """No iterations were recorded, so no statistics can be computed."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECT_ERROR = "CONNECT_ERROR"
    SEND_ERROR = "SEND_ERROR"
    RECEIVE_ERROR = "RECEIVE_ERROR"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    HTTP_STATUS = "HTTP_STATUS"
    MALFORMED_STATUS = "MALFORMED_STATUS"
    NONE = "NONE"


def categorize_exception(exc: BaseException, *, default: ErrorCategory = ErrorCategory.CONNECT_ERROR) -> ErrorCategory:
    """
    Map socket-level exceptions to ErrorCategory.

    ``default`` names the phase the exception was raised in (connect, send or receive)
    and is used for anything that is not a timeout.
    """
    if isinstance(exc, ProbeConnectionError):
        return exc.category
    if isinstance(exc, (TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT
    return default


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Deadline exceeded during probe",
        ErrorCategory.CONNECT_ERROR: "Could not connect to any endpoint",
        ErrorCategory.SEND_ERROR: "Failed to send request",
        ErrorCategory.RECEIVE_ERROR: "Connection failed while reading response",
        ErrorCategory.EMPTY_RESPONSE: "Peer closed the connection without responding",
        ErrorCategory.HTTP_STATUS: "Server answered with a non-200 status",
        ErrorCategory.MALFORMED_STATUS: "Response status line could not be parsed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "InsufficientDataError",
    "ProbeConnectionError",
    "ReqProbeError",
    "ResolutionError",
    "categorize_exception",
    "error_category_to_reason",
]
