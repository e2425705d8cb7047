# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Status-line classification for the first response chunk."""

from __future__ import annotations

import re

from ..models.probe import UNKNOWN_STATUS, StatusClassification

SUCCESS_STATUS = 200

_STATUS_CODE_RE = re.compile(rb"[0-9]+")


def _first_line(chunk: bytes) -> bytes:
    end = len(chunk)
    for sep in (b"\r", b"\n"):
        idx = chunk.find(sep)
        if idx != -1:
            end = min(end, idx)
    return chunk[:end]


def classify_status(first_chunk: bytes | bytearray | memoryview) -> StatusClassification:
    """
    Decide success from the status code in the first response chunk.

    Only the numeric code gates success; the reason phrase and headers are ignored.
    Truncated or malformed input yields an unknown code instead of raising.
    """
    tokens = _first_line(bytes(first_chunk)).split(b" ")
    if len(tokens) < 2 or not _STATUS_CODE_RE.fullmatch(tokens[1]):
        return UNKNOWN_STATUS
    code = int(tokens[1])
    return StatusClassification(success=code == SUCCESS_STATUS, code=code)


__all__ = ["SUCCESS_STATUS", "classify_status"]
