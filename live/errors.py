from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CaptureProtocolError(Exception):
    """Structured error for capture protocol contract violations.

    Raised for values outside the fixed vocabulary (phase, action, result,
    zone) or for unknown subjects. Out-of-order steps and captures while the
    clock is stopped are no-ops, not errors.

    The server layer maps these to HTTP 4xx while keeping a stable
    machine-readable code for the client.
    """

    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


# Error codes (stable API surface)
CAPTURE_UNKNOWN_PHASE = "CAPTURE_UNKNOWN_PHASE"
CAPTURE_UNKNOWN_ACTION = "CAPTURE_UNKNOWN_ACTION"
CAPTURE_UNKNOWN_RESULT = "CAPTURE_UNKNOWN_RESULT"
CAPTURE_INVALID_ZONE = "CAPTURE_INVALID_ZONE"
CAPTURE_UNKNOWN_SUBJECT = "CAPTURE_UNKNOWN_SUBJECT"
