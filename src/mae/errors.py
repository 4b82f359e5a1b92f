from __future__ import annotations

from typing import Optional


class AnalysisError(RuntimeError):
    """Base class for failures raised by the analysis pipeline."""


class TransportError(AnalysisError):
    """Request failed, or the API answered with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MissingOutputError(AnalysisError):
    """Response parsed fine but carries no output bundle."""


class FieldDecodeError(AnalysisError):
    """One artifact field could not be decoded or written."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


__all__ = [
    "AnalysisError",
    "TransportError",
    "MissingOutputError",
    "FieldDecodeError",
]
