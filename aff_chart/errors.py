from __future__ import annotations

from typing import Optional


class AffError(ValueError):
    """Base error for chart parsing, querying and export."""


class FormatError(AffError):
    """Raised when chart text (or a timing group) violates the chart format."""

    def __init__(self, msg: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            msg = f"{msg} (line {line + 1})"
        super().__init__(msg)


class ExportError(AffError):
    """Raised when an event has no textual representation."""
