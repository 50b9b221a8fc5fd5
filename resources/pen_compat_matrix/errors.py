"""
Exception types for Pen Compatibility Matrix.

Only failures that abort a load are exceptions. Dataset inconsistencies are
reported through models.diagnostics instead.
"""

from typing import Optional, Tuple


class PenCompatError(Exception):
    """Base class for all application errors."""
    pass


class FetchError(PenCompatError):
    """The dataset could not be retrieved (HTTP, transport or file error)."""

    def __init__(self, message: str, source: Optional[str] = None,
                 status: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status = status


class ParseError(PenCompatError):
    """The dataset document is not well-formed XML."""

    def __init__(self, message: str, source: Optional[str] = None,
                 position: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.source = source
        self.position = position
