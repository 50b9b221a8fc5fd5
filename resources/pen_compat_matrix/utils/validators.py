"""
Input validation utilities for Pen Compatibility Matrix.

This module validates user-supplied settings before they reach the pipeline:
dataset sources, view mode names and network timeouts.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from ..models.display import ViewMode


class ValidationResult:
    """Result of a validation operation."""

    def __init__(self, is_valid: bool, message: str = "", details: Optional[Dict[str, Any]] = None):
        self.is_valid = is_valid
        self.message = message
        self.details = details or {}

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, message='{self.message}')"


class Validator:
    """Validation methods for sources, view modes and numeric settings."""

    URL_SCHEMES = ("http", "https", "file")

    def __init__(self):
        self._logger = logging.getLogger(__name__)

    def validate_source(self, source: str, must_exist: bool = True) -> ValidationResult:
        """
        Validate a dataset source.

        Args:
            source: http(s)/file URL or filesystem path
            must_exist: Require local paths to exist

        Returns:
            ValidationResult with a "source_type" detail of "url" or "path"
        """
        if not source or not isinstance(source, str) or not source.strip():
            return ValidationResult(False, "Source cannot be empty")

        source = source.strip()
        parsed = urlparse(source)
        scheme = parsed.scheme.lower()

        if scheme in self.URL_SCHEMES:
            if scheme != "file" and not parsed.netloc:
                return ValidationResult(False, f"URL has no host: {source}")
            return ValidationResult(True, "Valid URL", {"source_type": "url", "scheme": scheme})

        # Single letter schemes are Windows drive letters
        if scheme and len(scheme) > 1:
            return ValidationResult(False, f"Unsupported URL scheme: {scheme}")

        path = Path(source).expanduser()
        if must_exist and not path.is_file():
            return ValidationResult(False, f"File not found: {source}",
                                    {"source_type": "path", "path": path})
        return ValidationResult(True, "Valid file path", {"source_type": "path", "path": path})

    def validate_sources(self, sources: List[str], must_exist: bool = True) -> ValidationResult:
        """Validate every source; the first failure is returned."""
        if not sources:
            return ValidationResult(False, "At least one source is required")
        for source in sources:
            result = self.validate_source(source, must_exist=must_exist)
            if not result:
                return result
        return ValidationResult(True, f"{len(sources)} valid sources", {"count": len(sources)})

    def validate_view_mode(self, name: str) -> ValidationResult:
        try:
            mode = ViewMode.from_name(name)
        except ValueError as e:
            return ValidationResult(False, str(e))
        return ValidationResult(True, "Valid view mode", {"view_mode": mode})

    def validate_timeout(self, value: Any, maximum: int = 600) -> ValidationResult:
        try:
            timeout = int(value)
        except (TypeError, ValueError):
            return ValidationResult(False, f"Timeout must be a number: {value!r}")
        if timeout <= 0:
            return ValidationResult(False, "Timeout must be positive")
        if timeout > maximum:
            return ValidationResult(False, f"Timeout too long (maximum {maximum} seconds)")
        return ValidationResult(True, "Valid timeout", {"timeout": timeout})


# Global validator instance
_global_validator: Optional[Validator] = None


def get_validator() -> Validator:
    """Get the global validator instance."""
    global _global_validator
    if _global_validator is None:
        _global_validator = Validator()
    return _global_validator
