"""Custom exceptions for the CORS filter."""

from __future__ import annotations


class CORSFilterError(Exception):
    """Base exception for CORS filter errors."""

    pass


class ConfigurationError(CORSFilterError):
    """Invalid CORS filter configuration payload."""

    def __init__(self, message: str, errors: list[dict[str, object]] | None = None) -> None:
        """Initialize with a message and the underlying validation errors."""
        self.errors: list[dict[str, object]] = errors or []
        super().__init__(message)
