"""Exception hierarchy raised by the error handling library itself."""

from __future__ import annotations

from typing import Any, Mapping

ErrorDetails = Mapping[str, Any] | None


class ErrorHandlingError(Exception):
    """Base exception carrying optional structured details."""

    def __init__(self, message: str, *, details: ErrorDetails = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:  # pragma: no cover - mirrors Exception.__str__
        return self.message


class ConfigurationError(ErrorHandlingError):
    """Raised at startup when the error handling settings cannot be used."""


__all__ = [
    "ErrorHandlingError",
    "ConfigurationError",
]
