"""Core utilities shared by the error handling pipeline."""

from .errors import ConfigurationError, ErrorHandlingError
from .logging import configure_logging, get_logger
from .settings import (
    DEFAULT_CODES,
    DefaultErrorCodeStrategy,
    ErrorHandlingSettings,
    ExceptionLogging,
    JsonFieldNames,
    get_settings,
)

__all__ = [
    "ConfigurationError",
    "ErrorHandlingError",
    "configure_logging",
    "get_logger",
    "DEFAULT_CODES",
    "DefaultErrorCodeStrategy",
    "ErrorHandlingSettings",
    "ExceptionLogging",
    "JsonFieldNames",
    "get_settings",
]
