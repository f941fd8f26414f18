"""Classify failures raised while serving an HTTP API into stable error responses."""

from .codes import CodeResolver
from .core import ConfigurationError, DefaultErrorCodeStrategy, ErrorHandlingError, ErrorHandlingSettings, ExceptionLogging
from .failures import DetailProvider, ErrorDetail, ErrorField, error_property, response_error_code, response_status
from .messages import InMemoryMessageCatalog, MessageCatalog, MessageResolver, MessageSourceResolvable, YamlMessageCatalog
from .pipeline import ErrorHandlingPipeline, build_pipeline
from .properties import PropertyExtractor
from .response import ApiErrorResponse, ApiErrorResponseSerializer, ApiFieldError, ApiGlobalError

__version__ = "0.1.0"

__all__ = [
    "ApiErrorResponse",
    "ApiErrorResponseSerializer",
    "ApiFieldError",
    "ApiGlobalError",
    "CodeResolver",
    "ConfigurationError",
    "DefaultErrorCodeStrategy",
    "DetailProvider",
    "ErrorDetail",
    "ErrorField",
    "ErrorHandlingError",
    "ErrorHandlingPipeline",
    "ErrorHandlingSettings",
    "ExceptionLogging",
    "InMemoryMessageCatalog",
    "MessageCatalog",
    "MessageResolver",
    "MessageSourceResolvable",
    "PropertyExtractor",
    "YamlMessageCatalog",
    "build_pipeline",
    "error_property",
    "response_error_code",
    "response_status",
]
