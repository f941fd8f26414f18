"""Failure types recognized by the mapper chain and the markers failures can carry."""

from .base import (
    DetailProvider,
    ErrorDetail,
    ErrorField,
    error_property,
    failure_type_key,
    response_error_code,
    response_status,
)
from .binding import (
    BindingResult,
    FieldError,
    MethodArgumentNotValidError,
    MethodArgumentTypeMismatchError,
    ObjectError,
    TypeMismatchError,
)
from .parsing import (
    HttpMessageNotReadableError,
    IgnoredPropertyError,
    InvalidFormatError,
    JsonProcessingError,
    PathReference,
    PropertyBindingError,
    UnrecognizedPropertyError,
)
from .persistence import ObjectOptimisticLockingFailureError
from .security import (
    AccessDeniedError,
    AccountExpiredError,
    AccountStatusError,
    AuthenticationCredentialsNotFoundError,
    AuthenticationError,
    AuthenticationServiceError,
    BadCredentialsError,
    DisabledError,
    InsufficientAuthenticationError,
    LockedError,
    UsernameNotFoundError,
)
from .validation import (
    ConstraintDescriptor,
    ConstraintViolation,
    ConstraintViolationError,
    ElementKind,
    PathNode,
    PropertyPath,
)

__all__ = [
    "DetailProvider",
    "ErrorDetail",
    "ErrorField",
    "error_property",
    "failure_type_key",
    "response_error_code",
    "response_status",
    "BindingResult",
    "FieldError",
    "MethodArgumentNotValidError",
    "MethodArgumentTypeMismatchError",
    "ObjectError",
    "TypeMismatchError",
    "HttpMessageNotReadableError",
    "IgnoredPropertyError",
    "InvalidFormatError",
    "JsonProcessingError",
    "PathReference",
    "PropertyBindingError",
    "UnrecognizedPropertyError",
    "ObjectOptimisticLockingFailureError",
    "AccessDeniedError",
    "AccountExpiredError",
    "AccountStatusError",
    "AuthenticationCredentialsNotFoundError",
    "AuthenticationError",
    "AuthenticationServiceError",
    "BadCredentialsError",
    "DisabledError",
    "InsufficientAuthenticationError",
    "LockedError",
    "UsernameNotFoundError",
    "ConstraintDescriptor",
    "ConstraintViolation",
    "ConstraintViolationError",
    "ElementKind",
    "PathNode",
    "PropertyPath",
]
