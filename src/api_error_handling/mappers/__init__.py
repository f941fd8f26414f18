"""The mapper chain: specialized mappers and the fallback."""

from .base import AbstractApiExceptionMapper, ApiExceptionMapper
from .constraint_violation import ConstraintViolationMapper
from .fallback import FallbackMapper
from .message_not_readable import HttpMessageNotReadableMapper
from .method_argument_not_valid import MethodArgumentNotValidMapper
from .optimistic_locking import OptimisticLockingMapper
from .security import SecurityMapper
from .type_mismatch import TypeMismatchMapper

__all__ = [
    "AbstractApiExceptionMapper",
    "ApiExceptionMapper",
    "ConstraintViolationMapper",
    "FallbackMapper",
    "HttpMessageNotReadableMapper",
    "MethodArgumentNotValidMapper",
    "OptimisticLockingMapper",
    "SecurityMapper",
    "TypeMismatchMapper",
]
