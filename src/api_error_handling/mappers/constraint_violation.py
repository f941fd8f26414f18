"""Mapper for constraint violations reported outside request binding.

Each violation becomes a field error when its path ends on a property and a
global error when it ends on the validated object itself. Violations on other
path kinds (method parameters, return values...) cannot be expressed in the
response and are dropped with a warning.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, cast

from pydantic import ValidationError as PydanticValidationError

from ..core.logging import get_logger
from ..failures.validation import ConstraintViolation, ConstraintViolationError, ElementKind
from ..response import ApiErrorResponse, ApiFieldError, ApiGlobalError
from .base import AbstractApiExceptionMapper

logger = get_logger(__name__)

_INTERNAL_ATTRIBUTES = frozenset({"message", "groups", "payload"})


class ConstraintViolationMapper(AbstractApiExceptionMapper):
    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, (ConstraintViolationError, PydanticValidationError))

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        if isinstance(failure, PydanticValidationError):
            violations = ConstraintViolationError.from_pydantic(failure).violations
        else:
            violations = cast(ConstraintViolationError, failure).violations

        field_errors: list[ApiFieldError] = []
        global_errors: list[ApiGlobalError] = []
        for violation in violations:
            kind = violation.property_path.leaf_kind
            if kind is ElementKind.PROPERTY:
                field_errors.append(
                    ApiFieldError(
                        code=self._code(violation),
                        property=str(violation.property_path),
                        message=self._violation_message(violation, locale),
                        rejected_value=violation.invalid_value,
                    )
                )
            elif kind is ElementKind.BEAN:
                global_errors.append(
                    ApiGlobalError(
                        code=self._code(violation),
                        message=self._violation_message(violation, locale),
                    )
                )
            else:
                logger.warning(
                    "constraint_violation_dropped",
                    element_kind=kind.value if kind else None,
                    property_path=str(violation.property_path),
                    constraint=violation.constraint.name,
                )

        count = len(violations)
        message = self.get_message(
            [ConstraintViolationError.__name__],
            [count],
            f"Validation failed. Error count: {count}",
            locale,
        )
        return ApiErrorResponse.build(
            HTTPStatus.BAD_REQUEST,
            self.error_code(failure),
            message,
            field_errors=field_errors,
            global_errors=global_errors,
        )

    def _code(self, violation: ConstraintViolation) -> str:
        return self.codes.resolve_field_code(str(violation.property_path), violation.constraint.name)

    def _violation_message(self, violation: ConstraintViolation, locale: str | None) -> str | None:
        name = violation.constraint.name
        override = self.field_override_message(str(violation.property_path), name)
        if override is not None:
            return override
        return self.get_message([name], constraint_arguments(violation), violation.message, locale)


def constraint_arguments(violation: ConstraintViolation) -> list[Any]:
    """Constraint attribute values ordered by attribute name, internal attributes excluded."""

    attributes = violation.constraint.attributes
    return [attributes[name] for name in sorted(attributes) if name not in _INTERNAL_ATTRIBUTES]


__all__ = ["ConstraintViolationMapper", "constraint_arguments"]
