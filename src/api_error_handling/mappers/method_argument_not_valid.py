"""Mapper for handler arguments that failed validation while being bound."""

from __future__ import annotations

from http import HTTPStatus
from typing import cast

from ..failures.binding import FieldError, MethodArgumentNotValidError, ObjectError
from ..messages import resolve_message_codes
from ..response import ApiErrorResponse, ApiFieldError, ApiGlobalError
from .base import AbstractApiExceptionMapper


class MethodArgumentNotValidMapper(AbstractApiExceptionMapper):
    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, MethodArgumentNotValidError)

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        failure = cast(MethodArgumentNotValidError, failure)
        result = failure.binding_result
        field_errors = [
            ApiFieldError(
                code=self.codes.resolve_field_code(error.field, error.code),
                property=error.field,
                message=self._field_message(error, locale),
                rejected_value=error.rejected_value,
            )
            for error in result.field_errors
        ]
        global_errors = [
            ApiGlobalError(
                code=self.codes.replace_with_override(error.code),
                message=self._global_message(error, locale),
            )
            for error in result.global_errors
        ]
        message = self.get_message(
            resolve_message_codes(MethodArgumentNotValidError.__name__, result.object_name),
            [self.resolvable(result.object_name), result.error_count],
            f"Validation failed for object='{result.object_name}'. Error count: {result.error_count}",
            locale,
        )
        return ApiErrorResponse.build(
            HTTPStatus.BAD_REQUEST,
            self.error_code(failure),
            message,
            field_errors=field_errors,
            global_errors=global_errors,
        )

    def _field_message(self, error: FieldError, locale: str | None) -> str | None:
        override = self.field_override_message(error.field, error.code)
        if override is not None:
            return override
        return self.get_message(error.codes, error.arguments, error.default_message, locale)

    def _global_message(self, error: ObjectError, locale: str | None) -> str | None:
        override = self.override_message(error.code)
        if override is not None:
            return override
        return self.get_message(error.codes, error.arguments, error.default_message, locale)


__all__ = ["MethodArgumentNotValidMapper"]
