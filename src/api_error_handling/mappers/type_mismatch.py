"""Mapper for values that could not be converted to the type a handler expects."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, cast

from ..failures.binding import MethodArgumentTypeMismatchError, TypeMismatchError, type_name
from ..messages import resolve_message_codes
from ..response import ApiErrorResponse
from .base import AbstractApiExceptionMapper


class TypeMismatchMapper(AbstractApiExceptionMapper):
    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, TypeMismatchError)

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        failure = cast(TypeMismatchError, failure)
        if isinstance(failure, MethodArgumentTypeMismatchError):
            property_name = failure.name
            message = self._argument_message(failure, locale)
        else:
            property_name = failure.property_name
            message = self._property_message(failure, locale)
        return ApiErrorResponse.build(
            HTTPStatus.BAD_REQUEST,
            self.error_code(failure),
            message,
            error_properties={
                "property": property_name,
                "rejectedValue": failure.value,
                "expectedType": type_name(failure.required_type),
            },
        )

    def _argument_message(self, failure: MethodArgumentTypeMismatchError, locale: str | None) -> str | None:
        field = failure.property_name or failure.name
        arguments: list[Any] = [
            self.resolvable(failure.name),
            self.resolvable(field),
            type_name(failure.required_type),
            failure.value,
        ]
        codes = resolve_message_codes(
            MethodArgumentTypeMismatchError.__name__,
            failure.name,
            field,
            failure.required_type,
        )
        return self.get_message(codes, arguments, str(failure), locale)

    def _property_message(self, failure: TypeMismatchError, locale: str | None) -> str | None:
        name = failure.property_name
        arguments: list[Any] = [self.resolvable(name) if name else None, failure.value]
        codes = resolve_message_codes(TypeMismatchError.__name__, name)
        return self.get_message(codes, arguments, str(failure), locale)


__all__ = ["TypeMismatchMapper"]
