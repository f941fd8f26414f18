"""Mapper for request bodies that could not be read."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from ..failures.parsing import (
    HttpMessageNotReadableError,
    IgnoredPropertyError,
    InvalidFormatError,
    JsonProcessingError,
    PropertyBindingError,
    UnrecognizedPropertyError,
    object_name_from_path,
)
from ..messages import resolve_message_codes
from ..response import ApiErrorResponse
from .base import AbstractApiExceptionMapper

_PROPERTY_KINDS: tuple[type[PropertyBindingError], ...] = (
    UnrecognizedPropertyError,
    IgnoredPropertyError,
    PropertyBindingError,
)


def innermost_cause(failure: BaseException) -> BaseException | None:
    """Return the deepest parse failure in the ``__cause__`` chain of ``failure``."""

    found: BaseException | None = None
    seen: set[int] = {id(failure)}
    cause = failure.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        if isinstance(cause, (JsonProcessingError, json.JSONDecodeError)):
            found = cause
        cause = cause.__cause__
    return found


class HttpMessageNotReadableMapper(AbstractApiExceptionMapper):
    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, HttpMessageNotReadableError)

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        return ApiErrorResponse.build(
            HTTPStatus.BAD_REQUEST,
            self.error_code(failure),
            self._message(failure, locale),
        )

    def _message(self, failure: BaseException, locale: str | None) -> str | None:
        cause = innermost_cause(failure)
        if isinstance(cause, InvalidFormatError):
            field = cause.path[0].field_name if cause.path else None
            codes = resolve_message_codes(
                InvalidFormatError.__name__,
                object_name_from_path(cause.path_reference),
                field,
            )
            return self.get_message(codes, [cause.value], str(cause), locale)
        if isinstance(cause, PropertyBindingError):
            kind = next(kind for kind in _PROPERTY_KINDS if isinstance(cause, kind))
            codes = resolve_message_codes(kind.__name__, object_name_from_path(cause.path_reference))
            arguments: list[Any] = [cause.property_name]
            return self.get_message(codes, arguments, str(cause), locale)
        if cause is not None:
            return self.get_message([JsonProcessingError.__name__], None, str(cause), locale)
        return self.get_message([HttpMessageNotReadableError.__name__], None, str(failure), locale)


__all__ = ["HttpMessageNotReadableMapper", "innermost_cause"]
