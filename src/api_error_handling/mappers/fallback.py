"""Mapper used when no specialized mapper recognizes a failure."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping

from starlette.exceptions import HTTPException

from ..codes import CodeResolver
from ..core.settings import ErrorHandlingSettings
from ..failures.base import declared_status
from ..messages import MessageResolver
from ..properties import PropertyExtractor
from ..response import ApiErrorResponse, coerce_status
from .base import AbstractApiExceptionMapper


class FallbackMapper(AbstractApiExceptionMapper):
    """Map any failure using its declarations and the configured overrides.

    The status is the declared one (``@response_status``), else the status of
    a Starlette ``HTTPException``, else the configured status for the failure
    type, else ``500``. Error properties are the ones the failure exposes.
    """

    def __init__(
        self,
        settings: ErrorHandlingSettings,
        message_resolver: MessageResolver | None = None,
        code_resolver: CodeResolver | None = None,
        property_extractor: PropertyExtractor | None = None,
    ) -> None:
        super().__init__(settings, message_resolver, code_resolver)
        self.properties = property_extractor or PropertyExtractor()

    def can_handle(self, failure: BaseException) -> bool:
        return True

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        properties = self.properties.extract(failure)
        return ApiErrorResponse.build(
            self.http_status(failure),
            self.codes.resolve_code(failure),
            self._message(failure, properties, locale),
            error_properties=properties,
        )

    def http_status(self, failure: BaseException) -> HTTPStatus | int:
        status = declared_status(failure)
        if status is not None:
            return status
        if isinstance(failure, HTTPException):
            return coerce_status(failure.status_code)
        return HTTPStatus(self.settings.http_statuses.get(self.type_key(failure), HTTPStatus.INTERNAL_SERVER_ERROR))

    def _message(self, failure: BaseException, properties: Mapping[str, Any], locale: str | None) -> str | None:
        override = self.override_message(self.type_key(failure))
        if override is not None:
            return override

        arguments: list[Any] = []
        for name, value in properties.items():
            arguments.extend((self.resolvable(name), value))
        return self.get_message([type(failure).__name__], arguments, default_text(failure), locale)


def default_text(failure: BaseException) -> str:
    if isinstance(failure, HTTPException) and isinstance(failure.detail, str):
        return failure.detail
    return str(failure)


__all__ = ["FallbackMapper", "default_text"]
