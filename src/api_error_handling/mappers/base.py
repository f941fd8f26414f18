"""Contracts and shared helpers of the mapper chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..codes import CodeResolver
from ..core.settings import ErrorHandlingSettings
from ..failures.base import failure_type_key
from ..messages import MessageResolver, MessageSourceResolvable
from ..response import ApiErrorResponse


class ApiExceptionMapper(ABC):
    """Turns one family of failures into an :class:`ApiErrorResponse`."""

    @abstractmethod
    def can_handle(self, failure: BaseException) -> bool:
        """Return whether this mapper is competent for ``failure``. Must be side-effect free."""

    @abstractmethod
    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        """Map ``failure``; only called after :meth:`can_handle` returned ``True``."""


class AbstractApiExceptionMapper(ApiExceptionMapper):
    """Base class giving mappers access to settings, codes and messages."""

    def __init__(
        self,
        settings: ErrorHandlingSettings,
        message_resolver: MessageResolver | None = None,
        code_resolver: CodeResolver | None = None,
    ) -> None:
        self.settings = settings
        self.messages = message_resolver or MessageResolver()
        self.codes = code_resolver or CodeResolver(settings)

    def error_code(self, failure: BaseException) -> str:
        return self.codes.resolve_type_code(failure)

    def override_message(self, key: str) -> str | None:
        return self.settings.messages.get(key)

    def field_override_message(self, path: str, code: str) -> str | None:
        """Message override for ``"<path>.<code>"``, then for ``"<code>"``."""

        message = self.override_message(f"{path}.{code}")
        if message is None:
            message = self.override_message(code)
        return message

    def get_message(
        self,
        codes: Sequence[str],
        arguments: Sequence[Any] | None = None,
        default_message: str | None = None,
        locale: str | None = None,
    ) -> str | None:
        return self.messages.resolve(codes, arguments, default_message, locale)

    def failure_message(self, failure: BaseException, locale: str | None = None) -> str | None:
        """Resolve the message keyed by the failure's simple type name."""

        return self.get_message([type(failure).__name__], None, str(failure), locale)

    @staticmethod
    def resolvable(code: str, default_message: str | None = None) -> MessageSourceResolvable:
        return MessageSourceResolvable.of(code, code if default_message is None else default_message)

    @staticmethod
    def type_key(failure: BaseException) -> str:
        return failure_type_key(type(failure))


__all__ = ["AbstractApiExceptionMapper", "ApiExceptionMapper"]
