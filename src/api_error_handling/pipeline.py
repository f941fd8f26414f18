"""Assembly of the mapper chain and dispatch of failures through it."""

from __future__ import annotations

from typing import Iterable, Sequence

from .codes import CodeResolver
from .core.logging import get_logger
from .core.settings import ErrorHandlingSettings, ExceptionLogging, get_settings
from .failures.base import failure_type_key
from .mappers import (
    ApiExceptionMapper,
    ConstraintViolationMapper,
    FallbackMapper,
    HttpMessageNotReadableMapper,
    MethodArgumentNotValidMapper,
    OptimisticLockingMapper,
    SecurityMapper,
    TypeMismatchMapper,
)
from .messages import MessageCatalog, MessageResolver
from .properties import PropertyExtractor
from .response import ApiErrorResponse

logger = get_logger(__name__)


class ErrorHandlingPipeline:
    """Offer a failure to each mapper in order; the first competent one answers.

    The fallback mapper answers when no mapper in the chain can handle the
    failure. The chain is immutable once built.
    """

    def __init__(
        self,
        mappers: Iterable[ApiExceptionMapper],
        fallback: ApiExceptionMapper,
        settings: ErrorHandlingSettings,
    ) -> None:
        self._mappers: tuple[ApiExceptionMapper, ...] = tuple(mappers)
        self._fallback = fallback
        self.settings = settings

    @property
    def mappers(self) -> tuple[ApiExceptionMapper, ...]:
        return self._mappers

    @property
    def fallback(self) -> ApiExceptionMapper:
        return self._fallback

    def select(self, failure: BaseException) -> ApiExceptionMapper:
        for mapper in self._mappers:
            if mapper.can_handle(failure):
                return mapper
        return self._fallback

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        response = self.select(failure).handle(failure, locale)
        self._log(failure, response)
        return response

    def _log(self, failure: BaseException, response: ApiErrorResponse) -> None:
        mode = self.settings.exception_logging
        if mode is ExceptionLogging.NO_LOGGING:
            return
        fields = {
            "exception_type": failure_type_key(type(failure)),
            "status_code": int(response.http_status),
            "code": response.code,
            "error": str(failure),
        }
        if mode is ExceptionLogging.WITH_STACKTRACE:
            logger.error("exception_handled", exc_info=failure, **fields)
        else:
            logger.error("exception_handled", **fields)


def build_pipeline(
    settings: ErrorHandlingSettings | None = None,
    catalog: MessageCatalog | None = None,
    mappers: Sequence[ApiExceptionMapper] = (),
) -> ErrorHandlingPipeline:
    """Build the default chain.

    ``mappers`` are consulted before the built-in ones, in the given order.
    """

    settings = settings or get_settings()
    messages = MessageResolver(catalog)
    codes = CodeResolver(settings)
    builtin: list[ApiExceptionMapper] = [
        TypeMismatchMapper(settings, messages, codes),
        ConstraintViolationMapper(settings, messages, codes),
        HttpMessageNotReadableMapper(settings, messages, codes),
        MethodArgumentNotValidMapper(settings, messages, codes),
        SecurityMapper(settings, messages, codes),
        OptimisticLockingMapper(settings, messages, codes),
    ]
    fallback = FallbackMapper(settings, messages, codes, PropertyExtractor())
    return ErrorHandlingPipeline([*mappers, *builtin], fallback, settings)


__all__ = ["ErrorHandlingPipeline", "build_pipeline"]
