"""FastAPI exception handlers rendering failures as API error responses.

::

    app = FastAPI()
    register_error_handlers(app, catalog=YamlMessageCatalog.from_directory("i18n"))
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException
from starlette.responses import Response

from ..core.logging import configure_logging
from ..core.settings import ErrorHandlingSettings, get_settings
from ..failures.binding import MethodArgumentNotValidError, MethodArgumentTypeMismatchError, TypeMismatchError
from ..failures.parsing import HttpMessageNotReadableError, JsonProcessingError
from ..failures.persistence import ObjectOptimisticLockingFailureError
from ..failures.security import AccessDeniedError, AuthenticationError
from ..failures.validation import ConstraintViolationError
from ..mappers import ApiExceptionMapper
from ..messages import MessageCatalog
from ..pipeline import ErrorHandlingPipeline, build_pipeline
from ..response import ApiErrorResponseSerializer

LocaleResolver = Callable[[Request], str | None]

# Request parameters whose conversion errors are reported as argument type mismatches.
PARAMETER_SOURCES = frozenset({"query", "path", "header", "cookie"})

_PARSING_TYPES: Mapping[str, str] = {
    "int_parsing": "int",
    "float_parsing": "float",
    "bool_parsing": "bool",
    "decimal_parsing": "decimal.Decimal",
    "uuid_parsing": "uuid.UUID",
    "date_parsing": "datetime.date",
    "datetime_parsing": "datetime.datetime",
    "time_parsing": "datetime.time",
    "enum": "enum.Enum",
}

# Failure families answered by the exception middleware instead of the
# server error middleware, which re-raises after responding.
HANDLED_FAILURES: tuple[type[BaseException], ...] = (
    TypeMismatchError,
    ConstraintViolationError,
    PydanticValidationError,
    HttpMessageNotReadableError,
    MethodArgumentNotValidError,
    AccessDeniedError,
    AuthenticationError,
    ObjectOptimisticLockingFailureError,
    StaleDataError,
)

_BODYLESS_STATUSES = frozenset({204, 304})


def translate_request_validation_error(exc: RequestValidationError) -> Exception:
    """Express a FastAPI request validation failure in the failure vocabulary."""

    errors: Sequence[Mapping[str, Any]] = list(exc.errors())
    for error in errors:
        if error.get("type") == "json_invalid":
            context = error.get("ctx") or {}
            reason = str(context.get("error") or error.get("msg") or "invalid JSON")
            failure = HttpMessageNotReadableError(f"JSON parse error: {reason}")
            failure.__cause__ = JsonProcessingError(reason)
            return failure

    if len(errors) == 1:
        error = errors[0]
        loc = tuple(error.get("loc") or ())
        error_type = str(error.get("type", ""))
        if len(loc) == 2 and loc[0] in PARAMETER_SOURCES and _is_parsing_error(error_type):
            return MethodArgumentTypeMismatchError(
                error.get("input"),
                _PARSING_TYPES.get(error_type, error_type.rsplit("_", 1)[0]),
                name=str(loc[1]),
            )

    sources = {error["loc"][0] for error in errors if error.get("loc")}
    if len(sources) == 1:
        return MethodArgumentNotValidError.from_pydantic_errors(errors, str(sources.pop()), strip_prefix=1)
    return MethodArgumentNotValidError.from_pydantic_errors(errors, "request")


def _is_parsing_error(error_type: str) -> bool:
    return error_type.endswith("_parsing") or error_type == "enum"


class ErrorHandlers:
    """Exception handlers bound to one pipeline."""

    def __init__(
        self,
        pipeline: ErrorHandlingPipeline,
        serializer: ApiErrorResponseSerializer,
        locale_resolver: LocaleResolver | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.serializer = serializer
        self.locale_resolver = locale_resolver

    def render(self, request: Request, failure: BaseException, headers: Mapping[str, str] | None = None) -> Response:
        locale = self.locale_resolver(request) if self.locale_resolver else None
        response = self.pipeline.handle(failure, locale)
        status_code = int(response.http_status)
        if status_code in _BODYLESS_STATUSES:
            return Response(status_code=status_code, headers=headers)
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(self.serializer.to_dict(response)),
            headers=headers,
        )

    async def request_validation(self, request: Request, exc: RequestValidationError) -> Response:
        return self.render(request, translate_request_validation_error(exc))

    async def http_exception(self, request: Request, exc: HTTPException) -> Response:
        return self.render(request, exc, getattr(exc, "headers", None))

    async def failure(self, request: Request, exc: Exception) -> Response:
        return self.render(request, exc)


def register_error_handlers(
    app: FastAPI,
    settings: ErrorHandlingSettings | None = None,
    catalog: MessageCatalog | None = None,
    mappers: Iterable[ApiExceptionMapper] = (),
    locale_resolver: LocaleResolver | None = None,
) -> ErrorHandlingPipeline | None:
    """Install the error handlers on ``app`` and return the pipeline they use.

    Nothing is registered when the settings disable error handling.
    """

    settings = settings or get_settings()
    if not settings.enabled:
        return None

    configure_logging(settings.log_level)
    pipeline = build_pipeline(settings, catalog, tuple(mappers))
    handlers = ErrorHandlers(pipeline, ApiErrorResponseSerializer(settings), locale_resolver)

    app.add_exception_handler(RequestValidationError, handlers.request_validation)
    app.add_exception_handler(HTTPException, handlers.http_exception)
    for failure_type in HANDLED_FAILURES:
        app.add_exception_handler(failure_type, handlers.failure)
    app.add_exception_handler(Exception, handlers.failure)

    app.state.error_handling = pipeline
    return pipeline


__all__ = [
    "ErrorHandlers",
    "register_error_handlers",
    "translate_request_validation_error",
]
