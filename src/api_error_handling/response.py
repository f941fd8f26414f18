"""Value types describing the error payload returned to API clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .core.settings import ErrorHandlingSettings, JsonFieldNames


def coerce_status(status: HTTPStatus | int) -> HTTPStatus | int:
    """Return the ``HTTPStatus`` member for ``status``, or the plain code when it has none."""
    try:
        return HTTPStatus(status)
    except ValueError:
        return int(status)


@dataclass(frozen=True, slots=True)
class ApiFieldError:
    """A violation attributable to one input field, ``property`` being its dotted path."""

    code: str
    property: str
    message: str | None
    rejected_value: Any = None


@dataclass(frozen=True, slots=True)
class ApiGlobalError:
    """A violation that is not attributable to a single field."""

    code: str
    message: str | None


@dataclass(frozen=True, slots=True)
class ApiErrorResponse:
    """The complete outcome of classifying one failure.

    ``error_properties`` is stored sorted by key and read-only. ``http_status`` is an
    ``HTTPStatus`` member, or a plain ``int`` for codes the enum does not define.
    """

    http_status: HTTPStatus | int
    code: str
    message: str | None
    error_properties: Mapping[str, Any] = field(default_factory=dict)
    field_errors: tuple[ApiFieldError, ...] = ()
    global_errors: tuple[ApiGlobalError, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "http_status", coerce_status(self.http_status))
        object.__setattr__(
            self,
            "error_properties",
            MappingProxyType(dict(sorted(dict(self.error_properties).items()))),
        )
        object.__setattr__(self, "field_errors", tuple(self.field_errors))
        object.__setattr__(self, "global_errors", tuple(self.global_errors))

    @classmethod
    def build(
        cls,
        http_status: HTTPStatus | int,
        code: str,
        message: str | None,
        *,
        error_properties: Mapping[str, Any] | None = None,
        field_errors: Iterable[ApiFieldError] = (),
        global_errors: Iterable[ApiGlobalError] = (),
    ) -> "ApiErrorResponse":
        return cls(
            http_status=coerce_status(http_status),
            code=code,
            message=message,
            error_properties=dict(error_properties or {}),
            field_errors=tuple(field_errors),
            global_errors=tuple(global_errors),
        )


class ApiErrorResponseSerializer:
    """Render an :class:`ApiErrorResponse` as a JSON-compatible dictionary.

    Error properties are written as top-level members after ``code`` and
    ``message``; empty field/global error lists are omitted.
    """

    def __init__(self, settings: ErrorHandlingSettings) -> None:
        self._names: JsonFieldNames = settings.json_field_names
        self._include_status = settings.http_status_in_json_response

    def to_dict(self, response: ApiErrorResponse) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self._include_status:
            payload["status"] = int(response.http_status)
        payload[self._names.code] = response.code
        payload[self._names.message] = response.message
        if response.field_errors:
            payload[self._names.field_errors] = [
                {
                    "code": error.code,
                    "property": error.property,
                    "message": error.message,
                    "rejectedValue": error.rejected_value,
                }
                for error in response.field_errors
            ]
        if response.global_errors:
            payload[self._names.global_errors] = [
                {"code": error.code, "message": error.message} for error in response.global_errors
            ]
        for name, value in response.error_properties.items():
            payload.setdefault(name, value)
        return payload


__all__ = [
    "ApiErrorResponse",
    "ApiErrorResponseSerializer",
    "ApiFieldError",
    "ApiGlobalError",
    "coerce_status",
]
