"""Declarative markers that let a failure describe its own API error payload.

A failure type can:

* declare a literal error code with :func:`response_error_code`;
* declare an HTTP status with :func:`response_status`;
* expose attributes with :class:`ErrorField` class attributes;
* expose computed values with methods or properties decorated by
  :func:`error_property`;
* implement :class:`DetailProvider` to return its details explicitly.

Only members marked this way end up in the response, nothing is discovered by
scanning arbitrary attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Iterable, NamedTuple, Protocol, TypeVar, runtime_checkable

_ERROR_CODE_ATTRIBUTE = "__response_error_code__"
_STATUS_ATTRIBUTE = "__response_status__"
_PROPERTY_MARKER = "__error_property__"

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


def response_error_code(code: str) -> Callable[[T], T]:
    """Class decorator declaring the literal error code of a failure type."""

    def decorator(cls: T) -> T:
        setattr(cls, _ERROR_CODE_ATTRIBUTE, code)
        return cls

    return decorator


def response_status(status: HTTPStatus | int) -> Callable[[T], T]:
    """Class decorator declaring the HTTP status answered for a failure type."""

    def decorator(cls: T) -> T:
        setattr(cls, _STATUS_ATTRIBUTE, HTTPStatus(status))
        return cls

    return decorator


def declared_error_code(failure: BaseException) -> str | None:
    return getattr(type(failure), _ERROR_CODE_ATTRIBUTE, None)


def declared_status(failure: BaseException) -> HTTPStatus | None:
    return getattr(type(failure), _STATUS_ATTRIBUTE, None)


@dataclass(frozen=True, slots=True)
class ErrorPropertyMarker:
    """Options attached to an accessor exposed with :func:`error_property`."""

    name: str | None = None
    include_if_none: bool = False


def error_property(
    func: F | None = None,
    *,
    name: str | None = None,
    include_if_none: bool = False,
) -> F | Callable[[F], F]:
    """Mark a zero-argument method (or a property getter) as an error property.

    Can be used bare (``@error_property``) or with options
    (``@error_property(name="id", include_if_none=True)``). When combined with
    ``@property`` it must be the innermost decorator.
    """

    def decorator(target: F) -> F:
        setattr(target, _PROPERTY_MARKER, ErrorPropertyMarker(name=name, include_if_none=include_if_none))
        return target

    if func is not None:
        return decorator(func)
    return decorator


def error_property_marker(member: Any) -> ErrorPropertyMarker | None:
    """Return the marker of a class member, unwrapping properties."""

    if isinstance(member, property):
        member = member.fget
    elif isinstance(member, (staticmethod, classmethod)):
        return None
    return getattr(member, _PROPERTY_MARKER, None)


class ErrorField:
    """Data descriptor exposing an instance attribute as an error property.

    ::

        class UserNotFoundError(Exception):
            user_id = ErrorField(name="userId")

            def __init__(self, user_id: str) -> None:
                super().__init__(f"Could not find user {user_id}")
                self.user_id = user_id
    """

    def __init__(self, name: str | None = None, *, include_if_none: bool = False) -> None:
        self.name = name
        self.include_if_none = include_if_none
        self.attribute = ""

    def __set_name__(self, owner: type, attribute: str) -> None:
        self.attribute = attribute

    @property
    def property_name(self) -> str:
        return self.name or self.attribute

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.attribute)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.attribute] = value


class ErrorDetail(NamedTuple):
    """One named value contributed by a :class:`DetailProvider`."""

    name: str
    value: Any
    include_if_none: bool = False


@runtime_checkable
class DetailProvider(Protocol):
    """Capability implemented by failures that list their own error details."""

    def error_details(self) -> Iterable[ErrorDetail]:
        ...


def failure_type_key(failure_type: type) -> str:
    """Return the fully qualified name used to key configuration by failure type."""

    module = failure_type.__module__
    if module == "builtins":
        return failure_type.__qualname__
    return f"{module}.{failure_type.__qualname__}"


__all__ = [
    "DetailProvider",
    "ErrorDetail",
    "ErrorField",
    "ErrorPropertyMarker",
    "declared_error_code",
    "declared_status",
    "error_property",
    "error_property_marker",
    "failure_type_key",
    "response_error_code",
    "response_status",
]
