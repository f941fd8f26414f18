"""Failures raised while reading a request body.

``HttpMessageNotReadableError`` is the failure the web layer raises; the
deserialization problem that caused it is attached as ``__cause__``::

    try:
        payload = decode(body)
    except UnrecognizedPropertyError as exc:
        raise HttpMessageNotReadableError("JSON parse error") from exc
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


class HttpMessageNotReadableError(Exception):
    """Raised when the request body cannot be read into the target type."""


@dataclass(frozen=True, slots=True)
class PathReference:
    """One step of the path to the offending value inside the document."""

    field_name: str | None = None
    index: int | None = None


class JsonProcessingError(Exception):
    """Generic failure to parse or map a JSON document."""


class PropertyBindingError(JsonProcessingError):
    """A property of the document could not be bound to the target type.

    ``path_reference`` describes the target, e.g. ``app.schemas.User["id"]``.
    """

    def __init__(
        self,
        message: str,
        property_name: str,
        path_reference: str,
        known_properties: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.property_name = property_name
        self.path_reference = path_reference
        self.known_properties = tuple(known_properties)


class UnrecognizedPropertyError(PropertyBindingError):
    """The document contains a property the target type does not declare."""


class IgnoredPropertyError(PropertyBindingError):
    """The document contains a property the target type explicitly ignores."""


class InvalidFormatError(JsonProcessingError):
    """A value in the document has the wrong format for its target field."""

    def __init__(
        self,
        message: str,
        value: Any,
        target_type: type | str | None,
        path: Sequence[PathReference],
        path_reference: str,
    ) -> None:
        super().__init__(message)
        self.value = value
        self.target_type = target_type
        self.path = tuple(path)
        self.path_reference = path_reference


def object_name_from_path(path_reference: str) -> str:
    """``app.schemas.User["id"]`` -> ``user``."""

    end = path_reference.rfind("[")
    type_path = path_reference[:end] if end != -1 else path_reference
    name = type_path.rsplit(".", 1)[-1]
    return name[:1].lower() + name[1:]


__all__ = [
    "HttpMessageNotReadableError",
    "IgnoredPropertyError",
    "InvalidFormatError",
    "JsonProcessingError",
    "PathReference",
    "PropertyBindingError",
    "UnrecognizedPropertyError",
    "object_name_from_path",
]
