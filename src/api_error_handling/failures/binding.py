"""Failures raised while binding request data to handler arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from ..messages import MessageSourceResolvable, resolve_message_codes
from .validation import path_segments, pydantic_constraint


def type_name(value: type | str | None) -> str | None:
    """Return a printable name for an expected type."""

    if value is None or isinstance(value, str):
        return value
    if value.__module__ == "builtins":
        return value.__qualname__
    return f"{value.__module__}.{value.__qualname__}"


class TypeMismatchError(Exception):
    """Raised when a value cannot be converted to the required type."""

    def __init__(
        self,
        value: Any,
        required_type: type | str | None,
        property_name: str | None = None,
        message: str | None = None,
    ) -> None:
        self.value = value
        self.required_type = required_type
        self.property_name = property_name
        if message is None:
            message = (
                f"Failed to convert value of type '{type(value).__name__}'"
                f" to required type '{type_name(required_type)}'"
            )
            if property_name:
                message += f" for property '{property_name}'"
        super().__init__(message)


class MethodArgumentTypeMismatchError(TypeMismatchError):
    """Raised when a handler argument (query, path, header...) has the wrong type.

    ``name`` is the name of the handler parameter, ``property_name`` the
    property inside it when the parameter is a structured object.
    """

    def __init__(
        self,
        value: Any,
        required_type: type | str | None,
        name: str,
        property_name: str | None = None,
        message: str | None = None,
    ) -> None:
        self.name = name
        if message is None:
            message = (
                f"Failed to convert value of type '{type(value).__name__}'"
                f" to required type '{type_name(required_type)}'"
                f" for parameter '{name}'"
            )
        super().__init__(value, required_type, property_name=property_name, message=message)


@dataclass(frozen=True)
class ObjectError(MessageSourceResolvable):
    """A binding error that applies to the bound object as a whole."""

    object_name: str = ""
    code: str = ""

    @classmethod
    def create(
        cls,
        object_name: str,
        code: str,
        default_message: str | None = None,
        arguments: Sequence[Any] = (),
    ) -> "ObjectError":
        return cls(
            codes=tuple(resolve_message_codes(code, object_name)),
            arguments=tuple(arguments),
            default_message=default_message,
            object_name=object_name,
            code=code,
        )


@dataclass(frozen=True)
class FieldError(ObjectError):
    """A binding error attributable to one field of the bound object."""

    field: str = ""
    rejected_value: Any = None

    @classmethod
    def create(  # type: ignore[override]
        cls,
        object_name: str,
        field: str,
        code: str,
        default_message: str | None = None,
        arguments: Sequence[Any] = (),
        rejected_value: Any = None,
    ) -> "FieldError":
        return cls(
            codes=tuple(resolve_message_codes(code, object_name, field)),
            arguments=tuple(arguments),
            default_message=default_message,
            object_name=object_name,
            code=code,
            field=field,
            rejected_value=rejected_value,
        )


@dataclass(frozen=True)
class BindingResult:
    """Errors collected while binding request data to a named target object."""

    object_name: str
    errors: tuple[ObjectError, ...] = field(default_factory=tuple)

    @property
    def field_errors(self) -> list[FieldError]:
        return [error for error in self.errors if isinstance(error, FieldError)]

    @property
    def global_errors(self) -> list[ObjectError]:
        return [error for error in self.errors if not isinstance(error, FieldError)]

    @property
    def error_count(self) -> int:
        return len(self.errors)


class MethodArgumentNotValidError(Exception):
    """Raised when a validated handler argument could not be bound."""

    def __init__(self, binding_result: BindingResult, message: str | None = None) -> None:
        self.binding_result = binding_result
        super().__init__(
            message
            or f"Validation failed for argument '{binding_result.object_name}'"
            f" with {binding_result.error_count} error(s)"
        )

    @classmethod
    def from_pydantic_errors(
        cls,
        errors: Iterable[Mapping[str, Any]],
        object_name: str,
        *,
        strip_prefix: int = 0,
    ) -> "MethodArgumentNotValidError":
        """Build a binding failure from pydantic error entries.

        ``strip_prefix`` drops leading ``loc`` elements such as FastAPI's
        ``"body"`` so field paths are relative to ``object_name``.
        """

        binding_errors: list[ObjectError] = []
        for detail in errors:
            loc = tuple(detail.get("loc") or ())[strip_prefix:]
            code, attributes = pydantic_constraint(detail)
            arguments = [attributes[key] for key in sorted(attributes)]
            message = str(detail.get("msg", "")) or None
            if not loc:
                binding_errors.append(ObjectError.create(object_name, code, message, arguments))
                continue
            field_path = ".".join(path_segments(loc))
            rejected = None if detail.get("type") == "missing" else detail.get("input")
            binding_errors.append(
                FieldError.create(
                    object_name,
                    field_path,
                    code,
                    message,
                    [MessageSourceResolvable.of(f"{object_name}.{field_path}", field_path), *arguments],
                    rejected_value=rejected,
                )
            )
        return cls(BindingResult(object_name=object_name, errors=tuple(binding_errors)))


__all__ = [
    "BindingResult",
    "FieldError",
    "MethodArgumentNotValidError",
    "MethodArgumentTypeMismatchError",
    "ObjectError",
    "TypeMismatchError",
    "type_name",
]
