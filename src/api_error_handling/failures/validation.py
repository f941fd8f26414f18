"""Constraint violations reported by validation performed outside request binding."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError

# pydantic error types and the constraint names they correspond to. Error types
# missing from this table are used verbatim, so a ``PydanticCustomError`` raised
# with type ``"ValuesEqual"`` is reported as constraint ``ValuesEqual``.
PYDANTIC_CONSTRAINTS: Mapping[str, str] = MappingProxyType(
    {
        "missing": "NotNull",
        "string_too_short": "Size",
        "string_too_long": "Size",
        "too_short": "Size",
        "too_long": "Size",
        "greater_than": "Min",
        "greater_than_equal": "Min",
        "less_than": "Max",
        "less_than_equal": "Max",
        "string_pattern_mismatch": "Pattern",
        "value_error": "AssertTrue",
    }
)


class ElementKind(str, Enum):
    """Kind of a node in a constraint violation's property path."""

    BEAN = "BEAN"
    PROPERTY = "PROPERTY"
    METHOD = "METHOD"
    PARAMETER = "PARAMETER"
    CROSS_PARAMETER = "CROSS_PARAMETER"
    RETURN_VALUE = "RETURN_VALUE"
    CONSTRUCTOR = "CONSTRUCTOR"
    CONTAINER_ELEMENT = "CONTAINER_ELEMENT"


@dataclass(frozen=True, slots=True)
class PathNode:
    name: str | None
    kind: ElementKind = ElementKind.PROPERTY


@dataclass(frozen=True, slots=True)
class PropertyPath:
    """Ordered nodes leading from the validated root to the violating element."""

    nodes: tuple[PathNode, ...] = ()

    @classmethod
    def of(cls, *names: str, leaf_kind: ElementKind = ElementKind.PROPERTY) -> "PropertyPath":
        """Build a path of named nodes, the last one having ``leaf_kind``.

        ``PropertyPath.of("doSomething", "requestBody", "value")`` yields a
        property path rendered as ``doSomething.requestBody.value``.
        """

        nodes = [PathNode(name) for name in names[:-1]]
        if names:
            nodes.append(PathNode(names[-1], leaf_kind))
        return cls(tuple(nodes))

    def bean(self) -> "PropertyPath":
        """Return this path extended with a nameless bean node."""

        return PropertyPath(self.nodes + (PathNode(None, ElementKind.BEAN),))

    @property
    def leaf_kind(self) -> ElementKind | None:
        return self.nodes[-1].kind if self.nodes else None

    def __iter__(self) -> Iterator[PathNode]:
        return iter(self.nodes)

    def __str__(self) -> str:
        return ".".join(node.name for node in self.nodes if node.name)


@dataclass(frozen=True, slots=True)
class ConstraintDescriptor:
    """The constraint that was violated and the attributes it was declared with."""

    name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    property_path: PropertyPath
    constraint: ConstraintDescriptor
    message: str
    invalid_value: Any = None


class ConstraintViolationError(Exception):
    """Raised when an object fails validation outside of request binding."""

    def __init__(self, violations: Iterable[ConstraintViolation], message: str | None = None) -> None:
        self.violations: tuple[ConstraintViolation, ...] = tuple(violations)
        super().__init__(message or _summarize(self.violations))

    @classmethod
    def from_pydantic(
        cls,
        error: PydanticValidationError,
        *,
        root: Sequence[str] = (),
    ) -> "ConstraintViolationError":
        """Convert a pydantic ``ValidationError`` into constraint violations.

        Errors located on the model itself (empty ``loc``) become bean-level
        violations, the others property-level violations. ``root`` prefixes
        every path, e.g. ``("create_order", "order")``.
        """

        violations = []
        for detail in error.errors():
            loc = tuple(detail.get("loc") or ())
            names = list(root) + path_segments(loc)
            path = PropertyPath.of(*names) if loc else PropertyPath.of(*names).bean()
            name, attributes = pydantic_constraint(detail)
            violations.append(
                ConstraintViolation(
                    property_path=path,
                    constraint=ConstraintDescriptor(name=name, attributes=attributes),
                    message=str(detail.get("msg", "")),
                    invalid_value=None if detail.get("type") == "missing" else detail.get("input"),
                )
            )
        return cls(violations)


def path_segments(loc: Sequence[Any]) -> list[str]:
    """Render a pydantic ``loc`` as path segments, folding list indexes into names."""

    segments: list[str] = []
    for part in loc:
        if isinstance(part, int) and segments:
            segments[-1] = f"{segments[-1]}[{part}]"
        else:
            segments.append(str(part))
    return segments


def pydantic_constraint(detail: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """Return the constraint name and attributes of one pydantic error entry."""

    error_type = str(detail.get("type", "value_error"))
    name = PYDANTIC_CONSTRAINTS.get(error_type, error_type)
    context = detail.get("ctx") or {}
    attributes = {key: value for key, value in context.items() if key != "error"}
    return name, attributes


def _summarize(violations: Sequence[ConstraintViolation]) -> str:
    return "; ".join(f"{violation.property_path}: {violation.message}" for violation in violations)


__all__ = [
    "PYDANTIC_CONSTRAINTS",
    "ConstraintDescriptor",
    "ConstraintViolation",
    "ConstraintViolationError",
    "ElementKind",
    "PathNode",
    "PropertyPath",
    "path_segments",
    "pydantic_constraint",
]
