"""Extraction of the values a failure declares as error properties."""

from __future__ import annotations

import inspect
from typing import Any, Iterator

from .core.logging import get_logger
from .failures.base import DetailProvider, ErrorDetail, ErrorField, ErrorPropertyMarker, error_property_marker, failure_type_key

logger = get_logger(__name__)


def _members(failure_type: type) -> dict[str, Any]:
    """Class attributes visible on ``failure_type``, subclasses overriding bases."""

    members: dict[str, Any] = {}
    for klass in reversed(inspect.getmro(failure_type)):
        members.update(vars(klass))
    return members


class PropertyExtractor:
    """Collect exposed properties of a failure into one alphabetically keyed mapping.

    Accessor-style members (``@error_property`` methods and properties, and
    :class:`DetailProvider` details) are collected first, then
    :class:`ErrorField` attributes, so a field wins when both expose the same
    name. A member that raises while being evaluated is logged and skipped.
    """

    def extract(self, failure: BaseException) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        properties.update(self.accessor_properties(failure))
        properties.update(self.field_properties(failure))
        return dict(sorted(properties.items()))

    def accessor_properties(self, failure: BaseException) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for attribute, marker, is_property in self._accessors(type(failure)):
            try:
                value = getattr(failure, attribute)
                if not is_property:
                    value = value()
            except Exception:
                self._log_failure(failure, attribute)
                continue
            if value is not None or marker.include_if_none:
                result[marker.name or attribute] = value

        if isinstance(failure, DetailProvider):
            try:
                details = list(failure.error_details())
            except Exception:
                self._log_failure(failure, "error_details")
            else:
                for item in details:
                    try:
                        detail = ErrorDetail(*item)
                        if detail.value is not None or detail.include_if_none:
                            result[detail.name] = detail.value
                    except Exception:
                        self._log_failure(failure, "error_details")
        return result

    def field_properties(self, failure: BaseException) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for descriptor in self._fields(type(failure)):
            try:
                value = descriptor.__get__(failure, type(failure))
            except Exception:
                self._log_failure(failure, descriptor.attribute)
                continue
            if value is not None or descriptor.include_if_none:
                result[descriptor.property_name] = value
        return result

    @staticmethod
    def _accessors(failure_type: type) -> Iterator[tuple[str, ErrorPropertyMarker, bool]]:
        for attribute, member in _members(failure_type).items():
            marker = error_property_marker(member)
            if marker is not None:
                yield attribute, marker, isinstance(member, property)

    @staticmethod
    def _fields(failure_type: type) -> Iterator[ErrorField]:
        for member in _members(failure_type).values():
            if isinstance(member, ErrorField):
                yield member

    @staticmethod
    def _log_failure(failure: BaseException, member: str) -> None:
        logger.error(
            "error_property_extraction_failed",
            exception_type=failure_type_key(type(failure)),
            member=member,
            exc_info=True,
        )


__all__ = ["PropertyExtractor"]
