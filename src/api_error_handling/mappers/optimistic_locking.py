"""Mapper for concurrent modification conflicts detected by the persistence layer."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from sqlalchemy.orm.exc import StaleDataError

from ..failures.persistence import ObjectOptimisticLockingFailureError
from ..messages import resolve_message_codes
from ..response import ApiErrorResponse
from .base import AbstractApiExceptionMapper


class OptimisticLockingMapper(AbstractApiExceptionMapper):
    """Answer ``409 Conflict`` exposing the conflicting entity.

    A bare SQLAlchemy ``StaleDataError`` carries no entity information, so
    both properties are ``None`` for it.
    """

    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, (ObjectOptimisticLockingFailureError, StaleDataError))

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        class_name: str | None = None
        identifier: Any = None
        if isinstance(failure, ObjectOptimisticLockingFailureError):
            class_name = failure.persistent_class_name
            identifier = failure.identifier

        message = self.get_message(
            resolve_message_codes(ObjectOptimisticLockingFailureError.__name__, class_name),
            [self.resolvable(class_name) if class_name else None, identifier],
            str(failure),
            locale,
        )
        return ApiErrorResponse.build(
            HTTPStatus.CONFLICT,
            self.error_code(failure),
            message,
            error_properties={
                "identifier": identifier,
                "persistentClassName": class_name,
            },
        )


__all__ = ["OptimisticLockingMapper"]
