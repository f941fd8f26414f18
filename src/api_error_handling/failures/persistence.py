"""Persistence failures surfaced to API clients."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect as sqlalchemy_inspect
from sqlalchemy.orm.exc import StaleDataError


class ObjectOptimisticLockingFailureError(Exception):
    """An entity was modified concurrently since it was loaded."""

    def __init__(
        self,
        persistent_class_name: str | None,
        identifier: Any,
        message: str | None = None,
    ) -> None:
        self.persistent_class_name = persistent_class_name
        self.identifier = identifier
        super().__init__(
            message
            or f"Object of class [{persistent_class_name}] with identifier [{identifier}]: optimistic locking failed"
        )

    @classmethod
    def from_stale_data(cls, error: StaleDataError, instance: Any) -> "ObjectOptimisticLockingFailureError":
        """Wrap SQLAlchemy's ``StaleDataError`` raised while flushing ``instance``."""

        state = sqlalchemy_inspect(instance)
        identity = state.identity
        if identity is not None and len(identity) == 1:
            identifier: Any = identity[0]
        else:
            identifier = identity
        failure = cls(type(instance).__name__, identifier)
        failure.__cause__ = error
        return failure


__all__ = ["ObjectOptimisticLockingFailureError"]
