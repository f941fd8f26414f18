"""Mapper for authentication and authorization failures."""

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType
from typing import Mapping

from ..failures.security import (
    AccessDeniedError,
    AccountExpiredError,
    AuthenticationCredentialsNotFoundError,
    AuthenticationError,
    AuthenticationServiceError,
    BadCredentialsError,
    DisabledError,
    InsufficientAuthenticationError,
    LockedError,
    UsernameNotFoundError,
)
from ..response import ApiErrorResponse
from .base import AbstractApiExceptionMapper

SECURITY_STATUSES: Mapping[type[BaseException], HTTPStatus] = MappingProxyType(
    {
        AccessDeniedError: HTTPStatus.FORBIDDEN,
        AccountExpiredError: HTTPStatus.BAD_REQUEST,
        AuthenticationCredentialsNotFoundError: HTTPStatus.UNAUTHORIZED,
        AuthenticationServiceError: HTTPStatus.INTERNAL_SERVER_ERROR,
        BadCredentialsError: HTTPStatus.BAD_REQUEST,
        UsernameNotFoundError: HTTPStatus.BAD_REQUEST,
        InsufficientAuthenticationError: HTTPStatus.UNAUTHORIZED,
        LockedError: HTTPStatus.BAD_REQUEST,
        DisabledError: HTTPStatus.BAD_REQUEST,
    }
)


def security_status(failure_type: type[BaseException]) -> HTTPStatus:
    """Status of the nearest mapped type in the MRO, ``500`` when none is mapped."""

    for klass in failure_type.__mro__:
        status = SECURITY_STATUSES.get(klass)
        if status is not None:
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


class SecurityMapper(AbstractApiExceptionMapper):
    def can_handle(self, failure: BaseException) -> bool:
        return isinstance(failure, (AccessDeniedError, AuthenticationError))

    def handle(self, failure: BaseException, locale: str | None = None) -> ApiErrorResponse:
        return ApiErrorResponse.build(
            security_status(type(failure)),
            self.error_code(failure),
            self.failure_message(failure, locale),
        )


__all__ = ["SECURITY_STATUSES", "SecurityMapper", "security_status"]
