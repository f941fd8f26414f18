"""Authentication and authorization failures."""

from __future__ import annotations


class AccessDeniedError(Exception):
    """The authenticated principal may not perform the requested operation."""


class AuthenticationError(Exception):
    """Base class of failures raised while authenticating a request."""


class AccountStatusError(AuthenticationError):
    """The account exists but is in a state that prevents authentication."""


class AccountExpiredError(AccountStatusError):
    pass


class LockedError(AccountStatusError):
    pass


class DisabledError(AccountStatusError):
    pass


class BadCredentialsError(AuthenticationError):
    pass


class UsernameNotFoundError(AuthenticationError):
    pass


class AuthenticationCredentialsNotFoundError(AuthenticationError):
    """No credentials were presented with the request."""


class InsufficientAuthenticationError(AuthenticationError):
    """The presented credentials are not sufficient for the resource."""


class AuthenticationServiceError(AuthenticationError):
    """The authentication backend failed internally."""


__all__ = [
    "AccessDeniedError",
    "AccountExpiredError",
    "AccountStatusError",
    "AuthenticationCredentialsNotFoundError",
    "AuthenticationError",
    "AuthenticationServiceError",
    "BadCredentialsError",
    "DisabledError",
    "InsufficientAuthenticationError",
    "LockedError",
    "UsernameNotFoundError",
]
