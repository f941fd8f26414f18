from __future__ import annotations

import pytest

from api_error_handling.codes import CodeResolver, convert_to_all_caps
from api_error_handling.core.errors import ConfigurationError, ErrorHandlingError
from api_error_handling.core.settings import DefaultErrorCodeStrategy, ErrorHandlingSettings
from api_error_handling.failures import failure_type_key, response_error_code


class MyCustomException(Exception):
    pass


class InvoiceLockedError(Exception):
    pass


@response_error_code("ORDER_GONE")
class OrderGoneException(Exception):
    pass


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("MyCustomException", "MY_CUSTOM"),
        ("MyCustomError", "MY_CUSTOM_ERROR"),
        ("ValueError", "VALUE_ERROR"),
        ("UserNotFoundException", "USER_NOT_FOUND"),
        ("ExceptionHandlerException", "EXCEPTION_HANDLER"),
    ],
)
def test_convert_to_all_caps(name: str, expected: str) -> None:
    assert convert_to_all_caps(name) == expected


@pytest.mark.parametrize("name", ["MyCustomException", "InvoiceLockedError", "HTTPServerError", "already_CAPS"])
def test_convert_to_all_caps_is_idempotent(name: str) -> None:
    once = convert_to_all_caps(name)

    assert convert_to_all_caps(once) == once


def test_declared_code_wins_over_configuration() -> None:
    settings = ErrorHandlingSettings(codes={failure_type_key(OrderGoneException): "CONFIGURED"})

    assert CodeResolver(settings).resolve_code(OrderGoneException()) == "ORDER_GONE"


def test_configured_code_wins_over_strategy() -> None:
    settings = ErrorHandlingSettings(codes={failure_type_key(InvoiceLockedError): "INVOICE_LOCKED"})

    assert CodeResolver(settings).resolve_code(InvoiceLockedError()) == "INVOICE_LOCKED"


def test_all_caps_strategy() -> None:
    resolver = CodeResolver(ErrorHandlingSettings())

    assert resolver.resolve_code(MyCustomException()) == "MY_CUSTOM"
    assert resolver.resolve_code(InvoiceLockedError()) == "INVOICE_LOCKED_ERROR"


def test_full_qualified_name_strategy() -> None:
    resolver = CodeResolver(
        ErrorHandlingSettings(default_error_code_strategy=DefaultErrorCodeStrategy.FULL_QUALIFIED_NAME)
    )

    assert resolver.resolve_code(MyCustomException()) == failure_type_key(MyCustomException)
    assert resolver.resolve_code(ValueError("boom")) == "ValueError"


def test_failure_type_key() -> None:
    assert failure_type_key(KeyError) == "KeyError"
    assert failure_type_key(ConfigurationError) == "api_error_handling.core.errors.ConfigurationError"


def test_field_code_precedence() -> None:
    settings = ErrorHandlingSettings(codes={"user.email.Email": "USER_EMAIL_INVALID"})
    resolver = CodeResolver(settings)

    assert resolver.resolve_field_code("user.email", "Email") == "USER_EMAIL_INVALID"
    assert resolver.resolve_field_code("contact.email", "Email") == "INVALID_EMAIL"
    assert resolver.resolve_field_code("contact.email", "Unknown") == "Unknown"


def test_resolve_type_code_uses_override_or_type_key() -> None:
    resolver = CodeResolver(ErrorHandlingSettings(codes={"KeyError": "MISSING_KEY"}))

    assert resolver.resolve_type_code(KeyError("a")) == "MISSING_KEY"
    assert resolver.resolve_type_code(IndexError()) == "IndexError"


def test_unknown_strategy_fails_at_construction() -> None:
    settings = ErrorHandlingSettings.model_construct(default_error_code_strategy="SNAKE_CASE")

    with pytest.raises(ConfigurationError) as exc_info:
        CodeResolver(settings)

    assert isinstance(exc_info.value, ErrorHandlingError)
    assert exc_info.value.details == {"strategy": "SNAKE_CASE"}
