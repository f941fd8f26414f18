from __future__ import annotations

from http import HTTPStatus

import pytest

from api_error_handling.failures import BindingResult, FieldError, MethodArgumentNotValidError, ObjectError

PYDANTIC_ERRORS = [
    {"type": "missing", "loc": ("body", "name"), "msg": "Field required", "input": {}},
    {
        "type": "string_too_short",
        "loc": ("body", "code"),
        "msg": "String should have at least 3 characters",
        "input": "ab",
        "ctx": {"min_length": 3},
    },
]


@pytest.fixture()
def failure() -> MethodArgumentNotValidError:
    return MethodArgumentNotValidError.from_pydantic_errors(PYDANTIC_ERRORS, "order", strip_prefix=1)


def test_binding_failure(make_pipeline, failure: MethodArgumentNotValidError) -> None:
    response = make_pipeline().handle(failure)

    assert response.http_status is HTTPStatus.BAD_REQUEST
    assert response.code == "VALIDATION_FAILED"
    assert response.message == "Validation failed for object='order'. Error count: 2"
    assert [(error.code, error.property, error.message, error.rejected_value) for error in response.field_errors] == [
        ("REQUIRED_NOT_NULL", "name", "Field required", None),
        ("INVALID_SIZE", "code", "String should have at least 3 characters", "ab"),
    ]
    assert response.global_errors == ()


def test_field_error_codes_are_expanded(failure: MethodArgumentNotValidError) -> None:
    field_error = failure.binding_result.field_errors[1]

    assert field_error.codes == ("Size.order.code", "Size.code", "Size")
    assert field_error.arguments[1:] == (3,)


def test_field_message_from_catalog(make_pipeline, failure: MethodArgumentNotValidError) -> None:
    pipeline = make_pipeline(
        catalog={
            "Size.order.code": "{0} needs {1} characters",
            "order.code": "The code",
            "MethodArgumentNotValidError.order": "Order {0} has {1} error(s)",
            "order": "form",
        }
    )

    response = pipeline.handle(failure)

    assert response.message == "Order form has 2 error(s)"
    assert response.field_errors[1].message == "The code needs 3 characters"
    assert response.field_errors[0].message == "Field required"


def test_field_overrides(make_pipeline, failure: MethodArgumentNotValidError) -> None:
    pipeline = make_pipeline(
        codes={"code.Size": "CODE_TOO_SHORT"},
        messages={"code.Size": "code is too short", "NotNull": "is required"},
    )

    response = pipeline.handle(failure)

    assert [(error.code, error.message) for error in response.field_errors] == [
        ("REQUIRED_NOT_NULL", "is required"),
        ("CODE_TOO_SHORT", "code is too short"),
    ]


def test_global_errors(make_pipeline) -> None:
    failure = MethodArgumentNotValidError(
        BindingResult(
            "registration",
            (
                ObjectError.create("registration", "PasswordsMatch", "passwords don't match"),
                FieldError.create("registration", "email", "Email", "not an email", rejected_value="nope"),
            ),
        )
    )

    default = make_pipeline().handle(failure)
    overridden = make_pipeline(
        codes={"PasswordsMatch": "PASSWORDS_MATCH"},
        messages={"PasswordsMatch": "Passwords must match"},
    ).handle(failure)

    assert [(error.code, error.message) for error in default.global_errors] == [
        ("PasswordsMatch", "passwords don't match"),
    ]
    assert [(error.code, error.message) for error in overridden.global_errors] == [
        ("PASSWORDS_MATCH", "Passwords must match"),
    ]
    assert [(error.code, error.property) for error in default.field_errors] == [("INVALID_EMAIL", "email")]


def test_model_level_pydantic_error_becomes_global_error() -> None:
    errors = [{"type": "PasswordsMatch", "loc": ("body",), "msg": "passwords do not match", "input": {}}]

    failure = MethodArgumentNotValidError.from_pydantic_errors(errors, "registration", strip_prefix=1)

    assert failure.binding_result.field_errors == []
    (error,) = failure.binding_result.global_errors
    assert error.code == "PasswordsMatch"
    assert error.codes == ("PasswordsMatch.registration", "PasswordsMatch")
