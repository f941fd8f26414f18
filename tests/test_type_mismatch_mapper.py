from __future__ import annotations

from http import HTTPStatus

from api_error_handling.failures import MethodArgumentTypeMismatchError, TypeMismatchError
from api_error_handling.mappers import TypeMismatchMapper


def test_method_argument_type_mismatch(make_pipeline) -> None:
    failure = MethodArgumentTypeMismatchError("abc", int, name="page")

    response = make_pipeline().handle(failure)

    assert response.http_status is HTTPStatus.BAD_REQUEST
    assert response.code == "ARGUMENT_TYPE_MISMATCH"
    assert response.message == "Failed to convert value of type 'str' to required type 'int' for parameter 'page'"
    assert dict(response.error_properties) == {
        "expectedType": "int",
        "property": "page",
        "rejectedValue": "abc",
    }


def test_method_argument_type_mismatch_message_from_catalog(make_pipeline) -> None:
    pipeline = make_pipeline(
        catalog={
            "MethodArgumentTypeMismatchError.page": "Parameter {0} must be a {2}, got ''{3}''",
            "page": "Page",
        }
    )

    response = pipeline.handle(MethodArgumentTypeMismatchError("abc", int, name="page"))

    assert response.message == "Parameter Page must be a int, got 'abc'"


def test_method_argument_type_mismatch_falls_back_to_type_specific_message(make_pipeline) -> None:
    pipeline = make_pipeline(catalog={"MethodArgumentTypeMismatchError.int": "{3} is not a number"})

    response = pipeline.handle(MethodArgumentTypeMismatchError("abc", int, name="size"))

    assert response.message == "abc is not a number"


def test_property_type_mismatch(make_pipeline) -> None:
    failure = TypeMismatchError("cheap", float, property_name="price")

    response = make_pipeline().handle(failure)

    assert response.code == "TYPE_MISMATCH"
    assert response.message == "Failed to convert value of type 'str' to required type 'float' for property 'price'"
    assert dict(response.error_properties) == {
        "expectedType": "float",
        "property": "price",
        "rejectedValue": "cheap",
    }


def test_property_type_mismatch_message_from_catalog(make_pipeline) -> None:
    pipeline = make_pipeline(catalog={"TypeMismatchError.price": "{0} cannot be ''{1}''", "price": "The price"})

    response = pipeline.handle(TypeMismatchError("cheap", float, property_name="price"))

    assert response.message == "The price cannot be 'cheap'"


def test_code_override(make_pipeline) -> None:
    pipeline = make_pipeline(
        codes={"api_error_handling.failures.binding.TypeMismatchError": "BAD_TYPE"},
    )

    assert pipeline.handle(TypeMismatchError("x", int)).code == "BAD_TYPE"


def test_can_handle(settings) -> None:
    mapper = TypeMismatchMapper(settings)

    assert mapper.can_handle(TypeMismatchError("x", int))
    assert mapper.can_handle(MethodArgumentTypeMismatchError("x", int, name="id"))
    assert not mapper.can_handle(ValueError("x"))
