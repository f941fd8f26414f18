"""Integration tests for the FastAPI exception handlers."""

from __future__ import annotations

from typing import Callable

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from api_error_handling.core.settings import ErrorHandlingSettings
from api_error_handling.failures import (
    AccessDeniedError,
    HttpMessageNotReadableError,
    MethodArgumentNotValidError,
    MethodArgumentTypeMismatchError,
    ObjectOptimisticLockingFailureError,
)
from api_error_handling.integrations.fastapi import register_error_handlers, translate_request_validation_error
from api_error_handling.messages import InMemoryMessageCatalog, MessageCatalog
from api_error_handling.pipeline import ErrorHandlingPipeline


class OrderRequest(BaseModel):
    value: str = Field(min_length=1)
    value2: str = Field(max_length=5)


class MyCustomException(Exception):
    pass


def _create_app(settings: ErrorHandlingSettings, catalog: MessageCatalog | None = None, **kwargs: object) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app, settings, catalog, **kwargs)

    @app.post("/orders")
    def create_order(payload: OrderRequest) -> dict[str, str]:
        return {"value": payload.value}

    @app.get("/items/{item_id}")
    def read_item(item_id: int) -> dict[str, int]:
        return {"item_id": item_id}

    @app.put("/orders/{order_id}")
    def update_order(order_id: int) -> None:
        raise ObjectOptimisticLockingFailureError("Order", order_id)

    @app.get("/missing")
    def missing() -> None:
        raise HTTPException(status_code=404, detail="Item not found", headers={"X-Error": "missing"})

    @app.get("/closed")
    def closed() -> None:
        raise HTTPException(status_code=499, detail="Client closed request")

    @app.get("/admin")
    def admin() -> None:
        raise AccessDeniedError("Access is denied")

    @app.get("/boom")
    def boom() -> None:
        raise MyCustomException("boom")

    return app


@pytest.fixture()
def client_factory() -> Callable[..., TestClient]:
    def factory(settings: ErrorHandlingSettings | None = None, **kwargs: object) -> TestClient:
        app = _create_app(settings or ErrorHandlingSettings(), **kwargs)
        return TestClient(app, raise_server_exceptions=False)

    return factory


def test_body_validation_failure(client_factory) -> None:
    client = client_factory()

    response = client.post("/orders", json={"value": "", "value2": "too long"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "VALIDATION_FAILED"
    assert payload["message"] == "Validation failed for object='body'. Error count: 2"
    assert sorted((error["property"], error["code"]) for error in payload["fieldErrors"]) == [
        ("value", "INVALID_SIZE"),
        ("value2", "INVALID_SIZE"),
    ]
    assert "globalErrors" not in payload


def test_field_message_override(client_factory) -> None:
    client = client_factory(ErrorHandlingSettings(messages={"value.Size": "value must not be empty"}))

    response = client.post("/orders", json={"value": "", "value2": "ok"})

    assert response.json()["fieldErrors"] == [
        {"code": "INVALID_SIZE", "property": "value", "message": "value must not be empty", "rejectedValue": ""}
    ]


def test_malformed_json_body(client_factory) -> None:
    client = client_factory()

    response = client.post("/orders", content="{", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["code"] == "MESSAGE_NOT_READABLE"


def test_path_parameter_type_mismatch(client_factory) -> None:
    client = client_factory()

    response = client.get("/items/abc")

    assert response.status_code == 400
    assert response.json() == {
        "code": "ARGUMENT_TYPE_MISMATCH",
        "message": "Failed to convert value of type 'str' to required type 'int' for parameter 'item_id'",
        "expectedType": "int",
        "property": "item_id",
        "rejectedValue": "abc",
    }


def test_optimistic_locking_conflict(client_factory) -> None:
    client = client_factory()

    response = client.put("/orders/42")

    assert response.status_code == 409
    payload = response.json()
    assert payload["code"] == "OPTIMISTIC_LOCKING_ERROR"
    assert payload["identifier"] == 42
    assert payload["persistentClassName"] == "Order"


def test_http_exception_keeps_headers(client_factory) -> None:
    client = client_factory()

    response = client.get("/missing")

    assert response.status_code == 404
    assert response.headers["X-Error"] == "missing"
    assert response.json()["message"] == "Item not found"


def test_unregistered_status_code(client_factory) -> None:
    response = client_factory().get("/closed")

    assert response.status_code == 499
    assert response.json()["message"] == "Client closed request"


def test_unknown_route(client_factory) -> None:
    response = client_factory().get("/does-not-exist")

    assert response.status_code == 404
    assert response.json()["message"] == "Not Found"


def test_security_failure(client_factory) -> None:
    response = client_factory().get("/admin")

    assert response.status_code == 403
    assert response.json() == {"code": "ACCESS_DENIED", "message": "Access is denied"}


def test_unhandled_failure(client_factory) -> None:
    response = client_factory().get("/boom")

    assert response.status_code == 500
    assert response.json() == {"code": "MY_CUSTOM", "message": "boom"}


def test_status_in_body(client_factory) -> None:
    client = client_factory(ErrorHandlingSettings(http_status_in_json_response=True))

    assert client.get("/admin").json()["status"] == 403


def test_locale_resolver(client_factory) -> None:
    catalog = InMemoryMessageCatalog(
        {"AccessDeniedError": "Access denied"},
        translations={"nl": {"AccessDeniedError": "Toegang geweigerd"}},
    )

    def resolve_locale(request: Request) -> str | None:
        return request.headers.get("Accept-Language")

    client = client_factory(catalog=catalog, locale_resolver=resolve_locale)

    assert client.get("/admin", headers={"Accept-Language": "nl-BE"}).json()["message"] == "Toegang geweigerd"
    assert client.get("/admin").json()["message"] == "Access denied"


def test_pipeline_is_stored_on_app_state() -> None:
    app = _create_app(ErrorHandlingSettings())

    assert isinstance(app.state.error_handling, ErrorHandlingPipeline)


def test_disabled_settings_register_nothing() -> None:
    app = FastAPI()

    assert register_error_handlers(app, ErrorHandlingSettings(enabled=False)) is None
    assert not hasattr(app.state, "error_handling")


def test_translate_json_invalid() -> None:
    exc = RequestValidationError(
        [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error", "input": {}, "ctx": {"error": "Expecting value"}}]
    )

    failure = translate_request_validation_error(exc)

    assert isinstance(failure, HttpMessageNotReadableError)
    assert str(failure.__cause__) == "Expecting value"


def test_translate_query_parsing_error() -> None:
    exc = RequestValidationError(
        [{"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer", "input": "x"}]
    )

    failure = translate_request_validation_error(exc)

    assert isinstance(failure, MethodArgumentTypeMismatchError)
    assert (failure.name, failure.value, failure.required_type) == ("page", "x", "int")


def test_translate_mixed_sources() -> None:
    exc = RequestValidationError(
        [
            {"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer", "input": "x"},
            {"type": "missing", "loc": ("body", "value"), "msg": "Field required", "input": {}},
        ]
    )

    failure = translate_request_validation_error(exc)

    assert isinstance(failure, MethodArgumentNotValidError)
    assert failure.binding_result.object_name == "request"
    assert [error.field for error in failure.binding_result.field_errors] == ["query.page", "body.value"]
