"""Pytest fixtures shared by the error handling test suite."""

from __future__ import annotations

import os
from typing import Callable, Iterator, Mapping, Sequence

import pytest

from api_error_handling.core.settings import ErrorHandlingSettings, get_settings
from api_error_handling.mappers import ApiExceptionMapper
from api_error_handling.messages import InMemoryMessageCatalog, MessageCatalog
from api_error_handling.pipeline import ErrorHandlingPipeline, build_pipeline

PipelineFactory = Callable[..., ErrorHandlingPipeline]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in list(os.environ):
        if name.upper().startswith("ERROR_HANDLING_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> ErrorHandlingSettings:
    return ErrorHandlingSettings()


@pytest.fixture()
def make_pipeline() -> PipelineFactory:
    """Build a pipeline from override tables and an optional default message bundle."""

    def factory(
        *,
        codes: Mapping[str, str] | None = None,
        messages: Mapping[str, str] | None = None,
        catalog: MessageCatalog | Mapping[str, str] | None = None,
        mappers: Sequence[ApiExceptionMapper] = (),
        **overrides: object,
    ) -> ErrorHandlingPipeline:
        settings = ErrorHandlingSettings(codes=dict(codes or {}), messages=dict(messages or {}), **overrides)
        if isinstance(catalog, Mapping):
            catalog = InMemoryMessageCatalog(catalog)
        return build_pipeline(settings, catalog, mappers)

    return factory
