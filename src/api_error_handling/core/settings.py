"""Error handling settings powered by :mod:`pydantic_settings`."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from http import HTTPStatus
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


def _load_defaults(path: Path = _DEFAULTS_PATH) -> dict[str, dict[str, str]]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    return {
        "codes": {str(key): str(value) for key, value in (payload.get("codes") or {}).items()},
        "messages": {str(key): str(value) for key, value in (payload.get("messages") or {}).items()},
    }


_DEFAULTS = _load_defaults()
DEFAULT_CODES: Mapping[str, str] = MappingProxyType(_DEFAULTS["codes"])
DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(_DEFAULTS["messages"])


class DefaultErrorCodeStrategy(str, Enum):
    """How a code is derived for failures without a declared or configured one."""

    FULL_QUALIFIED_NAME = "FULL_QUALIFIED_NAME"
    ALL_CAPS = "ALL_CAPS"


class ExceptionLogging(str, Enum):
    """Amount of detail logged for every failure handled by the pipeline."""

    NO_LOGGING = "NO_LOGGING"
    MESSAGE_ONLY = "MESSAGE_ONLY"
    WITH_STACKTRACE = "WITH_STACKTRACE"


class JsonFieldNames(BaseModel):
    """Names of the top-level members written by the response serializer."""

    model_config = ConfigDict(frozen=True)

    code: str = "code"
    message: str = "message"
    field_errors: str = "fieldErrors"
    global_errors: str = "globalErrors"


class ErrorHandlingSettings(BaseSettings):
    """Process-wide configuration of the failure classification pipeline.

    The override tables are exposed as read-only mappings and the model itself
    is frozen, so one instance can be shared by concurrent requests.
    """

    model_config = SettingsConfigDict(
        env_prefix="ERROR_HANDLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    enabled: bool = Field(
        default=True,
        description="Register the error handlers on the web application.",
    )
    http_statuses: Mapping[str, HTTPStatus] = Field(
        default_factory=dict,
        description="HTTP status per fully qualified failure type name.",
    )
    codes: Mapping[str, str] = Field(
        default_factory=dict,
        description="Error code overrides keyed by failure type, code or '<path>.<code>'.",
    )
    messages: Mapping[str, str] = Field(
        default_factory=dict,
        description="Message overrides keyed by failure type, code or '<path>.<code>'.",
    )
    default_error_code_strategy: DefaultErrorCodeStrategy = Field(
        default=DefaultErrorCodeStrategy.ALL_CAPS,
        description="Strategy used when no code is declared or configured.",
    )
    exception_logging: ExceptionLogging = Field(
        default=ExceptionLogging.MESSAGE_ONLY,
        description="How handled failures are logged.",
    )
    json_field_names: JsonFieldNames = Field(default_factory=JsonFieldNames)
    http_status_in_json_response: bool = Field(
        default=False,
        description="Add the numeric HTTP status to the serialized response.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging verbosity for the library's structured logs.",
    )

    @field_validator("http_statuses", mode="after")
    @classmethod
    def _freeze_http_statuses(cls, value: Mapping[str, HTTPStatus]) -> Mapping[str, HTTPStatus]:
        return MappingProxyType(dict(value))

    @field_validator("codes", mode="after")
    @classmethod
    def _merge_default_codes(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType({**DEFAULT_CODES, **value})

    @field_validator("messages", mode="after")
    @classmethod
    def _merge_default_messages(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType({**DEFAULT_MESSAGES, **value})

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def with_overrides(self, **changes: Any) -> "ErrorHandlingSettings":
        """Return a new settings snapshot with ``changes`` applied on top of this one."""

        data: dict[str, Any] = {name: getattr(self, name) for name in type(self).model_fields}
        for key in ("codes", "messages", "http_statuses"):
            data[key] = {**data[key], **changes.pop(key, {})}
        data.update(changes)
        return type(self)(**data)


@lru_cache
def get_settings() -> ErrorHandlingSettings:
    """Return a cached settings instance."""

    return ErrorHandlingSettings()


__all__ = [
    "DEFAULT_CODES",
    "DEFAULT_MESSAGES",
    "DefaultErrorCodeStrategy",
    "ErrorHandlingSettings",
    "ExceptionLogging",
    "JsonFieldNames",
    "get_settings",
]
