"""Derivation and override lookup of stable error codes."""

from __future__ import annotations

import re

from .core.errors import ConfigurationError
from .core.settings import DefaultErrorCodeStrategy, ErrorHandlingSettings
from .failures.base import declared_error_code, failure_type_key

_EXCEPTION_SUFFIX = re.compile(r"Exception$")
_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z]+)")


def convert_to_all_caps(name: str) -> str:
    """``MyCustomException`` -> ``MY_CUSTOM``, ``MyCustomError`` -> ``MY_CUSTOM_ERROR``."""

    result = _EXCEPTION_SUFFIX.sub("", name, count=1)
    return _CASE_BOUNDARY.sub(r"\1_\2", result).upper()


class CodeResolver:
    """Resolve the error code of a failure and apply configured code overrides."""

    def __init__(self, settings: ErrorHandlingSettings) -> None:
        strategy = settings.default_error_code_strategy
        if strategy not in DefaultErrorCodeStrategy.__members__.values():
            raise ConfigurationError(
                f"Unknown default error code strategy: {strategy!r}",
                details={"strategy": str(strategy)},
            )
        self._settings = settings
        self._strategy = DefaultErrorCodeStrategy(strategy)

    def resolve_code(self, failure: BaseException) -> str:
        code = declared_error_code(failure)
        if code is not None:
            return code

        type_key = failure_type_key(type(failure))
        if self.has_override(type_key):
            return self.replace_with_override(type_key)

        if self._strategy is DefaultErrorCodeStrategy.FULL_QUALIFIED_NAME:
            return type_key
        return convert_to_all_caps(type(failure).__name__)

    def resolve_type_code(self, failure: BaseException) -> str:
        """Return the override for the failure's type key, or the type key itself."""

        return self.replace_with_override(failure_type_key(type(failure)))

    def resolve_field_code(self, path: str, base_code: str) -> str:
        field_specific = f"{path}.{base_code}"
        if self.has_override(field_specific):
            return self.replace_with_override(field_specific)
        return self.replace_with_override(base_code)

    def has_override(self, code: str) -> bool:
        return code in self._settings.codes

    def replace_with_override(self, code: str) -> str:
        return self._settings.codes.get(code, code)


__all__ = ["CodeResolver", "convert_to_all_caps"]
