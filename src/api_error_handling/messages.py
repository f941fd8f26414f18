"""Locale-aware message catalogs and the resolver used by every mapper."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

import yaml

from .core.errors import ConfigurationError
from .templating import escape_single_quotes, format_message

# Nested resolvable arguments are resolved this many levels deep; deeper ones
# contribute their default message.
MAX_ARGUMENT_DEPTH = 1

_INDEX_PATTERN = re.compile(r"\[[^\]]*\]")


@dataclass(frozen=True)
class MessageSourceResolvable:
    """A message reference: candidate codes, arguments and a default text.

    Instances can be passed as arguments of other messages, in which case
    they are looked up in the catalog as well.
    """

    codes: tuple[str, ...] = ()
    arguments: tuple[Any, ...] = ()
    default_message: str | None = None

    @classmethod
    def of(cls, code: str, default_message: str | None = None) -> "MessageSourceResolvable":
        return cls(codes=(code,), default_message=default_message)


def _type_name(value: type | str) -> str:
    if isinstance(value, str):
        return value
    if value.__module__ == "builtins":
        return value.__qualname__
    return f"{value.__module__}.{value.__qualname__}"


def resolve_message_codes(
    error_code: str,
    object_name: str | None = None,
    field: str | None = None,
    field_type: type | str | None = None,
) -> list[str]:
    """Expand an error code into catalog keys, most specific first.

    ``resolve_message_codes("NotNull", "user", "name", str)`` returns
    ``["NotNull.user.name", "NotNull.name", "NotNull.str", "NotNull"]``.
    Indexed fields (``items[0].sku``) are also tried without their indexes.
    """

    codes: list[str] = []
    if field:
        fields = [field]
        stripped = _INDEX_PATTERN.sub("", field)
        if stripped != field:
            fields.append(stripped)
        if object_name:
            codes.extend(f"{error_code}.{object_name}.{name}" for name in fields)
        codes.extend(f"{error_code}.{name}" for name in fields)
        if field_type is not None:
            codes.append(f"{error_code}.{_type_name(field_type)}")
    elif object_name:
        codes.append(f"{error_code}.{object_name}")
    codes.append(error_code)
    return list(dict.fromkeys(codes))


@runtime_checkable
class MessageCatalog(Protocol):
    """Source of message templates per locale."""

    def lookup(self, codes: Sequence[str], locale: str | None = None) -> str | None:
        """Return the template of the first code known for ``locale``, if any."""


def candidate_locales(locale: str | None) -> list[str]:
    """Return the bundle names searched for ``locale``: ``nl-BE`` -> ``nl_BE``, ``nl``, default."""

    if not locale:
        return [""]
    normalized = locale.replace("-", "_")
    parts = normalized.split("_")
    candidates = ["_".join(parts[:size]) for size in range(len(parts), 0, -1)]
    candidates.append("")
    return list(dict.fromkeys(candidates))


class InMemoryMessageCatalog:
    """Message catalog backed by plain mappings.

    ``messages`` is the default bundle, ``translations`` maps a locale such as
    ``"nl"`` or ``"nl_BE"`` to its own bundle.
    """

    def __init__(
        self,
        messages: Mapping[str, str] | None = None,
        *,
        translations: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        bundles: dict[str, dict[str, str]] = {"": dict(messages or {})}
        for locale, bundle in (translations or {}).items():
            bundles[locale.replace("-", "_")] = dict(bundle)
        self._bundles = bundles

    @property
    def locales(self) -> list[str]:
        return sorted(locale for locale in self._bundles if locale)

    def lookup(self, codes: Sequence[str], locale: str | None = None) -> str | None:
        candidates = candidate_locales(locale)
        for code in codes:
            for candidate in candidates:
                bundle = self._bundles.get(candidate)
                if bundle is not None and code in bundle:
                    return bundle[code]
        return None


class YamlMessageCatalog(InMemoryMessageCatalog):
    """Catalog loaded from ``messages.yaml`` and ``messages_<locale>.yaml`` files."""

    @classmethod
    def from_directory(cls, directory: Path | str, basename: str = "messages") -> "YamlMessageCatalog":
        root = Path(directory)
        default_path = root / f"{basename}.yaml"
        messages = _load_bundle(default_path) if default_path.is_file() else {}
        translations = {
            path.stem[len(basename) + 1 :]: _load_bundle(path)
            for path in sorted(root.glob(f"{basename}_*.yaml"))
        }
        return cls(messages, translations=translations)


def _load_bundle(path: Path) -> dict[str, str]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Message bundle {path} must contain a mapping", details={"path": str(path)})
    return dict(_flatten(payload))


def _flatten(payload: Mapping[Any, Any], prefix: str = "") -> Iterable[tuple[str, str]]:
    for key, value in payload.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            yield from _flatten(value, f"{name}.")
        else:
            yield name, str(value)


class MessageResolver:
    """Resolve messages through an optional :class:`MessageCatalog`."""

    def __init__(self, catalog: MessageCatalog | None = None) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> MessageCatalog | None:
        return self._catalog

    def resolve(
        self,
        codes: Sequence[str],
        arguments: Sequence[Any] | None = None,
        default_text: str | None = None,
        locale: str | None = None,
    ) -> str | None:
        """Resolve the first known code, falling back to ``default_text``.

        ``default_text`` is literal text: when arguments are present it is
        escaped before being used as a template, so it renders unchanged.
        Without a catalog the default text is returned as is.
        """

        if self._catalog is None:
            return default_text
        arguments = tuple(arguments or ())
        if arguments and default_text is not None:
            default_text = escape_single_quotes(default_text)
        return self.get_message(MessageSourceResolvable(tuple(codes), arguments, default_text), locale)

    def get_message(
        self,
        resolvable: MessageSourceResolvable,
        locale: str | None = None,
        *,
        depth: int = 0,
    ) -> str | None:
        if self._catalog is None:
            return resolvable.default_message
        arguments = self._resolve_arguments(resolvable.arguments, locale, depth)
        template = self._catalog.lookup(resolvable.codes, locale)
        if template is None:
            template = resolvable.default_message
        if template is None or not arguments:
            return template
        return format_message(template, arguments)

    def _resolve_arguments(self, arguments: Sequence[Any], locale: str | None, depth: int) -> list[Any]:
        resolved: list[Any] = []
        for argument in arguments:
            if not isinstance(argument, MessageSourceResolvable):
                resolved.append(argument)
            elif depth >= MAX_ARGUMENT_DEPTH:
                resolved.append(argument.default_message)
            else:
                resolved.append(self.get_message(argument, locale, depth=depth + 1))
        return resolved


__all__ = [
    "InMemoryMessageCatalog",
    "MessageCatalog",
    "MessageResolver",
    "MessageSourceResolvable",
    "YamlMessageCatalog",
    "candidate_locales",
    "resolve_message_codes",
]
