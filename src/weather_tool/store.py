"""Persistent store of configured providers and the default selection."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .codec import TAG_FIELD, ProviderCodec
from .exceptions import ConfigStoreError, DecodeError, MalformedDataError, NotConfiguredError
from .providers.base import WeatherProvider
from .redaction import sanitize_for_logging


class ConfigDocument(BaseModel):
    """On-disk shape of the store; provider records are decoded separately."""

    default: str | None = None
    providers: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ProviderConfig:
    """Named provider instances plus the name of the default one.

    The first provider added to an empty store becomes the default. Adding a
    name that already exists replaces its instance and keeps the default.
    """

    def __init__(self) -> None:
        self._default: str | None = None
        self._providers: dict[str, WeatherProvider] = {}

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    @property
    def default(self) -> str | None:
        return self._default

    def names(self) -> list[str]:
        return sorted(self._providers)

    def get(self, name: str) -> WeatherProvider | None:
        return self._providers.get(name)

    def add(self, name: str, provider: WeatherProvider) -> None:
        """Insert or replace ``provider`` under ``name``."""
        was_empty = not self._providers
        self._providers[name] = provider
        if was_empty:
            self._default = name

    def get_default(self) -> WeatherProvider | None:
        if self._default is None:
            return None
        return self._providers.get(self._default)

    def require_default(self) -> WeatherProvider:
        """Return the default provider, raising NotConfiguredError if there is none."""
        provider = self.get_default()
        if provider is None:
            raise NotConfiguredError(
                "No provider configured; run `weather configure <provider>` first."
            )
        return provider

    def set_default(self, name: str) -> bool:
        """Make ``name`` the default. Returns False if it is not configured."""
        if name not in self._providers:
            return False
        self._default = name
        return True

    def to_document(self, codec: ProviderCodec) -> dict[str, Any]:
        return {
            "default": self._default,
            "providers": {
                name: codec.encode(provider) for name, provider in sorted(self._providers.items())
            },
        }

    @classmethod
    def from_document(cls, document: Any, codec: ProviderCodec) -> ProviderConfig:
        """Decode a parsed document, raising DecodeError on any inconsistency."""
        try:
            parsed = ConfigDocument.model_validate(document)
        except ValidationError as exc:
            raise MalformedDataError(f"Config document has an invalid shape: {exc}") from exc

        config = cls()
        for name, record in parsed.providers.items():
            provider = codec.decode(record)
            if record.get(TAG_FIELD) != name:
                raise MalformedDataError(
                    f"Config entry {name!r} holds a {record.get(TAG_FIELD)!r} provider."
                )
            config._providers[name] = provider

        if parsed.default is not None and parsed.default not in config._providers:
            raise MalformedDataError(
                f"Default provider {parsed.default!r} is not among the configured providers."
            )
        config._default = parsed.default
        return config

    def safe_summary(self, codec: ProviderCodec) -> dict[str, Any]:
        """Return the document with credentials redacted, for logs and display."""
        return sanitize_for_logging(self.to_document(codec))


def default_config_path() -> Path:
    """Config file next to the running executable, with a ``.json`` extension."""
    executable = Path(sys.argv[0]).resolve() if sys.argv and sys.argv[0] else Path(sys.executable)
    return executable.with_suffix(".json")


def load_config(
    path: Path,
    codec: ProviderCodec,
    logger: logging.Logger,
    *,
    strict: bool = False,
) -> ProviderConfig:
    """Load the store from ``path``.

    A missing or empty file is a first run. An unreadable or undecodable file
    is logged and also treated as empty, unless ``strict`` is set, in which
    case the DecodeError propagates.
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No provider config at %s; starting empty", path)
        return ProviderConfig()
    except OSError as exc:
        logger.warning("Could not read provider config %s: %s", path, exc)
        return ProviderConfig()

    if not raw.strip():
        logger.debug("Provider config %s is empty; starting empty", path)
        return ProviderConfig()

    try:
        try:
            document = json.loads(raw)
        except ValueError as exc:
            # Includes UnicodeDecodeError for files that are not UTF-8.
            raise MalformedDataError(f"Config file is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise MalformedDataError("Config file is nested too deeply to parse.") from exc
        config = ProviderConfig.from_document(document, codec)
    except DecodeError as exc:
        if strict:
            raise
        logger.warning(
            "Ignoring unreadable provider config %s: %s",
            path,
            exc,
            extra={"config_path": str(path)},
        )
        return ProviderConfig()

    logger.debug("Loaded %d provider(s) from %s", len(config), path)
    return config


def save_config(path: Path, config: ProviderConfig, codec: ProviderCodec) -> None:
    """Write the whole store to ``path``, replacing any previous contents."""
    document = config.to_document(codec)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, ensure_ascii=False, indent=2)
            fh.write("\n")
    except OSError as exc:
        raise ConfigStoreError(f"Failed writing provider config {path}: {exc}") from exc
