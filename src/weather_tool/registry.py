"""Catalog of the built-in weather providers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .codec import ProviderCodec
from .exceptions import UnknownProviderError
from .providers import DummyProvider, VisualCrossingProvider
from .providers.base import WeatherProvider

ProviderFactory = Callable[[], WeatherProvider]


@dataclass(frozen=True)
class ProviderEntry:
    """Registry row: identity of a provider type and how to build one."""

    name: str
    description: str
    provider_type: type[WeatherProvider]
    factory: ProviderFactory

    @property
    def needs_credential(self) -> bool:
        return self.provider_type.credential_field is not None


class ProviderRegistry:
    """Read-only mapping of provider name to description and factory.

    Factories take no arguments and do no I/O; they return a default-shaped
    instance that the caller may complete (e.g. with a credential).
    """

    def __init__(self, provider_types: Iterable[type[WeatherProvider]]) -> None:
        entries: dict[str, ProviderEntry] = {}
        for provider_type in provider_types:
            name = provider_type.provider_name
            if name in entries:
                raise ValueError(f"Duplicate provider name {name!r}.")
            entries[name] = ProviderEntry(
                name=name,
                description=provider_type.provider_description,
                provider_type=provider_type,
                factory=provider_type,
            )
        self._entries: Mapping[str, ProviderEntry] = MappingProxyType(entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def provider_types(self) -> list[type[WeatherProvider]]:
        return [entry.provider_type for entry in self.entries()]

    def entries(self) -> list[ProviderEntry]:
        """Return all entries ordered by name."""
        return [self._entries[name] for name in sorted(self._entries)]

    def get(self, name: str) -> ProviderEntry | None:
        return self._entries.get(name)

    def resolve(self, name: str) -> ProviderFactory | None:
        """Return the factory for ``name``, or None if it is not registered."""
        entry = self._entries.get(name)
        return entry.factory if entry is not None else None

    def create(self, name: str) -> WeatherProvider:
        """Build a new default-configured provider, raising UnknownProviderError."""
        factory = self.resolve(name)
        if factory is None:
            raise UnknownProviderError(name)
        return factory()

    def codec(self) -> ProviderCodec:
        """Return a codec that decodes exactly the registered provider types."""
        return ProviderCodec(self.provider_types)


def default_registry() -> ProviderRegistry:
    """Build the registry of providers shipped with the tool."""
    return ProviderRegistry([DummyProvider, VisualCrossingProvider])
