"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict

from .models import WeatherReport


class WeatherProvider(BaseModel, ABC):
    """Base contract for weather backends.

    Instance fields are the provider's persisted state. ``provider_name`` is
    the registry key and the serialization tag, so it must never change once
    a provider has been released.
    """

    model_config = ConfigDict(frozen=True)

    provider_name: ClassVar[str]
    provider_description: ClassVar[str]
    # Field holding a secret the CLI collects interactively, if any.
    credential_field: ClassVar[str | None] = None

    @abstractmethod
    def get_weather(self, location: str, day: date) -> WeatherReport:
        """Return the weather for ``location`` on ``day``.

        Raises a ``ProviderError`` subclass when the backend fails.
        """

    def with_credential(self, value: str) -> Self:
        """Return a copy of this provider with its credential field set."""
        if self.credential_field is None:
            raise TypeError(f"Provider {self.provider_name!r} takes no credential.")
        return self.model_copy(update={self.credential_field: value})
