"""Offline reference provider that always reports the same weather."""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from .base import WeatherProvider
from .models import Temperature, WeatherReport


class DummyProvider(WeatherProvider):
    """Returns a fixed sunny report for any location and date."""

    provider_name: ClassVar[str] = "dummy"
    provider_description: ClassVar[str] = "Dummy provider for testing (always sunny)"

    def get_weather(self, location: str, day: date) -> WeatherReport:
        return WeatherReport(temperature=Temperature.celsius(20.5), condition="Sunny")
