"""Typed models for weather reports."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

# Discriminator for temperature units. Only Celsius exists today; new units
# are added here and in UNIT_SYMBOLS.
TemperatureUnit = Literal["C"]

UNIT_SYMBOLS: dict[str, str] = {"C": "C"}


class Temperature(BaseModel):
    """A temperature measurement tagged with its unit."""

    model_config = ConfigDict(frozen=True)

    unit: TemperatureUnit = "C"
    value: float

    @classmethod
    def celsius(cls, value: float) -> Temperature:
        return cls(unit="C", value=value)

    def __str__(self) -> str:
        # Shortest exact form, without a trailing ".0" on whole numbers.
        value = repr(float(self.value))
        if value.endswith(".0"):
            value = value[:-2]
        return f"{value}{UNIT_SYMBOLS[self.unit]}"


class WeatherReport(BaseModel):
    """Weather for one location and date as returned by a provider."""

    model_config = ConfigDict(frozen=True)

    temperature: Temperature
    condition: str

    def __str__(self) -> str:
        return f"{self.temperature}, {self.condition}"
