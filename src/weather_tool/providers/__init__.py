"""Weather provider implementations."""

from .base import WeatherProvider
from .dummy import DummyProvider
from .models import Temperature, WeatherReport
from .visualcrossing import VisualCrossingProvider

__all__ = [
    "DummyProvider",
    "Temperature",
    "VisualCrossingProvider",
    "WeatherProvider",
    "WeatherReport",
]
