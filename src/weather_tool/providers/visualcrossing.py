"""Visual Crossing (weather.visualcrossing.com) weather provider implementation."""

from __future__ import annotations

import logging
from datetime import date
from typing import ClassVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from ..exceptions import ApiRejectedError, AuthenticationFailedError, ProviderFailureError
from ..redaction import sanitize_text
from .base import WeatherProvider
from .models import Temperature, WeatherReport

BASE_URL = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
DEFAULT_TIMEOUT_SECONDS = 10.0

logger = logging.getLogger("weather_tool.providers.visualcrossing")


class _VisualCrossingDay(BaseModel):
    temp: float
    conditions: str
    description: str = ""


class _VisualCrossingResponse(BaseModel):
    days: list[_VisualCrossingDay] = Field(default_factory=list)


class VisualCrossingProvider(WeatherProvider):
    """Fetches daily weather from the Visual Crossing timeline API."""

    provider_name: ClassVar[str] = "vc"
    provider_description: ClassVar[str] = "Visual Crossing weather provider"
    credential_field: ClassVar[str | None] = "api_key"

    api_key: str = Field(default="", repr=False)
    base_url: str = BASE_URL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    # Tests swap in httpx.MockTransport; never persisted.
    _transport: httpx.BaseTransport | None = PrivateAttr(default=None)

    def get_weather(self, location: str, day: date) -> WeatherReport:
        url = f"{self.base_url.rstrip('/')}/{quote(location, safe='')}/{day.isoformat()}"
        params = {
            "key": self.api_key,
            "unitGroup": "metric",
            "include": "days",
            "elements": "datetime,temp,conditions,description",
        }
        try:
            with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise ProviderFailureError(
                f"Visual Crossing request failed: {sanitize_text(str(exc))}"
            ) from exc

        status = response.status_code
        if status == 401:
            raise AuthenticationFailedError()
        if status == 400:
            raise ApiRejectedError(response.text)
        if status != 200:
            logger.warning(
                "Visual Crossing returned HTTP %d for %s",
                status,
                location,
                extra={"provider": self.provider_name, "status_code": status},
            )
            raise ProviderFailureError(
                f"Visual Crossing request failed with status {status}: "
                f"{sanitize_text(response.text[:300])}"
            )

        try:
            payload = _VisualCrossingResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ProviderFailureError(
                f"Visual Crossing returned an unparsable response: {exc.error_count()} error(s)"
            ) from exc
        return self._to_report(payload)

    @staticmethod
    def _to_report(payload: _VisualCrossingResponse) -> WeatherReport:
        if not payload.days:
            raise ApiRejectedError("no weather data in response")

        first = payload.days[0]
        if first.description:
            condition = f"{first.conditions} ({first.description})"
        else:
            condition = first.conditions
        return WeatherReport(temperature=Temperature.celsius(first.temp), condition=condition)
