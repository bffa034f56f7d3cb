"""Tests for tagged provider records."""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar

import httpx
import pytest

from weather_tool.codec import TAG_FIELD, ProviderCodec
from weather_tool.exceptions import MalformedDataError, UnknownTagError
from weather_tool.providers import DummyProvider, VisualCrossingProvider, WeatherProvider
from weather_tool.providers.models import Temperature, WeatherReport
from weather_tool.registry import default_registry


class _UnregisteredProvider(WeatherProvider):
    provider_name: ClassVar[str] = "unregistered"
    provider_description: ClassVar[str] = "Not known to the codec"

    def get_weather(self, location: str, day: date) -> WeatherReport:
        return WeatherReport(temperature=Temperature.celsius(0.0), condition="Unknown")


def _codec() -> ProviderCodec:
    return default_registry().codec()


def test_encode_writes_tag_and_fields() -> None:
    record = _codec().encode(VisualCrossingProvider(api_key="SECRET", base_url="https://x.test"))
    assert record == {
        TAG_FIELD: "vc",
        "api_key": "SECRET",
        "base_url": "https://x.test",
        "timeout_seconds": 10.0,
    }


def test_encode_dummy_is_tag_only() -> None:
    assert _codec().encode(DummyProvider()) == {TAG_FIELD: "dummy"}


def test_encode_unregistered_type_raises() -> None:
    with pytest.raises(UnknownTagError):
        _codec().encode(_UnregisteredProvider())


@pytest.mark.parametrize(
    "provider",
    [DummyProvider(), VisualCrossingProvider(api_key="SECRET", base_url="https://x.test")],
)
def test_round_trip_restores_concrete_type(provider: WeatherProvider) -> None:
    codec = _codec()
    restored = codec.decode(codec.encode(provider))
    assert type(restored) is type(provider)
    assert restored == provider


def test_round_trip_preserves_weather_behaviour() -> None:
    codec = _codec()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"days": [{"temp": 3.0, "conditions": request.url.params["key"]}]},
        )

    original = VisualCrossingProvider(api_key="SECRET", base_url="https://x.test")
    restored = codec.decode(codec.encode(original))
    assert isinstance(restored, VisualCrossingProvider)
    transport = httpx.MockTransport(handler)
    original._transport = transport
    restored._transport = transport

    for location, day in [("Minsk", date(2023, 5, 1)), ("Lima", date(2024, 2, 29))]:
        assert restored.get_weather(location, day) == original.get_weather(location, day)

    dummy = DummyProvider()
    assert codec.decode(codec.encode(dummy)).get_weather("Minsk", date(2023, 5, 1)) == (
        dummy.get_weather("Minsk", date(2023, 5, 1))
    )


def test_every_registered_type_round_trips() -> None:
    registry = default_registry()
    codec = registry.codec()
    for entry in registry.entries():
        provider = entry.factory()
        assert codec.decode(codec.encode(provider)) == provider


def test_decode_unknown_tag_raises() -> None:
    with pytest.raises(UnknownTagError) as excinfo:
        _codec().decode({TAG_FIELD: "openweather", "api_key": "x"})
    assert excinfo.value.tag == "openweather"


@pytest.mark.parametrize(
    "record",
    [
        [],
        "vc",
        None,
        {},
        {TAG_FIELD: ""},
        {TAG_FIELD: 3},
        {TAG_FIELD: "vc", "timeout_seconds": "soon"},
        {TAG_FIELD: "vc", "api_key": ["not", "a", "string"]},
    ],
)
def test_decode_malformed_record_raises(record: Any) -> None:
    with pytest.raises(MalformedDataError):
        _codec().decode(record)


def test_decode_fills_defaults_for_missing_fields() -> None:
    restored = _codec().decode({TAG_FIELD: "vc", "api_key": "SECRET"})
    assert isinstance(restored, VisualCrossingProvider)
    assert restored.api_key == "SECRET"
    assert restored.timeout_seconds == 10.0


def test_codec_only_decodes_its_own_types() -> None:
    codec = ProviderCodec([DummyProvider])
    assert codec.tags == ["dummy"]
    with pytest.raises(UnknownTagError):
        codec.decode({TAG_FIELD: "vc", "api_key": "SECRET"})


def test_duplicate_tags_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        ProviderCodec([DummyProvider, DummyProvider])
