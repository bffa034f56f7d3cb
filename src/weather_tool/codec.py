"""Tagged JSON records for persisting provider instances.

A record is a JSON object holding the provider's own fields plus a
``"provider"`` tag equal to its ``provider_name``. Decoding picks the
concrete type from the tag alone, so one document can hold any mix of
registered providers. The set of decodable types is fixed when the codec is
constructed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .exceptions import MalformedDataError, UnknownTagError
from .providers.base import WeatherProvider

TAG_FIELD = "provider"


class ProviderCodec:
    """Encodes and decodes providers for a closed set of registered types."""

    def __init__(self, provider_types: Iterable[type[WeatherProvider]]) -> None:
        types: dict[str, type[WeatherProvider]] = {}
        for provider_type in provider_types:
            tag = provider_type.provider_name
            if not tag:
                raise ValueError(f"{provider_type.__name__} has an empty provider_name.")
            if TAG_FIELD in provider_type.model_fields:
                raise ValueError(
                    f"{provider_type.__name__} declares a field named {TAG_FIELD!r}, "
                    "which is reserved for the record tag."
                )
            if tag in types:
                raise ValueError(f"Duplicate provider tag {tag!r}.")
            types[tag] = provider_type
        self._types: Mapping[str, type[WeatherProvider]] = MappingProxyType(types)

    @property
    def tags(self) -> list[str]:
        return sorted(self._types)

    def encode(self, provider: WeatherProvider) -> dict[str, Any]:
        """Return the tagged record for ``provider``."""
        tag = type(provider).provider_name
        if self._types.get(tag) is not type(provider):
            # Writing an unregistered type would produce a record nobody can decode.
            raise UnknownTagError(tag)
        return {TAG_FIELD: tag, **provider.model_dump(mode="json")}

    def decode(self, record: Any) -> WeatherProvider:
        """Rebuild the concrete provider described by ``record``."""
        if not isinstance(record, Mapping):
            raise MalformedDataError(
                f"Provider record must be an object, got {type(record).__name__}."
            )
        tag = record.get(TAG_FIELD)
        if not isinstance(tag, str) or not tag:
            raise MalformedDataError(f"Provider record is missing a {TAG_FIELD!r} tag.")

        provider_type = self._types.get(tag)
        if provider_type is None:
            raise UnknownTagError(tag)

        fields = {key: value for key, value in record.items() if key != TAG_FIELD}
        try:
            return provider_type.model_validate(fields)
        except ValidationError as exc:
            raise MalformedDataError(
                f"Provider record for {tag!r} has invalid fields: "
                f"{', '.join(str(err['loc'][0]) for err in exc.errors() if err['loc'])}"
            ) from exc
