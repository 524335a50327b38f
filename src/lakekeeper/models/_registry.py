"""Variant registry for tagged (polymorphic) payloads.

Each sum type (storage profile, storage credential, delete profile) owns
one registry mapping its discriminator values to the variant class that
parses them. Decoding peeks at the discriminators before handing the whole
payload to the selected variant.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import PlainSerializer, PlainValidator
from pydantic import ValidationError as PydanticValidationError

from lakekeeper.errors import (
    DecodeError,
    InvalidPayloadError,
    UnknownVariantError,
    UsageError,
)
from lakekeeper.models._base import TaggedModel, to_kebab

T = TypeVar("T", bound=TaggedModel)


class VariantRegistry(Generic[T]):
    """Registry of the variants of one sum type.

    Attributes:
        family: Human-readable name of the sum type, used in error messages.
        fields: Attribute names of the discriminator fields.
    """

    def __init__(self, family: str, fields: tuple[str, ...] = ("type",)) -> None:
        self.family = family
        self.fields = fields
        self._variants: dict[tuple[str, ...], type[T]] = {}

    @property
    def wire_keys(self) -> tuple[str, ...]:
        return tuple(to_kebab(name) for name in self.fields)

    def register(self, variant: type[T]) -> type[T]:
        """Register a variant class under its discriminator values.

        Usable as a class decorator.

        Args:
            variant: The variant class to register.

        Returns:
            The variant class, unchanged.

        Raises:
            ValueError: If another variant already claims the same discriminator.
        """
        key = variant.discriminator_value()
        existing = self._variants.get(key)
        if existing is not None and existing is not variant:
            raise ValueError(
                f"{self.family} discriminator {key} already registered by {existing.__name__}"
            )
        self._variants[key] = variant
        return variant

    def get_variant(self, discriminator: tuple[str, ...]) -> type[T] | None:
        return self._variants.get(discriminator)

    def is_registered(self, discriminator: tuple[str, ...]) -> bool:
        return discriminator in self._variants

    @property
    def registered(self) -> list[tuple[str, ...]]:
        """Discriminator values of every registered variant."""
        return list(self._variants.keys())

    def peek(self, data: dict[str, Any]) -> tuple[Any, ...]:
        """Read the discriminator values of a payload without parsing the rest."""
        return tuple(data.get(key) for key in self.wire_keys)

    def decode(self, data: Any) -> T:
        """Decode a tagged payload into its variant.

        Args:
            data: A JSON object (already parsed), a JSON document, or an
                instance of one of the registered variants.

        Returns:
            The decoded variant.

        Raises:
            DecodeError: If ``data`` is not valid JSON.
            UnknownVariantError: If the discriminators match no variant.
            InvalidPayloadError: If the payload is not an object, a
                discriminator is not a string, or the selected variant
                rejects its fields.
        """
        if isinstance(data, TaggedModel):
            if type(data) in self._variants.values():
                return data  # type: ignore[return-value]
            raise InvalidPayloadError(self.family, f"unexpected variant {type(data).__name__}")

        if isinstance(data, str | bytes | bytearray):
            try:
                data = json.loads(data)
            except ValueError as e:
                raise DecodeError(f"invalid JSON for {self.family}: {e}") from e

        if not isinstance(data, dict):
            raise InvalidPayloadError(self.family, "expected a JSON object")

        discriminator = self.peek(data)
        for key, value in zip(self.wire_keys, discriminator, strict=True):
            if value is not None and not isinstance(value, str):
                raise InvalidPayloadError(self.family, f"{key} must be a string")
        variant = self._variants.get(discriminator)
        if variant is None:
            raise UnknownVariantError(self.family, discriminator)

        try:
            return variant.model_validate(data)
        except PydanticValidationError as e:
            raise InvalidPayloadError(self.family, str(e)) from e

    def encode(self, value: T) -> dict[str, Any]:
        """Serialize a variant to its wire object, discriminators first.

        Raises:
            UsageError: If ``value`` is not a registered variant.
        """
        if type(value) not in self._variants.values():
            raise UsageError(f"unsupported {self.family} variant: {type(value).__name__}")
        return value.to_dict()

    @property
    def validator(self) -> PlainValidator:
        """Pydantic hook decoding a model field through this registry.

        Usage:
            StorageProfileField = Annotated[
                StorageProfile, registry.validator, registry.serializer
            ]
        """
        decode: Callable[[Any], T] = self.decode
        return PlainValidator(decode)

    @property
    def serializer(self) -> PlainSerializer:
        """Pydantic hook encoding a model field through this registry."""
        return PlainSerializer(self.encode, return_type=dict[str, Any])
