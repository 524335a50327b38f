"""Base classes shared by every wire model.

All Lakekeeper management payloads use kebab-case keys on the wire; the
models expose snake_case attributes and translate through aliases.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


def to_kebab(name: str) -> str:
    """Translate a snake_case attribute name to its kebab-case wire key."""
    return name.replace("_", "-")


class WireModel(BaseModel):
    """Immutable model serialized with kebab-case keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_kebab,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire representation, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def check_invariants(self) -> None:
        """Raise ``ValidationError`` if the value may not be sent as-is.

        The base implementation accepts everything.
        """


class TaggedModel(WireModel):
    """A variant of a sum type, identified by one or more discriminator fields.

    Subclasses declare their discriminators as ``Literal`` fields with a
    default, placed before any other field so they serialize first.
    """

    discriminator_fields: ClassVar[tuple[str, ...]] = ("type",)

    @classmethod
    def discriminator_value(cls) -> tuple[str, ...]:
        """Return the discriminator values identifying this variant."""
        return tuple(cls.model_fields[name].default for name in cls.discriminator_fields)

    @property
    def discriminator(self) -> tuple[str, ...]:
        return self.discriminator_value()

    @classmethod
    def build(cls, **fields: Any) -> Any:
        """Construct the variant and check it can be sent.

        Args:
            **fields: Variant fields, by attribute name.

        Returns:
            The constructed variant.

        Raises:
            ValidationError: If an invariant of the variant is violated.
        """
        value = cls(**fields)
        value.check_invariants()
        return value
