"""Delete profiles: what happens to tabular data when it is dropped."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import AliasChoices, ConfigDict, Field

from lakekeeper.errors import ValidationError
from lakekeeper.models._base import TaggedModel
from lakekeeper.models._registry import VariantRegistry

INT32_MAX = 2**31 - 1


class DeleteProfileType(str, Enum):
    """Deletion policies of a warehouse."""

    HARD = "hard"
    SOFT = "soft"


delete_profiles: VariantRegistry[HardDeleteProfile | SoftDeleteProfile] = VariantRegistry(
    "delete profile"
)


@delete_profiles.register
class HardDeleteProfile(TaggedModel):
    """Dropped tables are deleted immediately."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["hard"] = "hard"


@delete_profiles.register
class SoftDeleteProfile(TaggedModel):
    """Dropped tables are kept for ``expiration_seconds`` before deletion."""

    type: Literal["soft"] = "soft"
    expiration_seconds: int = Field(
        validation_alias=AliasChoices(
            "expired-seconds", "expiration-seconds", "expiration_seconds"
        ),
        serialization_alias="expired-seconds",
    )

    def check_invariants(self) -> None:
        if not 0 <= self.expiration_seconds <= INT32_MAX:
            raise ValidationError(
                f"expiration_seconds must be between 0 and {INT32_MAX}",
                field="expiration_seconds",
            )


DeleteProfile = HardDeleteProfile | SoftDeleteProfile

DeleteProfileField = Annotated[
    DeleteProfile,
    delete_profiles.validator,
    delete_profiles.serializer,
]


def new_delete_profile(
    profile_type: DeleteProfileType | str,
    expiration_seconds: int | None = None,
) -> DeleteProfile:
    """Build a delete profile from a type name and an optional expiration.

    Args:
        profile_type: ``hard`` or ``soft``.
        expiration_seconds: Retention window; required for ``soft``,
            rejected for ``hard``.

    Returns:
        The delete profile variant.

    Raises:
        ValidationError: If the expiration does not match the type.
    """
    try:
        kind = DeleteProfileType(profile_type)
    except ValueError as e:
        raise ValidationError(
            f"unsupported delete profile type: {profile_type}", field="type"
        ) from e

    if kind is DeleteProfileType.HARD:
        if expiration_seconds is not None:
            raise ValidationError(
                "expiration_seconds can not be set for hard delete profiles",
                field="expiration_seconds",
            )
        return HardDeleteProfile()

    if expiration_seconds is None:
        raise ValidationError(
            "expiration_seconds is required for soft delete profiles",
            field="expiration_seconds",
        )
    return SoftDeleteProfile.build(expiration_seconds=expiration_seconds)


def decode_delete_profile(data: object) -> DeleteProfile:
    """Decode a delete profile from its wire form."""
    return delete_profiles.decode(data)


def encode_delete_profile(profile: DeleteProfile) -> dict[str, object]:
    """Encode a delete profile to its wire form."""
    return delete_profiles.encode(profile)
