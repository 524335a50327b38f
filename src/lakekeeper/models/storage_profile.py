"""Storage profiles: where a warehouse keeps its data.

A storage profile is one of three variants, selected on the wire by the
``type`` field:

- ``s3``: AWS S3 or any S3-compatible object store.
- ``adls``: Azure Data Lake Storage Gen2.
- ``gcs``: Google Cloud Storage.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from lakekeeper.errors import ValidationError
from lakekeeper.models._base import TaggedModel
from lakekeeper.models._registry import VariantRegistry

BUCKET_MIN_LENGTH = 3
BUCKET_MAX_LENGTH = 64


class StorageFamily(str, Enum):
    """Storage backends a warehouse can use."""

    S3 = "s3"
    ADLS = "adls"
    GCS = "gcs"


class S3Flavor(str, Enum):
    """S3 implementation behind the endpoint."""

    AWS = "aws"
    S3_COMPAT = "s3"


class RemoteSigningURLStyle(str, Enum):
    """How remote signing locates the bucket in a request URL."""

    AUTO = "auto"
    PATH_STYLE = "path-style"
    VIRTUAL_HOST = "virtual-host"


def _check_bucket(bucket: str) -> None:
    if not BUCKET_MIN_LENGTH <= len(bucket) <= BUCKET_MAX_LENGTH:
        raise ValidationError(
            f"bucket name must be between {BUCKET_MIN_LENGTH} and "
            f"{BUCKET_MAX_LENGTH} characters, got {len(bucket)}",
            field="bucket",
        )


storage_profiles: VariantRegistry[S3StorageProfile | ADLSStorageProfile | GCSStorageProfile] = (
    VariantRegistry("storage profile")
)


@storage_profiles.register
class S3StorageProfile(TaggedModel):
    """Storage settings for S3 or S3-compatible storage.

    When ``sts_enabled`` is true, Lakekeeper vends credentials by assuming
    ``sts_role_arn``, falling back to ``assume_role_arn``; one of the two
    must be set.
    """

    type: Literal["s3"] = "s3"
    bucket: str
    region: str
    sts_enabled: bool = False
    endpoint: str | None = None
    flavor: S3Flavor | None = None
    key_prefix: str | None = None
    path_style_access: bool | None = None
    push_s3_delete_disabled: bool | None = None
    assume_role_arn: str | None = None
    aws_kms_key_arn: str | None = None
    remote_signing_url_style: RemoteSigningURLStyle | None = None
    sts_role_arn: str | None = None
    sts_token_validity_seconds: int | None = None
    allow_alternative_protocols: bool | None = None

    def check_invariants(self) -> None:
        _check_bucket(self.bucket)
        if self.endpoint is not None and not self.endpoint.endswith("/"):
            raise ValidationError("endpoint must end with '/'", field="endpoint")
        if self.sts_enabled and not (self.sts_role_arn or self.assume_role_arn):
            raise ValidationError(
                "in order to activate STS, either sts_role_arn or assume_role_arn must be set",
                field="sts_enabled",
            )


@storage_profiles.register
class ADLSStorageProfile(TaggedModel):
    """Storage settings for Azure Data Lake Storage."""

    type: Literal["adls"] = "adls"
    account_name: str
    filesystem: str
    authority_host: str | None = None
    host: str | None = None
    key_prefix: str | None = None
    sas_token_validity_seconds: int | None = None
    allow_alternative_protocols: bool | None = None


@storage_profiles.register
class GCSStorageProfile(TaggedModel):
    """Storage settings for Google Cloud Storage."""

    type: Literal["gcs"] = "gcs"
    bucket: str
    key_prefix: str | None = None

    def check_invariants(self) -> None:
        _check_bucket(self.bucket)


StorageProfile = S3StorageProfile | ADLSStorageProfile | GCSStorageProfile

StorageProfileField = Annotated[
    StorageProfile,
    storage_profiles.validator,
    storage_profiles.serializer,
]


def decode_storage_profile(data: object) -> StorageProfile:
    """Decode a storage profile from its wire form."""
    return storage_profiles.decode(data)


def encode_storage_profile(profile: StorageProfile) -> dict[str, object]:
    """Encode a storage profile to its wire form."""
    return storage_profiles.encode(profile)
