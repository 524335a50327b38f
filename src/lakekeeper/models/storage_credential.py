"""Storage credentials: the secrets Lakekeeper uses to reach a warehouse's storage.

Credentials are write-only: the server never returns them. Each variant is
selected on the wire by the pair ``(type, credential-type)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from lakekeeper.models._base import TaggedModel
from lakekeeper.models._registry import VariantRegistry


class CredentialFamily(str, Enum):
    """Storage backends a credential can authenticate against."""

    S3 = "s3"
    AZ = "az"
    GCS = "gcs"


class StorageCredentialModel(TaggedModel):
    """Base class of all storage credential variants."""

    discriminator_fields: ClassVar[tuple[str, ...]] = ("type", "credential_type")


storage_credentials: VariantRegistry[StorageCredentialModel] = VariantRegistry(
    "storage credential", fields=("type", "credential_type")
)


# S3


@storage_credentials.register
class S3AccessKeyCredential(StorageCredentialModel):
    """Static AWS access key pair."""

    type: Literal["s3"] = "s3"
    credential_type: Literal["access-key"] = "access-key"
    aws_access_key_id: str
    aws_secret_access_key: str
    external_id: str | None = None


@storage_credentials.register
class S3SystemIdentityCredential(StorageCredentialModel):
    """Use the AWS identity of the Lakekeeper server itself."""

    type: Literal["s3"] = "s3"
    credential_type: Literal["aws-system-identity"] = "aws-system-identity"
    external_id: str


@storage_credentials.register
class CloudflareR2Credential(StorageCredentialModel):
    """Cloudflare R2 access key plus the API token used for downscoped credentials."""

    type: Literal["s3"] = "s3"
    credential_type: Literal["cloudflare-r2"] = "cloudflare-r2"
    access_key_id: str
    secret_access_key: str
    account_id: str
    token: str


# Azure


@storage_credentials.register
class AZClientCredentials(StorageCredentialModel):
    """Azure service principal."""

    type: Literal["az"] = "az"
    credential_type: Literal["client-credentials"] = "client-credentials"
    client_id: str
    client_secret: str
    tenant_id: str


@storage_credentials.register
class AZSharedAccessKeyCredential(StorageCredentialModel):
    type: Literal["az"] = "az"
    credential_type: Literal["shared-access-key"] = "shared-access-key"
    key: str


@storage_credentials.register
class AZSystemIdentityCredential(StorageCredentialModel):
    type: Literal["az"] = "az"
    credential_type: Literal["azure-system-identity"] = "azure-system-identity"


# Google Cloud Storage


class GCSServiceKey(BaseModel):
    """Google service-account key file, as downloaded from the console.

    Keys keep their snake_case names on the wire.
    """

    model_config = ConfigDict(frozen=True)

    type: str = "service_account"
    project_id: str
    private_key_id: str
    private_key: str
    client_email: str
    client_id: str
    auth_uri: str
    token_uri: str
    auth_provider_x509_cert_url: str
    client_x509_cert_url: str
    universe_domain: str | None = None


@storage_credentials.register
class GCSServiceAccountKeyCredential(StorageCredentialModel):
    type: Literal["gcs"] = "gcs"
    credential_type: Literal["service-account-key"] = "service-account-key"
    key: GCSServiceKey


@storage_credentials.register
class GCSSystemIdentityCredential(StorageCredentialModel):
    type: Literal["gcs"] = "gcs"
    credential_type: Literal["gcp-system-identity"] = "gcp-system-identity"


StorageCredential = (
    S3AccessKeyCredential
    | S3SystemIdentityCredential
    | CloudflareR2Credential
    | AZClientCredentials
    | AZSharedAccessKeyCredential
    | AZSystemIdentityCredential
    | GCSServiceAccountKeyCredential
    | GCSSystemIdentityCredential
)

StorageCredentialField = Annotated[
    StorageCredential,
    storage_credentials.validator,
    storage_credentials.serializer,
]


def decode_storage_credential(data: object) -> StorageCredentialModel:
    """Decode a storage credential from its wire form."""
    return storage_credentials.decode(data)


def encode_storage_credential(credential: StorageCredentialModel) -> dict[str, object]:
    """Encode a storage credential to its wire form."""
    return storage_credentials.encode(credential)
