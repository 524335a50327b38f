"""Wire models of the Lakekeeper management API.

Polymorphic values (storage profiles, storage credentials, delete
profiles) are tagged variants decoded through a per-family registry;
every other payload is a plain immutable record.
"""

from lakekeeper.models._base import TaggedModel, WireModel
from lakekeeper.models._registry import VariantRegistry
from lakekeeper.models.delete_profile import (
    DeleteProfile,
    DeleteProfileType,
    HardDeleteProfile,
    SoftDeleteProfile,
    decode_delete_profile,
    delete_profiles,
    encode_delete_profile,
    new_delete_profile,
)
from lakekeeper.models.permission import (
    AssigneeType,
    Assignment,
    Assignments,
    ProjectAssignment,
    ProjectAssignmentType,
    RoleAssignment,
    RoleAssignmentType,
    ServerAssignment,
    ServerAssignmentType,
    SetManagedAccessOptions,
    UpdatePermissionsOptions,
    WarehouseAssignment,
    WarehouseAssignmentType,
)
from lakekeeper.models.project import (
    CreateProjectOptions,
    Project,
    RenameProjectOptions,
)
from lakekeeper.models.role import (
    CreateRoleOptions,
    ListRolesOptions,
    Role,
    UpdateRoleOptions,
)
from lakekeeper.models.server import BootstrapServerOptions, ServerInfo
from lakekeeper.models.storage_credential import (
    AZClientCredentials,
    AZSharedAccessKeyCredential,
    AZSystemIdentityCredential,
    CloudflareR2Credential,
    CredentialFamily,
    GCSServiceAccountKeyCredential,
    GCSServiceKey,
    GCSSystemIdentityCredential,
    S3AccessKeyCredential,
    S3SystemIdentityCredential,
    StorageCredential,
    decode_storage_credential,
    encode_storage_credential,
    storage_credentials,
)
from lakekeeper.models.storage_profile import (
    ADLSStorageProfile,
    GCSStorageProfile,
    RemoteSigningURLStyle,
    S3Flavor,
    S3StorageProfile,
    StorageFamily,
    StorageProfile,
    decode_storage_profile,
    encode_storage_profile,
    storage_profiles,
)
from lakekeeper.models.user import (
    ListUsersOptions,
    ProvisionUserOptions,
    UpdateUserOptions,
    User,
    UserType,
)
from lakekeeper.models.warehouse import (
    CreateWarehouseOptions,
    DeleteWarehouseOptions,
    ListWarehousesOptions,
    RenameWarehouseOptions,
    UpdateDeleteProfileOptions,
    UpdateStorageCredentialOptions,
    UpdateStorageProfileOptions,
    Warehouse,
    WarehouseStatus,
)

__all__ = [
    # Base classes
    "TaggedModel",
    "VariantRegistry",
    "WireModel",
    # Storage profiles
    "ADLSStorageProfile",
    "GCSStorageProfile",
    "RemoteSigningURLStyle",
    "S3Flavor",
    "S3StorageProfile",
    "StorageFamily",
    "StorageProfile",
    "decode_storage_profile",
    "encode_storage_profile",
    "storage_profiles",
    # Storage credentials
    "AZClientCredentials",
    "AZSharedAccessKeyCredential",
    "AZSystemIdentityCredential",
    "CloudflareR2Credential",
    "CredentialFamily",
    "GCSServiceAccountKeyCredential",
    "GCSServiceKey",
    "GCSSystemIdentityCredential",
    "S3AccessKeyCredential",
    "S3SystemIdentityCredential",
    "StorageCredential",
    "decode_storage_credential",
    "encode_storage_credential",
    "storage_credentials",
    # Delete profiles
    "DeleteProfile",
    "DeleteProfileType",
    "HardDeleteProfile",
    "SoftDeleteProfile",
    "decode_delete_profile",
    "delete_profiles",
    "encode_delete_profile",
    "new_delete_profile",
    # Permissions
    "AssigneeType",
    "Assignment",
    "Assignments",
    "ProjectAssignment",
    "ProjectAssignmentType",
    "RoleAssignment",
    "RoleAssignmentType",
    "ServerAssignment",
    "ServerAssignmentType",
    "SetManagedAccessOptions",
    "UpdatePermissionsOptions",
    "WarehouseAssignment",
    "WarehouseAssignmentType",
    # Records and options
    "BootstrapServerOptions",
    "CreateProjectOptions",
    "CreateRoleOptions",
    "CreateWarehouseOptions",
    "DeleteWarehouseOptions",
    "ListRolesOptions",
    "ListUsersOptions",
    "ListWarehousesOptions",
    "Project",
    "ProvisionUserOptions",
    "RenameProjectOptions",
    "RenameWarehouseOptions",
    "Role",
    "ServerInfo",
    "UpdateDeleteProfileOptions",
    "UpdateRoleOptions",
    "UpdateStorageCredentialOptions",
    "UpdateStorageProfileOptions",
    "UpdateUserOptions",
    "User",
    "UserType",
    "Warehouse",
    "WarehouseStatus",
]
