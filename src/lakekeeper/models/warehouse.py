"""Warehouse records and request options.

Optional fields left unset are omitted from request bodies rather than
sent as null. The API has no way to clear a field of an existing
warehouse; to drop a setting, recreate the warehouse without it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from lakekeeper.models._base import WireModel
from lakekeeper.models.delete_profile import DeleteProfileField
from lakekeeper.models.storage_credential import StorageCredentialField
from lakekeeper.models.storage_profile import StorageProfileField


class WarehouseStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Warehouse(WireModel):
    """A warehouse bound to one storage backend.

    Storage credentials are write-only and never part of this record. A
    missing ``delete_profile`` means the server default applies.
    """

    id: str
    project_id: str | None = None
    name: str
    protected: bool = False
    status: WarehouseStatus
    storage_profile: StorageProfileField
    delete_profile: DeleteProfileField | None = None

    @property
    def is_active(self) -> bool:
        return self.status is WarehouseStatus.ACTIVE


class WarehouseList(WireModel):
    warehouses: list[Warehouse] = Field(default_factory=list)


class CreateWarehouseOptions(WireModel):
    """Body of ``POST /warehouse``."""

    name: str = Field(alias="warehouse-name")
    project_id: str | None = None
    storage_profile: StorageProfileField
    storage_credential: StorageCredentialField
    delete_profile: DeleteProfileField | None = None

    def check_invariants(self) -> None:
        self.storage_profile.check_invariants()
        self.storage_credential.check_invariants()
        if self.delete_profile is not None:
            self.delete_profile.check_invariants()


class CreateWarehouseResponse(WireModel):
    id: str = Field(alias="warehouse-id")


class ListWarehousesOptions(WireModel):
    """Query parameters of ``GET /warehouse``."""

    warehouse_status: list[WarehouseStatus] | None = None
    project_id: str | None = None


class DeleteWarehouseOptions(WireModel):
    """Query parameters of ``DELETE /warehouse/{id}``.

    ``force`` deletes the warehouse even when it is protected.
    """

    force: bool | None = None
    project_id: str | None = Field(default=None, exclude=True)


class SetProtectionOptions(WireModel):
    protected: bool


class ProtectionResponse(WireModel):
    protected: bool


class RenameWarehouseOptions(WireModel):
    new_name: str
    project_id: str | None = Field(default=None, exclude=True)


class UpdateStorageProfileOptions(WireModel):
    """Body of ``POST /warehouse/{id}/storage``.

    Without ``storage_credential`` the warehouse keeps its current credential.
    """

    storage_profile: StorageProfileField
    storage_credential: StorageCredentialField | None = None
    project_id: str | None = Field(default=None, exclude=True)

    def check_invariants(self) -> None:
        self.storage_profile.check_invariants()
        if self.storage_credential is not None:
            self.storage_credential.check_invariants()


class UpdateDeleteProfileOptions(WireModel):
    delete_profile: DeleteProfileField
    project_id: str | None = Field(default=None, exclude=True)

    def check_invariants(self) -> None:
        self.delete_profile.check_invariants()


class UpdateStorageCredentialOptions(WireModel):
    """Body of ``POST /warehouse/{id}/storage-credential``."""

    storage_credential: StorageCredentialField | None = Field(
        default=None, alias="new-storage-credential"
    )
    project_id: str | None = Field(default=None, exclude=True)
