"""Unit tests for WarehouseService."""

from __future__ import annotations

from typing import Any

import pytest

from lakekeeper.client import Client
from lakekeeper.errors import (
    InvalidPayloadError,
    UnknownVariantError,
    UsageError,
    ValidationError,
)
from lakekeeper.models.delete_profile import HardDeleteProfile
from lakekeeper.models.storage_credential import S3AccessKeyCredential
from lakekeeper.models.storage_profile import S3StorageProfile
from lakekeeper.models.warehouse import (
    CreateWarehouseOptions,
    DeleteWarehouseOptions,
    ListWarehousesOptions,
    RenameWarehouseOptions,
    UpdateDeleteProfileOptions,
    UpdateStorageCredentialOptions,
    UpdateStorageProfileOptions,
    WarehouseStatus,
)
from tests.fixtures.http import MockServer, Reply, body

CREDENTIAL = S3AccessKeyCredential(aws_access_key_id="keyid", aws_secret_access_key="secretkey")


def minio_profile(**overrides: Any) -> S3StorageProfile:
    fields: dict[str, Any] = {
        "bucket": "bucket1",
        "region": "eu-west-1",
        "endpoint": "http://minio:9000/",
        "path_style_access": True,
    }
    fields.update(overrides)
    return S3StorageProfile(**fields)


class TestWarehouseLifecycle:
    """Tests for creating, reading and deleting warehouses."""

    def test_create_warehouse(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_warehouse: dict[str, Any]
    ) -> None:
        """Test creating a warehouse reads the record back in the same project."""
        mock_server.on("POST", "warehouse", Reply(201, {"warehouse-id": "wh-1"}))
        mock_server.on("GET", "warehouse/wh-1", Reply(json=sample_warehouse))

        warehouse = lakekeeper_client.warehouse.create_warehouse(
            CreateWarehouseOptions(
                name="analytics",
                project_id="p1",
                storage_profile=minio_profile(),
                storage_credential=CREDENTIAL,
            )
        )

        assert warehouse.id == "wh-1"
        assert warehouse.project_id == "p1"
        create, read = mock_server.requests
        assert body(create)["warehouse-name"] == "analytics"
        assert body(create)["storage-credential"]["credential-type"] == "access-key"
        assert create.headers["x-project-id"] == "p1"
        assert read.headers["x-project-id"] == "p1"

    def test_create_warehouse_invalid_profile(
        self, lakekeeper_client: Client, mock_server: MockServer
    ) -> None:
        """Test an invalid storage profile is rejected before sending."""
        opts = CreateWarehouseOptions(
            name="analytics",
            storage_profile=minio_profile(endpoint="http://minio:9000"),
            storage_credential=CREDENTIAL,
        )

        with pytest.raises(ValidationError):
            lakekeeper_client.warehouse.create_warehouse(opts)
        assert mock_server.requests == []

    def test_get_warehouse(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_warehouse: dict[str, Any]
    ) -> None:
        """Test reading a warehouse."""
        mock_server.on("GET", "warehouse/wh-1", Reply(json=sample_warehouse))

        warehouse = lakekeeper_client.warehouse.get_warehouse("wh-1")

        assert warehouse.name == "analytics"
        assert warehouse.project_id is None

    def test_get_warehouse_unknown_storage(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_warehouse: dict[str, Any]
    ) -> None:
        """Test an unknown storage type in a response is reported."""
        sample_warehouse["storage-profile"] = {"type": "hdfs"}
        mock_server.on("GET", "warehouse/wh-1", Reply(json=sample_warehouse))

        with pytest.raises(UnknownVariantError) as exc_info:
            lakekeeper_client.warehouse.get_warehouse("wh-1")
        assert exc_info.value.response is not None
        assert exc_info.value.response.status_code == 200

    def test_get_warehouse_non_string_storage_type(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_warehouse: dict[str, Any]
    ) -> None:
        """Test a storage type that is not a string is an invalid payload."""
        sample_warehouse["storage-profile"] = {"type": ["s3"], "bucket": "bucket1"}
        mock_server.on("GET", "warehouse/wh-1", Reply(json=sample_warehouse))

        with pytest.raises(InvalidPayloadError) as exc_info:
            lakekeeper_client.warehouse.get_warehouse("wh-1")
        assert exc_info.value.response is not None

    def test_get_warehouse_requires_id(self, lakekeeper_client: Client) -> None:
        """Test an empty id is rejected."""
        with pytest.raises(UsageError):
            lakekeeper_client.warehouse.get_warehouse("")

    def test_list_warehouses(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_warehouse: dict[str, Any]
    ) -> None:
        """Test listing warehouses filtered by status."""
        mock_server.on("GET", "warehouse", Reply(json={"warehouses": [sample_warehouse]}))

        warehouses = lakekeeper_client.warehouse.list_warehouses(
            ListWarehousesOptions(warehouse_status=[WarehouseStatus.ACTIVE], project_id="p1")
        )

        assert [w.id for w in warehouses] == ["wh-1"]
        assert warehouses[0].project_id == "p1"
        assert mock_server.last.url.params.get_list("warehouse-status") == ["active"]
        assert mock_server.last.headers["x-project-id"] == "p1"

    def test_force_delete(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test a forced delete sends force=true and the project header."""
        mock_server.on("DELETE", "warehouse/wh-1", Reply(204))

        response = lakekeeper_client.warehouse.delete_warehouse(
            "wh-1", DeleteWarehouseOptions(force=True, project_id="p1")
        )

        assert response.status_code == 204
        assert mock_server.last.url.params["force"] == "true"
        assert mock_server.last.headers["x-project-id"] == "p1"
        assert "project-id" not in mock_server.last.url.params

    def test_plain_delete(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test a plain delete has no query and no project header."""
        mock_server.on("DELETE", "warehouse/wh-1", Reply(204))

        lakekeeper_client.warehouse.delete_warehouse("wh-1")

        assert not mock_server.last.url.params
        assert "x-project-id" not in mock_server.last.headers


class TestWarehouseState:
    """Tests for protection and activation."""

    def test_set_protection(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test protection is set with a POST."""
        mock_server.on("POST", "warehouse/wh-1/protection", Reply(json={"protected": True}))

        lakekeeper_client.warehouse.set_warehouse_protection("wh-1", True, "p1")

        assert body(mock_server.last) == {"protected": True}
        assert mock_server.last.headers["x-project-id"] == "p1"

    @pytest.mark.parametrize("action", ["activate", "deactivate"])
    def test_activation(
        self, lakekeeper_client: Client, mock_server: MockServer, action: str
    ) -> None:
        """Test activating and deactivating send no body."""
        mock_server.on("POST", f"warehouse/wh-1/{action}", Reply(200))

        getattr(lakekeeper_client.warehouse, f"{action}_warehouse")("wh-1")

        assert mock_server.last.url.path.endswith(f"/warehouse/wh-1/{action}")
        assert mock_server.last.content == b""


class TestWarehouseUpdates:
    """Tests for warehouse update operations."""

    def test_rename(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test renaming a warehouse."""
        mock_server.on("POST", "warehouse/wh-1/rename", Reply(200))

        lakekeeper_client.warehouse.rename_warehouse(
            "wh-1", RenameWarehouseOptions(new_name="renamed", project_id="p1")
        )

        assert body(mock_server.last) == {"new-name": "renamed"}
        assert mock_server.last.headers["x-project-id"] == "p1"

    def test_rename_requires_name(self, lakekeeper_client: Client) -> None:
        """Test an empty name is rejected."""
        with pytest.raises(UsageError):
            lakekeeper_client.warehouse.rename_warehouse(
                "wh-1", RenameWarehouseOptions(new_name="")
            )

    def test_update_storage_profile(
        self, lakekeeper_client: Client, mock_server: MockServer
    ) -> None:
        """Test replacing the storage profile and credential."""
        mock_server.on("POST", "warehouse/wh-1/storage", Reply(200))

        lakekeeper_client.warehouse.update_storage_profile(
            "wh-1",
            UpdateStorageProfileOptions(
                storage_profile=minio_profile(key_prefix="new"), storage_credential=CREDENTIAL
            ),
        )

        sent = body(mock_server.last)
        assert sent["storage-profile"]["key-prefix"] == "new"
        assert sent["storage-credential"]["type"] == "s3"

    def test_update_delete_profile(
        self, lakekeeper_client: Client, mock_server: MockServer
    ) -> None:
        """Test replacing the delete profile."""
        mock_server.on("POST", "warehouse/wh-1/delete-profile", Reply(200))

        lakekeeper_client.warehouse.update_delete_profile(
            "wh-1", UpdateDeleteProfileOptions(delete_profile=HardDeleteProfile())
        )

        assert body(mock_server.last) == {"delete-profile": {"type": "hard"}}

    def test_update_storage_credential(
        self, lakekeeper_client: Client, mock_server: MockServer
    ) -> None:
        """Test replacing the storage credential."""
        mock_server.on("POST", "warehouse/wh-1/storage-credential", Reply(200))

        lakekeeper_client.warehouse.update_storage_credential(
            "wh-1", UpdateStorageCredentialOptions(storage_credential=CREDENTIAL)
        )

        assert body(mock_server.last)["new-storage-credential"]["aws-access-key-id"] == "keyid"
