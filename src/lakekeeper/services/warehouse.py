"""Warehouse endpoints.

A warehouse moves between ``active`` and ``inactive`` through
:meth:`WarehouseService.activate_warehouse` and
:meth:`WarehouseService.deactivate_warehouse`, and ends with
:meth:`WarehouseService.delete_warehouse`. A protected warehouse can only
be deleted with ``force``.
"""

from __future__ import annotations

import httpx

from lakekeeper.models.warehouse import (
    CreateWarehouseOptions,
    CreateWarehouseResponse,
    DeleteWarehouseOptions,
    ListWarehousesOptions,
    RenameWarehouseOptions,
    SetProtectionOptions,
    UpdateDeleteProfileOptions,
    UpdateStorageCredentialOptions,
    UpdateStorageProfileOptions,
    Warehouse,
    WarehouseList,
)
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService, path_escape, require


def _path(warehouse_id: str, action: str | None = None) -> str:
    require(warehouse_id, "warehouse_id", "warehouse id")
    path = f"warehouse/{path_escape(warehouse_id)}"
    return f"{path}/{action}" if action else path


def _with_project_id(warehouse: Warehouse, project_id: str | None) -> Warehouse:
    if warehouse.project_id or not project_id:
        return warehouse
    return warehouse.model_copy(update={"project_id": project_id})


class WarehouseService(BaseService):
    """Operations on warehouses."""

    def get_warehouse(
        self,
        warehouse_id: str,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> Warehouse:
        req = self._client.new_request(
            "GET", _path(warehouse_id), None, self._project_options(project_id, options)
        )
        warehouse, _ = self._client.do(req, Warehouse)
        return _with_project_id(warehouse, project_id)

    def list_warehouses(
        self,
        opts: ListWarehousesOptions | None = None,
        *options: RequestOptionFunc,
    ) -> list[Warehouse]:
        """Return the warehouses of a project, optionally filtered by status."""
        opts = opts or ListWarehousesOptions()
        req = self._client.new_request(
            "GET", "warehouse", opts, self._project_options(opts.project_id, options)
        )
        warehouses, _ = self._client.do(req, WarehouseList)
        return [_with_project_id(w, opts.project_id) for w in warehouses.warehouses]

    def create_warehouse(
        self,
        opts: CreateWarehouseOptions,
        *options: RequestOptionFunc,
    ) -> Warehouse:
        """Create a warehouse and return its full record.

        The server checks it can reach the storage with the given credential
        before accepting the warehouse. The create endpoint only returns the
        new id; the record is read back with a second request.

        Raises:
            ValidationError: If the storage or delete profile is invalid.
            ApiError: If the server rejects the warehouse.
        """
        require(opts.name, "name", "warehouse name")
        project_options = self._project_options(opts.project_id, options)
        req = self._client.new_request("POST", "warehouse", opts, project_options)
        created, _ = self._client.do(req, CreateWarehouseResponse)
        return self.get_warehouse(created.id, opts.project_id, *options)

    def delete_warehouse(
        self,
        warehouse_id: str,
        opts: DeleteWarehouseOptions | None = None,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        """Delete a warehouse; ``opts.force`` overrides its protection."""
        opts = opts or DeleteWarehouseOptions()
        req = self._client.new_request(
            "DELETE",
            _path(warehouse_id),
            opts,
            self._project_options(opts.project_id, options),
        )
        _, resp = self._client.do(req)
        return resp

    def set_warehouse_protection(
        self,
        warehouse_id: str,
        protected: bool,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        req = self._client.new_request(
            "POST",
            _path(warehouse_id, "protection"),
            SetProtectionOptions(protected=protected),
            self._project_options(project_id, options),
        )
        _, resp = self._client.do(req)
        return resp

    def activate_warehouse(
        self,
        warehouse_id: str,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        req = self._client.new_request(
            "POST",
            _path(warehouse_id, "activate"),
            None,
            self._project_options(project_id, options),
        )
        _, resp = self._client.do(req)
        return resp

    def deactivate_warehouse(
        self,
        warehouse_id: str,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        req = self._client.new_request(
            "POST",
            _path(warehouse_id, "deactivate"),
            None,
            self._project_options(project_id, options),
        )
        _, resp = self._client.do(req)
        return resp

    def rename_warehouse(
        self,
        warehouse_id: str,
        opts: RenameWarehouseOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        require(opts.new_name, "new_name", "warehouse name")
        return self._post_update(warehouse_id, "rename", opts, opts.project_id, options)

    def update_storage_profile(
        self,
        warehouse_id: str,
        opts: UpdateStorageProfileOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        """Replace the storage profile, and optionally the credential."""
        return self._post_update(warehouse_id, "storage", opts, opts.project_id, options)

    def update_delete_profile(
        self,
        warehouse_id: str,
        opts: UpdateDeleteProfileOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        return self._post_update(warehouse_id, "delete-profile", opts, opts.project_id, options)

    def update_storage_credential(
        self,
        warehouse_id: str,
        opts: UpdateStorageCredentialOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        """Replace the storage credential, keeping the storage profile."""
        return self._post_update(
            warehouse_id, "storage-credential", opts, opts.project_id, options
        )

    def _post_update(
        self,
        warehouse_id: str,
        action: str,
        opts: object,
        project_id: str | None,
        options: tuple[RequestOptionFunc, ...],
    ) -> httpx.Response:
        req = self._client.new_request(
            "POST",
            _path(warehouse_id, action),
            opts,
            self._project_options(project_id, options),
        )
        _, resp = self._client.do(req)
        return resp
