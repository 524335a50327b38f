"""Permission endpoints: who holds which relation on which object."""

from __future__ import annotations

from typing import Any

import httpx

from lakekeeper.models.permission import (
    Assignments,
    ProjectAssignment,
    RoleAssignment,
    ServerAssignment,
    SetManagedAccessOptions,
    UpdatePermissionsOptions,
    WarehouseAssignment,
)
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService, path_escape, require


class PermissionService(BaseService):
    """Read and update assignments on the server, projects, warehouses and roles.

    Updates take the assignments to add (``writes``) and to remove
    (``deletes``) in a single request.
    """

    def _get(
        self,
        path: str,
        model: type[Any],
        options: tuple[RequestOptionFunc, ...],
    ) -> list[Any]:
        req = self._client.new_request("GET", path, None, options)
        assignments, _ = self._client.do(req, Assignments[model])
        return assignments.assignments

    def _update(
        self,
        path: str,
        opts: UpdatePermissionsOptions[Any],
        options: tuple[RequestOptionFunc, ...],
    ) -> httpx.Response:
        req = self._client.new_request("POST", path, opts, options)
        _, resp = self._client.do(req)
        return resp

    # Server

    def get_server_assignments(self, *options: RequestOptionFunc) -> list[ServerAssignment]:
        return self._get("permissions/server/assignments", ServerAssignment, options)

    def update_server_permissions(
        self,
        opts: UpdatePermissionsOptions[ServerAssignment],
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        return self._update("permissions/server/assignments", opts, options)

    # Project

    def get_project_assignments(
        self, project_id: str, *options: RequestOptionFunc
    ) -> list[ProjectAssignment]:
        return self._get(_object_path("project", project_id), ProjectAssignment, options)

    def update_project_permissions(
        self,
        project_id: str,
        opts: UpdatePermissionsOptions[ProjectAssignment],
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        return self._update(_object_path("project", project_id), opts, options)

    # Warehouse

    def get_warehouse_assignments(
        self, warehouse_id: str, *options: RequestOptionFunc
    ) -> list[WarehouseAssignment]:
        return self._get(_object_path("warehouse", warehouse_id), WarehouseAssignment, options)

    def update_warehouse_permissions(
        self,
        warehouse_id: str,
        opts: UpdatePermissionsOptions[WarehouseAssignment],
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        return self._update(_object_path("warehouse", warehouse_id), opts, options)

    def set_warehouse_managed_access(
        self,
        warehouse_id: str,
        managed_access: bool,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        """Toggle managed access: when on, only owners may grant on the warehouse."""
        require(warehouse_id, "warehouse_id", "warehouse id")
        req = self._client.new_request(
            "POST",
            f"permissions/warehouse/{path_escape(warehouse_id)}/managed-access",
            SetManagedAccessOptions(managed_access=managed_access),
            options,
        )
        _, resp = self._client.do(req)
        return resp

    # Role

    def get_role_assignments(
        self, role_id: str, *options: RequestOptionFunc
    ) -> list[RoleAssignment]:
        return self._get(_object_path("role", role_id), RoleAssignment, options)

    def update_role_permissions(
        self,
        role_id: str,
        opts: UpdatePermissionsOptions[RoleAssignment],
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        return self._update(_object_path("role", role_id), opts, options)


def _object_path(kind: str, object_id: str) -> str:
    require(object_id, f"{kind}_id", f"{kind} id")
    return f"permissions/{kind}/{path_escape(object_id)}/assignments"
