"""Role endpoints."""

from __future__ import annotations

import httpx

from lakekeeper.errors import UsageError
from lakekeeper.models.role import (
    CreateRoleOptions,
    ListRolesOptions,
    Role,
    RolePage,
    UpdateRoleOptions,
)
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService, path_escape, require


class RoleService(BaseService):
    """Operations on roles.

    Roles belong to one project; ``project_id`` selects it through the
    project header, and fills ``Role.project_id`` when the response omits it.
    """

    def get_role(
        self,
        role_id: str,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> Role:
        require(role_id, "role_id", "role id")
        req = self._client.new_request(
            "GET",
            f"role/{path_escape(role_id)}",
            None,
            self._project_options(project_id, options),
        )
        role, _ = self._client.do(req, Role)
        return _with_project_id(role, project_id)

    def list_roles(
        self,
        opts: ListRolesOptions | None = None,
        *options: RequestOptionFunc,
    ) -> list[Role]:
        """Return all roles matching ``opts``, following every page."""
        opts = opts or ListRolesOptions()
        roles = self._paginate(
            "role",
            opts,
            RolePage,
            "roles",
            self._project_options(opts.project_id, options),
        )
        return [_with_project_id(role, opts.project_id) for role in roles]

    def create_role(
        self,
        opts: CreateRoleOptions | None,
        *options: RequestOptionFunc,
    ) -> Role:
        """Create a role.

        Raises:
            UsageError: If ``opts`` is missing or has no name.
        """
        if opts is None:
            raise UsageError("create role options must be provided")
        require(opts.name, "name", "role name")
        req = self._client.new_request(
            "POST", "role", opts, self._project_options(opts.project_id, options)
        )
        role, _ = self._client.do(req, Role)
        return _with_project_id(role, opts.project_id)

    def update_role(
        self,
        role_id: str,
        opts: UpdateRoleOptions | None,
        *options: RequestOptionFunc,
    ) -> Role:
        """Rename a role or change its description.

        Raises:
            UsageError: If ``role_id`` is empty or ``opts`` is missing.
        """
        require(role_id, "role_id", "role id")
        if opts is None:
            raise UsageError("update role options must be provided")
        req = self._client.new_request(
            "POST",
            f"role/{path_escape(role_id)}",
            opts,
            self._project_options(opts.project_id, options),
        )
        role, _ = self._client.do(req, Role)
        return _with_project_id(role, opts.project_id)

    def delete_role(
        self,
        role_id: str,
        project_id: str | None = None,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        require(role_id, "role_id", "role id")
        req = self._client.new_request(
            "DELETE",
            f"role/{path_escape(role_id)}",
            None,
            self._project_options(project_id, options),
        )
        _, resp = self._client.do(req)
        return resp


def _with_project_id(role: Role, project_id: str | None) -> Role:
    if role.project_id or not project_id:
        return role
    return role.model_copy(update={"project_id": project_id})
