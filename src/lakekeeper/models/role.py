"""Role records and request options."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from lakekeeper.models._base import WireModel


class Role(WireModel):
    """A named group of permissions scoped to one project."""

    id: str
    project_id: str | None = None
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class RolePage(WireModel):
    roles: list[Role] = Field(default_factory=list)
    next_page_token: str | None = None


class CreateRoleOptions(WireModel):
    """Body of ``POST /role``; ``project_id`` also selects the project header."""

    name: str
    description: str | None = None
    project_id: str | None = None


class UpdateRoleOptions(WireModel):
    name: str
    description: str | None = None
    project_id: str | None = Field(default=None, exclude=True)


class ListRolesOptions(WireModel):
    """Query parameters of ``GET /role``.

    ``project_id`` selects the project header and is not sent as a parameter.
    """

    name: str | None = None
    page_token: str | None = None
    page_size: int | None = None
    project_id: str | None = Field(default=None, exclude=True)
