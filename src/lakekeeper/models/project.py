"""Project records and request options."""

from __future__ import annotations

from pydantic import Field

from lakekeeper.models._base import WireModel


class Project(WireModel):
    """A tenancy boundary grouping warehouses and roles."""

    id: str = Field(alias="project-id")
    name: str = Field(alias="project-name")


class ProjectList(WireModel):
    projects: list[Project] = Field(default_factory=list)


class CreateProjectOptions(WireModel):
    name: str = Field(alias="project-name")


class CreateProjectResponse(WireModel):
    id: str = Field(alias="project-id")


class RenameProjectOptions(WireModel):
    new_name: str
