"""Project endpoints.

The project an operation applies to is selected by the ``x-project-id``
header, not by the path.
"""

from __future__ import annotations

import httpx

from lakekeeper.models.project import (
    CreateProjectOptions,
    CreateProjectResponse,
    Project,
    ProjectList,
    RenameProjectOptions,
)
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService, require


class ProjectService(BaseService):
    """Operations on projects."""

    def get_project(self, project_id: str, *options: RequestOptionFunc) -> Project:
        require(project_id, "project_id", "project id")
        req = self._client.new_request(
            "GET", "project", None, self._project_options(project_id, options)
        )
        project, _ = self._client.do(req, Project)
        return project

    def get_default_project(self, *options: RequestOptionFunc) -> Project:
        """Return the default project of the caller.

        The ``/default-project`` endpoint is deprecated server-side; prefer
        :meth:`get_project` with an explicit id.
        """
        req = self._client.new_request("GET", "default-project", None, options)
        project, _ = self._client.do(req, Project)
        return project

    def list_projects(self, *options: RequestOptionFunc) -> list[Project]:
        """Return every project the caller can access."""
        req = self._client.new_request("GET", "project-list", None, options)
        projects, _ = self._client.do(req, ProjectList)
        return projects.projects

    def get_project_by_name(self, name: str, *options: RequestOptionFunc) -> Project | None:
        """Return the first project named ``name``, or None when there is none."""
        for project in self.list_projects(*options):
            if project.name == name:
                return project
        return None

    def create_project(
        self,
        opts: CreateProjectOptions,
        *options: RequestOptionFunc,
    ) -> Project:
        """Create a project and return its full record.

        The create endpoint only returns the new id; the record is read back
        with a second request.
        """
        require(opts.name, "name", "project name")
        req = self._client.new_request("POST", "project", opts, options)
        created, _ = self._client.do(req, CreateProjectResponse)
        return self.get_project(created.id, *options)

    def rename_project(
        self,
        project_id: str,
        opts: RenameProjectOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        require(project_id, "project_id", "project id")
        req = self._client.new_request(
            "POST", "project/rename", opts, self._project_options(project_id, options)
        )
        _, resp = self._client.do(req)
        return resp

    def delete_project(self, project_id: str, *options: RequestOptionFunc) -> httpx.Response:
        require(project_id, "project_id", "project id")
        req = self._client.new_request(
            "DELETE", "project", None, self._project_options(project_id, options)
        )
        _, resp = self._client.do(req)
        return resp
