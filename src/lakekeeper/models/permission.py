"""Permission assignments on the server, projects, warehouses and roles.

An assignment grants one relation (``type``) to exactly one assignee,
which is either a user or a role:

    {"type": "operator", "user": "oidc~alice"}
    {"type": "describe", "role": "1d9e5f0a-..."}
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import Field, model_validator

from lakekeeper.models._base import WireModel


class AssigneeType(str, Enum):
    USER = "user"
    ROLE = "role"


class ServerAssignmentType(str, Enum):
    OPERATOR = "operator"
    ADMIN = "admin"


class ProjectAssignmentType(str, Enum):
    PROJECT_ADMIN = "project_admin"
    SECURITY_ADMIN = "security_admin"
    DATA_ADMIN = "data_admin"
    ROLE_CREATOR = "role_creator"
    DESCRIBE = "describe"
    SELECT = "select"
    CREATE = "create"
    MODIFY = "modify"


class WarehouseAssignmentType(str, Enum):
    OWNERSHIP = "ownership"
    PASS_GRANTS = "pass_grants"
    MANAGE_GRANTS = "manage_grants"
    DESCRIBE = "describe"
    SELECT = "select"
    CREATE = "create"
    MODIFY = "modify"


class RoleAssignmentType(str, Enum):
    OWNERSHIP = "ownership"
    ASSIGNEE = "assignee"


class Assignment(WireModel):
    """A relation granted to a single user or role.

    Subclasses narrow ``type`` to the relations valid on their object.
    """

    type: Any
    user: str | None = None
    role: str | None = None

    @model_validator(mode="after")
    def _exactly_one_assignee(self) -> Assignment:
        if self.user is None and self.role is None:
            raise ValueError("role or user must be provided")
        if self.user is not None and self.role is not None:
            raise ValueError("role and user can't be both provided")
        return self

    @property
    def assignee_type(self) -> AssigneeType:
        return AssigneeType.USER if self.user is not None else AssigneeType.ROLE

    @property
    def assignee(self) -> str:
        """Identifier of the user or role holding the relation."""
        return self.user if self.user is not None else self.role  # type: ignore[return-value]

    @classmethod
    def for_user(cls, relation: Any, user_id: str) -> Any:
        return cls(type=relation, user=user_id)

    @classmethod
    def for_role(cls, relation: Any, role_id: str) -> Any:
        return cls(type=relation, role=role_id)


class ServerAssignment(Assignment):
    type: ServerAssignmentType


class ProjectAssignment(Assignment):
    type: ProjectAssignmentType


class WarehouseAssignment(Assignment):
    type: WarehouseAssignmentType


class RoleAssignment(Assignment):
    type: RoleAssignmentType


A = TypeVar("A", bound=Assignment)


class Assignments(WireModel, Generic[A]):
    """List of assignments returned by the ``.../assignments`` endpoints."""

    assignments: list[A] = Field(default_factory=list)


class UpdatePermissionsOptions(WireModel, Generic[A]):
    """Assignments to add (``writes``) and remove (``deletes``) in one call."""

    writes: list[A] = Field(default_factory=list)
    deletes: list[A] = Field(default_factory=list)


class SetManagedAccessOptions(WireModel):
    managed_access: bool
