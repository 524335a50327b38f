"""Unit tests for permission assignments."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from lakekeeper.models.permission import (
    AssigneeType,
    Assignments,
    ProjectAssignment,
    ProjectAssignmentType,
    RoleAssignment,
    ServerAssignment,
    ServerAssignmentType,
    UpdatePermissionsOptions,
    WarehouseAssignment,
    WarehouseAssignmentType,
)


class TestAssignment:
    """Tests for assignment values."""

    def test_user_assignment(self) -> None:
        """Test a user assignment encodes type and user."""
        assignment = ServerAssignment.for_user(ServerAssignmentType.OPERATOR, "oidc~alice")

        assert assignment.to_dict() == {"type": "operator", "user": "oidc~alice"}
        assert assignment.assignee_type is AssigneeType.USER
        assert assignment.assignee == "oidc~alice"

    def test_role_assignment(self) -> None:
        """Test a role assignment encodes type and role."""
        assignment = WarehouseAssignment.for_role(WarehouseAssignmentType.PASS_GRANTS, "role-1")

        assert assignment.to_dict() == {"type": "pass_grants", "role": "role-1"}
        assert assignment.assignee_type is AssigneeType.ROLE

    def test_both_assignees_rejected(self) -> None:
        """Test an assignment naming a user and a role is rejected."""
        with pytest.raises(PydanticValidationError):
            ProjectAssignment.model_validate({"type": "describe", "user": "u", "role": "r"})

    def test_no_assignee_rejected(self) -> None:
        """Test an assignment without assignee is rejected."""
        with pytest.raises(PydanticValidationError):
            RoleAssignment.model_validate({"type": "ownership"})

    def test_relation_outside_object_rejected(self) -> None:
        """Test a relation not valid on the object is rejected."""
        with pytest.raises(PydanticValidationError):
            ServerAssignment.model_validate({"type": "select", "user": "u"})

    def test_decode_assignment_list(self) -> None:
        """Test decoding the assignments endpoint body."""
        decoded = Assignments[ProjectAssignment].model_validate(
            {
                "assignments": [
                    {"type": "project_admin", "user": "oidc~alice"},
                    {"type": "select", "role": "role-1"},
                ]
            }
        )

        first, second = decoded.assignments
        assert first.type is ProjectAssignmentType.PROJECT_ADMIN
        assert second.role == "role-1"


class TestUpdatePermissionsOptions:
    """Tests for UpdatePermissionsOptions."""

    def test_writes_and_deletes(self) -> None:
        """Test the update body carries both lists."""
        opts = UpdatePermissionsOptions[ServerAssignment](
            writes=[ServerAssignment.for_user("admin", "oidc~alice")],
            deletes=[ServerAssignment.for_role("operator", "role-1")],
        )

        assert opts.to_dict() == {
            "writes": [{"type": "admin", "user": "oidc~alice"}],
            "deletes": [{"type": "operator", "role": "role-1"}],
        }

    def test_empty(self) -> None:
        """Test an empty update sends empty lists."""
        assert UpdatePermissionsOptions[RoleAssignment]().to_dict() == {
            "writes": [],
            "deletes": [],
        }
