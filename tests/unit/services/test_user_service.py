"""Unit tests for UserService."""

from __future__ import annotations

from typing import Any

import pytest

from lakekeeper.client import Client
from lakekeeper.errors import DecodeError
from lakekeeper.models.user import (
    ListUsersOptions,
    ProvisionUserOptions,
    UpdateUserOptions,
    UserType,
)
from tests.fixtures.http import MockServer, Reply, body


class TestUserService:
    """Tests for UserService."""

    def test_get_user_escapes_id(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test the user id is escaped as one path segment."""
        mock_server.on("GET", "user/oidc~a/b", Reply(json=sample_user))

        user = lakekeeper_client.user.get_user("oidc~a/b")

        assert user.name == "Alice"
        assert mock_server.last.url.raw_path.endswith(b"/user/oidc~a%2Fb")

    def test_whoami(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test reading the calling user."""
        mock_server.on("GET", "whoami", Reply(json=sample_user))

        assert lakekeeper_client.user.whoami().id == "oidc~alice"

    def test_self_provision(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test provisioning without options sends an empty object."""
        mock_server.on("POST", "user", Reply(201, sample_user))

        lakekeeper_client.user.provision_user()

        assert body(mock_server.last) == {}

    def test_provision_user(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test provisioning another principal."""
        mock_server.on("POST", "user", Reply(201, sample_user))

        lakekeeper_client.user.provision_user(
            ProvisionUserOptions(
                id="oidc~bob", name="Bob", user_type=UserType.APPLICATION, update_if_exists=True
            )
        )

        assert body(mock_server.last) == {
            "id": "oidc~bob",
            "name": "Bob",
            "user-type": "application",
            "update-if-exists": True,
        }

    def test_update_user(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test updating a user uses PUT."""
        mock_server.on("PUT", "user/oidc~alice", Reply(200))

        response = lakekeeper_client.user.update_user(
            "oidc~alice", UpdateUserOptions(name="Alice B", email="ab@example.com")
        )

        assert response.status_code == 200
        assert body(mock_server.last) == {"name": "Alice B", "email": "ab@example.com"}

    def test_delete_user(self, lakekeeper_client: Client, mock_server: MockServer) -> None:
        """Test deleting a user."""
        mock_server.on("DELETE", "user/oidc~alice", Reply(204))

        assert lakekeeper_client.user.delete_user("oidc~alice").status_code == 204


class TestListUsers:
    """Tests for UserService.list_users."""

    def test_follows_pages(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test every page is read and the caller's options are untouched."""
        mock_server.on(
            "GET",
            "user",
            Reply(json={"users": [sample_user], "next-page-token": "t1"}),
            Reply(json={"users": [sample_user], "next-page-token": "t2"}),
            Reply(json={"users": [sample_user]}),
        )
        opts = ListUsersOptions(name="Alice", page_size=1)

        users = lakekeeper_client.user.list_users(opts)

        assert len(users) == 3
        tokens = [r.url.params.get("page-token") for r in mock_server.requests]
        assert tokens == [None, "t1", "t2"]
        assert all(r.url.params["name"] == "Alice" for r in mock_server.requests)
        assert opts.page_token is None

    def test_repeated_token(
        self, lakekeeper_client: Client, mock_server: MockServer, sample_user: dict[str, Any]
    ) -> None:
        """Test a server repeating its page token stops pagination."""
        mock_server.on(
            "GET",
            "user",
            Reply(json={"users": [sample_user], "next-page-token": "same"}),
        )

        with pytest.raises(DecodeError):
            lakekeeper_client.user.list_users()
        assert len(mock_server.requests) == 2
