"""User endpoints."""

from __future__ import annotations

import httpx

from lakekeeper.models.user import (
    ListUsersOptions,
    ProvisionUserOptions,
    UpdateUserOptions,
    User,
    UserPage,
)
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService, path_escape, require


class UserService(BaseService):
    """Operations on users."""

    def get_user(self, user_id: str, *options: RequestOptionFunc) -> User:
        require(user_id, "user_id", "user id")
        req = self._client.new_request("GET", f"user/{path_escape(user_id)}", None, options)
        user, _ = self._client.do(req, User)
        return user

    def whoami(self, *options: RequestOptionFunc) -> User:
        """Return the user behind the credentials of the request."""
        req = self._client.new_request("GET", "whoami", None, options)
        user, _ = self._client.do(req, User)
        return user

    def provision_user(
        self,
        opts: ProvisionUserOptions | None = None,
        *options: RequestOptionFunc,
    ) -> User:
        """Create a user, or update it when ``update_if_exists`` is set.

        With no options, the calling principal provisions itself.
        """
        req = self._client.new_request("POST", "user", opts or ProvisionUserOptions(), options)
        user, _ = self._client.do(req, User)
        return user

    def update_user(
        self,
        user_id: str,
        opts: UpdateUserOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response:
        require(user_id, "user_id", "user id")
        req = self._client.new_request("PUT", f"user/{path_escape(user_id)}", opts, options)
        _, resp = self._client.do(req)
        return resp

    def delete_user(self, user_id: str, *options: RequestOptionFunc) -> httpx.Response:
        require(user_id, "user_id", "user id")
        req = self._client.new_request("DELETE", f"user/{path_escape(user_id)}", None, options)
        _, resp = self._client.do(req)
        return resp

    def list_users(
        self,
        opts: ListUsersOptions | None = None,
        *options: RequestOptionFunc,
    ) -> list[User]:
        """Return all users matching ``opts``, following every page."""
        return self._paginate("user", opts or ListUsersOptions(), UserPage, "users", options)
