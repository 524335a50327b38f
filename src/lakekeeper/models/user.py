"""User records and request options."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from lakekeeper.models._base import WireModel


class UserType(str, Enum):
    """Kind of principal behind a user."""

    HUMAN = "human"
    APPLICATION = "application"


class User(WireModel):
    """A principal known to Lakekeeper.

    Externally provisioned ids take the form ``<idp>~<subject>``, e.g.
    ``oidc~4a1c...``.
    """

    id: str
    name: str
    email: str | None = None
    user_type: UserType
    created_at: datetime
    updated_at: datetime | None = None
    last_updated_with: str


class UserPage(WireModel):
    users: list[User] = Field(default_factory=list)
    next_page_token: str | None = None


class ProvisionUserOptions(WireModel):
    """Body of ``POST /user``.

    Every field is optional: without ``id`` the user is derived from the
    bearer token of the request (self-provisioning).
    """

    id: str | None = None
    name: str | None = None
    email: str | None = None
    user_type: UserType | None = None
    update_if_exists: bool | None = None


class UpdateUserOptions(WireModel):
    name: str
    email: str | None = None
    user_type: UserType | None = None


class ListUsersOptions(WireModel):
    """Query parameters of ``GET /user``."""

    name: str | None = None
    page_token: str | None = None
    page_size: int | None = None
