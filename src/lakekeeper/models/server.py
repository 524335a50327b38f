"""Server information and bootstrap options."""

from __future__ import annotations

from pydantic import Field

from lakekeeper.models._base import WireModel
from lakekeeper.models.user import UserType


class ServerInfo(WireModel):
    """Configuration and status reported by ``GET /info``."""

    authz_backend: str | None = None
    bootstrapped: bool
    default_project_id: str | None = None
    aws_system_identities_enabled: bool = False
    azure_system_identities_enabled: bool = False
    gcp_system_identities_enabled: bool = False
    server_id: str | None = None
    version: str | None = None
    queues: list[str] = Field(default_factory=list)


class BootstrapServerOptions(WireModel):
    """Body of ``POST /bootstrap``.

    The caller becomes the initial administrator (and operator, with
    ``is_operator``). Terms of use must be accepted.
    """

    accept_terms_of_use: bool
    is_operator: bool | None = None
    user_email: str | None = None
    user_name: str | None = None
    user_type: UserType | None = None
