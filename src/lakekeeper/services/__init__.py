"""Service objects grouping the operations of the management API."""

from lakekeeper.services.permission import PermissionService
from lakekeeper.services.project import ProjectService
from lakekeeper.services.role import RoleService
from lakekeeper.services.server import ServerService
from lakekeeper.services.user import UserService
from lakekeeper.services.warehouse import WarehouseService

__all__ = [
    "PermissionService",
    "ProjectService",
    "RoleService",
    "ServerService",
    "UserService",
    "WarehouseService",
]
