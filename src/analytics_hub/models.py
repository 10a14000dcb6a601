"""Import every ORM model so SQLAlchemy can resolve relationships by name.

Import this module before using the mappers outside the web app (CLI,
scripts, tests).
"""

from analytics_hub.core.database.base import Base
from analytics_hub.core.permissions.models import Permission, Role, role_permissions
from analytics_hub.modules.menus.models import MenuItem, menu_roles
from analytics_hub.modules.users.models import User


__all__ = [
    "Base",
    "MenuItem",
    "Permission",
    "Role",
    "User",
    "menu_roles",
    "role_permissions",
]
