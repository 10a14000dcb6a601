"""Permission system for role-based access control (RBAC)."""

from analytics_hub.core.permissions.catalog import (
    DEFAULT_PERMISSION_CATALOG,
    PERMISSION_GROUPS,
    PermissionCatalog,
    PermissionDefinition,
    Permissions,
    Roles,
    is_valid_permission,
    is_valid_role,
    parse_permission,
)
from analytics_hub.core.permissions.checker import (
    PermissionChecker,
    create_permission_checker,
)
from analytics_hub.core.permissions.guards import (
    Allowed,
    Decision,
    Denied,
    authorize,
    authorize_all,
    authorize_any,
    authorize_resource,
    authorize_role,
    authorize_user,
    enforce,
    require_active_user,
    require_all_permissions,
    require_any_permission,
    require_permission,
    require_resource_access,
    require_role,
)
from analytics_hub.core.permissions.schemas import (
    PermissionRef,
    RoleProjection,
    UserProjection,
)
from analytics_hub.core.permissions.templates import (
    DEFAULT_ROLE_TEMPLATES,
    PermissionRule,
    RoleTemplate,
    RoleTemplateResolver,
    can_assign_role,
    default_resolver,
    get_role_permissions,
)


__all__ = [
    # Catalog
    "DEFAULT_PERMISSION_CATALOG",
    # Templates
    "DEFAULT_ROLE_TEMPLATES",
    "PERMISSION_GROUPS",
    # Guards
    "Allowed",
    "Decision",
    "Denied",
    "PermissionCatalog",
    # Checker
    "PermissionChecker",
    "PermissionDefinition",
    # Schemas
    "PermissionRef",
    "PermissionRule",
    "Permissions",
    "RoleProjection",
    "RoleTemplate",
    "RoleTemplateResolver",
    "Roles",
    "UserProjection",
    "authorize",
    "authorize_all",
    "authorize_any",
    "authorize_resource",
    "authorize_role",
    "authorize_user",
    "can_assign_role",
    "create_permission_checker",
    "default_resolver",
    "enforce",
    "get_role_permissions",
    "is_valid_permission",
    "is_valid_role",
    "parse_permission",
    "require_active_user",
    "require_all_permissions",
    "require_any_permission",
    "require_permission",
    "require_resource_access",
    "require_role",
]
