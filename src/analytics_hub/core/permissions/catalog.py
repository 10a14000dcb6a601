"""Permission catalog.

Every permission is an atomic ``resource.action`` identifier
(e.g. ``content.publish``). The catalog enumerates the permissions the
application knows about together with their metadata. It is consumed by
the role template resolver and by seeding; request-time checks never
consult it.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

from analytics_hub.core.constants import (
    ADMIN_ROLE,
    EDITOR_ROLE,
    PERMISSION_SEPARATOR,
    SUPER_ADMIN_ROLE,
    VIEWER_ROLE,
)


def parse_permission(name: str) -> tuple[str, str]:
    """Split a permission name into ``(resource, action)``.

    Args:
        name: Permission name such as ``"users.create"``

    Returns:
        The resource and action parts

    Raises:
        ValueError: If the name is not exactly ``resource.action``
    """
    if not isinstance(name, str):
        raise TypeError(f"Permission name must be a string, got {type(name).__name__}")

    resource, sep, action = name.partition(PERMISSION_SEPARATOR)
    if not sep or not resource or not action or PERMISSION_SEPARATOR in action:
        raise ValueError(f"Invalid permission name {name!r}; expected 'resource.action'")
    return resource, action


@dataclass(frozen=True, slots=True)
class PermissionDefinition:
    """Metadata for a single catalog permission."""

    name: str
    resource: str
    action: str
    description: str | None = None

    @classmethod
    def from_name(cls, name: str, description: str | None = None) -> "PermissionDefinition":
        """Build a definition by parsing a ``resource.action`` name."""
        resource, action = parse_permission(name)
        return cls(name=name, resource=resource, action=action, description=description)


class PermissionCatalog:
    """Immutable, ordered collection of permission definitions keyed by name.

    Iteration yields definitions in the order they were given, which keeps
    seeding output and CLI listings stable.
    """

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Iterable[PermissionDefinition]) -> None:
        entries: dict[str, PermissionDefinition] = {}
        for definition in definitions:
            resource, action = parse_permission(definition.name)
            if (resource, action) != (definition.resource, definition.action):
                raise ValueError(
                    f"Permission {definition.name!r} does not match "
                    f"resource={definition.resource!r} action={definition.action!r}"
                )
            if definition.name in entries:
                raise ValueError(f"Duplicate permission {definition.name!r} in catalog")
            entries[definition.name] = definition
        self._definitions = MappingProxyType(entries)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "PermissionCatalog":
        """Build a catalog from bare ``resource.action`` names."""
        return cls(PermissionDefinition.from_name(name) for name in names)

    def names(self) -> frozenset[str]:
        """Return every permission name in the catalog."""
        return frozenset(self._definitions)

    def get(self, name: str) -> PermissionDefinition | None:
        """Return the definition for ``name``, if catalogued."""
        return self._definitions.get(name)

    def by_resource(self, resource: str) -> list[PermissionDefinition]:
        """Return the definitions for one resource, in catalog order."""
        return [d for d in self._definitions.values() if d.resource == resource]

    def resources(self) -> list[str]:
        """Return the distinct resources, in catalog order."""
        return list(dict.fromkeys(d.resource for d in self._definitions.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[PermissionDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"<PermissionCatalog(size={len(self)})>"


class Roles:
    """Built-in role names."""

    SUPER_ADMIN = SUPER_ADMIN_ROLE
    ADMIN = ADMIN_ROLE
    EDITOR = EDITOR_ROLE
    VIEWER = VIEWER_ROLE

    ALL = (SUPER_ADMIN, ADMIN, EDITOR, VIEWER)


class Permissions:
    """Named constants for the default catalog."""

    # User management
    USERS_CREATE = "users.create"
    USERS_READ = "users.read"
    USERS_UPDATE = "users.update"
    USERS_DELETE = "users.delete"
    USERS_INVITE = "users.invite"

    # Role management
    ROLES_CREATE = "roles.create"
    ROLES_READ = "roles.read"
    ROLES_UPDATE = "roles.update"
    ROLES_DELETE = "roles.delete"

    # Content management
    CONTENT_CREATE = "content.create"
    CONTENT_READ = "content.read"
    CONTENT_UPDATE = "content.update"
    CONTENT_DELETE = "content.delete"
    CONTENT_PUBLISH = "content.publish"

    # Content categories
    CATEGORIES_CREATE = "categories.create"
    CATEGORIES_READ = "categories.read"
    CATEGORIES_UPDATE = "categories.update"
    CATEGORIES_DELETE = "categories.delete"

    # Dashboards
    DASHBOARD_CREATE = "dashboard.create"
    DASHBOARD_READ = "dashboard.read"
    DASHBOARD_UPDATE = "dashboard.update"
    DASHBOARD_DELETE = "dashboard.delete"

    # Navigation menus
    MENUS_CREATE = "menus.create"
    MENUS_READ = "menus.read"
    MENUS_UPDATE = "menus.update"
    MENUS_DELETE = "menus.delete"

    # System settings
    SETTINGS_READ = "settings.read"
    SETTINGS_UPDATE = "settings.update"

    # Audit logs
    AUDIT_READ = "audit.read"
    AUDIT_EXPORT = "audit.export"

    # File management
    FILES_UPLOAD = "files.upload"
    FILES_READ = "files.read"
    FILES_DELETE = "files.delete"


DEFAULT_PERMISSION_CATALOG = PermissionCatalog(
    [
        PermissionDefinition("users.create", "users", "create", "Create new users"),
        PermissionDefinition("users.read", "users", "read", "View user information"),
        PermissionDefinition("users.update", "users", "update", "Update user information"),
        PermissionDefinition("users.delete", "users", "delete", "Delete users"),
        PermissionDefinition("users.invite", "users", "invite", "Invite new users"),
        PermissionDefinition("roles.create", "roles", "create", "Create new roles"),
        PermissionDefinition("roles.read", "roles", "read", "View role information"),
        PermissionDefinition("roles.update", "roles", "update", "Update role information"),
        PermissionDefinition("roles.delete", "roles", "delete", "Delete roles"),
        PermissionDefinition("content.create", "content", "create", "Create new content"),
        PermissionDefinition("content.read", "content", "read", "View content"),
        PermissionDefinition("content.update", "content", "update", "Update content"),
        PermissionDefinition("content.delete", "content", "delete", "Delete content"),
        PermissionDefinition("content.publish", "content", "publish", "Publish content"),
        PermissionDefinition("categories.create", "categories", "create", "Create categories"),
        PermissionDefinition("categories.read", "categories", "read", "View categories"),
        PermissionDefinition("categories.update", "categories", "update", "Update categories"),
        PermissionDefinition("categories.delete", "categories", "delete", "Delete categories"),
        PermissionDefinition("dashboard.create", "dashboard", "create", "Create dashboards"),
        PermissionDefinition("dashboard.read", "dashboard", "read", "View dashboards"),
        PermissionDefinition("dashboard.update", "dashboard", "update", "Update dashboards"),
        PermissionDefinition("dashboard.delete", "dashboard", "delete", "Delete dashboards"),
        PermissionDefinition("menus.create", "menus", "create", "Create navigation menus"),
        PermissionDefinition("menus.read", "menus", "read", "View navigation menus"),
        PermissionDefinition("menus.update", "menus", "update", "Update and reorder menus"),
        PermissionDefinition("menus.delete", "menus", "delete", "Delete navigation menus"),
        PermissionDefinition("settings.read", "settings", "read", "View system settings"),
        PermissionDefinition("settings.update", "settings", "update", "Update system settings"),
        PermissionDefinition("audit.read", "audit", "read", "View audit logs"),
        PermissionDefinition("audit.export", "audit", "export", "Export audit logs"),
        PermissionDefinition("files.upload", "files", "upload", "Upload files"),
        PermissionDefinition("files.read", "files", "read", "View files"),
        PermissionDefinition("files.delete", "files", "delete", "Delete files"),
    ]
)


def _group(resource: str) -> tuple[str, ...]:
    return tuple(d.name for d in DEFAULT_PERMISSION_CATALOG.by_resource(resource))


PERMISSION_GROUPS: dict[str, tuple[str, ...]] = {
    "user_management": _group("users"),
    "role_management": _group("roles"),
    "content_management": _group("content"),
    "category_management": _group("categories"),
    "dashboard_management": _group("dashboard"),
    "menu_management": _group("menus"),
    "file_management": _group("files"),
    "system_administration": _group("settings") + _group("audit"),
}


def is_valid_permission(
    name: str, catalog: PermissionCatalog = DEFAULT_PERMISSION_CATALOG
) -> bool:
    """Check whether ``name`` is a catalogued permission."""
    return name in catalog


def is_valid_role(name: str) -> bool:
    """Check whether ``name`` is one of the built-in roles."""
    return name in Roles.ALL
