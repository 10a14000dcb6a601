"""Role templates used at provisioning time.

A role template describes the initial permission set of a built-in role.
Templates are only resolved when seeding or resetting roles; request-time
authorization reads the permissions persisted on the role instead.

Templates are plain configuration: a list of allow rules and a deny-list,
resolved against a permission catalog. The resolver holds both inputs and
has no dependency on persisted state, so tests can swap in their own
catalog and template table.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from analytics_hub.core.permissions.catalog import (
    DEFAULT_PERMISSION_CATALOG,
    PermissionCatalog,
    Permissions,
    Roles,
)


@dataclass(frozen=True)
class PermissionRule:
    """Selects catalog permissions by resource and, optionally, action.

    Attributes:
        resources: Resources whose permissions are selected
        actions: When set, only these actions are selected
    """

    resources: frozenset[str]
    actions: frozenset[str] | None = None

    def select(self, catalog: PermissionCatalog) -> set[str]:
        """Return the names of catalog permissions matching this rule."""
        return {
            d.name
            for d in catalog
            if d.resource in self.resources
            and (self.actions is None or d.action in self.actions)
        }


@dataclass(frozen=True)
class RoleTemplate:
    """Initial permission set for a role.

    Attributes:
        name: Role name the template provisions
        description: Human-readable description stored on the role
        grant_all: Start from the full catalog instead of the allow rules
        allow: Rules whose selections are granted
        permissions: Individual permission names granted
        deny: Permission names removed after everything else is applied
    """

    name: str
    description: str = ""
    grant_all: bool = False
    allow: tuple[PermissionRule, ...] = ()
    permissions: frozenset[str] = field(default_factory=frozenset)
    deny: frozenset[str] = field(default_factory=frozenset)

    def resolve(self, catalog: PermissionCatalog) -> frozenset[str]:
        """Resolve this template against ``catalog``.

        The result is always a subset of the catalog; names in
        ``permissions`` that are not catalogued are ignored.
        """
        if self.grant_all:
            granted = set(catalog.names())
        else:
            granted = set()
            for rule in self.allow:
                granted |= rule.select(catalog)
            granted |= self.permissions & catalog.names()
        return frozenset(granted - self.deny)


DEFAULT_ROLE_TEMPLATES: tuple[RoleTemplate, ...] = (
    RoleTemplate(
        name=Roles.SUPER_ADMIN,
        description="Full system access with all permissions",
        grant_all=True,
    ),
    RoleTemplate(
        name=Roles.ADMIN,
        description="Administrative access with content management permissions",
        grant_all=True,
        deny=frozenset(
            {
                Permissions.USERS_DELETE,
                Permissions.ROLES_DELETE,
                Permissions.SETTINGS_UPDATE,
            }
        ),
    ),
    RoleTemplate(
        name=Roles.EDITOR,
        description="Content creation and editing permissions",
        allow=(PermissionRule(frozenset({"content", "dashboard", "files"})),),
        permissions=frozenset({Permissions.CATEGORIES_READ}),
    ),
    RoleTemplate(
        name=Roles.VIEWER,
        description="Read-only access to dashboards and content",
        allow=(
            PermissionRule(
                frozenset({"users", "content", "dashboard", "files", "categories"}),
                actions=frozenset({"read"}),
            ),
        ),
    ),
)

# Built-in roles from least to most privileged
ROLE_PRIVILEGE_ORDER: tuple[str, ...] = (
    Roles.VIEWER,
    Roles.EDITOR,
    Roles.ADMIN,
    Roles.SUPER_ADMIN,
)


class RoleTemplateResolver:
    """Resolves role names to their template permission sets.

    Resolution happens once at construction; lookups afterwards are plain
    dictionary reads.

    Usage:
        resolver = RoleTemplateResolver(DEFAULT_PERMISSION_CATALOG, DEFAULT_ROLE_TEMPLATES)
        resolver.get_role_permissions("Editor")
    """

    def __init__(
        self,
        catalog: PermissionCatalog,
        templates: Iterable[RoleTemplate],
    ) -> None:
        self.catalog = catalog
        table: dict[str, RoleTemplate] = {}
        for template in templates:
            if template.name in table:
                raise ValueError(f"Duplicate role template {template.name!r}")
            table[template.name] = template
        self._templates: Mapping[str, RoleTemplate] = MappingProxyType(table)
        self._resolved: Mapping[str, frozenset[str]] = MappingProxyType(
            {name: template.resolve(catalog) for name, template in table.items()}
        )

    def get_role_permissions(self, role_name: str) -> frozenset[str]:
        """Return the template permissions for ``role_name``.

        Unknown role names yield an empty set rather than an error.
        """
        return self._resolved.get(role_name, frozenset())

    def get_template(self, role_name: str) -> RoleTemplate | None:
        """Return the raw template for ``role_name``, if defined."""
        return self._templates.get(role_name)

    def role_names(self) -> list[str]:
        """Return the templated role names in definition order."""
        return list(self._templates)

    def resolve_all(self) -> dict[str, frozenset[str]]:
        """Return every templated role with its resolved permissions."""
        return dict(self._resolved)

    def __contains__(self, role_name: object) -> bool:
        return role_name in self._templates


@lru_cache
def default_resolver() -> RoleTemplateResolver:
    """Get the resolver for the default catalog and templates."""
    return RoleTemplateResolver(DEFAULT_PERMISSION_CATALOG, DEFAULT_ROLE_TEMPLATES)


def get_role_permissions(role_name: str) -> frozenset[str]:
    """Return the default template permissions for ``role_name``."""
    return default_resolver().get_role_permissions(role_name)


def privilege_level(role_name: str | None) -> int:
    """Return the privilege rank of a built-in role (0 for anything else)."""
    if role_name not in ROLE_PRIVILEGE_ORDER:
        return 0
    return ROLE_PRIVILEGE_ORDER.index(role_name) + 1


def can_assign_role(assigner_role: str | None, target_role: str) -> bool:
    """Check whether a user holding ``assigner_role`` may grant ``target_role``.

    Super Admin may assign any role, Admin any role except Super Admin,
    and every other role only roles strictly below its own rank.
    """
    if assigner_role == Roles.SUPER_ADMIN:
        return True
    if assigner_role == Roles.ADMIN:
        return target_role != Roles.SUPER_ADMIN
    return privilege_level(assigner_role) > privilege_level(target_role)
