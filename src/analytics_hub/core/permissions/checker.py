"""Permission checking logic.

``PermissionChecker`` answers authorization questions for one resolved
user. It is pure and synchronous: the user projection is loaded by the
caller beforehand, every check is a set lookup or a string comparison, and
denial is a ``False`` return value rather than an exception.

Each request builds its own checker from freshly loaded data; instances
share no mutable state.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from analytics_hub.core.constants import ADMIN_ROLE, SUPER_ADMIN_ROLE
from analytics_hub.core.permissions.catalog import Permissions
from analytics_hub.core.permissions.schemas import UserProjection


# Management permissions that open the admin panel for non-admin roles
ADMIN_PANEL_PERMISSIONS: tuple[str, ...] = (
    Permissions.USERS_UPDATE,
    Permissions.ROLES_UPDATE,
    Permissions.CONTENT_PUBLISH,
    Permissions.SETTINGS_UPDATE,
)

# Bulk operations and the permission each one needs on top of an admin role
BULK_OPERATION_PERMISSIONS: dict[str, str] = {
    "delete_users": Permissions.USERS_DELETE,
    "delete_content": Permissions.CONTENT_DELETE,
    "export_data": Permissions.AUDIT_EXPORT,
}


class PermissionChecker:
    """Evaluates permissions and roles for a single user.

    The superuser bypass is keyed on the role *name*: a role called
    ``"Super Admin"`` passes every permission check, including permissions
    that are not in the catalog. Renaming that role removes the bypass.

    Usage:
        checker = PermissionChecker(user_projection)
        if not checker.has_permission("content.publish"):
            ...
    """

    __slots__ = ("_permissions", "_user")

    def __init__(self, user: UserProjection | Mapping[str, Any] | None) -> None:
        """Build a checker for ``user``.

        Args:
            user: The user projection, a mapping in the same shape, or None
                for an unauthenticated request

        Raises:
            pydantic.ValidationError: If a mapping does not match the
                projection shape (e.g. a role without a name)
        """
        if user is not None and not isinstance(user, UserProjection):
            user = UserProjection.model_validate(user)
        self._user: UserProjection | None = user
        self._permissions: frozenset[str] = (
            user.role.permission_names() if user is not None and user.role else frozenset()
        )

    @property
    def user(self) -> UserProjection | None:
        """The user this checker evaluates."""
        return self._user

    @property
    def user_id(self) -> str | None:
        """The user's ID, or None without a user."""
        return self._user.id if self._user is not None else None

    @property
    def is_authenticated(self) -> bool:
        """Whether a user is attached at all."""
        return self._user is not None

    @property
    def is_active(self) -> bool:
        """Whether the user is present and active."""
        return self._user is not None and self._user.is_active

    def has_permission(self, permission: str) -> bool:
        """Check if the user holds ``permission``.

        Absent or inactive users are always denied. Users whose role is
        named ``"Super Admin"`` are always allowed. Everyone else needs the
        permission in their role's grant set.
        """
        if not self.is_active:
            return False

        if self.is_super_admin():
            return True

        return permission in self._permissions

    def has_any_permission(self, permissions: Iterable[str]) -> bool:
        """Check if the user holds at least one of ``permissions``.

        An empty list is never satisfied.
        """
        return any(self.has_permission(permission) for permission in permissions)

    def has_all_permissions(self, permissions: Iterable[str]) -> bool:
        """Check if the user holds every one of ``permissions``.

        An empty list is always satisfied.
        """
        return all(self.has_permission(permission) for permission in permissions)

    def has_role(self, role_name: str) -> bool:
        """Check if the user's role is exactly ``role_name``."""
        role_name_held = self.get_user_role()
        return role_name_held is not None and role_name_held == role_name

    def has_any_role(self, role_names: Iterable[str]) -> bool:
        """Check if the user's role is one of ``role_names``."""
        return any(self.has_role(role_name) for role_name in role_names)

    def is_admin(self) -> bool:
        """Check if the user is an Admin or a Super Admin."""
        return self.has_any_role([ADMIN_ROLE, SUPER_ADMIN_ROLE])

    def is_super_admin(self) -> bool:
        """Check if the user is a Super Admin."""
        return self.has_role(SUPER_ADMIN_ROLE)

    def can_perform_action(self, resource: str, action: str) -> bool:
        """Check the ``resource.action`` permission."""
        return self.has_permission(f"{resource}.{action}")

    def owns_resource(self, owner_id: str) -> bool:
        """Check if the user is the owner identified by ``owner_id``."""
        if self._user is None:
            return False
        return self._user.id == str(owner_id)

    def can_access_resource(self, owner_id: str, permission: str) -> bool:
        """Allow the owner of a resource, or anyone holding ``permission``.

        This is the self-service rule: users may act on their own records
        without a blanket grant, while admins act on anyone's through the
        explicit permission.
        """
        return self.owns_resource(owner_id) or self.has_permission(permission)

    def can_access_admin(self) -> bool:
        """Check if the user may open the administration area."""
        return self.is_admin() or self.has_any_permission(ADMIN_PANEL_PERMISSIONS)

    def can_perform_bulk_operation(self, operation: str) -> bool:
        """Check a named bulk operation.

        Bulk operations are restricted to admins holding the matching
        permission. Unknown operations are denied.
        """
        if not self.is_admin():
            return False

        permission = BULK_OPERATION_PERMISSIONS.get(operation)
        if permission is None:
            return False
        return self.has_permission(permission)

    def get_all_permissions(self) -> frozenset[str]:
        """Return the permissions granted by the user's role."""
        return self._permissions

    def get_user_role(self) -> str | None:
        """Return the user's role name, if any."""
        if self._user is None or self._user.role is None:
            return None
        return self._user.role.name

    def __repr__(self) -> str:
        return f"<PermissionChecker(user_id={self.user_id}, role={self.get_user_role()})>"


def create_permission_checker(
    user: UserProjection | Mapping[str, Any] | None,
) -> PermissionChecker:
    """Create a checker for ``user``."""
    return PermissionChecker(user)


def has_permission(user: UserProjection | None, permission: str) -> bool:
    """Check a single permission without keeping the checker around."""
    return PermissionChecker(user).has_permission(permission)


def has_role(user: UserProjection | None, role_name: str) -> bool:
    """Check a single role without keeping the checker around."""
    return PermissionChecker(user).has_role(role_name)


def is_admin(user: UserProjection | None) -> bool:
    """Check whether ``user`` is an Admin or Super Admin."""
    return PermissionChecker(user).is_admin()


def is_super_admin(user: UserProjection | None) -> bool:
    """Check whether ``user`` is a Super Admin."""
    return PermissionChecker(user).is_super_admin()
