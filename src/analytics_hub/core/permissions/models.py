"""Permission system database models.

This module defines the RBAC (Role-Based Access Control) models:
- Permission: A ``resource.action`` grant identifier
- Role: A named set of permissions; every user references at most one role
- role_permissions: Junction table linking roles to permissions

There is no inheritance between roles: a role's effective permissions are
exactly the permissions granted to it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from analytics_hub.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PERMISSION_ACTION_LENGTH,
    MAX_PERMISSION_NAME_LENGTH,
    MAX_PERMISSION_RESOURCE_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from analytics_hub.core.database.base import Base, TimestampMixin, UUIDMixin
from analytics_hub.core.permissions.schemas import PermissionRef, RoleProjection


if TYPE_CHECKING:
    from analytics_hub.modules.users.models import User


# Junction table for Role <-> Permission many-to-many relationship
role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "permission_id",
        Uuid,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Permission(Base, UUIDMixin, TimestampMixin):
    """Permission model representing an action on a resource.

    Permissions are seeded from the catalog and referenced by role grants;
    they are not edited once referenced.

    Attributes:
        name: Unique ``resource.action`` identifier
        resource: The resource being protected (e.g., "users", "content")
        action: The action being performed (e.g., "read", "publish")
        description: Human-readable description of the permission
    """

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    resource: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_RESOURCE_LENGTH),
        nullable=False,
        index=True,
    )
    action: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_ACTION_LENGTH),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    # Relationships
    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return f"<Permission({self.name})>"


class Role(Base, UUIDMixin, TimestampMixin):
    """Role model representing a named set of permissions.

    Roles are soft-disabled through ``is_active`` and are not deleted while
    users reference them.

    Attributes:
        name: Unique role name (e.g., "Admin", "Editor")
        description: Human-readable description of the role
        is_active: Whether the role is enabled
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Relationships
    permissions: Mapped[list["Permission"]] = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="role",
    )

    def permission_names(self) -> frozenset[str]:
        """Return the names of every permission granted to this role."""
        return frozenset(permission.name for permission in self.permissions)

    def to_projection(self) -> RoleProjection:
        """Build the read-only projection used by the permission checker."""
        return RoleProjection(
            id=str(self.id),
            name=self.name,
            is_active=self.is_active,
            permissions=[PermissionRef(name=name) for name in sorted(self.permission_names())],
        )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
