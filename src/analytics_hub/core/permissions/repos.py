"""Repositories for permissions and roles."""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from analytics_hub.api.dependencies import DBSession
from analytics_hub.core.permissions.catalog import PermissionCatalog
from analytics_hub.core.permissions.models import Permission, Role


class PermissionRepository:
    """Repository for Permission database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_all(self) -> list[Permission]:
        """List every permission ordered by name."""
        result = await self.session.execute(select(Permission).order_by(Permission.name))
        return list(result.scalars().all())

    async def get_by_names(self, names: Iterable[str]) -> list[Permission]:
        """Get the permissions whose names are in ``names``.

        Names without a stored permission are silently absent from the result.
        """
        wanted = set(names)
        if not wanted:
            return []
        stmt = select(Permission).where(Permission.name.in_(wanted)).order_by(Permission.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def upsert_catalog(self, catalog: PermissionCatalog) -> list[Permission]:
        """Ensure every catalog permission exists.

        Existing permissions are left untouched; missing ones are inserted.

        Args:
            catalog: The permission catalog to persist

        Returns:
            The permissions that were created
        """
        existing = {p.name for p in await self.get_by_names(catalog.names())}
        created: list[Permission] = []

        for definition in catalog:
            if definition.name in existing:
                continue
            permission = Permission(
                name=definition.name,
                resource=definition.resource,
                action=definition.action,
                description=definition.description,
            )
            self.session.add(permission)
            created.append(permission)

        await self.session.flush()
        return created


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        """Create a new role.

        Args:
            role: Role instance to create

        Returns:
            The created role with ID populated
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by its unique name, with permissions loaded."""
        stmt = (
            select(Role)
            .where(Role.name == name)
            .options(selectinload(Role.permissions))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, include_inactive: bool = True) -> list[Role]:
        """List roles ordered by name."""
        stmt = select(Role).options(selectinload(Role.permissions)).order_by(Role.name)
        if not include_inactive:
            stmt = stmt.where(Role.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sync_permissions(self, role: Role, names: Iterable[str]) -> Role:
        """Replace the role's grants with exactly ``names``.

        Args:
            role: The role to update
            names: Permission names the role should hold afterwards

        Returns:
            The updated role
        """
        permissions = await PermissionRepository(self.session).get_by_names(names)
        role.permissions = permissions
        await self.session.flush()
        return role


# Type aliases for dependency injection
PermissionRepo = Annotated[PermissionRepository, Depends(PermissionRepository)]
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
