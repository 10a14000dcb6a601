"""Menu repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from analytics_hub.api.dependencies import DBSession
from analytics_hub.core.errors import ConflictError, NotFoundError
from analytics_hub.modules.menus.models import MenuItem
from analytics_hub.modules.menus.schemas import MenuNode
from analytics_hub.modules.menus.validation import descendants_of, validate_parent


class MenuRepository:
    """Repository for MenuItem database operations.

    Writes go through the menu validation rules so that stored menus stay
    acyclic and within the depth limit.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_all(self) -> list[MenuItem]:
        """List every menu entry with its roles, ordered for display."""
        stmt = (
            select(MenuItem)
            .options(selectinload(MenuItem.roles))
            .order_by(MenuItem.level, MenuItem.order_index, MenuItem.title)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_nodes(self) -> list[MenuNode]:
        """Load the whole menu forest as filter input."""
        return [item.to_node() for item in await self.list_all()]

    async def get_by_id(self, menu_id: UUID) -> MenuItem | None:
        """Get a menu entry by ID."""
        stmt = (
            select(MenuItem)
            .where(MenuItem.id == menu_id)
            .options(selectinload(MenuItem.roles))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> MenuItem | None:
        """Get a menu entry by its unique slug."""
        result = await self.session.execute(select(MenuItem).where(MenuItem.slug == slug))
        return result.scalar_one_or_none()

    async def create(self, menu: MenuItem) -> MenuItem:
        """Create a menu entry under ``menu.parent_id``.

        The entry's level is derived from its parent.

        Raises:
            ConflictError: If the slug is taken
            ValidationError: If the parent is unknown or too deep
        """
        if await self.get_by_slug(menu.slug) is not None:
            raise ConflictError(
                "Menu slug already exists",
                details={"slug": menu.slug},
            )

        parent_of, levels = await self._tree_shape()
        menu.level = validate_parent(parent_of, levels, None, _key(menu.parent_id))

        self.session.add(menu)
        await self.session.flush()
        await self.session.refresh(menu)
        return menu

    async def move(self, menu_id: UUID, new_parent_id: UUID | None) -> MenuItem:
        """Re-parent a menu entry together with its subtree.

        Every descendant's level shifts by the same amount as the entry's.

        Raises:
            NotFoundError: If the entry does not exist
            ValidationError: For self-parenting, cycles, unknown parents or
                depth overflow
        """
        menu = await self.get_by_id(menu_id)
        if menu is None:
            raise NotFoundError("Menu not found", resource="menu", resource_id=str(menu_id))

        parent_of, levels = await self._tree_shape()
        new_level = validate_parent(parent_of, levels, str(menu_id), _key(new_parent_id))
        delta = new_level - menu.level

        if delta:
            subtree_ids = [UUID(key) for key in descendants_of(parent_of, str(menu_id))]
            if subtree_ids:
                result = await self.session.execute(
                    select(MenuItem).where(MenuItem.id.in_(subtree_ids))
                )
                for descendant in result.scalars():
                    descendant.level += delta

        menu.level = new_level
        menu.parent_id = new_parent_id
        await self.session.flush()
        return menu

    async def _tree_shape(self) -> tuple[dict[str, str | None], dict[str, int]]:
        result = await self.session.execute(
            select(MenuItem.id, MenuItem.parent_id, MenuItem.level)
        )
        parent_of: dict[str, str | None] = {}
        levels: dict[str, int] = {}
        for menu_id, parent_id, level in result.all():
            parent_of[str(menu_id)] = _key(parent_id)
            levels[str(menu_id)] = level
        return parent_of, levels


def _key(menu_id: UUID | None) -> str | None:
    return str(menu_id) if menu_id is not None else None


# Type alias for dependency injection
MenuRepo = Annotated[MenuRepository, Depends(MenuRepository)]
