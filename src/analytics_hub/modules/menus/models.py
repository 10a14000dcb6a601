"""Navigation menu database models."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from analytics_hub.core.constants import (
    MAX_MENU_ICON_LENGTH,
    MAX_MENU_PATH_LENGTH,
    MAX_MENU_SLUG_LENGTH,
    MAX_MENU_TITLE_LENGTH,
    ROOT_MENU_LEVEL,
)
from analytics_hub.core.database.base import Base, TimestampMixin, UUIDMixin
from analytics_hub.modules.menus.schemas import MenuNode


if TYPE_CHECKING:
    from analytics_hub.core.permissions.models import Role


# Junction table for the roles allowed to see a menu entry
menu_roles = Table(
    "menu_roles",
    Base.metadata,
    Column(
        "menu_id", Uuid, ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    ),
)


class MenuItem(Base, UUIDMixin, TimestampMixin):
    """A navigation menu entry.

    Entries form a forest through ``parent_id``. An entry without roles is
    visible to every user holding a role.

    Attributes:
        title: Display title
        slug: Unique identifier used by the frontend
        icon: Optional icon name
        path: Optional route the entry links to
        parent_id: Parent entry, None for roots
        level: Depth in the tree, 1 for roots
        order_index: Position among siblings
        is_active: Whether the entry is shown at all
    """

    __tablename__ = "menu_items"

    title: Mapped[str] = mapped_column(
        String(MAX_MENU_TITLE_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_MENU_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    icon: Mapped[str | None] = mapped_column(
        String(MAX_MENU_ICON_LENGTH),
        nullable=True,
    )
    path: Mapped[str | None] = mapped_column(
        String(MAX_MENU_PATH_LENGTH),
        nullable=True,
    )
    parent_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    level: Mapped[int] = mapped_column(
        Integer,
        default=ROOT_MENU_LEVEL,
        nullable=False,
    )
    order_index: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    # Relationships
    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=menu_roles,
        lazy="selectin",
    )

    def to_node(self) -> MenuNode:
        """Build the plain node the visibility filter consumes."""
        return MenuNode(
            id=str(self.id),
            title=self.title,
            slug=self.slug,
            parent_id=str(self.parent_id) if self.parent_id is not None else None,
            level=self.level,
            order_index=self.order_index,
            is_active=self.is_active,
            roles=frozenset(role.name for role in self.roles),
            path=self.path,
            icon=self.icon,
        )

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, slug={self.slug}, level={self.level})>"
