"""Pydantic schemas for navigation menus."""

from pydantic import BaseModel, ConfigDict, Field


class MenuNode(BaseModel):
    """One menu entry as stored, before visibility filtering.

    ``roles`` is the visibility grant: the role names allowed to see the
    entry. An empty set means any authenticated user sees it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str
    parent_id: str | None = None
    level: int = Field(1, ge=1)
    order_index: int = 0
    is_active: bool = True
    roles: frozenset[str] = frozenset()
    path: str | None = None
    icon: str | None = None


class VisibleMenuItem(BaseModel):
    """A menu entry the current user may see, with its visible children."""

    id: str
    title: str
    slug: str
    path: str | None = None
    icon: str | None = None
    level: int
    order_index: int
    children: list["VisibleMenuItem"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: MenuNode) -> "VisibleMenuItem":
        """Copy the display fields of ``node``; children are attached later."""
        return cls(
            id=node.id,
            title=node.title,
            slug=node.slug,
            path=node.path,
            icon=node.icon,
            level=node.level,
            order_index=node.order_index,
        )
