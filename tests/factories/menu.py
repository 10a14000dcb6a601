"""Menu node factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from analytics_hub.modules.menus.schemas import MenuNode


class MenuNodeFactory(ModelFactory):
    """Factory for creating test MenuNode instances.

    Nodes default to active, unrestricted roots.
    """

    __model__ = MenuNode

    @classmethod
    def id(cls) -> str:
        """Generate a menu ID."""
        return uuid4().hex[:8]

    @classmethod
    def title(cls) -> str:
        """Generate a title."""
        return f"Menu {uuid4().hex[:4]}"

    @classmethod
    def slug(cls) -> str:
        """Generate a unique slug."""
        return f"menu-{uuid4().hex[:8]}"

    @classmethod
    def parent_id(cls) -> str | None:
        """Default to a root entry."""
        return None

    @classmethod
    def level(cls) -> int:
        """Default to the root level."""
        return 1

    @classmethod
    def order_index(cls) -> int:
        """Default to the first position."""
        return 0

    @classmethod
    def is_active(cls) -> bool:
        """Default to active."""
        return True

    @classmethod
    def roles(cls) -> frozenset[str]:
        """Default to visible for every role."""
        return frozenset()

    @classmethod
    def path(cls) -> str | None:
        """Default to no route."""
        return None

    @classmethod
    def icon(cls) -> str | None:
        """Default to no icon."""
        return None
