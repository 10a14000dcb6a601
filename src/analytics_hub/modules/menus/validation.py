"""Write-time checks that keep the menu tree a shallow forest.

The visibility filter assumes menus form an acyclic tree no deeper than
``MAX_MENU_DEPTH``. Anything that creates or re-parents a menu entry runs
these checks first.
"""

from collections.abc import Mapping

from analytics_hub.core.constants import MAX_MENU_DEPTH, ROOT_MENU_LEVEL
from analytics_hub.core.errors import ValidationError


def resolve_level(parent_level: int | None) -> int:
    """Return the level of an entry placed under a parent at ``parent_level``.

    Args:
        parent_level: Level of the parent, or None for a root entry

    Returns:
        The new entry's level

    Raises:
        ValidationError: If the entry would sit deeper than MAX_MENU_DEPTH
    """
    if parent_level is None:
        return ROOT_MENU_LEVEL

    level = parent_level + 1
    if level > MAX_MENU_DEPTH:
        raise _depth_exceeded()
    return level


def _depth_exceeded() -> ValidationError:
    return ValidationError(
        "Maximum menu depth exceeded",
        errors=[
            {
                "field": "parent_id",
                "message": f"Menu depth is limited to {MAX_MENU_DEPTH} levels",
            }
        ],
    )


def descendants_of(parent_of: Mapping[str, str | None], menu_id: str) -> list[str]:
    """Return every entry below ``menu_id``, nearest first."""
    children: dict[str, list[str]] = {}
    for child_id, parent_id in parent_of.items():
        if parent_id is not None:
            children.setdefault(parent_id, []).append(child_id)

    found: list[str] = []
    visited = {menu_id}
    frontier = [menu_id]
    while frontier:
        next_frontier: list[str] = []
        for current in frontier:
            for child_id in children.get(current, []):
                if child_id not in visited:
                    visited.add(child_id)
                    found.append(child_id)
                    next_frontier.append(child_id)
        frontier = next_frontier
    return found


def subtree_height(parent_of: Mapping[str, str | None], menu_id: str) -> int:
    """Count the levels in the subtree rooted at ``menu_id``.

    A leaf has height 1.
    """
    depth_of = {menu_id: 1}
    for descendant in descendants_of(parent_of, menu_id):
        depth_of[descendant] = depth_of[parent_of[descendant]] + 1
    return max(depth_of.values())


def would_create_cycle(
    parent_of: Mapping[str, str | None],
    menu_id: str,
    new_parent_id: str | None,
) -> bool:
    """Check whether moving ``menu_id`` under ``new_parent_id`` closes a loop.

    Walks the ancestor chain of ``new_parent_id``. A chain that reaches
    ``menu_id``, or that already loops on itself, counts as a cycle.
    """
    visited: set[str] = set()
    current = new_parent_id
    while current is not None:
        if current == menu_id or current in visited:
            return True
        visited.add(current)
        current = parent_of.get(current)
    return False


def validate_parent(
    parent_of: Mapping[str, str | None],
    levels: Mapping[str, int],
    menu_id: str | None,
    new_parent_id: str | None,
) -> int:
    """Validate a parent assignment and return the resulting level.

    Args:
        parent_of: Current parent ID of every existing entry
        levels: Current level of every existing entry
        menu_id: The entry being moved, or None for a new entry
        new_parent_id: The requested parent, or None for a root entry

    Returns:
        The level the entry will have

    Raises:
        ValidationError: For self-parenting, an unknown parent, a cycle,
            or a depth above MAX_MENU_DEPTH for the entry or anything
            below it
    """
    if new_parent_id is None:
        return resolve_level(None)

    if menu_id is not None and new_parent_id == menu_id:
        raise ValidationError(
            "Menu cannot be its own parent",
            errors=[{"field": "parent_id", "message": "Menu cannot be its own parent"}],
        )

    if new_parent_id not in levels:
        raise ValidationError(
            "Parent menu not found",
            errors=[{"field": "parent_id", "message": f"Unknown menu '{new_parent_id}'"}],
        )

    if menu_id is not None and would_create_cycle(parent_of, menu_id, new_parent_id):
        raise ValidationError(
            "Cannot create circular menu reference",
            errors=[
                {
                    "field": "parent_id",
                    "message": "Menu cannot be moved under one of its descendants",
                }
            ],
        )

    level = resolve_level(levels[new_parent_id])
    if menu_id is not None and level + subtree_height(parent_of, menu_id) - 1 > MAX_MENU_DEPTH:
        raise _depth_exceeded()
    return level
