"""Menu visibility filtering.

The menu tree is loaded once into an arena: nodes indexed by ID plus a
parent-to-children adjacency map with siblings sorted by ``order_index``.
Filtering then walks the arena depth-first from the roots.

A node is visible when it is active and its role grant is empty or
contains the user's role. A hidden node hides its whole subtree; children
are never promoted to the parent's level.

The tree is assumed to be acyclic and at most ``MAX_MENU_DEPTH`` deep
(both are enforced when menus are written). The filter still tracks
visited IDs so that malformed data ends the walk instead of recursing
forever.
"""

from collections.abc import Iterable, Mapping, Sequence

import structlog

from analytics_hub.core.permissions.checker import PermissionChecker
from analytics_hub.modules.menus.schemas import MenuNode, VisibleMenuItem


logger = structlog.get_logger()


class MenuTree:
    """Indexed menu tree ready for per-user filtering.

    Build it with ``MenuTree.build(nodes)``; the constructor takes an
    already assembled arena.
    """

    def __init__(
        self,
        nodes: Mapping[str, MenuNode],
        children: Mapping[str, Sequence[str]],
        roots: Sequence[str],
    ) -> None:
        self._nodes = dict(nodes)
        self._children = {parent: tuple(ids) for parent, ids in children.items()}
        self._roots = tuple(roots)
        self.unreachable: frozenset[str] = frozenset(self._nodes) - self._reachable()
        if self.unreachable:
            logger.warning("menu_nodes_unreachable", menu_ids=sorted(self.unreachable))

    @classmethod
    def build(cls, nodes: Iterable[MenuNode]) -> "MenuTree":
        """Index ``nodes`` and build the parent-to-children adjacency.

        Nodes whose parent does not exist are treated as roots. When an ID
        appears more than once, the first node wins.
        """
        index: dict[str, MenuNode] = {}
        for node in nodes:
            if node.id in index:
                logger.warning("menu_duplicate_id", menu_id=node.id)
                continue
            index[node.id] = node

        roots: list[str] = []
        children: dict[str, list[str]] = {}
        for node in index.values():
            if node.parent_id is None:
                roots.append(node.id)
            elif node.parent_id not in index:
                logger.warning(
                    "menu_orphan_promoted",
                    menu_id=node.id,
                    parent_id=node.parent_id,
                )
                roots.append(node.id)
            else:
                children.setdefault(node.parent_id, []).append(node.id)

        # Stable sort keeps input order for equal order_index values
        roots.sort(key=lambda node_id: index[node_id].order_index)
        for sibling_ids in children.values():
            sibling_ids.sort(key=lambda node_id: index[node_id].order_index)

        return cls(index, children, roots)

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, node_id: str) -> MenuNode | None:
        """Return the node with ``node_id``, if present."""
        return self._nodes.get(node_id)

    def children_of(self, node_id: str) -> tuple[str, ...]:
        """Return the ordered child IDs of ``node_id``."""
        return self._children.get(node_id, ())

    @property
    def roots(self) -> tuple[str, ...]:
        """The ordered root IDs."""
        return self._roots

    def visible_for(self, role_name: str | None) -> list[VisibleMenuItem]:
        """Return the subtree visible to a user holding ``role_name``.

        Users without a role see nothing.
        """
        if role_name is None:
            return []
        visited: set[str] = set()
        return self._collect(self._roots, role_name, visited)

    @staticmethod
    def is_visible(node: MenuNode, role_name: str) -> bool:
        """Check a single node, ignoring its ancestors."""
        return node.is_active and (not node.roles or role_name in node.roles)

    def _collect(
        self,
        node_ids: Sequence[str],
        role_name: str,
        visited: set[str],
    ) -> list[VisibleMenuItem]:
        items: list[VisibleMenuItem] = []
        for node_id in node_ids:
            if node_id in visited:
                logger.warning("menu_cycle_detected", menu_id=node_id)
                continue
            visited.add(node_id)

            node = self._nodes.get(node_id)
            if node is None or not self.is_visible(node, role_name):
                continue

            item = VisibleMenuItem.from_node(node)
            item.children = self._collect(self.children_of(node_id), role_name, visited)
            items.append(item)
        return items

    def _reachable(self) -> set[str]:
        seen: set[str] = set()
        stack = list(self._roots)
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                continue
            seen.add(node_id)
            stack.extend(self.children_of(node_id))
        return seen


def filter_menu_for_role(
    nodes: Iterable[MenuNode], role_name: str | None
) -> list[VisibleMenuItem]:
    """Build the tree from ``nodes`` and filter it for ``role_name``."""
    return MenuTree.build(nodes).visible_for(role_name)


def filter_menu_for_user(
    nodes: Iterable[MenuNode], checker: PermissionChecker
) -> list[VisibleMenuItem]:
    """Filter the menu for the checker's user.

    Absent or inactive users, and users without a role, see nothing.
    """
    if not checker.is_active:
        return []
    return filter_menu_for_role(nodes, checker.get_user_role())


def flatten_menu(items: Iterable[VisibleMenuItem]) -> list[VisibleMenuItem]:
    """Return every item of a filtered tree in depth-first order."""
    flattened: list[VisibleMenuItem] = []
    for item in items:
        flattened.append(item)
        flattened.extend(flatten_menu(item.children))
    return flattened


def find_breadcrumb_trail(
    items: Iterable[VisibleMenuItem], path: str
) -> list[VisibleMenuItem]:
    """Return the chain of items from a root down to the item at ``path``.

    Returns an empty list when no visible item has that path.
    """
    for item in items:
        if item.path == path:
            return [item]
        trail = find_breadcrumb_trail(item.children, path)
        if trail:
            return [item, *trail]
    return []


def find_active_item(items: Iterable[VisibleMenuItem], path: str) -> VisibleMenuItem | None:
    """Return the visible item whose path is ``path``, if any."""
    trail = find_breadcrumb_trail(items, path)
    return trail[-1] if trail else None
