"""Navigation menus and per-user menu visibility."""

from analytics_hub.modules.menus.filter import (
    MenuTree,
    filter_menu_for_role,
    filter_menu_for_user,
    find_active_item,
    find_breadcrumb_trail,
    flatten_menu,
)
from analytics_hub.modules.menus.schemas import MenuNode, VisibleMenuItem


__all__ = [
    "MenuNode",
    "MenuTree",
    "VisibleMenuItem",
    "filter_menu_for_role",
    "filter_menu_for_user",
    "find_active_item",
    "find_breadcrumb_trail",
    "flatten_menu",
]
