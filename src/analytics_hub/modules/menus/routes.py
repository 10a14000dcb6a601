"""Navigation menu API routes."""

from fastapi import APIRouter

from analytics_hub.core.permissions.dependencies import Checker
from analytics_hub.core.permissions.guards import require_active_user
from analytics_hub.modules.menus.filter import filter_menu_for_user
from analytics_hub.modules.menus.repos import MenuRepo
from analytics_hub.modules.menus.schemas import VisibleMenuItem


router = APIRouter(prefix="/menus", tags=["menus"])


@router.get(
    "/visible",
    response_model=list[VisibleMenuItem],
    summary="Visible menu tree",
    description="Returns the navigation tree filtered to the entries the current user may see.",
)
async def read_visible_menu(checker: Checker, menus: MenuRepo) -> list[VisibleMenuItem]:
    """Return the menu tree visible to the current user."""
    require_active_user(checker)

    nodes = await menus.list_nodes()
    return filter_menu_for_user(nodes, checker)
