"""Access control API routes.

Provides endpoints for:
- The current user's role, permissions and admin flags
- Resolved role templates
"""

from fastapi import APIRouter

from analytics_hub.core.errors import NotFoundError
from analytics_hub.core.permissions.catalog import Permissions
from analytics_hub.core.permissions.dependencies import Checker
from analytics_hub.core.permissions.guards import require_active_user, require_permission
from analytics_hub.core.permissions.schemas import AccessSummary, RoleTemplateResponse
from analytics_hub.core.permissions.templates import default_resolver


router = APIRouter(tags=["access"])


@router.get(
    "/access/me",
    response_model=AccessSummary,
    summary="Current user's access",
    description="Returns the role, effective permissions and admin flags of the current user.",
)
async def read_my_access(checker: Checker) -> AccessSummary:
    """Describe what the current user may do."""
    require_active_user(checker)

    return AccessSummary(
        user_id=checker.user_id or "",
        role=checker.get_user_role(),
        permissions=sorted(checker.get_all_permissions()),
        is_admin=checker.is_admin(),
        is_super_admin=checker.is_super_admin(),
        can_access_admin=checker.can_access_admin(),
    )


@router.get(
    "/roles/templates/{role_name}",
    response_model=RoleTemplateResponse,
    summary="Resolve a role template",
    description="Returns the permission set a built-in role is provisioned with.",
)
async def read_role_template(role_name: str, checker: Checker) -> RoleTemplateResponse:
    """Resolve the built-in template for ``role_name``."""
    require_permission(checker, Permissions.ROLES_READ)

    resolver = default_resolver()
    template = resolver.get_template(role_name)
    if template is None:
        raise NotFoundError(
            "Role template not found",
            resource="role_template",
            resource_id=role_name,
        )

    return RoleTemplateResponse(
        name=template.name,
        description=template.description,
        permissions=sorted(resolver.get_role_permissions(role_name)),
    )
