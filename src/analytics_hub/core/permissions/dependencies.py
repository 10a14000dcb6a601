"""FastAPI dependencies that build a permission checker per request.

The session layer in front of this service authenticates the request and
stores the user's ID on ``request.state.user_id``. These dependencies load
the user projection for that ID and wrap it in a ``PermissionChecker``.
A request without a user ID, or with an ID that matches no user, gets a
checker for ``None``, which every guard answers with a 401.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, Request

from analytics_hub.core.permissions.checker import PermissionChecker
from analytics_hub.core.permissions.schemas import UserProjection
from analytics_hub.modules.users.repos import UserRepo


logger = structlog.get_logger()


async def get_current_user(request: Request, users: UserRepo) -> UserProjection | None:
    """Load the projection of the user attached to the request.

    Args:
        request: The incoming request
        users: User repository

    Returns:
        The user projection, or None for anonymous requests
    """
    raw_user_id = getattr(request.state, "user_id", None)
    if raw_user_id is None:
        return None

    try:
        user_id = raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id))
    except ValueError:
        logger.warning("invalid_session_user_id", user_id=str(raw_user_id))
        return None

    return await users.get_projection(user_id)


async def get_permission_checker(
    user: Annotated[UserProjection | None, Depends(get_current_user)],
) -> PermissionChecker:
    """Build the permission checker for the current request."""
    return PermissionChecker(user)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[UserProjection | None, Depends(get_current_user)]
Checker = Annotated[PermissionChecker, Depends(get_permission_checker)]
