"""Authorization guards for route handlers and use cases.

Guards are called explicitly at the top of a handler, so the check is
visible in the handler's control flow:

    @router.delete("/users/{user_id}")
    async def delete_user(user_id: UUID, checker: Checker):
        require_permission(checker, Permissions.USERS_DELETE)
        ...

``authorize*`` functions return a ``Decision`` (``Allowed`` or ``Denied``)
without raising. ``require*`` functions authorize and then ``enforce`` the
decision, raising ``UnauthorizedError`` (401) when no user is attached and
``AuthorizationError`` (403) when the user is denied.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from analytics_hub.core.errors import AuthorizationError, ForbiddenError, UnauthorizedError
from analytics_hub.core.permissions.checker import PermissionChecker


logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Allowed:
    """The request may proceed."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Denied:
    """The request must be rejected.

    Attributes:
        reason: Machine-readable reason (``auth_required``, ``user_inactive``,
            ``permission_denied`` or ``role_required``)
        status_code: HTTP status the boundary should answer with
        required: Permissions or roles that would have allowed the request
    """

    reason: str
    status_code: int = 403
    required: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return False


Decision = Allowed | Denied

ALLOWED = Allowed()


def _precheck(checker: PermissionChecker, required: tuple[str, ...]) -> Denied | None:
    """Deny requests without an active user before evaluating anything else."""
    if not checker.is_authenticated:
        return Denied("auth_required", status_code=401, required=required)
    if not checker.is_active:
        return Denied("user_inactive", required=required)
    return None


def _decide(
    checker: PermissionChecker,
    granted: bool,
    required: tuple[str, ...],
    reason: str = "permission_denied",
    held: bool | None = None,
) -> Decision:
    """Turn a check result into a decision.

    ``held`` is whether the role grants cover the check on their own. A grant
    that only passed through the Super Admin shortcut is logged as a bypass.
    """
    if granted:
        if held is False and checker.is_super_admin():
            logger.warning(
                "superuser_bypass",
                user_id=checker.user_id,
                required=list(required),
            )
        return ALLOWED

    logger.info(
        "authorization_denied",
        user_id=checker.user_id,
        role=checker.get_user_role(),
        reason=reason,
        required=list(required),
    )
    return Denied(reason, required=required)


def authorize_user(checker: PermissionChecker) -> Decision:
    """Decide whether an active user is attached, without checking grants."""
    denied = _precheck(checker, ())
    if denied is not None:
        return denied
    return ALLOWED


def authorize(checker: PermissionChecker, permission: str) -> Decision:
    """Decide whether the user holds ``permission``."""
    required = (permission,)
    denied = _precheck(checker, required)
    if denied is not None:
        return denied
    return _decide(
        checker,
        checker.has_permission(permission),
        required,
        held=permission in checker.get_all_permissions(),
    )


def authorize_any(checker: PermissionChecker, permissions: Iterable[str]) -> Decision:
    """Decide whether the user holds at least one of ``permissions``."""
    required = tuple(permissions)
    denied = _precheck(checker, required)
    if denied is not None:
        return denied
    return _decide(
        checker,
        checker.has_any_permission(required),
        required,
        held=not checker.get_all_permissions().isdisjoint(required),
    )


def authorize_all(checker: PermissionChecker, permissions: Iterable[str]) -> Decision:
    """Decide whether the user holds every one of ``permissions``."""
    required = tuple(permissions)
    denied = _precheck(checker, required)
    if denied is not None:
        return denied
    return _decide(
        checker,
        checker.has_all_permissions(required),
        required,
        held=checker.get_all_permissions().issuperset(required),
    )


def authorize_role(checker: PermissionChecker, role_names: Iterable[str]) -> Decision:
    """Decide whether the user's role is one of ``role_names``."""
    required = tuple(role_names)
    denied = _precheck(checker, required)
    if denied is not None:
        return denied
    return _decide(checker, checker.has_any_role(required), required, reason="role_required")


def authorize_resource(
    checker: PermissionChecker, owner_id: str, permission: str
) -> Decision:
    """Decide whether the user owns the resource or holds ``permission``."""
    required = (permission,)
    denied = _precheck(checker, required)
    if denied is not None:
        return denied
    return _decide(
        checker,
        checker.can_access_resource(owner_id, permission),
        required,
        held=checker.owns_resource(owner_id) or permission in checker.get_all_permissions(),
    )


def enforce(decision: Decision) -> None:
    """Raise the boundary error matching a ``Denied`` decision.

    Raises:
        UnauthorizedError: When no user is attached to the request
        ForbiddenError: When the user account is inactive
        AuthorizationError: When a permission or role check failed
    """
    if isinstance(decision, Allowed):
        return

    required = list(decision.required)
    if decision.status_code == 401:
        raise UnauthorizedError("Authentication required", error_code=decision.reason)
    if decision.reason == "user_inactive":
        raise ForbiddenError("User account is deactivated", error_code="user_inactive")
    if decision.reason == "role_required":
        raise AuthorizationError(
            f"Requires one of the roles: {', '.join(required)}",
            error_code="role_required",
            details={"required_roles": required},
        )
    raise AuthorizationError(
        f"Missing required permission: {', '.join(required)}",
        required_permissions=required,
    )


def require_active_user(checker: PermissionChecker) -> None:
    """Require an active user or raise."""
    enforce(authorize_user(checker))


def require_permission(checker: PermissionChecker, permission: str) -> None:
    """Require ``permission`` or raise."""
    enforce(authorize(checker, permission))


def require_any_permission(checker: PermissionChecker, permissions: Iterable[str]) -> None:
    """Require at least one of ``permissions`` or raise."""
    enforce(authorize_any(checker, permissions))


def require_all_permissions(checker: PermissionChecker, permissions: Iterable[str]) -> None:
    """Require every one of ``permissions`` or raise."""
    enforce(authorize_all(checker, permissions))


def require_role(checker: PermissionChecker, role_names: Iterable[str]) -> None:
    """Require one of ``role_names`` or raise."""
    enforce(authorize_role(checker, role_names))


def require_resource_access(
    checker: PermissionChecker, owner_id: str, permission: str
) -> None:
    """Require ownership of the resource or ``permission``, or raise."""
    enforce(authorize_resource(checker, owner_id, permission))
