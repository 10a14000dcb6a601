"""Unit tests for the permission checker.

These tests verify the PermissionChecker logic including:
- Permission evaluation and the Super Admin bypass
- Inactive and absent users
- Role helpers and admin-area access
- The resource-ownership rule
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from analytics_hub.core.permissions.catalog import Permissions, Roles
from analytics_hub.core.permissions.checker import (
    PermissionChecker,
    create_permission_checker,
    has_permission,
    has_role,
    is_admin,
    is_super_admin,
)
from analytics_hub.core.permissions.templates import get_role_permissions
from tests.factories.user import UserProjectionFactory, user_with_role


pytestmark = pytest.mark.unit


class TestHasPermission:
    """Tests for single-permission evaluation."""

    def test_grants_permission_held_by_role(self) -> None:
        """A permission in the role's grant set is allowed."""
        checker = PermissionChecker(user_with_role(Roles.VIEWER, ["dashboard.read"]))

        assert checker.has_permission("dashboard.read") is True

    def test_denies_permission_not_held(self) -> None:
        """A permission outside the grant set is denied."""
        checker = PermissionChecker(user_with_role(Roles.VIEWER, ["dashboard.read"]))

        assert checker.has_permission("content.create") is False

    def test_inactive_user_is_denied_everything(self) -> None:
        """Inactive users are denied even permissions their role grants."""
        user = user_with_role(Roles.EDITOR, ["content.read"], is_active=False)
        checker = PermissionChecker(user)

        assert checker.has_permission("content.read") is False
        assert checker.has_any_permission(["content.read"]) is False

    def test_inactive_super_admin_is_denied(self) -> None:
        """The Super Admin bypass does not apply to inactive users."""
        checker = PermissionChecker(user_with_role(Roles.SUPER_ADMIN, is_active=False))

        assert checker.has_permission("users.delete") is False

    @pytest.mark.parametrize(
        "permission",
        ["users.delete", "nonexistent.permission", "not-even-a-permission", ""],
    )
    def test_super_admin_passes_any_string(self, permission: str) -> None:
        """A Super Admin is allowed any permission string, catalogued or not."""
        checker = PermissionChecker(user_with_role(Roles.SUPER_ADMIN))

        assert checker.has_permission(permission) is True

    def test_no_user_is_denied(self) -> None:
        """A checker without a user denies everything."""
        checker = PermissionChecker(None)

        assert checker.has_permission("dashboard.read") is False
        assert checker.get_all_permissions() == frozenset()
        assert checker.get_user_role() is None
        assert checker.is_authenticated is False

    def test_user_without_role_is_denied(self) -> None:
        """An active user without a role holds no permissions."""
        checker = PermissionChecker(UserProjectionFactory.build(role=None))

        assert checker.is_active is True
        assert checker.has_permission("dashboard.read") is False
        assert checker.get_user_role() is None

    def test_can_perform_action_joins_resource_and_action(self) -> None:
        """can_perform_action checks the resource.action permission."""
        checker = PermissionChecker(user_with_role(Roles.EDITOR, ["content.update"]))

        assert checker.can_perform_action("content", "update") is True
        assert checker.can_perform_action("content", "delete") is False


class TestAnyAndAll:
    """Tests for multi-permission evaluation."""

    @pytest.fixture
    def viewer(self) -> PermissionChecker:
        """Viewer holding dashboard.read and content.read."""
        return PermissionChecker(user_with_role(Roles.VIEWER, ["dashboard.read", "content.read"]))

    def test_any_with_one_match(self, viewer: PermissionChecker) -> None:
        """has_any_permission is satisfied by a single match."""
        assert viewer.has_any_permission(["content.create", "dashboard.read"]) is True

    def test_all_with_one_missing(self, viewer: PermissionChecker) -> None:
        """has_all_permissions fails when one permission is missing."""
        assert viewer.has_all_permissions(["content.create", "dashboard.read"]) is False

    def test_all_with_every_match(self, viewer: PermissionChecker) -> None:
        """has_all_permissions passes when every permission is held."""
        assert viewer.has_all_permissions(["content.read", "dashboard.read"]) is True

    def test_empty_any_is_false(self, viewer: PermissionChecker) -> None:
        """An empty list never satisfies has_any_permission."""
        assert viewer.has_any_permission([]) is False

    def test_empty_all_is_true(self, viewer: PermissionChecker) -> None:
        """An empty list always satisfies has_all_permissions."""
        assert viewer.has_all_permissions([]) is True


class TestRoles:
    """Tests for role helpers."""

    def test_has_role_is_exact_match(self) -> None:
        """has_role compares role names exactly."""
        checker = PermissionChecker(user_with_role(Roles.EDITOR))

        assert checker.has_role(Roles.EDITOR) is True
        assert checker.has_role("editor") is False
        assert checker.has_any_role([Roles.VIEWER, Roles.EDITOR]) is True
        assert checker.has_any_role([]) is False

    @pytest.mark.parametrize(
        ("role_name", "expected"),
        [
            (Roles.SUPER_ADMIN, True),
            (Roles.ADMIN, True),
            (Roles.EDITOR, False),
            (Roles.VIEWER, False),
        ],
    )
    def test_is_admin(self, role_name: str, expected: bool) -> None:
        """Only Admin and Super Admin count as admins."""
        checker = PermissionChecker(user_with_role(role_name))

        assert checker.is_admin() is expected

    def test_is_super_admin_only_for_super_admin(self) -> None:
        """Admin is not a Super Admin."""
        assert PermissionChecker(user_with_role(Roles.SUPER_ADMIN)).is_super_admin() is True
        assert PermissionChecker(user_with_role(Roles.ADMIN)).is_super_admin() is False

    def test_renamed_role_loses_bypass(self) -> None:
        """The bypass is tied to the role name, not to a flag."""
        checker = PermissionChecker(user_with_role("Super Administrator"))

        assert checker.has_permission("users.delete") is False


class TestAdminAccess:
    """Tests for admin-area and bulk-operation checks."""

    def test_editor_with_publish_can_access_admin(self) -> None:
        """Holding a management permission opens the admin area."""
        checker = PermissionChecker(
            user_with_role(Roles.EDITOR, get_role_permissions(Roles.EDITOR))
        )

        assert checker.can_access_admin() is True

    def test_viewer_cannot_access_admin(self) -> None:
        """A read-only role cannot open the admin area."""
        checker = PermissionChecker(
            user_with_role(Roles.VIEWER, get_role_permissions(Roles.VIEWER))
        )

        assert checker.can_access_admin() is False

    def test_admin_bulk_operations_follow_template(self) -> None:
        """Admin may bulk delete content but not users."""
        checker = PermissionChecker(
            user_with_role(Roles.ADMIN, get_role_permissions(Roles.ADMIN))
        )

        assert checker.can_perform_bulk_operation("delete_content") is True
        assert checker.can_perform_bulk_operation("export_data") is True
        assert checker.can_perform_bulk_operation("delete_users") is False

    def test_non_admin_cannot_bulk_operate(self) -> None:
        """Bulk operations need an admin role even with the permission."""
        checker = PermissionChecker(user_with_role(Roles.EDITOR, ["content.delete"]))

        assert checker.can_perform_bulk_operation("delete_content") is False

    def test_unknown_bulk_operation_is_denied(self) -> None:
        """Operations without a mapped permission are denied."""
        checker = PermissionChecker(user_with_role(Roles.SUPER_ADMIN))

        assert checker.can_perform_bulk_operation("drop_everything") is False


class TestResourceOwnership:
    """Tests for the self-service ownership rule."""

    def test_owner_without_permission_is_allowed(self) -> None:
        """Owners may access their own resource without the permission."""
        user_id = str(uuid4())
        checker = PermissionChecker(user_with_role(Roles.VIEWER, [], user_id=user_id))

        assert checker.owns_resource(user_id) is True
        assert checker.can_access_resource(user_id, Permissions.USERS_UPDATE) is True

    def test_non_owner_without_permission_is_denied(self) -> None:
        """Non-owners need the explicit permission."""
        checker = PermissionChecker(user_with_role(Roles.VIEWER, ["users.read"]))

        assert checker.can_access_resource(str(uuid4()), Permissions.USERS_UPDATE) is False

    def test_non_owner_with_permission_is_allowed(self) -> None:
        """The explicit permission grants access to anyone's resource."""
        checker = PermissionChecker(user_with_role(Roles.ADMIN, [Permissions.USERS_UPDATE]))

        assert checker.can_access_resource(str(uuid4()), Permissions.USERS_UPDATE) is True

    def test_owner_id_is_compared_as_string(self) -> None:
        """UUID owner IDs match the projection's string ID."""
        owner_id = uuid4()
        checker = PermissionChecker(user_with_role(Roles.VIEWER, user_id=str(owner_id)))

        assert checker.owns_resource(owner_id) is True

    def test_no_user_owns_nothing(self) -> None:
        """Without a user nothing is owned."""
        assert PermissionChecker(None).owns_resource("anything") is False


class TestConstruction:
    """Tests for building checkers from raw data."""

    def test_accepts_camel_case_mapping(self) -> None:
        """A plain mapping in the persistence layer's shape is validated."""
        checker = create_permission_checker(
            {
                "id": "user-1",
                "isActive": True,
                "role": {
                    "name": Roles.EDITOR,
                    "isActive": True,
                    "permissions": [{"name": "content.create"}],
                },
            }
        )

        assert checker.user_id == "user-1"
        assert checker.has_permission("content.create") is True

    def test_rejects_malformed_projection(self) -> None:
        """A role without a name fails fast."""
        with pytest.raises(ValidationError):
            PermissionChecker({"id": "user-1", "is_active": True, "role": {"permissions": []}})

    def test_module_helpers(self) -> None:
        """Module-level helpers mirror the checker methods."""
        user = user_with_role(Roles.ADMIN, ["users.read"])

        assert has_permission(user, "users.read") is True
        assert has_role(user, Roles.ADMIN) is True
        assert is_admin(user) is True
        assert is_super_admin(user) is False
        assert has_permission(None, "users.read") is False
