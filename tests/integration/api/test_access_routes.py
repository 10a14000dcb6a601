"""Integration tests for the access endpoints."""

from collections.abc import Callable
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from analytics_hub.core.permissions.catalog import DEFAULT_PERMISSION_CATALOG, Roles
from analytics_hub.core.permissions.repos import RoleRepository
from analytics_hub.core.permissions.seeding import seed_roles
from analytics_hub.core.permissions.templates import default_resolver, get_role_permissions
from analytics_hub.modules.users.models import User
from analytics_hub.modules.users.repos import UserRepository


pytestmark = pytest.mark.integration

Headers = Callable[[object], dict[str, str]]


async def create_user(db: AsyncSession, role_name: str | None, is_active: bool = True) -> User:
    """Create a user holding a seeded role."""
    role = await RoleRepository(db).get_by_name(role_name) if role_name else None
    return await UserRepository(db).create(
        User(
            email=f"user-{uuid4().hex[:8]}@example.com",
            full_name="Test User",
            is_active=is_active,
            role=role,
        )
    )


@pytest.fixture(autouse=True)
async def seeded(db: AsyncSession) -> None:
    """Seed the built-in roles for every test in this module."""
    await seed_roles(db, default_resolver())


class TestMyAccess:
    """Tests for GET /api/v1/access/me."""

    async def test_requires_user(self, client: AsyncClient) -> None:
        """Anonymous requests get a 401 problem response."""
        response = await client.get("/api/v1/access/me")

        assert response.status_code == 401
        data = response.json()
        assert data["status"] == 401
        assert data["type"].endswith("/errors/auth_required")

    async def test_unknown_user_is_anonymous(self, client: AsyncClient, as_user: Headers) -> None:
        """A session ID matching no user is treated as anonymous."""
        response = await client.get("/api/v1/access/me", headers=as_user(uuid4()))

        assert response.status_code == 401

    async def test_malformed_user_id_is_anonymous(
        self, client: AsyncClient, as_user: Headers
    ) -> None:
        """A session ID that is not a UUID is treated as anonymous."""
        response = await client.get("/api/v1/access/me", headers=as_user("not-a-uuid"))

        assert response.status_code == 401

    async def test_inactive_user_is_forbidden(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """Inactive users get a 403 user_inactive."""
        user = await create_user(db, Roles.ADMIN, is_active=False)

        response = await client.get("/api/v1/access/me", headers=as_user(user.id))

        assert response.status_code == 403
        assert response.json()["type"].endswith("/errors/user_inactive")

    async def test_viewer_summary(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """A Viewer sees its read-only permissions and no admin flags."""
        user = await create_user(db, Roles.VIEWER)

        response = await client.get("/api/v1/access/me", headers=as_user(user.id))

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == str(user.id)
        assert data["role"] == Roles.VIEWER
        assert data["permissions"] == sorted(get_role_permissions(Roles.VIEWER))
        assert data["is_admin"] is False
        assert data["is_super_admin"] is False
        assert data["can_access_admin"] is False

    async def test_super_admin_summary(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """A Super Admin holds the whole catalog and every admin flag."""
        user = await create_user(db, Roles.SUPER_ADMIN)

        response = await client.get("/api/v1/access/me", headers=as_user(user.id))

        data = response.json()
        assert set(data["permissions"]) == DEFAULT_PERMISSION_CATALOG.names()
        assert data["is_admin"] is True
        assert data["is_super_admin"] is True
        assert data["can_access_admin"] is True


class TestRoleTemplates:
    """Tests for GET /api/v1/roles/templates/{role_name}."""

    async def test_requires_roles_read(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """Users without roles.read get a 403 naming the permission."""
        user = await create_user(db, Roles.EDITOR)

        response = await client.get("/api/v1/roles/templates/Viewer", headers=as_user(user.id))

        assert response.status_code == 403
        data = response.json()
        assert data["type"].endswith("/errors/permission_denied")
        assert data["required_permissions"] == ["roles.read"]

    async def test_admin_reads_template(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """An Admin can resolve a template."""
        user = await create_user(db, Roles.ADMIN)

        response = await client.get("/api/v1/roles/templates/Admin", headers=as_user(user.id))

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == Roles.ADMIN
        assert "users.delete" not in data["permissions"]
        assert data["permissions"] == sorted(get_role_permissions(Roles.ADMIN))

    async def test_unknown_template(
        self, client: AsyncClient, db: AsyncSession, as_user: Headers
    ) -> None:
        """Unknown role names are a 404."""
        user = await create_user(db, Roles.SUPER_ADMIN)

        response = await client.get("/api/v1/roles/templates/Guest", headers=as_user(user.id))

        assert response.status_code == 404
        assert response.json()["resource_id"] == "Guest"
