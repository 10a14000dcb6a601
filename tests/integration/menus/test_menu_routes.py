"""Integration tests for menu persistence and the visible-menu endpoint."""

from collections.abc import Callable
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from analytics_hub.core.errors import ConflictError, NotFoundError, ValidationError
from analytics_hub.core.permissions.catalog import Roles
from analytics_hub.core.permissions.models import Role
from analytics_hub.core.permissions.repos import RoleRepository
from analytics_hub.core.permissions.seeding import seed_roles
from analytics_hub.core.permissions.templates import default_resolver
from analytics_hub.modules.menus.models import MenuItem
from analytics_hub.modules.menus.repos import MenuRepository
from analytics_hub.modules.users.models import User
from analytics_hub.modules.users.repos import UserRepository


pytestmark = pytest.mark.integration

Headers = Callable[[object], dict[str, str]]


@pytest.fixture
async def roles(db: AsyncSession) -> dict[str, Role]:
    """Seed the built-in roles and return them by name."""
    await seed_roles(db, default_resolver())
    return {role.name: role for role in await RoleRepository(db).list_all()}


@pytest.fixture
async def menus(db: AsyncSession, roles: dict[str, Role]) -> MenuRepository:
    """Menu repository over a small navigation tree.

    Dashboard (everyone)
    Content (Editor, Admin)
        Articles (everyone)
    Administration (Admin)
        Users (Admin)
    """
    repo = MenuRepository(db)
    await repo.create(MenuItem(title="Dashboard", slug="dashboard", path="/dashboard"))
    content = await repo.create(
        MenuItem(
            title="Content",
            slug="content",
            order_index=1,
            roles=[roles[Roles.EDITOR], roles[Roles.ADMIN]],
        )
    )
    await repo.create(
        MenuItem(title="Articles", slug="articles", path="/content/articles", parent_id=content.id)
    )
    admin = await repo.create(
        MenuItem(title="Administration", slug="admin", order_index=2, roles=[roles[Roles.ADMIN]])
    )
    await repo.create(
        MenuItem(title="Users", slug="users", parent_id=admin.id, roles=[roles[Roles.ADMIN]])
    )
    return repo


async def create_user(db: AsyncSession, role: Role | None) -> User:
    """Create an active user holding ``role``."""
    return await UserRepository(db).create(
        User(email=f"user-{uuid4().hex[:8]}@example.com", full_name="Test User", role=role)
    )


class TestMenuRepository:
    """Tests for MenuRepository writes and reads."""

    async def test_levels_follow_parents(self, menus: MenuRepository) -> None:
        """Created entries get their level from the parent."""
        articles = await menus.get_by_slug("articles")

        assert articles is not None
        assert articles.level == 2

    async def test_list_nodes(self, menus: MenuRepository) -> None:
        """Nodes carry role names and string IDs."""
        nodes = {node.slug: node for node in await menus.list_nodes()}

        assert set(nodes) == {"dashboard", "content", "articles", "admin", "users"}
        assert nodes["content"].roles == {Roles.EDITOR, Roles.ADMIN}
        assert nodes["articles"].parent_id == nodes["content"].id
        assert nodes["dashboard"].roles == frozenset()

    async def test_duplicate_slug(self, menus: MenuRepository) -> None:
        """Slugs are unique."""
        with pytest.raises(ConflictError):
            await menus.create(MenuItem(title="Again", slug="dashboard"))

    async def test_depth_limit(self, menus: MenuRepository) -> None:
        """Entries cannot be created below level 3."""
        users = await menus.get_by_slug("users")
        assert users is not None
        audit = await menus.create(MenuItem(title="Audit", slug="audit", parent_id=users.id))
        assert audit.level == 3

        with pytest.raises(ValidationError):
            await menus.create(MenuItem(title="Too Deep", slug="too-deep", parent_id=audit.id))

    async def test_move_rejects_cycle(self, menus: MenuRepository) -> None:
        """An entry cannot move under its own descendant."""
        admin = await menus.get_by_slug("admin")
        users = await menus.get_by_slug("users")
        assert admin is not None
        assert users is not None

        with pytest.raises(ValidationError):
            await menus.move(admin.id, users.id)

    async def test_move_updates_level(self, menus: MenuRepository) -> None:
        """Moving an entry recomputes its level."""
        articles = await menus.get_by_slug("articles")
        assert articles is not None

        moved = await menus.move(articles.id, None)

        assert moved.parent_id is None
        assert moved.level == 1

    async def test_move_relevels_subtree(self, menus: MenuRepository) -> None:
        """Descendants shift by the same number of levels as the moved entry."""
        dashboard = await menus.get_by_slug("dashboard")
        admin = await menus.get_by_slug("admin")
        assert dashboard is not None
        assert admin is not None

        await menus.move(admin.id, dashboard.id)

        levels = {node.slug: node.level for node in await menus.list_nodes()}
        assert levels["admin"] == 2
        assert levels["users"] == 3

    async def test_move_rejects_subtree_too_deep(self, menus: MenuRepository) -> None:
        """A move is rejected when the subtree would end up below level 3."""
        dashboard = await menus.get_by_slug("dashboard")
        admin = await menus.get_by_slug("admin")
        users = await menus.get_by_slug("users")
        assert dashboard is not None
        assert admin is not None
        assert users is not None
        await menus.create(MenuItem(title="Audit", slug="audit", parent_id=users.id))

        with pytest.raises(ValidationError):
            await menus.move(admin.id, dashboard.id)

        levels = {node.slug: node.level for node in await menus.list_nodes()}
        assert levels["admin"] == 1
        assert levels["users"] == 2
        assert levels["audit"] == 3

    async def test_move_missing(self, menus: MenuRepository) -> None:
        """Moving an unknown entry is a 404."""
        with pytest.raises(NotFoundError):
            await menus.move(uuid4(), None)


class TestVisibleMenu:
    """Tests for GET /api/v1/menus/visible."""

    async def test_requires_user(self, client: AsyncClient, menus: MenuRepository) -> None:
        """Anonymous requests get a 401."""
        response = await client.get("/api/v1/menus/visible")

        assert response.status_code == 401

    async def test_editor_tree(
        self,
        client: AsyncClient,
        db: AsyncSession,
        roles: dict[str, Role],
        menus: MenuRepository,
        as_user: Headers,
    ) -> None:
        """An Editor sees shared and editor entries, not the admin branch."""
        user = await create_user(db, roles[Roles.EDITOR])

        response = await client.get("/api/v1/menus/visible", headers=as_user(user.id))

        assert response.status_code == 200
        data = response.json()
        assert [item["slug"] for item in data] == ["dashboard", "content"]
        assert [child["slug"] for child in data[1]["children"]] == ["articles"]

    async def test_admin_tree(
        self,
        client: AsyncClient,
        db: AsyncSession,
        roles: dict[str, Role],
        menus: MenuRepository,
        as_user: Headers,
    ) -> None:
        """An Admin sees every branch."""
        user = await create_user(db, roles[Roles.ADMIN])

        response = await client.get("/api/v1/menus/visible", headers=as_user(user.id))

        data = response.json()
        assert [item["slug"] for item in data] == ["dashboard", "content", "admin"]
        assert [child["slug"] for child in data[2]["children"]] == ["users"]

    async def test_super_admin_needs_menu_grant(
        self,
        client: AsyncClient,
        db: AsyncSession,
        roles: dict[str, Role],
        menus: MenuRepository,
        as_user: Headers,
    ) -> None:
        """Menu visibility is by role name, so the permission bypass does not apply."""
        user = await create_user(db, roles[Roles.SUPER_ADMIN])

        response = await client.get("/api/v1/menus/visible", headers=as_user(user.id))

        assert [item["slug"] for item in response.json()] == ["dashboard"]

    async def test_user_without_role_sees_nothing(
        self,
        client: AsyncClient,
        db: AsyncSession,
        menus: MenuRepository,
        as_user: Headers,
    ) -> None:
        """Users without a role get an empty menu."""
        user = await create_user(db, None)

        response = await client.get("/api/v1/menus/visible", headers=as_user(user.id))

        assert response.status_code == 200
        assert response.json() == []
