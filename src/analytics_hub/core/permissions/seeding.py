"""Provision built-in roles from role templates.

Seeding is the only place role templates are resolved. It is idempotent:
catalog permissions are inserted when missing, templated roles are created
when missing, and existing roles keep their grants unless ``reset`` is set.
"""

from dataclasses import dataclass, field

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from analytics_hub.core.permissions.models import Role
from analytics_hub.core.permissions.repos import PermissionRepository, RoleRepository
from analytics_hub.core.permissions.templates import RoleTemplateResolver


logger = structlog.get_logger()


@dataclass
class SeedReport:
    """Summary of a seeding run."""

    permissions_created: list[str] = field(default_factory=list)
    roles_created: list[str] = field(default_factory=list)
    roles_reset: list[str] = field(default_factory=list)
    roles_skipped: list[str] = field(default_factory=list)


async def seed_roles(
    session: AsyncSession,
    resolver: RoleTemplateResolver,
    reset: bool = False,
) -> SeedReport:
    """Seed catalog permissions and templated roles.

    Args:
        session: Database session; the caller commits
        resolver: Resolver holding the catalog and role templates
        reset: Replace the grants of roles that already exist

    Returns:
        What was created, reset, or left alone
    """
    report = SeedReport()

    created = await PermissionRepository(session).upsert_catalog(resolver.catalog)
    report.permissions_created = sorted(p.name for p in created)

    roles = RoleRepository(session)
    for role_name in resolver.role_names():
        template = resolver.get_template(role_name)
        granted = resolver.get_role_permissions(role_name)
        role = await roles.get_by_name(role_name)

        if role is None:
            role = Role(
                name=role_name,
                description=template.description if template else None,
                is_active=True,
            )
            session.add(role)
            await roles.sync_permissions(role, granted)
            report.roles_created.append(role_name)
            logger.info("role_seeded", role=role_name, permission_count=len(granted))
        elif reset:
            await roles.sync_permissions(role, granted)
            report.roles_reset.append(role_name)
            logger.info("role_reset", role=role_name, permission_count=len(granted))
        else:
            report.roles_skipped.append(role_name)

    await session.flush()
    return report
