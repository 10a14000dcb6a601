"""Command: analytics-hub seed - Provision built-in roles in the database."""

import asyncio
from typing import TYPE_CHECKING

import typer
from rich.console import Console


if TYPE_CHECKING:
    from analytics_hub.core.permissions.seeding import SeedReport


console = Console()


async def _run_seed(reset: bool) -> "SeedReport":
    import analytics_hub.models  # noqa: F401
    from analytics_hub.core.database import async_engine, async_session_factory
    from analytics_hub.core.permissions.seeding import seed_roles
    from analytics_hub.core.permissions.templates import default_resolver

    try:
        async with async_session_factory() as session:
            report = await seed_roles(session, default_resolver(), reset=reset)
            await session.commit()
    finally:
        await async_engine.dispose()
    return report


def seed(
    reset: bool = typer.Option(
        False, "--reset", help="Replace the grants of roles that already exist"
    ),
) -> None:
    """Seed the permission catalog and the built-in roles.

    Existing roles keep their grants unless --reset is given.
    """
    report = asyncio.run(_run_seed(reset))

    console.print(
        f"[green]✓[/green] {len(report.permissions_created)} permission(s) created"
    )
    for name in report.roles_created:
        console.print(f"  [green]+[/green] created role [cyan]{name}[/cyan]")
    for name in report.roles_reset:
        console.print(f"  [yellow]~[/yellow] reset role [cyan]{name}[/cyan]")
    for name in report.roles_skipped:
        console.print(f"  [dim]=[/dim] kept role [cyan]{name}[/cyan]")
