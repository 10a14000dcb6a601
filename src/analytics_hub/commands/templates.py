"""Command: analytics-hub templates - Show resolved role templates."""

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def show_templates(
    role: str | None = typer.Argument(None, help="Only show this role"),
) -> None:
    """Show the permissions each built-in role is provisioned with."""
    from analytics_hub.core.permissions.templates import default_resolver

    resolver = default_resolver()
    role_names = resolver.role_names()

    if role is not None:
        if role not in resolver:
            console.print(f"[red]Error:[/red] Role '{role}' has no template.")
            console.print("\nAvailable roles:")
            for name in role_names:
                console.print(f"  - {name}")
            raise typer.Exit(1)
        role_names = [role]

    table = Table(title="Role Templates", show_header=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Count", style="green", no_wrap=True, justify="right")
    table.add_column("Permissions")

    for name in role_names:
        template = resolver.get_template(name)
        granted = sorted(resolver.get_role_permissions(name))
        table.add_row(
            name,
            template.description if template else "",
            str(len(granted)),
            ", ".join(granted),
        )

    console.print()
    console.print(table)
    console.print()
