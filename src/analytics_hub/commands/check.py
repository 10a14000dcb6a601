"""Command: analytics-hub check - Evaluate a permission for a role template."""

import typer
from rich.console import Console


console = Console()


def check(
    role: str = typer.Argument(..., help="Role name, e.g. 'Editor'"),
    permission: str = typer.Argument(..., help="Permission name, e.g. 'content.publish'"),
) -> None:
    """Check whether a user holding ROLE would be granted PERMISSION.

    The role's permissions come from its built-in template. Exits with
    status 1 when the permission is denied.
    """
    from analytics_hub.core.permissions.catalog import is_valid_permission
    from analytics_hub.core.permissions.checker import PermissionChecker
    from analytics_hub.core.permissions.templates import default_resolver

    resolver = default_resolver()
    if role not in resolver:
        console.print(
            f"[yellow]Warning:[/yellow] Role '{role}' has no template; it holds no permissions."
        )
    if not is_valid_permission(permission):
        console.print(
            f"[yellow]Warning:[/yellow] '{permission}' is not in the permission catalog."
        )

    checker = PermissionChecker(
        {
            "id": "cli",
            "is_active": True,
            "role": {
                "name": role,
                "permissions": [
                    {"name": name} for name in sorted(resolver.get_role_permissions(role))
                ],
            },
        }
    )

    if checker.has_permission(permission):
        console.print(f"[green]ALLOW[/green] {role} -> {permission}")
        return

    console.print(f"[red]DENY[/red] {role} -> {permission}")
    raise typer.Exit(1)
