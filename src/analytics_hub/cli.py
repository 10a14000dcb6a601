"""Analytics Hub administration CLI."""

import typer
from rich.console import Console

from analytics_hub import __version__
from analytics_hub.commands import check, seed, serve, templates


console = Console()

app = typer.Typer(
    name="analytics-hub",
    help="Inspect role templates, provision roles and run the API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="templates")(templates.show_templates)
app.command(name="check")(check.check)
app.command(name="seed")(seed.seed)
app.command(name="serve")(serve.serve)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Analytics Hub CLI - Inspect role templates, provision roles and run the API."""
    if version:
        console.print(f"[bold cyan]analytics-hub[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
