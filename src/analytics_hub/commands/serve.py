"""Command: analytics-hub serve - Run the API server."""

import typer


def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from analytics_hub.config import settings

    uvicorn.run(
        "analytics_hub.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
