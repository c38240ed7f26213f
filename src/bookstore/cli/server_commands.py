"""Service and database CLI commands."""

import typer
import uvicorn
from rich.panel import Panel

from src.bookstore.runtime.context import get_config

from .utils import console

db_app = typer.Typer(help="🗄️  Document store commands")


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind (defaults to the PORT setting)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the catalog service.

    Host and port default to the values in config.yaml, where the port is
    taken from the PORT environment variable.
    """
    app_config = get_config().app
    host = host or app_config.host
    port = port or app_config.port

    console.print(
        Panel.fit(
            "[bold green]Starting Bookstore Catalog Service[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.bookstore.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


@db_app.command(name="init")
def init() -> None:
    """Create the indexes used by the book collection."""
    from src.bookstore.core.errors import StoreError
    from src.bookstore.runtime.init_db import init_db

    try:
        indexes = init_db()
    except StoreError as e:
        console.print(f"[red]❌ Failed to initialize the database: {e.message}[/red]")
        raise typer.Exit(1) from None
    console.print(f"[green]✅ Indexes ready: {', '.join(indexes)}[/green]")
