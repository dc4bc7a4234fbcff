"""Command line entry point."""

from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.user_service.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="User Service - REST API over the users table",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind (defaults to config)"),
    port: Optional[int] = typer.Option(None, help="Port to bind (defaults to config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the HTTP server."""
    app_config = get_config().app
    bind_host = host or app_config.host
    bind_port = port or app_config.port

    console.print(
        Panel.fit(
            f"[bold green]Server is running on http://localhost:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.user_service.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_config=None,  # Loguru owns logging
    )


@app.command(name="init-db")
def init_db_command() -> None:
    """Create the users table in the configured database."""
    from src.user_service.runtime.init_db import init_db

    config = get_config()
    console.print(f"[blue]Initializing[/blue] {config.database.safe_connection_string}")
    init_db()
    console.print("[green]✅ users table ready[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
