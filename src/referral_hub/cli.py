"""Command-line interface for Referral Hub."""

from typing import Annotated, Optional

import typer
import uvicorn
from rich.console import Console

from referral_hub.logging_config import configure_logging, get_logger
from referral_hub.settings import settings
from referral_hub.storage.db import Database

logger = get_logger(__name__)

# Create Typer app
app = typer.Typer(
    name="referral-hub",
    help="Referral Hub - program referral intake API",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


@app.callback()
def main() -> None:
    """Configure logging for every command."""
    configure_logging()


@app.command("init-db")
def init_database() -> None:
    """Initialize the database and create tables."""
    console.print("[bold blue]Initializing database...[/bold blue]")
    Database(settings.database_url).create_tables()
    console.print("[bold green]✓[/bold green] Database initialized successfully")


@app.command("serve")
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port (defaults to PORT)")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Run the API server."""
    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[bold blue]Server running on port {bind_port}[/bold blue]")
    logger.info("server_starting", host=bind_host, port=bind_port)
    uvicorn.run(
        "referral_hub.api.main:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_config=None,
    )


if __name__ == "__main__":
    app()
