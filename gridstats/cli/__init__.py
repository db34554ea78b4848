"""CLI interface for the gridstats dashboard."""

import typer
import uvicorn

from ..config import settings
from .admin import app as admin_app
from .dashboard import app as dashboard_app
from .db import app as db_app
from .db import setup_logging

main = typer.Typer(help="gridstats CLI")

# Add sub-applications
main.add_typer(db_app, name="db", help="Database management commands")
main.add_typer(dashboard_app, name="dashboard", help="Dashboard views backed by the API server")
main.add_typer(admin_app, name="admin", help="Add, edit and delete games and player stats through the API")


@main.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool | None = typer.Option(None, "--reload/--no-reload", help="Auto-reload on code changes"),
):
    """Run the API server with uvicorn."""
    setup_logging()
    uvicorn.run(
        "gridstats.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.api_reload if reload is None else reload,
    )
