"""
CLI commands for managing the record store.

This module provides a command-line interface for creating, seeding and
inspecting the games/players database using the Typer library, which creates
CLI applications with automatic help generation and validation.

Key CLI Patterns Demonstrated:
- Command grouping with typer.Typer()
- Option handling with typer.Option()
- Error handling and exit codes
- Logging configuration for debugging

Database Workflow:
1. init-db: create the tables
2. seed: fill an empty store from the seed data generator
3. status: check connectivity, tables and row counts
4. regenerate: wipe everything and seed again (asks for confirmation)

These commands talk to the database directly; the API server does not need
to be running.
"""

import logging
import sys

import typer

from ..config.settings import settings
from ..core.exceptions import GridstatsError
from ..database.connection import get_session_context
from ..database.init_db import create_database
from ..ingestion import MockarooClient, populate_initial_data, regenerate_database
from ..services.diagnostics import database_report

app = typer.Typer(help="Database management commands")


def setup_logging():
    """
    Configure logging for CLI operations.

    Sets up dual logging output:
    - File logging for permanent records
    - Console logging for real-time feedback

    Uses configuration from settings to control log level and file location.
    """
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        # Convert string log level to logging constant (e.g., "DEBUG" -> logging.DEBUG)
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(settings.log_file),
            logging.StreamHandler(sys.stdout),
        ],
    )


def _run_seed(action, label: str) -> None:
    """Run populate/regenerate in one session and report the outcome."""
    try:
        with MockarooClient() as client, get_session_context() as session:
            result = action(session, client)
    except GridstatsError as e:
        typer.echo(f"❌ {label} failed: {e.message}")
        raise typer.Exit(1) from e

    if not result.ok:
        typer.echo(f"❌ {label} failed: {result.error.message}")
        if result.error.details:
            typer.echo(f"   Details: {result.error.details}")
        raise typer.Exit(1)

    summary = result.value
    typer.echo(f"✅ {summary['message']}")
    if "games_added" in summary:
        typer.echo(f"  Games added: {summary['games_added']}")
    elif "count" in summary:
        typer.echo(f"  Existing games: {summary['count']}")


# ========== DATABASE MANAGEMENT COMMANDS ==========


@app.command()
def init_db():
    """
    Create the games and players tables.

    Safe to run repeatedly; existing tables and rows are left alone.

    Example usage:
        gridstats db init-db
    """
    typer.echo("Initializing database...")
    try:
        create_database()
        typer.echo("✅ Database initialized successfully!")
    except Exception as e:
        typer.echo(f"❌ Database initialization failed: {e}")
        raise typer.Exit(1) from e


@app.command()
def seed():
    """
    Seed the database from the generator if it holds no games yet.

    Example usage:
        gridstats db seed
    """
    setup_logging()
    typer.echo(f"Seeding database ({settings.roster_mode} roster mode)...")
    _run_seed(populate_initial_data, "Seeding")


@app.command()
def regenerate(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """
    Delete every game and player row, then seed again.

    Runs as a single transaction: if the generator cannot be reached the
    existing data is kept.

    Example usage:
        gridstats db regenerate --yes
    """
    setup_logging()
    if not yes and not typer.confirm("This deletes all games and player stats. Continue?"):
        typer.echo("Aborted.")
        raise typer.Exit(0)
    _run_seed(regenerate_database, "Regeneration")


@app.command()
def status():
    """Show connectivity, table status and row counts."""
    with get_session_context() as session:
        result = database_report(session)

    if not result.ok:
        typer.echo(f"❌ Status check failed: {result.error.message}")
        raise typer.Exit(1)

    report = result.value
    if report.get("db_status") == "connection_failed":
        typer.echo(f"❌ {report['message']}")
        raise typer.Exit(1)

    typer.echo(f"Database: {settings.database_url}")
    typer.echo(f"Connection: {report['database_connection']}")
    typer.echo(f"Tables: {report['tables']}")
    if "records" in report:
        typer.echo(f"  Games: {report['records']['games']}")
        typer.echo(f"  Player rows: {report['records']['players']}")
    else:
        typer.echo(f"  {report['solution']}")
