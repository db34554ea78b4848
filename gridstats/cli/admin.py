"""
Admin commands: add, edit and delete games and player stat rows.

Everything goes through the API server (see ``gridstats serve``) with the same
DashboardApiClient the dashboard uses, so the server's validation and error
messages apply unchanged.

Editing Workflow:
1. games / players: list records to find the id to change
2. update-game / update-player: only the options you pass change; the other
   fields are read back from the server first
3. delete-game / delete-player: asks for confirmation unless --yes is given

Examples:
    gridstats admin add-game --date 2024-10-10 --opponent "Seattle Seahawks" --home-score 36 --opponent-score 24
    gridstats admin update-game 4 --venue Away
    gridstats admin players --game 4
    gridstats admin update-player 17 --td 2
    gridstats admin regenerate --yes
"""

from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from ..dashboard import DashboardApiClient
from ..services.results import Result

app = typer.Typer(help="Add, edit and delete games and player stats through the API")
console = Console()

API_URL_OPTION = typer.Option(None, "--api-url", help="API endpoint (default: DASHBOARD_API_URL)")

GAME_FIELDS = ("game_date", "opponent", "venue", "home_score", "opponent_score")
PLAYER_FIELDS = ("game_id", "player_name", "touchdowns", "yards", "tackles")


def _report(result: Result[Any]) -> dict[str, Any]:
    """Print the outcome of a write; failures exit with code 1."""
    if not result.ok:
        console.print(f"❌ {result.error.message}", style="red")
        raise typer.Exit(1)
    console.print(f"✅ {result.value['message']}", style="green")
    return result.value


def _merge(current: Result[Any], fields: tuple[str, ...], changes: dict[str, Any]) -> dict[str, Any]:
    """Full record body: the stored values with the given options laid over them."""
    if not current.ok:
        console.print(f"❌ {current.error.message}", style="red")
        raise typer.Exit(1)
    body = {name: current.value.get(name) for name in fields}
    body.update({name: value for name, value in changes.items() if value is not None})
    return body


def _confirm(yes: bool, question: str) -> None:
    if not yes and not typer.confirm(question):
        console.print("Aborted.")
        raise typer.Exit(0)


# ========== GAMES ==========


@app.command("add-game")
def add_game(
    game_date: str = typer.Option(..., "--date", help="Game date, YYYY-MM-DD"),
    opponent: str = typer.Option(..., "--opponent", help="Opponent team name"),
    venue: str = typer.Option("Home", "--venue", help="Home or Away"),
    home_score: int = typer.Option(0, "--home-score", min=0),
    opponent_score: int = typer.Option(0, "--opponent-score", min=0),
    api_url: str | None = API_URL_OPTION,
):
    """Create a game."""
    with DashboardApiClient(api_url) as api:
        created = _report(
            api.create_game(
                {
                    "game_date": game_date,
                    "opponent": opponent,
                    "venue": venue,
                    "home_score": home_score,
                    "opponent_score": opponent_score,
                }
            )
        )
    console.print(f"  Game ID: {created['id']}")


@app.command("update-game")
def update_game(
    game_id: int = typer.Argument(..., help="Game to change"),
    game_date: str | None = typer.Option(None, "--date"),
    opponent: str | None = typer.Option(None, "--opponent"),
    venue: str | None = typer.Option(None, "--venue"),
    home_score: int | None = typer.Option(None, "--home-score", min=0),
    opponent_score: int | None = typer.Option(None, "--opponent-score", min=0),
    api_url: str | None = API_URL_OPTION,
):
    """Change some fields of a game."""
    changes = {
        "game_date": game_date,
        "opponent": opponent,
        "venue": venue,
        "home_score": home_score,
        "opponent_score": opponent_score,
    }
    with DashboardApiClient(api_url) as api:
        body = _merge(api.fetch_game(game_id), GAME_FIELDS, changes)
        _report(api.update_game(game_id, body))


@app.command("delete-game")
def delete_game(
    game_id: int = typer.Argument(..., help="Game to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    api_url: str | None = API_URL_OPTION,
):
    """Delete a game together with its player stat rows."""
    _confirm(yes, f"Delete game {game_id} and all of its player stats?")
    with DashboardApiClient(api_url) as api:
        _report(api.delete_game(game_id))


# ========== PLAYER STAT ROWS ==========


@app.command("players")
def list_players(
    game: int | None = typer.Option(None, "--game", "-g", help="Only rows of this game"),
    api_url: str | None = API_URL_OPTION,
):
    """List raw player stat rows with their ids."""
    with DashboardApiClient(api_url) as api:
        result = api.fetch_player_stats(game)
    if not result.ok:
        console.print(f"❌ {result.error.message}", style="red")
        raise typer.Exit(1)

    table = Table(title=f"Player stat rows ({len(result.value)})")
    table.add_column("ID", justify="right")
    table.add_column("Game", justify="right")
    table.add_column("Player", style="cyan")
    table.add_column("TD", justify="right")
    table.add_column("YDS", justify="right")
    table.add_column("TKL", justify="right")
    for row in result.value:
        table.add_row(
            str(row["id"]),
            str(row["game_id"]),
            row["player_name"],
            str(row["touchdowns"]),
            str(row["yards"]),
            str(row["tackles"]),
        )
    console.print(table)


@app.command("add-player")
def add_player(
    game_id: int = typer.Option(..., "--game", "-g", help="Game the line belongs to"),
    player_name: str = typer.Option(..., "--name", help="Player name"),
    touchdowns: int = typer.Option(0, "--td", min=0),
    yards: int = typer.Option(0, "--yards", min=0),
    tackles: int = typer.Option(0, "--tackles", min=0),
    api_url: str | None = API_URL_OPTION,
):
    """Add one player's stat line for a game."""
    with DashboardApiClient(api_url) as api:
        created = _report(
            api.create_player(
                {
                    "game_id": game_id,
                    "player_name": player_name,
                    "touchdowns": touchdowns,
                    "yards": yards,
                    "tackles": tackles,
                }
            )
        )
    console.print(f"  Player row ID: {created['id']}")


@app.command("update-player")
def update_player(
    stat_id: int = typer.Argument(..., help="Player stat row to change"),
    game_id: int | None = typer.Option(None, "--game", "-g"),
    player_name: str | None = typer.Option(None, "--name"),
    touchdowns: int | None = typer.Option(None, "--td", min=0),
    yards: int | None = typer.Option(None, "--yards", min=0),
    tackles: int | None = typer.Option(None, "--tackles", min=0),
    api_url: str | None = API_URL_OPTION,
):
    """Change some fields of one player stat row."""
    changes = {
        "game_id": game_id,
        "player_name": player_name,
        "touchdowns": touchdowns,
        "yards": yards,
        "tackles": tackles,
    }
    with DashboardApiClient(api_url) as api:
        body = _merge(api.fetch_player_stat(stat_id), PLAYER_FIELDS, changes)
        _report(api.update_player(stat_id, body))


@app.command("delete-player")
def delete_player(
    stat_id: int = typer.Argument(..., help="Player stat row to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    api_url: str | None = API_URL_OPTION,
):
    """Delete one player stat row."""
    _confirm(yes, f"Delete player stat row {stat_id}?")
    with DashboardApiClient(api_url) as api:
        _report(api.delete_player(stat_id))


@app.command("show-player")
def show_player(
    player_id: int = typer.Argument(..., help="Any stat row id of the player"),
    api_url: str | None = API_URL_OPTION,
):
    """Show a player's season totals."""
    with DashboardApiClient(api_url) as api:
        result = api.fetch_player(player_id)
    if not result.ok:
        console.print(f"❌ {result.error.message}", style="red")
        raise typer.Exit(1)

    player = result.value
    console.print(f"[bold]{player.player_name}[/bold] (ID {player.id})")
    console.print(
        f"  TD: {player.touchdowns}  YDS: {player.yards}  "
        f"TKL: {player.tackles}  GP: {player.games_played}"
    )


# ========== MAINTENANCE ==========


@app.command("init")
def init(api_url: str | None = API_URL_OPTION):
    """Ask the server to seed an empty store."""
    with DashboardApiClient(api_url) as api:
        summary = _report(api.initialize_database())
    if "games_added" in summary:
        console.print(f"  Games added: {summary['games_added']}")


@app.command("regenerate")
def regenerate(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    api_url: str | None = API_URL_OPTION,
):
    """Ask the server to wipe and reseed the store."""
    _confirm(yes, "This will delete ALL existing data and regenerate the database. Are you sure?")
    with DashboardApiClient(api_url) as api:
        summary = _report(api.regenerate_database())
    console.print(f"  Games added: {summary.get('games_added', 0)}")


@app.command("ping")
def ping(api_url: str | None = API_URL_OPTION):
    """Check that the server can reach its database."""
    with DashboardApiClient(api_url) as api:
        result = api.test_connection()
    if not result.ok:
        console.print(f"❌ {result.error.message}", style="red")
        raise typer.Exit(1)

    report = result.value
    if report.get("db_status") == "connection_failed":
        console.print(f"❌ {report['message']}", style="red")
        raise typer.Exit(1)
    console.print(f"Connection: {report['database_connection']}")
    console.print(f"Tables: {report['tables']}")
