"""Terminal dashboard: score strip, leaderboard and CSV export.

These commands are clients of a running API server (see ``gridstats serve``);
they go through DashboardApiClient exactly like the web dashboard does.

Examples:
    gridstats dashboard games
    gridstats dashboard leaderboard --position QB --min-td 6
    gridstats dashboard leaderboard --game 3 --sort yards --desc
    gridstats dashboard export --search purdy --output-dir exports/
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config.settings import settings
from ..core.exceptions import ValidationError
from ..dashboard import DashboardApiClient, FilterStore, Leaderboard, ScoreBoard
from ..ranking import RANK_FIELDS, SortState

app = typer.Typer(help="Dashboard views backed by the API server")
console = Console()

API_URL_OPTION = typer.Option(None, "--api-url", help="API endpoint (default: DASHBOARD_API_URL)")


def _leaderboard_options(
    api: DashboardApiClient,
    game_id: int | None,
    position: str,
    min_td: int,
    min_yards: int,
    min_tackles: int,
    search: str,
    sort: str,
    descending: bool | None,
) -> Leaderboard:
    """Build a leaderboard, load it, and apply the command-line filters and sort."""
    filters = FilterStore()
    for name, value in (
        ("position", position.upper()),
        ("min_touchdowns", min_td),
        ("min_yards", min_yards),
        ("min_tackles", min_tackles),
        ("search_name", search),
    ):
        filters.set(name, value)

    if descending is None:
        direction = "asc" if sort in RANK_FIELDS else "desc"
    else:
        direction = "desc" if descending else "asc"

    board = Leaderboard(api, filters=filters, sort=SortState(sort, direction))
    board.load_season()
    if board.error:
        console.print(f"❌ Error fetching players: {board.error}", style="red")
        raise typer.Exit(1)

    if game_id is not None:
        game = api.fetch_game(game_id)
        if not game.ok:
            console.print(f"❌ {game.error.message}", style="red")
            raise typer.Exit(1)
        board.select_game(game.value)
        if board.error:
            console.print(
                f"⚠️  Could not load game {game_id} ({board.error}); showing season stats",
                style="yellow",
            )
    return board


@app.command()
def games(api_url: str | None = API_URL_OPTION):
    """List games, newest first, with result and stadium."""
    with DashboardApiClient(api_url) as api:
        scoreboard = ScoreBoard(api)
        scoreboard.load()

    if scoreboard.error:
        console.print(f"❌ {scoreboard.error}", style="red")
        raise typer.Exit(1)
    if not scoreboard.games:
        console.print("No game data available.", style="yellow")
        return

    table = Table(title=f"{settings.home_team_name} games")
    table.add_column("ID", justify="right")
    table.add_column("Date")
    table.add_column("Opponent", style="cyan")
    table.add_column("Stadium")
    table.add_column("Score", justify="center")
    table.add_column("Result", justify="center")

    colors = {"W": "green", "L": "red", "T": "yellow"}
    for card in scoreboard.cards():
        color = colors[card.result]
        table.add_row(
            str(card.game_id),
            card.display_date,
            card.opponent,
            card.stadium,
            card.score,
            f"[{color}]{card.result}[/{color}]",
        )
    console.print(table)


@app.command()
def leaderboard(
    game: int | None = typer.Option(None, "--game", "-g", help="Show one game instead of the season"),
    position: str = typer.Option("", "--position", "-p", help="Position filter, e.g. QB"),
    min_td: int = typer.Option(0, "--min-td", min=0, help="Minimum touchdowns"),
    min_yards: int = typer.Option(0, "--min-yards", min=0, help="Minimum yards"),
    min_tackles: int = typer.Option(0, "--min-tackles", min=0, help="Minimum tackles"),
    search: str = typer.Option("", "--search", "-s", help="Name contains (case-insensitive)"),
    sort: str = typer.Option("seasonRank", "--sort", help="Sort field"),
    descending: bool | None = typer.Option(None, "--desc/--asc", help="Sort direction"),
    api_url: str | None = API_URL_OPTION,
):
    """Show the ranked, filtered player table."""
    with DashboardApiClient(api_url) as api:
        board = _leaderboard_options(
            api, game, position, min_td, min_yards, min_tackles, search, sort, descending
        )

    rows = board.display_rows()
    game_label = f"VS {board.selected_game['opponent']}" if board.game_players is not None else "GAME"
    table = Table(title=f"Leaderboard ({len(rows)} players)")
    table.add_column("SEASON", justify="right")
    table.add_column(game_label, justify="right")
    table.add_column("Player", style="cyan")
    table.add_column("Pos", justify="center")
    table.add_column("TD", justify="right")
    table.add_column("YDS", justify="right")
    table.add_column("TKL", justify="right")
    table.add_column("GP", justify="right")

    for row in rows:
        player = row.player
        table.add_row(
            str(row.display_season_rank),
            str(row.display_game_rank),
            row.name,
            row.position,
            str(player.touchdowns),
            str(player.yards),
            str(player.tackles),
            str(player.games_played),
        )
    console.print(table)
    if board.status:
        console.print(f"Active filters: {board.status}", style="magenta")


@app.command()
def export(
    game: int | None = typer.Option(None, "--game", "-g", help="Export one game instead of the season"),
    position: str = typer.Option("", "--position", "-p", help="Position filter, e.g. QB"),
    min_td: int = typer.Option(0, "--min-td", min=0, help="Minimum touchdowns"),
    min_yards: int = typer.Option(0, "--min-yards", min=0, help="Minimum yards"),
    min_tackles: int = typer.Option(0, "--min-tackles", min=0, help="Minimum tackles"),
    search: str = typer.Option("", "--search", "-s", help="Name contains (case-insensitive)"),
    sort: str = typer.Option("seasonRank", "--sort", help="Sort field"),
    descending: bool | None = typer.Option(None, "--desc/--asc", help="Sort direction"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Where to write the CSV"),
    api_url: str | None = API_URL_OPTION,
):
    """Export the visible leaderboard rows to CSV."""
    with DashboardApiClient(api_url) as api:
        board = _leaderboard_options(
            api, game, position, min_td, min_yards, min_tackles, search, sort, descending
        )

    try:
        path = board.export_csv(output_dir or settings.exports_dir)
    except ValidationError as e:
        console.print(e.message, style="yellow")
        raise typer.Exit(1) from e
    console.print(f"✅ Exported {path}", style="green")
