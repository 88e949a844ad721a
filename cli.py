#!/usr/bin/env python3
"""
CLI for playing Next Ball in the terminal
"""
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from nextball.catalog import SOURCES, build_catalog
from nextball.config import configure_logging, settings
from nextball.engine import GameSession
from nextball.exceptions import CatalogError, FetchFailed, GameError, InvalidPayload

console = Console()

# Keys accepted at the prediction prompt
PROMPT_CHOICES = {
    "4": "4",
    "6": "6",
    "w": "wicket",
    "wicket": "wicket",
    "": None,
}


def _catalog(source, data_dir, url):
    try:
        return build_catalog(source, data_dir=data_dir, url=url)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--source")


def catalog_options(func):
    func = click.option("--url", default=None, help="Catalog base URL (http source)")(func)
    func = click.option("--data-dir", default=None, help="Match data directory (files source)")(func)
    func = click.option("--source", type=click.Choice(SOURCES), default=None,
                        help="Where match data comes from (default follows NEXTBALL_APP_MODE)")(func)
    return func


def print_scoreboard(game: GameSession):
    snap = game.snapshot()
    table = Table(show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("Batting", f"[bold]{snap.batting_team}[/bold]  {snap.runs}-{snap.wickets}")
    table.add_row("Overs", snap.overs)
    if snap.current_batter:
        table.add_row("Batsman", snap.current_batter)
        table.add_row("Bowler", snap.current_bowler or "")
    points_style = "red" if snap.points < 10 else "green"
    table.add_row("Points", f"[{points_style}]{snap.points}[/{points_style}]")
    console.print(Panel(table, title=snap.match_label or "Next Ball"))


@click.group()
@click.option("--log-level", default=None, help="Logging level (default NEXTBALL_LOG_LEVEL)")
def cli(log_level):
    """Next Ball - Predict the next ball of a replayed IPL match"""
    configure_logging(log_level.upper() if log_level else None)


@cli.command()
@catalog_options
def seasons(source, data_dir, url):
    """List available seasons"""
    catalog = _catalog(source, data_dir, url)
    try:
        found = catalog.list_seasons()
    except (CatalogError, FetchFailed) as e:
        console.print(f"[red]Could not list seasons: {e}[/red]")
        raise SystemExit(1)

    if not found:
        console.print("[red]No seasons found.[/red]")
        return
    for season in found:
        console.print(f"  {season}")


@cli.command()
@click.argument("season")
@catalog_options
def matches(season, source, data_dir, url):
    """List matches for a season"""
    catalog = _catalog(source, data_dir, url)
    try:
        found = catalog.list_matches(season)
    except (CatalogError, FetchFailed) as e:
        console.print(f"[red]Could not list matches: {e}[/red]")
        raise SystemExit(1)

    table = Table(title=f"Season {season} ({len(found)} matches)")
    table.add_column("Match ID", style="cyan")
    table.add_column("Match")
    for match in found:
        table.add_row(str(match["match_id"]), match.get("match") or match["description"])
    console.print(table)


@cli.command()
@click.argument("season")
@click.argument("match_id")
@click.option("--auto", is_flag=True, help="Replay without prompting for predictions")
@click.option("--points", default=None, type=int, help="Starting points")
@catalog_options
def play(season, match_id, auto, points, source, data_dir, url):
    """Replay a match ball by ball, predicting each delivery"""
    catalog = _catalog(source, data_dir, url)
    game = GameSession(starting_points=points if points is not None else settings.STARTING_POINTS)
    token = game.select(season, match_id)

    try:
        payload = catalog.get_match_data(season, match_id)
        game.start(payload, token=token)
    except (CatalogError, FetchFailed, InvalidPayload) as e:
        console.print(f"[red]Could not load match data: {e}[/red]")
        raise SystemExit(1)

    console.print(f"[yellow]{game.message}[/yellow]", soft_wrap=True)

    while not game.is_game_over:
        print_scoreboard(game)
        if not auto:
            answer = click.prompt(
                "Predict [4/6/w], Enter to skip, q to quit",
                default="", show_default=False,
            ).strip().lower()
            if answer == "q":
                break
            if answer not in PROMPT_CHOICES:
                console.print("[red]Choose 4, 6, w or press Enter.[/red]")
                continue
            try:
                game.predict(PROMPT_CHOICES[answer])
            except GameError as e:
                console.print(f"[red]{e}[/red]")
                continue

        result = game.bowl_next_ball()
        if result is None:
            break
        style = "green" if result.resolution.correct else "red" if result.resolution.correct is False else "white"
        console.print(f"[{style}]{result.message}[/{style}]", soft_wrap=True)

    print_scoreboard(game)
    console.print(Panel(f"[bold]Final points: {game.scorer.points}[/bold]"))


@cli.command()
@click.option("--host", default=None, help="Bind address")
@click.option("--port", default=None, type=int, help="Port")
def serve(host, port):
    """Run the API server"""
    import uvicorn
    uvicorn.run("main:app", host=host or settings.HOST, port=port or settings.PORT)


if __name__ == "__main__":
    cli()
