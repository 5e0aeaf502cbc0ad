"""awa2spotify CLI using Typer.

Commands:
- create: Create a Spotify playlist from an AWA playlist
- add: Append an AWA playlist's tracks to an existing Spotify playlist

Only a missing or invalid configuration exits non-zero; usage mistakes and
failed runs print a message and exit 0.
"""

from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError
from typer.core import TyperGroup

from .config import Settings, get_settings
from .errors import Awa2SpotifyError, ConfigurationError
from .logging import configure_logging, get_logger
from .models import SourcePlaylist, TrackResolution
from .pipeline import Pipeline, parse_playlist_id

EXIT_CONFIGURATION_ERROR = 1

USAGE = """
Usage:
    awa2spotify [command]

Command:
    create  Create a Spotify playlist from an AWA playlist.
    add     Add the tracks of an AWA playlist to an existing Spotify playlist.

Create command:
    Usage:
        awa2spotify create [awa playlist url] [options]

    Options:
        -name  Name of the new playlist. Defaults to the AWA playlist's name.
        -desc  Description of the new playlist. Defaults to the AWA playlist's description.

    Example:
        awa2spotify create https://mf.awa.fm/2RDS2S8 -name="今日の1曲" -desc="素敵な音楽がいっぱいあって幸せです"

Add command:
    Usage:
        awa2spotify add [awa playlist url] [spotify playlist url]

    Example:
        awa2spotify add https://mf.awa.fm/350pkxE https://open.spotify.com/playlist/2dpeGxTWfOVysBwuO5bvta
"""


class UsageGroup(TyperGroup):
    """Command group that checks TOKEN before anything else and answers
    unknown commands with the usage text instead of a usage error."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        if not ctx.resilient_parsing:
            try:
                get_settings().require_token()
            except ConfigurationError as e:
                typer.echo(str(e))
                ctx.exit(EXIT_CONFIGURATION_ERROR)
            except ValidationError as e:
                typer.echo(f"Invalid configuration: {e}")
                ctx.exit(EXIT_CONFIGURATION_ERROR)
        return super().parse_args(ctx, args)

    def resolve_command(self, ctx: typer.Context, args: list[str]) -> tuple[Any, ...]:
        if args and self.get_command(ctx, args[0]) is None:
            typer.echo("Unknown command.")
            typer.echo(USAGE)
            ctx.exit(0)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="awa2spotify",
    help="Copy AWA playlists to Spotify.",
    cls=UsageGroup,
    add_completion=False,
)


def echo_resolution(resolution: TrackResolution) -> None:
    """Print the outcome of one track search."""
    if resolution.matched:
        typer.echo(f"{resolution.track} -> {resolution.link}")
    else:
        typer.echo(f'[!] Could not find "{resolution.track}"')


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context) -> None:
    """Copy AWA playlists to Spotify.

    Requires the TOKEN environment variable to hold a Spotify access token.
    Set DEBUG to any value to print request and scrape diagnostics.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, format=settings.log_format)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        typer.echo(USAGE)


def _scrape(pipeline: Pipeline, url: str) -> SourcePlaylist | None:
    try:
        return pipeline.scrape(url)
    except Awa2SpotifyError as e:
        typer.echo(f"Could not scrape: {e}")
        return None


@app.command()
def create(
    ctx: typer.Context,
    source_url: Annotated[Optional[str], typer.Argument(help="AWA playlist URL")] = None,
    name: Annotated[Optional[str], typer.Option("-name", "--name", help="Playlist name (default: AWA playlist name)")] = None,
    desc: Annotated[Optional[str], typer.Option("-desc", "--desc", help="Playlist description (default: AWA playlist description)")] = None,
) -> None:
    """Create a Spotify playlist from an AWA playlist.

    Example:
        awa2spotify create https://mf.awa.fm/2RDS2S8 -name="今日の1曲"
    """
    if not source_url:
        typer.echo("AWA playlist url must be set.")
        typer.echo(USAGE)
        return

    settings: Settings = ctx.obj
    logger = get_logger(__name__)

    with Pipeline(settings) as pipeline:
        playlist = _scrape(pipeline, source_url)
        if playlist is None:
            return

        try:
            result = pipeline.create(
                playlist.with_overrides(name=name, description=desc),
                on_result=echo_resolution,
            )
        except Awa2SpotifyError as e:
            logger.debug("create_failed", error=str(e))
            typer.echo(f"Could not create: {e}")
            return

    typer.echo(f"playlist url: {result.playlist_url}")


@app.command()
def add(
    ctx: typer.Context,
    source_url: Annotated[Optional[str], typer.Argument(help="AWA playlist URL")] = None,
    destination_url: Annotated[Optional[str], typer.Argument(help="Spotify playlist URL")] = None,
) -> None:
    """Add the tracks of an AWA playlist to an existing Spotify playlist.

    Example:
        awa2spotify add https://mf.awa.fm/350pkxE https://open.spotify.com/playlist/2dpeGxTWfOVysBwuO5bvta
    """
    if not source_url or not destination_url:
        typer.echo("AWA and Spotify playlist url must be set.")
        typer.echo(USAGE)
        return

    settings: Settings = ctx.obj

    with Pipeline(settings) as pipeline:
        playlist = _scrape(pipeline, source_url)
        if playlist is None:
            return

        try:
            pipeline.add(parse_playlist_id(destination_url), playlist, on_result=echo_resolution)
        except Awa2SpotifyError as e:
            typer.echo(f"Could not add: {e}")


def main() -> None:
    """CLI entry point."""
    app()
