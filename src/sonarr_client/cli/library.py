"""Read-only commands: series lookup, tags and episode listing."""

from __future__ import annotations

import click

from sonarr_client.cli import get_client
from sonarr_client.cli.output import format_option, print_json, sonarr_errors


@click.command("series")
@click.argument("tvdb_id")
@format_option
@click.pass_context
def series_command(ctx: click.Context, tvdb_id: str, output_format: str) -> None:
    """Look up series by TVDB id.

    Examples:

    \b
        sonarr-client series 81189
        sonarr-client series 81189 --format json
    """
    as_json = output_format == "json"
    client = get_client(ctx)
    with sonarr_errors(as_json):
        series = client.series_by_tvdb_id(tvdb_id)

    if as_json:
        print_json(
            [
                {
                    "id": s.id,
                    "title": s.title,
                    "tags": list(s.tags) if s.tags is not None else None,
                }
                for s in series
            ]
        )
        return

    if not series:
        click.echo(f"No series found for TVDB id {tvdb_id}")
        return
    for s in series:
        tags = ", ".join(str(t) for t in s.tags) if s.tags else "-"
        click.echo(f"{s.id:>6}  {s.title}  (tags: {tags})")


@click.command("tags")
@format_option
@click.pass_context
def tags_command(ctx: click.Context, output_format: str) -> None:
    """List all tags."""
    as_json = output_format == "json"
    client = get_client(ctx)
    with sonarr_errors(as_json):
        tags = client.tags()

    if as_json:
        print_json([{"id": t.id, "label": t.label} for t in tags])
        return

    for tag in tags:
        click.echo(f"{tag.id:>4}  {tag.label}")


@click.command("episodes")
@click.argument("series_id", type=int)
@click.option(
    "--with-files",
    is_flag=True,
    default=False,
    help="Only show episodes that have a file attached.",
)
@format_option
@click.pass_context
def episodes_command(
    ctx: click.Context,
    series_id: int,
    with_files: bool,
    output_format: str,
) -> None:
    """List the episodes of a series.

    Examples:

    \b
        sonarr-client episodes 42
        sonarr-client episodes 42 --with-files --format json
    """
    as_json = output_format == "json"
    client = get_client(ctx)
    with sonarr_errors(as_json):
        episodes = client.episodes_by_series(series_id)

    if with_files:
        episodes = [e for e in episodes if e.has_file]

    if as_json:
        print_json(
            [
                {
                    "id": e.id,
                    "series_id": e.series_id,
                    "episode_file_id": e.episode_file_id,
                    "season_number": e.season_number,
                    "episode_number": e.episode_number,
                    "title": e.title,
                    "monitored": e.monitored,
                }
                for e in episodes
            ]
        )
        return

    for e in episodes:
        file_id = e.episode_file_id if e.has_file else "-"
        monitored = "monitored" if e.monitored else "unmonitored"
        click.echo(
            f"S{e.season_number:02d}E{e.episode_number:02d}  id={e.id:<7} "
            f"file={file_id!s:<7} {monitored:<11}  {e.title}"
        )
