"""Mutating commands: delete an episode file, unmonitor an episode."""

from __future__ import annotations

import click

from sonarr_client.cli import get_client
from sonarr_client.cli.output import sonarr_errors, success_output


@click.command("delete-file")
@click.argument("episode_file_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.option("--json", "json_flag", is_flag=True, help="Output result as JSON.")
@click.pass_context
def delete_file_command(
    ctx: click.Context,
    episode_file_id: int,
    yes: bool,
    json_flag: bool,
) -> None:
    """Delete an episode file. The media file is removed from disk."""
    if not yes:
        click.confirm(
            f"Delete episode file {episode_file_id} from disk?", abort=True
        )
    client = get_client(ctx)
    with sonarr_errors(json_flag):
        client.delete_episode_file(episode_file_id)
    success_output(
        f"Deleted episode file {episode_file_id}",
        json_flag,
        episode_file_id=episode_file_id,
    )


@click.command("unmonitor")
@click.argument("episode_id", type=int)
@click.option("--json", "json_flag", is_flag=True, help="Output result as JSON.")
@click.pass_context
def unmonitor_command(ctx: click.Context, episode_id: int, json_flag: bool) -> None:
    """Stop Sonarr from downloading an episode again."""
    client = get_client(ctx)
    with sonarr_errors(json_flag):
        client.unmonitor_episode(episode_id)
    success_output(
        f"Episode {episode_id} unmonitored",
        json_flag,
        episode_id=episode_id,
    )
