"""Sample and ticks commands for reading the process timer."""

import json
import sys

import click

from ...exceptions import PlatformQueryError


@click.command()
@click.option("--json", "output_json", is_flag=True, help="Output in JSON format")
@click.pass_context
def sample(ctx, output_json: bool):
    """Print the user CPU time consumed by this process so far.

    Examples:
      proctime sample
      proctime --checked sample --json
    """
    cli_ctx = ctx.find_root().obj

    try:
        reading = cli_ctx.timer.sample()
    except PlatformQueryError as e:
        click.echo(f"Error reading process time: {e}", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(reading.to_dict(), indent=2))
        return

    click.echo(f"Backend: {reading.backend}")
    click.echo(f"User Ticks: {reading.user_time.ticks}")
    click.echo(f"Ticks Per Second: {reading.frequency.ticks_per_second}")
    click.echo(f"User Seconds: {reading.seconds:.6f}")


@click.command()
@click.pass_context
def ticks(ctx):
    """Print the tick frequency of the active backend."""
    cli_ctx = ctx.find_root().obj

    try:
        click.echo(cli_ctx.timer.get_ticks())
    except PlatformQueryError as e:
        click.echo(f"Error reading tick frequency: {e}", err=True)
        sys.exit(1)
