"""Check command comparing the process timer with psutil."""

import json
import math
import sys
from typing import Optional

import click

from ...exceptions import PlatformQueryError
from ...services.crosscheck import CrossChecker


@click.command()
@click.option("--burn", "burn_seconds", type=float,
              help="Seconds of CPU-bound work to measure")
@click.option("--tolerance", type=float,
              help="Allowed difference from psutil in seconds")
@click.option("--json", "output_json", is_flag=True, help="Output in JSON format")
@click.pass_context
def check(ctx, burn_seconds: Optional[float], tolerance: Optional[float],
          output_json: bool):
    """Burn CPU and compare the timer's reading with psutil.

    Exits with status 1 when the readings disagree by more than the
    tolerance.

    Examples:
      proctime check
      proctime check --burn 1.0 --json
    """
    cli_ctx = ctx.find_root().obj
    config = cli_ctx.config

    burn_seconds = burn_seconds if burn_seconds is not None else config.get_burn_seconds()
    tolerance = tolerance if tolerance is not None else config.get_tolerance_seconds()

    if not all(math.isfinite(v) and v > 0 for v in (burn_seconds, tolerance)):
        click.echo(
            "Error: --burn and --tolerance must be positive finite numbers", err=True
        )
        sys.exit(2)

    try:
        result = CrossChecker(cli_ctx.timer, tolerance_seconds=tolerance).run(burn_seconds)
    except PlatformQueryError as e:
        click.echo(f"Error reading process time: {e}", err=True)
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(f"=== Cross-check ({result.backend}) ===")
        click.echo(f"Wall Time: {result.wall_seconds:.3f}s")
        click.echo(f"Timer User Time: {result.timer_seconds:.3f}s")
        click.echo(f"psutil User Time: {result.psutil_seconds:.3f}s")
        if cli_ctx.verbose:
            click.echo(f"Ticks: {result.start_ticks} -> {result.end_ticks}")
            click.echo(f"Ticks Per Second: {result.ticks_per_second}")
        click.echo(f"Difference: {result.difference_seconds:.3f}s "
                   f"(tolerance {result.tolerance_seconds:.3f}s)")
        click.echo("✓ Within tolerance" if result.within_tolerance
                   else "✗ Out of tolerance")

    if not result.within_tolerance:
        sys.exit(1)
