"""Main CLI entry point for proctime.

Provides a small command-line front end over the process timers using the
Click framework.
"""
import sys
from typing import Optional

import click

from .. import __version__
from ..exceptions import TimerException
from ..lib.base import ProcessTimer
from ..models.timer_configuration import TimerConfiguration
from ..services.config_manager import ConfigManager
from ..services.timer_factory import create_timer_from_config
from ..utils.logging import configure_default_logger


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config: Optional[TimerConfiguration] = None
        self.config_manager: Optional[ConfigManager] = None
        self.timer: Optional[ProcessTimer] = None
        self.verbose = False
        self.quiet = False


@click.group(invoke_without_command=True)
@click.option('--config', '-c',
              type=click.Path(),
              help='Path to configuration file')
@click.option('--backend',
              type=click.Choice(['auto', 'windows', 'posix']),
              help='Timer backend (overrides configuration)')
@click.option('--checked',
              is_flag=True,
              help='Fail when the OS query reports an error')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose output')
@click.option('--quiet', '-q',
              is_flag=True,
              help='Suppress non-essential output')
@click.option('--version',
              is_flag=True,
              help='Show version information')
@click.pass_context
def cli(click_ctx: click.Context, config: Optional[str], backend: Optional[str],
        checked: bool, verbose: bool, quiet: bool, version: bool):
    """Report the user CPU time consumed by this process.

    Times are read in platform-native ticks together with the tick
    frequency needed to convert them to seconds.
    """
    ctx = click_ctx.ensure_object(CLIContext)

    if version:
        click.echo(f"proctime version {__version__}")
        click_ctx.exit(0)

    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        click_ctx.exit(0)

    if verbose and quiet:
        click.echo("Error: --verbose and --quiet cannot be used together", err=True)
        sys.exit(1)

    ctx.verbose = verbose
    ctx.quiet = quiet

    try:
        ctx.config_manager = ConfigManager(config)
        ctx.config = ctx.config_manager.load_config_with_env_override(config)

        if backend:
            ctx.config.backend = backend
        if checked:
            ctx.config.checked = True

        configure_default_logger(
            level="DEBUG" if verbose else ctx.config.log_level.value,
            log_file=ctx.config.get_log_file_path(),
        )

        ctx.timer = create_timer_from_config(ctx.config)

    except TimerException as e:
        if not quiet:
            click.echo(f"Error initializing: {e}", err=True)
        sys.exit(1)


from .commands.sample import sample, ticks
from .commands.check import check
from .commands.config import config as config_cmd

cli.add_command(sample)
cli.add_command(ticks)
cli.add_command(check)
cli.add_command(config_cmd, name='config')


def main():
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user")
        sys.exit(1)


if __name__ == '__main__':
    main()
