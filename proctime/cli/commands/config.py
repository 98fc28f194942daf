"""Config command for configuration management."""

import json
import os
import sys

import click

from ...exceptions import ConfigurationException


@click.group()
@click.pass_context
def config(ctx):
    """Manage proctime configuration.

    Examples:
      proctime config show
      proctime config init ~/.proctime.json
    """
    pass


@config.command()
@click.option("--json", "output_json", is_flag=True, help="Output in JSON format")
@click.pass_context
def show(ctx, output_json: bool):
    """Display the effective configuration."""
    cli_ctx = ctx.find_root().obj
    current_config = cli_ctx.config

    if output_json:
        click.echo(json.dumps(current_config.model_dump(mode="json"), indent=2))
        return

    click.echo("=== Current Configuration ===")
    click.echo(f"Version: {current_config.config_version}")
    click.echo(f"Log Level: {current_config.log_level.value}")
    click.echo(f"Log File: {current_config.get_log_file_path() or '-'}")
    click.echo(f"Backend: {current_config.backend.value} ({cli_ctx.timer.name})")
    click.echo(f"Checked: {current_config.checked}")
    click.echo()
    click.echo("Cross-check Settings:")
    for key, value in current_config.crosscheck.items():
        click.echo(f"  {key}: {value}")


@config.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init(ctx, path: str, force: bool):
    """Write the effective configuration to PATH."""
    cli_ctx = ctx.find_root().obj

    if os.path.exists(path) and not force:
        click.echo(f"Error: {path} already exists (use --force)", err=True)
        sys.exit(1)

    try:
        saved = cli_ctx.config_manager.save_config(cli_ctx.config, path)
    except ConfigurationException as e:
        click.echo(f"Error writing configuration: {e}", err=True)
        sys.exit(1)

    if not saved:
        click.echo(f"Error: could not write {path}", err=True)
        sys.exit(1)

    if not cli_ctx.quiet:
        click.echo(f"✓ Configuration written to: {path}")
