"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ..config import ConfigManager
from ..utils.logging import setup_logging
from .commands import (
    init_command,
    location_command,
    path_command,
    set_command,
    show_command,
    validate_command,
)


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Configuration directory (defaults to the per-user config directory)"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default="WARNING",
    help="Logging level"
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Log file path"
)
@click.option(
    "--no-rich",
    is_flag=True,
    help="Disable rich formatting"
)
@click.pass_context
def cli(
    ctx,
    config_dir: Optional[Path],
    log_level: str,
    log_file: Optional[Path],
    no_rich: bool,
):
    """FSearch configuration tool."""
    ctx.ensure_object(dict)

    logger = setup_logging(
        level=log_level,
        log_file=log_file,
        use_rich=not no_rich
    )

    config_manager = ConfigManager(config_dir)
    ctx.call_on_close(config_manager.close)

    ctx.obj["config_manager"] = config_manager
    ctx.obj["logger"] = logger


cli.add_command(path_command)
cli.add_command(show_command)
cli.add_command(init_command)
cli.add_command(set_command)
cli.add_command(location_command)
cli.add_command(validate_command)


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user", err=True)
        sys.exit(130)
    except Exception as e:
        logger = logging.getLogger(__name__)
        logger.exception("Unexpected error occurred")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
