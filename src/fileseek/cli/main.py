"""fileseek CLI - fseek command."""

from pathlib import Path

import click

from fileseek.cli.find import find_command
from fileseek.cli.scan import scan_command
from fileseek.cli.watch import watch_command
from fileseek.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="fseek")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file layered over the project and global config",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """fileseek - Quick-open file search and single-file watching."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(scan_command, name="scan")
cli.add_command(find_command, name="find")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
