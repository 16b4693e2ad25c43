"""fseek scan command - list the files quick open would search."""

import asyncio
import json
from pathlib import Path

import click

from fileseek.cli.utils import load_cli_config
from fileseek.core.progress import pluralize, spinner, status
from fileseek.files.scanner import scan


@click.command()
@click.argument(
    "root", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-git", is_flag=True, help="Skip git and walk the directory tree")
@click.pass_context
def scan_command(ctx: click.Context, root: Path, as_json: bool, no_git: bool) -> None:
    """List project files, one relative path per line.

    ROOT is the project directory (default: current directory).
    """
    root = root.resolve()
    config = load_cli_config(ctx, root, as_json=as_json)
    scanner_config = config.scanner
    if no_git:
        scanner_config = scanner_config.model_copy(update={"use_git": False})

    if as_json:
        paths = asyncio.run(scan(root, scanner_config))
        click.echo(json.dumps({"root": str(root), "count": len(paths), "paths": paths}))
        return

    with spinner("Scanning files"):
        paths = asyncio.run(scan(root, scanner_config))

    for path in paths:
        click.echo(path)

    if len(paths) >= scanner_config.max_files:
        status(f"Stopped at {pluralize(len(paths), 'file')} (scanner.max_files)", style="warning")
    else:
        status(pluralize(len(paths), "file"), style="success")
