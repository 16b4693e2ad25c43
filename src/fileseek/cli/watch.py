"""fseek watch command - report external changes to one file."""

import asyncio
from datetime import datetime
from pathlib import Path

import click

from fileseek.cli.utils import load_cli_config
from fileseek.config.models import WatcherConfig
from fileseek.core.logging import get_log_file_path
from fileseek.core.progress import status
from fileseek.watch.watcher import FileWatcher, Stopped


async def _watch(path: Path, config: WatcherConfig) -> bool:
    """Watch until interrupted or the watcher gives up. Returns True on give-up."""

    def on_change() -> None:
        click.echo(f"{datetime.now():%H:%M:%S} changed {path}")

    watcher = FileWatcher.from_config(path, on_change, config)
    watcher.start()
    try:
        while watcher.is_watching:
            await asyncio.sleep(config.reconnect_interval_sec)
        state = watcher.state
        return isinstance(state, Stopped) and state.gave_up
    finally:
        watcher.stop()


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def watch_command(ctx: click.Context, file: Path) -> None:
    """Print a line each time FILE changes on disk. Ctrl+C to stop."""
    path = file.resolve()
    config = load_cli_config(ctx, path.parent)

    status(f"Watching {path}")
    try:
        gave_up = asyncio.run(_watch(path, config.watcher))
    except KeyboardInterrupt:
        click.echo("\nStopped")
        return

    if gave_up:
        status(f"Stopped watching: {path} did not come back", style="warning")
        log_file = get_log_file_path()
        if log_file is not None:
            status(f"Details in {log_file}", indent=2)
