"""Shared CLI helpers."""

import json
from pathlib import Path

import click

from fileseek.config.loader import load_config
from fileseek.config.models import FileSeekConfig
from fileseek.core.errors import FileSeekError
from fileseek.core.logging import configure_logging


def load_cli_config(ctx: click.Context, root: Path, *, as_json: bool = False) -> FileSeekConfig:
    """Load config for ``root`` and apply its logging section.

    With ``--verbose`` the debug console logging set up by the group is kept.
    With ``as_json`` a load failure is printed as a JSON error object on
    stdout before exiting, so scripted callers get the code and details.

    Raises:
        click.ClickException: If the config can't be loaded
    """
    obj = ctx.ensure_object(dict)
    try:
        config = load_config(root, config_path=obj.get("config_path"))
    except FileSeekError as e:
        if as_json:
            click.echo(json.dumps({"error": e.to_dict()}))
            raise SystemExit(1) from e
        raise click.ClickException(str(e)) from e

    if not obj.get("verbose"):
        configure_logging(config=config.logging)
    return config
