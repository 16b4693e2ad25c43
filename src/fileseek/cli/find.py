"""fseek find command - fuzzy search project paths."""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from fileseek.cli.utils import load_cli_config
from fileseek.core.progress import spinner, status
from fileseek.files.scanner import scan
from fileseek.search.fuzzy import rank
from fileseek.search.models import MatchResult, filename_highlights


def _render(result: MatchResult) -> Text:
    """Filename with matched characters highlighted, then the dimmed directory."""
    text = Text()
    highlights = filename_highlights(result)
    for i, char in enumerate(result.filename):
        text.append(char, style="bold yellow" if i in highlights else None)
    if result.directory:
        text.append(f"  {result.directory}", style="dim")
    return text


@click.command()
@click.argument("query")
@click.argument(
    "root", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum results (default: search.max_results)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def find_command(
    ctx: click.Context, query: str, root: Path, limit: int | None, as_json: bool
) -> None:
    """Fuzzy-find files matching QUERY, best match first.

    ROOT is the project directory (default: current directory).
    """
    root = root.resolve()
    config = load_cli_config(ctx, root, as_json=as_json)
    max_results = limit or config.search.max_results

    if as_json:
        paths = asyncio.run(scan(root, config.scanner))
        results = rank(query, paths, max_results)
        click.echo(
            json.dumps(
                [
                    {"path": r.path, "score": r.score, "matched_indices": list(r.matched_indices)}
                    for r in results
                ]
            )
        )
        return

    with spinner("Scanning files"):
        paths = asyncio.run(scan(root, config.scanner))
    results = rank(query, paths, max_results)

    if not results:
        status(f"No files match '{query}'", style="warning")
        return

    console = Console(highlight=False)
    for result in results:
        console.print(_render(result), soft_wrap=True)
