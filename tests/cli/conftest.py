"""CLI test fixtures."""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ignore the user's global config and FILESEEK__ env vars.

    Scans walk the tree instead of asking git, so results don't depend on
    whatever checkout the temp directory happens to live in.
    """
    for key in list(os.environ):
        if key.startswith("FILESEEK__"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("FILESEEK__SCANNER__USE_GIT", "false")
    with patch("fileseek.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield
