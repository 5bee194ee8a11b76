from __future__ import annotations

import json
import logging
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

PNG_BYTES = b"\x89PNG\r\n\x1a\n"

TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<link rel="stylesheet" href="theme.css">
<script>window.EMBED_DATA = window.EMBED_DATA || {};</script>
</head>
<body>
<select id="slide-select"></select>
<div id="terminal-content"></div>
<script src="app.js"></script>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def reset_deckdown_logger():
    """Drops handlers the CLI attaches so later tests do not log to a closed stream."""
    yield
    logger = logging.getLogger("deckdown")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


def write_file(base: Path, relative: str, content: str) -> Path:
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


@pytest.fixture()
def deck_project(tmp_path: Path) -> Path:
    """A three-slide deck project with a template, theme, script, and assets."""
    manifest = {
        "title": "Self-modifying binaries",
        "slides": [
            {"title": "Intro", "file": "slides/01-intro.md"},
            {"title": "Patching", "file": "slides/02-patching.md"},
            {"title": "Untitled", "file": "slides/03-notes.md"},
        ],
    }
    (tmp_path / "deck.json").write_text(json.dumps(manifest), encoding="utf-8")
    write_file(
        tmp_path,
        "slides/01-intro.md",
        """
        # Welcome

        Code that **rewrites** itself.

        - one
        - two
        """,
    )
    write_file(
        tmp_path,
        "slides/02-patching.md",
        """
        ## Patching at runtime

        <img src="assets/diagram.png" alt="diagram">

        ```
        mov eax, <target>
        ```
        """,
    )
    write_file(tmp_path, "slides/03-notes.md", "Just a paragraph.\n")
    (tmp_path / "index.html").write_text(TEMPLATE, encoding="utf-8")
    (tmp_path / "theme.css").write_text(
        "body { background: url('assets/diagram.png'); }\n", encoding="utf-8"
    )
    (tmp_path / "app.js").write_text("console.log('deck');\n", encoding="utf-8")
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "diagram.png").write_bytes(PNG_BYTES)
    (assets / "notes.txt").write_text("not an image", encoding="utf-8")
    return tmp_path
