"""
Renders markdown slides to HTML, browses a deck, and bundles it for offline use.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from .builder import build_site
from .config import ConfigError, apply_overrides, build_config
from .exceptions import DeckError
from .filesystem import get_max_file_size, read_text
from .loader import load_embedded_data
from .logging import configure_logging
from .navigation import DeckSession, start_index_from_hash
from .parser import parse_markdown

__all__ = ["cli"]


def _load_config(search_path: Path, **overrides):
    try:
        config = build_config(search_path, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    # DECKDOWN_MAX_FILE_SIZE takes precedence over the configured limit.
    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    return apply_overrides(config, max_file_size=max_file_size)


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool = False):
    """Markdown slide deck tools."""
    configure_logging(verbose=verbose)


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print title and HTML as JSON")
def render(filepath: Path, as_json: bool = False):
    """
    Convert one markdown file to an HTML fragment.

    Args:
        filepath: Markdown file to convert.
        as_json: Print ``{"title": ..., "html": ...}`` instead of bare HTML.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If the file cannot be read or is too large.

    Examples:
        deckdown render slides/01-intro.md --json
    """
    config = _load_config(filepath.parent)
    try:
        content = read_text(filepath, config.max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    result = parse_markdown(content)
    if as_json:
        click.echo(json.dumps({"title": result.title, "html": result.html}, ensure_ascii=False))
    else:
        click.echo(result.html)


@cli.command()
@click.argument(
    "deck_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default="."
)
def slides(deck_dir: Path):
    """List the slides of a deck as numbered titles."""
    config = _load_config(deck_dir)
    session = DeckSession.open(deck_dir, config)
    for label in session.option_labels():
        click.echo(label)


@cli.command()
@click.argument(
    "deck_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default="."
)
@click.option("--slide", "number", type=click.IntRange(min=1), help="One-based slide number")
@click.option("--hash", "fragment", help="URL fragment such as #slide3")
@click.option(
    "--embedded",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Bundled page whose embedded data is used as a fallback",
)
@click.option("--json", "as_json", is_flag=True, help="Print the rendered slide as JSON")
def show(
    deck_dir: Path,
    number: int | None = None,
    fragment: str | None = None,
    embedded: Path | None = None,
    as_json: bool = False,
):
    """
    Render one slide of a deck.

    The slide is chosen by ``--slide``, then ``--hash``, then defaults to the
    first slide. Missing files fall back to the embedded data of ``--embedded``.

    Raises:
        click.BadParameter: If options conflict or the configuration is invalid.
        click.ClickException: If the embedded page cannot be read or the slide
            does not exist.
    """
    if number is not None and fragment is not None:
        raise click.BadParameter("use either --slide or --hash, not both")

    config = _load_config(deck_dir)

    embedded_data = None
    if embedded is not None:
        try:
            embedded_data = load_embedded_data(embedded, config.max_file_size)
        except (IOError, DeckError) as error:
            raise click.ClickException(str(error)) from error

    session = DeckSession.open(deck_dir, config, embedded_data)
    if number is not None:
        index = number - 1
    else:
        index = start_index_from_hash(fragment or "", session.slide_count)

    rendered = session.load_slide(index)
    if rendered is None:
        raise click.ClickException(
            f"No slide at position {index + 1} (deck has {session.slide_count})"
        )

    if as_json:
        payload = {
            "index": rendered.index,
            "title": rendered.title,
            "anchor": rendered.anchor,
            "html": rendered.html,
        }
        click.echo(json.dumps(payload, ensure_ascii=False))
    else:
        click.echo(f"{rendered.anchor} {rendered.title}")
        click.echo(rendered.html)


@cli.command()
@click.argument(
    "project_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default="."
)
@click.option("--output-dir", help="Directory for the bundled page")
def build(project_dir: Path, output_dir: str | None = None):
    """
    Bundle a deck project into one self-contained HTML page.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If an input is missing or the page cannot be written.

    Examples:
        deckdown build talk --output-dir dist
    """
    config = _load_config(project_dir, output_dir=output_dir)
    try:
        output_path = build_site(project_dir, config)
    except DeckError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Build complete. Generated {output_path}")


if __name__ == "__main__":
    cli()
