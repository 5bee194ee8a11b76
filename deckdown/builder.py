"""Bundle a deck project into a single offline HTML page."""

from __future__ import annotations

import base64
import json
from pathlib import Path

from .config import DeckConfig
from .constants import ASSET_MIME_TYPES, CSS_URL_PATTERN, EMBED_ASSIGNMENT, EMBED_PLACEHOLDER
from .exceptions import BuildError
from .filesystem import enforce_file_size, read_text, safe_read_bytes, write_atomic
from .logging import get_logger
from .models import Deck, EmbeddedData

logger = get_logger("builder")


def encode_assets(assets_dir: Path, max_size: int | None = None) -> dict[str, str]:
    """Encode supported images under `assets_dir` as ``data:`` URIs.

    Keys are ``assets/<file name>``, matching how slides and stylesheets refer
    to them. Files with other extensions are skipped. A missing directory
    yields no assets.

    Args:
        assets_dir: Directory containing the images.
        max_size: Optional size limit in bytes per asset.

    Returns:
        dict[str, str]: Data URIs keyed by asset path, in file name order.

    Raises:
        IOError: If an asset cannot be read or is too large.

    Examples:
        encode_assets(Path("assets"))  # {"assets/logo.png": "data:image/png;base64,..."}
    """
    assets: dict[str, str] = {}
    if not assets_dir.is_dir():
        logger.debug("No assets directory at %s", assets_dir)
        return assets

    for path in sorted(assets_dir.iterdir()):
        mime = ASSET_MIME_TYPES.get(path.suffix.lower())
        if mime is None or not path.is_file():
            continue
        if max_size is not None:
            enforce_file_size(path, max_size)
        with safe_read_bytes(path) as file:
            encoded = base64.b64encode(file.read()).decode("ascii")
        assets[f"assets/{path.name}"] = f"data:{mime};base64,{encoded}"

    return assets


def inline_css_urls(css: str, assets: dict[str, str]) -> str:
    """Replace ``url(...)`` references to embedded assets with data URIs.

    Single-quoted, double-quoted, and unquoted references are recognized;
    anything not found in `assets` is left as written.

    Examples:
        inline_css_urls("body { background: url('assets/bg.png'); }", assets)
    """

    def _substitute(match):
        target = match.group(1).strip()
        if target[:1] in ("'", '"'):
            target = target[1:]
        if target[-1:] in ("'", '"'):
            target = target[:-1]
        if target in assets:
            return f"url('{assets[target]}')"
        return match.group(0)

    return CSS_URL_PATTERN.sub(_substitute, css)


def build_embed_script(data: EmbeddedData) -> str:
    """Serialize embedded data as the script assignment the page reads.

    ``</`` is written as ``<\\/`` so slide text cannot close the script element.
    """
    payload = json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":"))
    payload = payload.replace("</", "<\\/")
    return f"{EMBED_ASSIGNMENT}{payload};"


def bundle_html(
    template: str,
    css: str,
    script: str,
    embed_script: str,
    config: DeckConfig | None = None,
) -> str:
    """Inline the stylesheet, the script, and the embedded data into `template`.

    Replaces the first ``<link rel="stylesheet" href="...">`` for the configured
    stylesheet, the first ``<script src="..."></script>`` for the configured
    script, and the empty ``window.EMBED_DATA`` placeholder. Elements the
    template lacks are skipped.
    """
    config = config or DeckConfig()
    link_tag = f'<link rel="stylesheet" href="{config.stylesheet}">'
    script_tag = f'<script src="{config.script}"></script>'

    html = template
    if link_tag not in html:
        logger.warning("Template has no %s; stylesheet not inlined", link_tag)
    html = html.replace(link_tag, f"<style>{css}</style>", 1)
    if script_tag not in html:
        logger.warning("Template has no %s; script not inlined", script_tag)
    html = html.replace(script_tag, f"<script>{script}</script>", 1)
    if EMBED_PLACEHOLDER not in html:
        logger.warning("Template has no embedded data placeholder")
    return html.replace(EMBED_PLACEHOLDER, embed_script, 1)


def _read_required(path: Path, max_size: int) -> str:
    try:
        return read_text(path, max_size)
    except IOError as error:
        raise BuildError(str(error)) from error


def collect_embedded_data(project_root: Path, config: DeckConfig) -> EmbeddedData:
    """Gather the deck, every slide's markdown, and encoded assets.

    Raises:
        BuildError: If the manifest, a slide, or an asset cannot be read, or the
            manifest is malformed.
    """
    manifest_path = project_root / config.deck_file
    try:
        deck = Deck.from_dict(json.loads(_read_required(manifest_path, config.max_file_size)))
    except ValueError as error:
        raise BuildError(f"Invalid deck manifest {manifest_path}: {error}") from error

    slides = {
        slide.file: _read_required(project_root / slide.file, config.max_file_size)
        for slide in deck.slides
    }

    try:
        assets = encode_assets(project_root / config.assets_dir, config.max_file_size)
    except IOError as error:
        raise BuildError(str(error)) from error

    return EmbeddedData(deck=deck, slides=slides, assets=assets)


def build_site(project_root: Path, config: DeckConfig | None = None) -> Path:
    """Write the self-contained page for the deck project at `project_root`.

    Args:
        project_root: Directory holding the template, stylesheet, script,
            manifest, slides, and assets.
        config: Project configuration; defaults to `DeckConfig()`.

    Returns:
        Path: Location of the written page.

    Raises:
        BuildError: If an input is missing or malformed, or the output cannot
            be written.

    Examples:
        build_site(Path("talk"))  # Path("talk/docs/index.html")
    """
    config = config or DeckConfig()
    max_size = config.max_file_size

    template = _read_required(project_root / config.template, max_size)
    css = _read_required(project_root / config.stylesheet, max_size)
    script = _read_required(project_root / config.script, max_size)

    data = collect_embedded_data(project_root, config)
    css = inline_css_urls(css, data.assets)
    html = bundle_html(template, css, script, build_embed_script(data), config)

    output_dir = project_root / config.output_dir
    output_path = output_dir / config.output_file
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        write_atomic(output_path, html)
    except OSError as error:
        raise BuildError(str(error)) from error

    logger.info(
        "Build complete. Generated %s (%d slides, %d assets)",
        output_path,
        len(data.slides),
        len(data.assets),
    )
    return output_path
