from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from deckdown.builder import (
    build_embed_script,
    build_site,
    bundle_html,
    encode_assets,
    inline_css_urls,
)
from deckdown.config import DeckConfig
from deckdown.exceptions import BuildError, SlideTooLargeError
from deckdown.loader import extract_embedded_data
from deckdown.models import EmbeddedData

ASSETS = {"assets/bg.png": "data:image/png;base64,AA=="}


def _png_uri(path: Path) -> str:
    return "data:image/png;base64," + base64.b64encode(path.read_bytes()).decode("ascii")


def test_encode_assets_skips_unsupported_files(deck_project: Path):
    assets = encode_assets(deck_project / "assets")

    assert assets == {"assets/diagram.png": _png_uri(deck_project / "assets" / "diagram.png")}


def test_encode_assets_mime_types(tmp_path: Path):
    for name in ("a.JPG", "b.jpeg", "c.svg", "d.gif", "e.webp"):
        (tmp_path / name).write_bytes(b"x")

    assets = encode_assets(tmp_path)

    assert {key: value.split(";")[0] for key, value in assets.items()} == {
        "assets/a.JPG": "data:image/jpeg",
        "assets/b.jpeg": "data:image/jpeg",
        "assets/c.svg": "data:image/svg+xml",
        "assets/d.gif": "data:image/gif",
    }


def test_encode_assets_missing_directory(tmp_path: Path):
    assert encode_assets(tmp_path / "assets") == {}


def test_encode_assets_enforces_size_limit(deck_project: Path):
    with pytest.raises(SlideTooLargeError):
        encode_assets(deck_project / "assets", max_size=2)


@pytest.mark.parametrize(
    "css",
    [
        "a { background: url(assets/bg.png); }",
        "a { background: url('assets/bg.png'); }",
        'a { background: url( "assets/bg.png" ); }',
    ],
)
def test_inline_css_urls_rewrites_known_assets(css: str):
    assert inline_css_urls(css, ASSETS) == "a { background: url('data:image/png;base64,AA=='); }"


def test_inline_css_urls_leaves_unknown_urls():
    css = "a { background: url('https://example.com/x.png'); }"

    assert inline_css_urls(css, ASSETS) == css


def test_build_embed_script_escapes_closing_tags():
    script = build_embed_script(EmbeddedData(slides={"a.md": "</script>"}))

    assert script.startswith("window.EMBED_DATA = {")
    assert script.endswith("};")
    assert "</script>" not in script
    payload = json.loads(script[len("window.EMBED_DATA = ") : -1])
    assert payload["slides"] == {"a.md": "</script>"}


def test_bundle_html_inlines_everything():
    template = (
        '<link rel="stylesheet" href="theme.css">'
        "<script>window.EMBED_DATA = window.EMBED_DATA || {};</script>"
        '<script src="app.js"></script>'
    )

    html = bundle_html(template, "p{}", "run();", "window.EMBED_DATA = {};")

    assert html == (
        "<style>p{}</style><script>window.EMBED_DATA = {};</script><script>run();</script>"
    )


def test_bundle_html_uses_configured_names():
    template = '<link rel="stylesheet" href="deck.css"><script src="deck.js"></script>'
    config = DeckConfig(stylesheet="deck.css", script="deck.js")

    html = bundle_html(template, "p{}", "run();", "", config)

    assert html == "<style>p{}</style><script>run();</script>"


def test_bundle_html_template_without_placeholders_is_unchanged():
    assert bundle_html("<html></html>", "p{}", "run();", "x") == "<html></html>"


def test_build_site_writes_self_contained_page(deck_project: Path):
    output = build_site(deck_project)

    assert output == deck_project / "docs" / "index.html"
    html = output.read_text(encoding="utf-8")
    png_uri = _png_uri(deck_project / "assets" / "diagram.png")
    assert f"<style>body {{ background: url('{png_uri}'); }}\n</style>" in html
    assert "<script>console.log('deck');\n</script>" in html
    assert "window.EMBED_DATA || {}" not in html
    assert 'href="theme.css"' not in html

    data = extract_embedded_data(html)
    assert data.deck.title == "Self-modifying binaries"
    assert sorted(data.slides) == [
        "slides/01-intro.md",
        "slides/02-patching.md",
        "slides/03-notes.md",
    ]
    assert data.slides["slides/03-notes.md"] == "Just a paragraph.\n"
    assert data.assets == {"assets/diagram.png": png_uri}


def test_build_site_respects_output_config(deck_project: Path):
    output = build_site(deck_project, DeckConfig(output_dir="dist/site", output_file="deck.html"))

    assert output == deck_project / "dist" / "site" / "deck.html"
    assert output.is_file()
    assert list(output.parent.iterdir()) == [output]


def test_build_site_requires_manifest(deck_project: Path):
    (deck_project / "deck.json").unlink()

    with pytest.raises(BuildError, match="deck.json"):
        build_site(deck_project)


def test_build_site_rejects_malformed_manifest(deck_project: Path):
    (deck_project / "deck.json").write_text('{"slides": [1]}', encoding="utf-8")

    with pytest.raises(BuildError, match="Invalid deck manifest"):
        build_site(deck_project)


def test_build_site_requires_every_slide(deck_project: Path):
    (deck_project / "slides" / "01-intro.md").unlink()

    with pytest.raises(BuildError, match="01-intro.md"):
        build_site(deck_project)


def test_build_site_requires_template(deck_project: Path):
    (deck_project / "index.html").unlink()

    with pytest.raises(BuildError):
        build_site(deck_project)
