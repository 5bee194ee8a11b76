"""Turn slide markdown into display-ready HTML."""

from __future__ import annotations

from .constants import IMG_SRC_PATTERN, SLIDE_ANCHOR_PREFIX
from .models import EmbeddedData, RenderedSlide, Slide
from .parser import parse_markdown


def slide_anchor(index: int) -> str:
    """Return the URL fragment for a zero-based slide index.

    Examples:
        slide_anchor(0)  # "#slide1"
    """
    return f"{SLIDE_ANCHOR_PREFIX}{index + 1}"


def embed_image_sources(html: str, assets: dict[str, str]) -> str:
    """Point ``<img>`` sources at embedded data URIs.

    Sources with no embedded asset are left untouched.

    Args:
        html: Rendered slide HTML.
        assets: Data URIs keyed by asset path.

    Returns:
        str: HTML with known image sources replaced.

    Examples:
        embed_image_sources('<img src="assets/a.png">', {"assets/a.png": "data:..."})
        # '<img src="data:...">'
    """
    if not assets:
        return html

    def _substitute(match):
        tag, src = match.group(0), match.group(1)
        if src in assets:
            return tag.replace(src, assets[src], 1)
        return tag

    return IMG_SRC_PATTERN.sub(_substitute, html)


def render_slide(
    slide: Slide, index: int, text: str, embedded: EmbeddedData | None = None
) -> RenderedSlide:
    """Convert a slide's markdown into a `RenderedSlide`.

    The displayed title is the first heading of the slide, then the manifest
    title, then ``Slide <n>``.

    Args:
        slide: Manifest entry for the slide.
        index: Zero-based slide position.
        text: Markdown text of the slide.
        embedded: Embedded data whose assets replace image sources.

    Returns:
        RenderedSlide: Title, HTML, and anchor for the slide.
    """
    result = parse_markdown(text or "")
    title = result.title or slide.title or f"Slide {index + 1}"
    html = result.html
    if embedded is not None:
        html = embed_image_sources(html, embedded.assets)
    return RenderedSlide(index=index, title=title, html=html, anchor=slide_anchor(index))
