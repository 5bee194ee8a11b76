"""Deck manifest and slide loading with embedded fallbacks."""

from __future__ import annotations

import json
from pathlib import Path

from .constants import EMBED_ASSIGNMENT, FALLBACK_SLIDE_TEXT
from .exceptions import ManifestError
from .filesystem import read_text
from .logging import get_logger
from .models import Deck, EmbeddedData, Slide

logger = get_logger("loader")


def load_deck(
    deck_path: Path, embedded: EmbeddedData | None = None, max_size: int | None = None
) -> Deck:
    """Load the deck manifest, falling back to the embedded copy.

    Args:
        deck_path: Path to ``deck.json``.
        embedded: Embedded data consulted when the manifest cannot be used.
        max_size: Optional size limit in bytes for the manifest.

    Returns:
        Deck: The manifest's deck, the embedded deck, or an empty deck when
            neither is available.

    Examples:
        deck = load_deck(Path("deck.json"))
    """
    try:
        return Deck.from_dict(json.loads(read_text(deck_path, max_size)))
    except (IOError, ValueError) as error:
        if embedded is not None and embedded.deck is not None:
            logger.warning("Using embedded deck; %s could not be loaded: %s", deck_path, error)
            return embedded.deck
        logger.error("Failed to load %s and no fallback available: %s", deck_path, error)
        return Deck()


def load_slide_text(
    slide: Slide,
    base_dir: Path,
    embedded: EmbeddedData | None = None,
    fallback_text: str = FALLBACK_SLIDE_TEXT,
    max_size: int | None = None,
) -> str:
    """Read a slide's markdown, falling back to embedded text.

    Args:
        slide: Manifest entry whose ``file`` is resolved against `base_dir`.
        base_dir: Deck project root.
        embedded: Embedded data consulted when the file cannot be read.
        fallback_text: Markdown returned when no source is available.
        max_size: Size limit in bytes for the slide file. When None it comes from
            `DECKDOWN_MAX_FILE_SIZE`, and an invalid value there counts as an
            unreadable file.

    Returns:
        str: Markdown text for the slide.
    """
    slide_path = base_dir / slide.file
    try:
        return read_text(slide_path, max_size)
    except (IOError, ValueError) as error:
        if embedded is not None and embedded.slides.get(slide.file):
            logger.info("Using embedded text for %s: %s", slide.file, error)
            return embedded.slides[slide.file]
        logger.warning("Unable to load slide %s: %s", slide.file, error)
        return fallback_text


def extract_embedded_data(html: str) -> EmbeddedData | None:
    """Recover the embedded data object from a bundled HTML page.

    Args:
        html: Contents of a page produced by the build step.

    Returns:
        EmbeddedData | None: Decoded data, or None when the page carries no
            ``window.EMBED_DATA = {...};`` assignment or only the empty
            placeholder.

    Raises:
        ManifestError: If the assignment is present but its object is malformed.
    """
    decoder = json.JSONDecoder()
    search_from = 0
    while True:
        position = html.find(EMBED_ASSIGNMENT, search_from)
        if position < 0:
            return None
        start = position + len(EMBED_ASSIGNMENT)
        search_from = start
        if not html.startswith("{", start):
            continue
        try:
            data, _ = decoder.raw_decode(html, start)
        except json.JSONDecodeError as error:
            raise ManifestError(f"Embedded data is not valid JSON: {error}") from error
        return EmbeddedData.from_dict(data)


def load_embedded_data(bundle_path: Path, max_size: int | None = None) -> EmbeddedData | None:
    """Read a bundled page and return its embedded data.

    Raises:
        IOError: If the page cannot be read.
        ManifestError: If the embedded object is malformed.
    """
    return extract_embedded_data(read_text(bundle_path, max_size))
