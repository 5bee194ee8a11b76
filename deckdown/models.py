"""Data models for deckdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ManifestError


class ListType(Enum):
    """List kinds the block parser can buffer.

    The value of each member is the HTML tag used when the list is flushed.

    Attributes:
        NONE: No list is open.
        ORDERED: Numbered list (``1. item``).
        UNORDERED: Bulleted list (``- item``, ``* item``, ``+ item``).
    """

    NONE = ""
    ORDERED = "ol"
    UNORDERED = "ul"


@dataclass
class ParserState:
    """Mutable state carried while walking a document line by line.

    Attributes:
        in_code: Whether a fenced code block is open.
        code_buffer: Raw lines collected inside the open code block.
        list_buffer: Rendered items of the open list.
        list_type: Kind of the open list.
        title: First heading text seen, or None.
        html: Rendered HTML fragments in output order.
    """

    in_code: bool = False
    code_buffer: list[str] = field(default_factory=list)
    list_buffer: list[str] = field(default_factory=list)
    list_type: ListType = ListType.NONE
    title: str | None = None
    html: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParseResult:
    """Structured result of converting a slide's markdown.

    Attributes:
        title: Text of the first heading in the document, or None.
        html: Rendered HTML fragment.
    """

    title: str | None
    html: str


@dataclass(frozen=True)
class Slide:
    """One entry of the deck manifest."""

    title: str
    file: str


@dataclass(frozen=True)
class Deck:
    """Ordered collection of slides plus the deck title.

    Attributes:
        title: Deck-level title, or None when the manifest has none.
        slides: Slides in presentation order.
    """

    title: str | None = None
    slides: tuple[Slide, ...] = ()

    @classmethod
    def from_dict(cls, data: object) -> Deck:
        """Build a deck from a decoded ``deck.json`` manifest.

        Args:
            data: Decoded JSON value.

        Returns:
            Deck: Validated deck.

        Raises:
            ManifestError: If the manifest is not an object, the title is not a
                string, or any slide lacks a string ``title`` and ``file``.

        Examples:
            Deck.from_dict({"title": "Talk", "slides": [{"title": "Intro", "file": "01.md"}]})
        """
        if not isinstance(data, dict):
            raise ManifestError("Deck manifest must be a JSON object")

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise ManifestError("Deck `title` must be a string")

        raw_slides = data.get("slides") or []
        if not isinstance(raw_slides, list):
            raise ManifestError("Deck `slides` must be a list")

        slides = []
        for position, entry in enumerate(raw_slides, start=1):
            if not isinstance(entry, dict):
                raise ManifestError(f"Slide {position} must be an object")
            slide_title = entry.get("title", "")
            slide_file = entry.get("file")
            if not isinstance(slide_title, str) or not isinstance(slide_file, str):
                raise ManifestError(f"Slide {position} needs a string `title` and `file`")
            slides.append(Slide(title=slide_title, file=slide_file))

        return cls(title=title, slides=tuple(slides))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.title is not None:
            data["title"] = self.title
        data["slides"] = [{"title": slide.title, "file": slide.file} for slide in self.slides]
        return data


@dataclass(frozen=True)
class EmbeddedData:
    """Pre-packaged deck, slide text, and assets used when files are unavailable.

    Attributes:
        deck: Embedded deck manifest, or None.
        slides: Markdown text keyed by the slide's manifest ``file`` path.
        assets: ``data:`` URIs keyed by asset path (``assets/<name>``).
    """

    deck: Deck | None = None
    slides: dict[str, str] = field(default_factory=dict)
    assets: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: object) -> EmbeddedData:
        """Build embedded data from the decoded ``window.EMBED_DATA`` object.

        Missing sections become empty. An empty object is valid and yields no
        fallback content.

        Raises:
            ManifestError: If the object or one of its sections is malformed.
        """
        if not isinstance(data, dict):
            raise ManifestError("Embedded data must be a JSON object")

        raw_deck = data.get("deck")
        deck = Deck.from_dict(raw_deck) if raw_deck is not None else None

        slides = data.get("slides") or {}
        assets = data.get("assets") or {}
        if not isinstance(slides, dict) or not isinstance(assets, dict):
            raise ManifestError("Embedded `slides` and `assets` must be objects")
        for section in (slides, assets):
            for key, value in section.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ManifestError(
                        "Embedded `slides` and `assets` must map strings to strings"
                    )

        return cls(deck=deck, slides=dict(slides), assets=dict(assets))

    def to_dict(self) -> dict[str, object]:
        return {
            "deck": self.deck.to_dict() if self.deck is not None else None,
            "slides": dict(self.slides),
            "assets": dict(self.assets),
        }


@dataclass(frozen=True)
class RenderedSlide:
    """A slide ready to display.

    Attributes:
        index: Zero-based slide position.
        title: Title shown above the slide.
        html: Slide body with embedded image sources substituted.
        anchor: URL fragment identifying the slide (``#slide3``).
    """

    index: int
    title: str
    html: str
    anchor: str
