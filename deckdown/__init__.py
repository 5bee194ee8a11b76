"""
deckdown: Markdown slide decks rendered to HTML.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    deckdown render slides/01-intro.md
    deckdown build talk/

Library Usage:
    from deckdown import parse_markdown

    result = parse_markdown("# Title\\n\\nSome *text*.\\n")
    result.title  # "Title"
    result.html  # "<h1>Title</h1><p>Some <em>text</em>.</p>"
"""

from .builder import build_site
from .config import ConfigError, DeckConfig
from .exceptions import BuildError, DeckError, ManifestError, SlideTooLargeError
from .inline import escape_html, format_inline
from .loader import load_deck, load_slide_text
from .models import Deck, EmbeddedData, ParseResult, RenderedSlide, Slide
from .navigation import DeckSession, start_index_from_hash
from .parser import parse_markdown
from .renderer import render_slide, slide_anchor

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_markdown",
    "format_inline",
    "escape_html",
    # Deck handling
    "load_deck",
    "load_slide_text",
    "render_slide",
    "slide_anchor",
    "start_index_from_hash",
    "DeckSession",
    "build_site",
    # Data models
    "Deck",
    "EmbeddedData",
    "ParseResult",
    "RenderedSlide",
    "Slide",
    # Configuration
    "DeckConfig",
    # Exceptions
    "BuildError",
    "ConfigError",
    "DeckError",
    "ManifestError",
    "SlideTooLargeError",
    # Version
    "__version__",
]
