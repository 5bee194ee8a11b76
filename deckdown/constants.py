"""Constants used across the deckdown package."""

from __future__ import annotations

import re

from .config import DeckConfig

DEFAULT_CONFIG = DeckConfig()

# Block patterns
CODE_FENCE = "```"
RAW_HTML_PATTERN = re.compile(r"^<(figure|img|svg|/figure|figcaption)", re.IGNORECASE)
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)")
UNORDERED_ITEM_PATTERN = re.compile(r"^\s*([-*+])\s+(.*)")
ORDERED_ITEM_PATTERN = re.compile(r"^\s*(\d+)\.\s+(.*)")

# Inline patterns
ESCAPED_UNDERSCORE = "\\_"
ESCAPED_ASTERISK = "\\*"
UNDERSCORE_ENTITY = "&#95;"
ASTERISK_ENTITY = "&#42;"
CODE_SPAN_PATTERN = re.compile(r"`([^`]+)`")
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.*?)\*")
CODE_PLACEHOLDER = "__CODE_PLACEHOLDER_{index}__"
CODE_PLACEHOLDER_PATTERN = re.compile(r"__CODE_PLACEHOLDER_(\d+)__")

# Rendering and navigation
IMG_SRC_PATTERN = re.compile(r"""<img\s+[^>]*src=["'](.+?)["']""")
SLIDE_ANCHOR_PREFIX = "#slide"
SLIDE_NUMBER_PATTERN = re.compile(r"\s*(\d+)")
FALLBACK_SLIDE_TEXT = DEFAULT_CONFIG.fallback_text

# Build
EMBED_PLACEHOLDER = "window.EMBED_DATA = window.EMBED_DATA || {};"
EMBED_ASSIGNMENT = "window.EMBED_DATA = "
ASSET_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".gif": "image/gif",
}
CSS_URL_PATTERN = re.compile(r"url\(([^)]+)\)")
MARKDOWN_EXTENSIONS = (".md", ".markdown")
