"""Slide navigation over a loaded deck."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import DeckConfig
from .constants import SLIDE_ANCHOR_PREFIX, SLIDE_NUMBER_PATTERN
from .loader import load_deck, load_slide_text
from .logging import get_logger
from .models import Deck, EmbeddedData, RenderedSlide
from .renderer import render_slide

logger = get_logger("navigation")


def start_index_from_hash(fragment: str, slide_count: int) -> int:
    """Choose the starting slide from a ``#slideN`` URL fragment.

    Args:
        fragment: URL fragment, including the leading ``#``.
        slide_count: Number of slides in the deck.

    Returns:
        int: ``N - 1`` when ``1 <= N <= slide_count``, otherwise 0.

    Examples:
        start_index_from_hash("#slide3", 5)  # 2
        start_index_from_hash("#slide9", 5)  # 0
    """
    if not fragment.startswith(SLIDE_ANCHOR_PREFIX):
        return 0

    match = SLIDE_NUMBER_PATTERN.match(fragment, len(SLIDE_ANCHOR_PREFIX))
    if not match:
        return 0

    number = int(match.group(1))

    if 0 < number <= slide_count:
        return number - 1
    return 0


@dataclass
class DeckSession:
    """Application state for presenting one deck.

    Attributes:
        deck: Loaded deck manifest.
        base_dir: Directory slide paths are resolved against.
        embedded: Embedded fallback data, if any.
        config: Active configuration.
        current_index: Index of the slide shown last, or None before the first load.
    """

    deck: Deck
    base_dir: Path
    embedded: EmbeddedData | None = None
    config: DeckConfig = field(default_factory=DeckConfig)
    current_index: int | None = None

    @classmethod
    def open(
        cls,
        base_dir: Path,
        config: DeckConfig | None = None,
        embedded: EmbeddedData | None = None,
    ) -> DeckSession:
        """Load the deck manifest under `base_dir` and start a session."""
        config = config or DeckConfig()
        deck = load_deck(base_dir / config.deck_file, embedded, config.max_file_size)
        logger.debug("Loaded deck %r with %d slides", deck.title, len(deck.slides))
        return cls(deck=deck, base_dir=base_dir, embedded=embedded, config=config)

    @property
    def slide_count(self) -> int:
        return len(self.deck.slides)

    def option_labels(self) -> list[str]:
        """Return the numbered labels shown in the slide picker."""
        return [f"{index + 1}. {slide.title}" for index, slide in enumerate(self.deck.slides)]

    def load_slide(self, index: int) -> RenderedSlide | None:
        """Read and render the slide at `index` and make it current.

        Returns:
            RenderedSlide | None: The rendered slide, or None when `index` is
                out of range (the current slide is unchanged).
        """
        if not 0 <= index < self.slide_count:
            return None

        slide = self.deck.slides[index]
        text = load_slide_text(
            slide,
            self.base_dir,
            self.embedded,
            fallback_text=self.config.fallback_text,
            max_size=self.config.max_file_size,
        )
        rendered = render_slide(slide, index, text, self.embedded)
        self.current_index = index
        return rendered

    def load_from_hash(self, fragment: str) -> RenderedSlide | None:
        return self.load_slide(start_index_from_hash(fragment, self.slide_count))

    def next_slide(self) -> RenderedSlide | None:
        """Advance one slide, wrapping to the first after the last."""
        if not self.slide_count:
            return None
        current = self.current_index if self.current_index is not None else 0
        return self.load_slide((current + 1) % self.slide_count)

    def previous_slide(self) -> RenderedSlide | None:
        """Go back one slide, wrapping to the last before the first."""
        if not self.slide_count:
            return None
        current = self.current_index if self.current_index is not None else 0
        return self.load_slide((current - 1 + self.slide_count) % self.slide_count)
