"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib


@dataclass
class DeckConfig:
    """Configuration for loading, rendering, and bundling a slide deck.

    Paths are relative to the deck project root.

    Attributes:
        deck_file: Deck manifest listing the slides.
        template: HTML page the bundle is built from.
        stylesheet: Stylesheet linked from the template.
        script: Script linked from the template.
        assets_dir: Directory holding images to embed.
        output_dir: Directory the bundle is written to.
        output_file: File name of the bundle.
        fallback_text: Markdown shown when a slide cannot be read.
        max_file_size: Maximum size in bytes of any file read.

    Examples:
        DeckConfig(output_dir="dist", max_file_size=1_048_576)
    """

    # Project layout
    deck_file: str = "deck.json"
    template: str = "index.html"
    stylesheet: str = "theme.css"
    script: str = "app.js"
    assets_dir: str = "assets"

    # Output
    output_dir: str = "docs"
    output_file: str = "index.html"

    # Loading
    fallback_text: str = "Unable to load slide."
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


# Files checked in each directory, with the tables that may hold deck settings.
CONFIG_SOURCES = (
    ("pyproject.toml", (("tool", "deckdown"),)),
    (".deckdown.toml", (("deckdown",), ("tool", "deckdown"))),
)

_FIELD_NAMES = frozenset(f.name for f in fields(DeckConfig))
_STRING_FIELDS = tuple(sorted(_FIELD_NAMES - {"max_file_size"}))


def load_config(search_path: Path) -> DeckConfig:
    """Find the deck settings that apply to `search_path`.

    A deck project usually keeps its settings next to ``deck.json``, but a
    repository holding several talks can share one ``[tool.deckdown]`` table
    at its root, so the search climbs from `search_path` towards the
    filesystem root. In each directory ``pyproject.toml`` wins over
    ``.deckdown.toml``. Unreadable or malformed TOML is ignored.

    Args:
        search_path: Deck project directory.

    Returns:
        DeckConfig: Settings from the first table found, or defaults.

    Raises:
        ConfigError: If the table found is not a mapping or names settings
            deckdown does not know.

    Examples:
        load_config(Path("talks/2024"))
    """
    directory = search_path.resolve()
    for candidate in (directory, *directory.parents):
        for file_name, table_paths in CONFIG_SOURCES:
            found = _find_deck_table(candidate / file_name, table_paths)
            if found is not None:
                return _config_from_table(*found)
    return DeckConfig()


def _find_deck_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[object, str, Path] | None:
    if not config_file.is_file():
        return None

    try:
        with open(config_file, "rb") as stream:
            document = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = document
        for key in table_path:
            if not isinstance(table, dict) or key not in table:
                break
            table = table[key]
        else:
            return table, ".".join(table_path), config_file

    return None


def _config_from_table(table: object, table_name: str, config_file: Path) -> DeckConfig:
    if not isinstance(table, dict):
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}")

    unknown = sorted(set(table) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(
            f"Invalid `[{table_name}]` settings in {config_file}: "
            f"unknown key(s) {', '.join(unknown)}"
        )
    return DeckConfig(**table)


def validate_config(config: DeckConfig) -> None:
    """Validate a `DeckConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a path or text field is empty or not a string, or the
            size limit is not a positive integer.

    Examples:
        validate_config(DeckConfig(output_dir="dist"))
    """
    for name in _STRING_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, str):
            raise ConfigError(f"`{name}` must be a string")
        if not value:
            raise ConfigError(f"`{name}` must not be empty")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: DeckConfig, **overrides: object) -> DeckConfig:
    """Apply override values to a `DeckConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        DeckConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `DeckConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> DeckConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        DeckConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_dir="dist")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
