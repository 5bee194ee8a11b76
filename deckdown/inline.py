"""Inline markdown formatting for a single line."""

from __future__ import annotations

from .constants import (
    ASTERISK_ENTITY,
    BOLD_PATTERN,
    CODE_PLACEHOLDER,
    CODE_PLACEHOLDER_PATTERN,
    CODE_SPAN_PATTERN,
    ESCAPED_ASTERISK,
    ESCAPED_UNDERSCORE,
    ITALIC_PATTERN,
    UNDERSCORE_ENTITY,
)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for display inside HTML.

    ``&`` is replaced first so the entities produced for ``<`` and ``>`` are
    not escaped a second time.

    Examples:
        escape_html("<b>&</b>")  # "&lt;b&gt;&amp;&lt;/b&gt;"
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def extract_code_spans(text: str) -> tuple[str, list[str]]:
    """Replace inline code spans with positional placeholders.

    Args:
        text: Line to scan.

    Returns:
        tuple[str, list[str]]: Text with each span replaced by
            ``__CODE_PLACEHOLDER_<n>__`` and the raw span contents in
            extraction order.

    Examples:
        extract_code_spans("run `make` now")  # ("run __CODE_PLACEHOLDER_0__ now", ["make"])
    """
    code_spans: list[str] = []

    def _stash(match):
        placeholder = CODE_PLACEHOLDER.format(index=len(code_spans))
        code_spans.append(match.group(1))
        return placeholder

    return CODE_SPAN_PATTERN.sub(_stash, text), code_spans


def restore_code_spans(text: str, code_spans: list[str]) -> str:
    """Swap placeholders back for escaped ``<code>`` elements.

    A placeholder without a stored span restores as an empty element.
    """

    def _restore(match):
        index = int(match.group(1))
        code_text = code_spans[index] if index < len(code_spans) else ""
        return f"<code>{escape_html(code_text)}</code>"

    return CODE_PLACEHOLDER_PATTERN.sub(_restore, text)


def format_inline(text: str) -> str:
    r"""Convert inline markdown in one line to an HTML fragment.

    Backslash-escaped ``\_`` and ``\*`` become character entities, code spans
    are set aside, ``**bold**`` and ``*italic*`` are applied, and the code spans
    are restored with their contents escaped. Markers inside code spans are
    never interpreted. Underscore emphasis is not recognized so identifiers
    such as ``__init__`` stay intact. Unmatched markers remain literal.

    Args:
        text: A single line of markdown.

    Returns:
        str: HTML fragment without a surrounding block element.

    Examples:
        format_inline("**a** and *b*")  # "<strong>a</strong> and <em>b</em>"
        format_inline("`*not italic*`")  # "<code>*not italic*</code>"
    """
    text = text.replace(ESCAPED_UNDERSCORE, UNDERSCORE_ENTITY)
    text = text.replace(ESCAPED_ASTERISK, ASTERISK_ENTITY)

    text, code_spans = extract_code_spans(text)

    text = BOLD_PATTERN.sub(r"<strong>\1</strong>", text)
    text = ITALIC_PATTERN.sub(r"<em>\1</em>", text)

    return restore_code_spans(text, code_spans)
