"""Markdown to HTML conversion for slide content."""

from __future__ import annotations

from .constants import (
    CODE_FENCE,
    HEADING_PATTERN,
    ORDERED_ITEM_PATTERN,
    RAW_HTML_PATTERN,
    UNORDERED_ITEM_PATTERN,
)
from .inline import escape_html, format_inline
from .models import ListType, ParseResult, ParserState


def flush_list(state: ParserState) -> None:
    """Render buffered list items and reset the list buffer.

    Uses ``<ol>`` for ordered lists and ``<ul>`` otherwise, including when the
    list type is unset. Does nothing when the buffer is empty.

    Args:
        state: Parser state to update.

    Examples:
        state = ParserState(list_buffer=["one"], list_type=ListType.ORDERED)
        flush_list(state)  # state.html == ["<ol><li>one</li></ol>"]
    """
    if not state.list_buffer:
        return

    tag = "ol" if state.list_type is ListType.ORDERED else "ul"
    items = "".join(f"<li>{item}</li>" for item in state.list_buffer)
    state.html.append(f"<{tag}>{items}</{tag}>")
    state.list_buffer = []
    state.list_type = ListType.NONE


def _try_code_line(state: ParserState, line: str) -> bool:
    """Collect a line inside an open fenced code block.

    A line that is exactly a fence marker once trimmed closes the block and
    emits its escaped contents.

    Args:
        state: Parser state to update.
        line: Current line.

    Returns:
        bool: True when a code block is open, so the line is consumed.

    Examples:
        state = ParserState(in_code=True)
        _try_code_line(state, "print(1)")  # True, buffered
    """
    if not state.in_code:
        return False

    if line.strip() == CODE_FENCE:
        code = escape_html("\n".join(state.code_buffer))
        state.html.append(f"<pre><code>{code}</code></pre>")
        state.in_code = False
        state.code_buffer = []
    else:
        state.code_buffer.append(line)
    return True


def _try_open_fence(state: ParserState, line: str) -> bool:
    """Open a fenced code block when the trimmed line starts with a fence.

    Anything after the fence (a language tag) is ignored.
    """
    if not line.strip().startswith(CODE_FENCE):
        return False

    flush_list(state)
    state.in_code = True
    state.code_buffer = []
    return True


def _try_raw_html(state: ParserState, line: str) -> bool:
    """Pass figure, image, and SVG markup through unchanged."""
    if not RAW_HTML_PATTERN.match(line.strip()):
        return False

    flush_list(state)
    state.html.append(line + "\n")
    return True


def _try_heading(state: ParserState, line: str) -> bool:
    """Emit a heading and record the deck title from the first one.

    Heading text is emitted as written: inline markers are not formatted.

    Args:
        state: Parser state to update.
        line: Current line.

    Returns:
        bool: True when the line is a heading.

    Examples:
        state = ParserState()
        _try_heading(state, "## Setup")  # state.html == ["<h2>Setup</h2>"]
    """
    match = HEADING_PATTERN.match(line)
    if not match:
        return False

    flush_list(state)
    level = len(match.group(1))
    text = match.group(2).strip()
    if state.title is None:
        state.title = text
    state.html.append(f"<h{level}>{text}</h{level}>")
    return True


def _append_list_item(state: ParserState, list_type: ListType, item: str) -> None:
    if state.list_type is not ListType.NONE and state.list_type is not list_type:
        flush_list(state)
    state.list_type = list_type
    state.list_buffer.append(format_inline(item))


def _try_unordered_item(state: ParserState, line: str) -> bool:
    match = UNORDERED_ITEM_PATTERN.match(line)
    if not match:
        return False

    _append_list_item(state, ListType.UNORDERED, match.group(2))
    return True


def _try_ordered_item(state: ParserState, line: str) -> bool:
    match = ORDERED_ITEM_PATTERN.match(line)
    if not match:
        return False

    _append_list_item(state, ListType.ORDERED, match.group(2))
    return True


def _try_blank(state: ParserState, line: str) -> bool:
    """Close any open list on a blank line."""
    if line.strip():
        return False

    flush_list(state)
    return True


def _paragraph(state: ParserState, line: str) -> bool:
    flush_list(state)
    state.html.append(f"<p>{format_inline(line)}</p>")
    return True


# Evaluated top-down; the first handler returning True consumes the line.
LINE_HANDLERS = (
    _try_code_line,
    _try_open_fence,
    _try_raw_html,
    _try_heading,
    _try_unordered_item,
    _try_ordered_item,
    _try_blank,
    _paragraph,
)


def parse_markdown(content: str) -> ParseResult:
    """Convert slide markdown to HTML and extract its title.

    Supports ATX headings, ordered and unordered lists, fenced code blocks,
    raw figure/image/SVG passthrough, and inline bold, italic, and code.
    Never raises: lists left open at the end are flushed, and an unterminated
    code block is dropped.

    Args:
        content: Markdown text. Carriage returns are removed before parsing.

    Returns:
        ParseResult: Title of the first heading (None when there is no heading)
            and the rendered HTML.

    Examples:
        parse_markdown("# Title\\n\\nSome *text*.\\n")
        # ParseResult(title="Title", html="<h1>Title</h1><p>Some <em>text</em>.</p>")
    """
    state = ParserState()

    for line in content.replace("\r", "").split("\n"):
        for handler in LINE_HANDLERS:
            if handler(state, line):
                break

    flush_list(state)
    return ParseResult(title=state.title, html="".join(state.html))
