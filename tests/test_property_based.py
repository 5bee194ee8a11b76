from __future__ import annotations

import html
import string

from hypothesis import given
from hypothesis import strategies as st
from deckdown.inline import escape_html, format_inline
from deckdown.parser import parse_markdown

code_text = st.text(
    alphabet=st.characters(exclude_categories=("Cs",), exclude_characters="`\r\n"),
    max_size=60,
)
title_strategy = st.text(alphabet=string.ascii_letters + string.digits + " ", min_size=1).filter(
    str.strip
)


@given(st.text(max_size=300))
def test_parse_markdown_is_deterministic(content: str):
    assert parse_markdown(content) == parse_markdown(content)


@given(st.text(alphabet=string.ascii_letters + string.digits + " .,;:!?-", max_size=80))
def test_format_inline_leaves_plain_text_alone(text: str):
    assert format_inline(text) == text


@given(code_text)
def test_fenced_code_is_escaped_exactly_once(line: str):
    result = parse_markdown(f"```\n{line}\n```")

    assert result.html.startswith("<pre><code>")
    inner = result.html[len("<pre><code>") : -len("</code></pre>")]
    assert "<" not in inner and ">" not in inner
    assert html.unescape(inner) == line


@given(code_text.filter(lambda text: text and "\\" not in text))
def test_code_span_content_is_escaped_exactly_once(text: str):
    assert format_inline(f"`{text}`") == f"<code>{escape_html(text)}</code>"


@given(st.lists(st.tuples(st.integers(min_value=1, max_value=6), title_strategy), min_size=1))
def test_title_comes_from_first_heading(headings):
    document = "\n".join(f"{'#' * level} {title}" for level, title in headings)

    assert parse_markdown(document).title == headings[0][1].strip()


@given(
    st.lists(title_strategy, min_size=1, max_size=10),
    st.lists(title_strategy, min_size=1, max_size=10),
)
def test_separated_lists_keep_their_items(bullets, numbered):
    bullet_lines = [f"- {item}" for item in bullets]
    numbered_lines = [f"{n}. {item}" for n, item in enumerate(numbered, start=1)]
    document = "\n".join(bullet_lines + [""] + numbered_lines)

    result = parse_markdown(document)

    assert result.html.count("<ul>") == 1
    assert result.html.count("<ol>") == 1
    assert result.html.count("<li>") == len(bullets) + len(numbered)
    assert result.html.index("</ul>") < result.html.index("<ol>")
