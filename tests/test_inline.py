from deckdown.inline import escape_html, extract_code_spans, format_inline, restore_code_spans


def test_bold_and_italic():
    assert format_inline("**a** and *b*") == "<strong>a</strong> and <em>b</em>"


def test_code_span_content_is_not_formatted():
    assert format_inline("`*not italic*`") == "<code>*not italic*</code>"


def test_escaped_asterisks_become_entities():
    assert format_inline("\\*literal\\*") == "&#42;literal&#42;"


def test_escaped_underscore_becomes_entity():
    assert format_inline(r"snake\_case") == "snake&#95;case"


def test_underscores_are_never_emphasis():
    assert format_inline("__init__ and _private_") == "__init__ and _private_"


def test_code_span_content_is_escaped():
    assert format_inline("`a < b && c > d`") == "<code>a &lt; b &amp;&amp; c &gt; d</code>"


def test_text_outside_code_is_not_escaped():
    assert format_inline("<b>x</b> **y**") == "<b>x</b> <strong>y</strong>"


def test_multiple_code_spans_keep_order():
    assert format_inline("`a` and `b`") == "<code>a</code> and <code>b</code>"


def test_italic_inside_bold():
    assert format_inline("**bold *nested* text**") == "<strong>bold <em>nested</em> text</strong>"


def test_unmatched_markers_stay_literal():
    assert format_inline("*unmatched") == "*unmatched"
    assert format_inline("`unmatched") == "`unmatched"
    assert format_inline("``") == "``"


def test_bold_spans_are_non_greedy():
    assert format_inline("**a** x **b**") == "<strong>a</strong> x <strong>b</strong>"


def test_escape_html_order():
    assert escape_html("<a href='x'>&amp;</a>") == "&lt;a href='x'&gt;&amp;amp;&lt;/a&gt;"


def test_extract_code_spans_uses_positional_placeholders():
    text, spans = extract_code_spans("run `make` then `make install`")

    assert text == "run __CODE_PLACEHOLDER_0__ then __CODE_PLACEHOLDER_1__"
    assert spans == ["make", "make install"]


def test_restore_unknown_placeholder_is_empty_code():
    assert restore_code_spans("__CODE_PLACEHOLDER_3__", ["x"]) == "<code></code>"
