from markdown_utils import (
    BULLET,
    ORDINAL,
    Emphasis,
    FormattedLine,
    ListMarker,
    PlainText,
    format_markdown,
    fragments_to_html,
    fragments_to_markdown,
    fragments_to_text,
    strip_emphasis,
)


def _segments(text: str):
    lines = format_markdown(text)
    assert len(lines) == 1
    return lines[0].segments


def test_multiple_emphasis_runs_in_one_line():
    assert _segments("**Radar** tech is *hot* now") == [
        Emphasis("Radar"),
        PlainText(" tech is "),
        Emphasis("hot"),
        PlainText(" now"),
    ]


def test_bullet_marker():
    assert _segments("- Item one") == [ListMarker(BULLET), PlainText("Item one")]


def test_all_bullet_characters_and_indent():
    for line in ("* star", "+ star", "   - star"):
        segments = _segments(line)
        assert segments == [ListMarker(BULLET), PlainText("star")]


def test_ordinal_marker_keeps_number():
    assert _segments("2. Second point") == [ListMarker(ORDINAL, 2), PlainText("Second point")]
    assert _segments("  12. Twelfth") == [ListMarker(ORDINAL, 12), PlainText("Twelfth")]


def test_empty_text_yields_one_blank_line():
    lines = format_markdown("")
    assert lines == [FormattedLine()]
    assert lines[0].is_blank


def test_blank_lines_are_preserved():
    lines = format_markdown("first\n\n   \nlast")
    assert len(lines) == 4
    assert [line.is_blank for line in lines] == [False, True, True, False]


def test_unbalanced_delimiters_fall_through_to_plain_text():
    assert _segments("**oops") == [PlainText("**oops")]
    assert _segments("2 * 3 is six") == [PlainText("2 * 3 is six")]


def test_emphasis_is_found_before_list_markers():
    assert _segments("1. **Bold** text") == [
        PlainText("1. "),
        Emphasis("Bold"),
        PlainText(" text"),
    ]


def test_no_list_marker_after_emphasis():
    assert _segments("**Note** - see appendix") == [
        Emphasis("Note"),
        PlainText(" - see appendix"),
    ]


def test_emphasis_does_not_nest():
    # First match wins; the leftover delimiters stay as plain text.
    assert _segments("***deep***") == [PlainText("*"), Emphasis("deep"), PlainText("*")]


def test_formatting_is_deterministic():
    text = "**A** line\n- bullet\n3. third *item*"
    assert format_markdown(text) == format_markdown(text)


def test_visible_text_drops_delimiters_and_markers():
    text = "**Radar** tech is *hot* now\n- Item one\n2. Second point"
    assert strip_emphasis(text) == "Radar tech is hot now\nItem one\nSecond point"


def test_html_rendering_escapes_text():
    line = format_markdown("<b>*x*</b>")[0]
    assert fragments_to_html(line) == '&lt;b&gt;<strong class="font-semibold">x</strong>&lt;/b&gt;'


def test_html_rendering_of_markers():
    assert fragments_to_html(format_markdown("- a")[0]) == '<span class="list-marker">•</span>a'
    assert (
        fragments_to_html(format_markdown("4. d")[0])
        == '<span class="list-marker ordinal">4.</span>d'
    )


def test_text_and_markdown_rendering():
    line = format_markdown("* item with *stress*")[0]
    # Emphasis is searched first, so the bullet star opens an emphasis run.
    assert line.segments[0] == Emphasis(" item with ")
    bullet = format_markdown("+ plain item")[0]
    assert fragments_to_text(bullet) == "• plain item"
    assert fragments_to_markdown(bullet) == "- plain item"
    ordinal = format_markdown("7.   seventh one")[0]
    assert fragments_to_markdown(ordinal) == "7. seventh one"
