"""Inline Markdown formatting for generated summary text.

Only a restricted subset is understood: ``**bold**`` and ``*italic*``
emphasis (both rendered as emphasis), ``*``/``-``/``+`` bullet markers and
``N.`` ordinal markers. Emphasis is matched non-greedily and never nests:
the first match wins and its content cannot contain an asterisk. Anything
that does not match falls through as plain text, so formatting never fails
on malformed input.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

BULLET = "bullet"
ORDINAL = "ordinal"
BULLET_GLYPH = "•"

EMPHASIS_PATTERN = re.compile(r"\*\*([^*]+)\*\*|\*([^*]+)\*")
BULLET_PATTERN = re.compile(r"^\s*[*\-+]\s+")
ORDINAL_PATTERN = re.compile(r"^\s*(\d+)\.\s+")


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Emphasis:
    text: str


@dataclass(frozen=True)
class ListMarker:
    kind: str
    value: Optional[int] = None

    @property
    def glyph(self) -> str:
        if self.kind == ORDINAL:
            return f"{self.value}."
        return BULLET_GLYPH


InlineFragment = Union[PlainText, Emphasis, ListMarker]


@dataclass(frozen=True)
class FormattedLine:
    """One rendered line: its fragments in document order."""

    segments: List[InlineFragment] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return not self.segments

    @property
    def text(self) -> str:
        """Visible characters with delimiters and list markers removed."""
        return "".join(
            segment.text for segment in self.segments if not isinstance(segment, ListMarker)
        )

    @property
    def markers(self) -> List[ListMarker]:
        return [segment for segment in self.segments if isinstance(segment, ListMarker)]


def format_markdown(text: str) -> List[FormattedLine]:
    """Split ``text`` into lines and convert inline Markdown in each one."""

    return [_format_line(line) for line in (text or "").split("\n")]


def _format_line(line: str) -> FormattedLine:
    if line.strip() == "":
        return FormattedLine()

    segments: List[InlineFragment] = []
    remaining = line
    # List markers only count before any text has been emitted on the line.
    at_line_start = True

    while remaining:
        match = EMPHASIS_PATTERN.search(remaining)
        if match:
            if match.start() > 0:
                segments.append(PlainText(remaining[: match.start()]))
            segments.append(Emphasis(match.group(1) or match.group(2)))
            remaining = remaining[match.end():]
            at_line_start = False
            continue

        if at_line_start:
            bullet = BULLET_PATTERN.match(remaining)
            if bullet:
                segments.append(ListMarker(BULLET))
                remaining = remaining[bullet.end():]
                continue

            ordinal = ORDINAL_PATTERN.match(remaining)
            if ordinal:
                segments.append(ListMarker(ORDINAL, int(ordinal.group(1))))
                remaining = remaining[ordinal.end():]
                continue

        segments.append(PlainText(remaining))
        break

    return FormattedLine(segments)


def fragments_to_html(line: FormattedLine) -> str:
    """Render one line as inline HTML; text content is escaped."""

    parts: List[str] = []
    for segment in line.segments:
        if isinstance(segment, Emphasis):
            parts.append(f'<strong class="font-semibold">{html.escape(segment.text)}</strong>')
        elif isinstance(segment, ListMarker):
            css = "list-marker ordinal" if segment.kind == ORDINAL else "list-marker"
            parts.append(f'<span class="{css}">{html.escape(segment.glyph)}</span>')
        else:
            parts.append(html.escape(segment.text))
    return "".join(parts)


def fragments_to_text(line: FormattedLine) -> str:
    """Render one line for a console: markers become glyphs, emphasis is unmarked."""

    parts: List[str] = []
    for segment in line.segments:
        if isinstance(segment, ListMarker):
            parts.append(f"{segment.glyph} ")
        else:
            parts.append(segment.text)
    return "".join(parts)


def fragments_to_markdown(line: FormattedLine) -> str:
    """Re-serialize a line in normalized form: ``**bold**``, ``- `` and ``N. ``."""

    parts: List[str] = []
    for segment in line.segments:
        if isinstance(segment, Emphasis):
            parts.append(f"**{segment.text}**")
        elif isinstance(segment, ListMarker):
            parts.append(f"{segment.value}. " if segment.kind == ORDINAL else "- ")
        else:
            parts.append(segment.text)
    return "".join(parts)


def strip_emphasis(text: str) -> str:
    return "\n".join(line.text for line in format_markdown(text))


__all__ = [
    "BULLET",
    "ORDINAL",
    "PlainText",
    "Emphasis",
    "ListMarker",
    "InlineFragment",
    "FormattedLine",
    "format_markdown",
    "fragments_to_html",
    "fragments_to_text",
    "fragments_to_markdown",
    "strip_emphasis",
]
