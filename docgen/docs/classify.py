"""Lexical heading/body classification of plain-text lines.

A line is a heading when it carries the marker prefix (``# Title``) or when,
after stripping, it is fully upper-case and its length falls inside the
configured bounds. Detection is purely lexical: accidental all-caps body text
is styled as a heading.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterable, List


class LineKind(enum.Enum):
    HEADING = "heading"
    BODY = "body"


@dataclass(frozen=True)
class LineStyle:
    font_size: float
    bold: bool = False
    space_after: float = 0.0


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str

    @property
    def is_heading(self) -> bool:
        return self.kind is LineKind.HEADING


def _default_styles() -> Dict[LineKind, LineStyle]:
    return {
        LineKind.HEADING: LineStyle(font_size=14, bold=True, space_after=3.0),
        LineKind.BODY: LineStyle(font_size=10),
    }


@dataclass(frozen=True)
class HeadingRules:
    """Thresholds and per-kind styling used by the layout code.

    Doxygen:
    - @param min_length: Shortest stripped line treated as an all-caps heading.
    - @param max_length: Longest stripped line treated as an all-caps heading.
    - @param marker: Prefix character that forces a heading (stripped from the text).
    - @param styles: Font size / weight / extra spacing per `LineKind`.
    """

    min_length: int = 4
    max_length: int = 49
    marker: str = "#"
    styles: Dict[LineKind, LineStyle] = field(default_factory=_default_styles)

    def style_for(self, kind: LineKind) -> LineStyle:
        return self.styles[kind]


DEFAULT_RULES = HeadingRules()


def classify_line(line: str, rules: HeadingRules = DEFAULT_RULES) -> ClassifiedLine:
    """Return the tagged classification of a single source line."""
    stripped = (line or "").strip()
    if rules.marker and stripped.startswith(rules.marker):
        return ClassifiedLine(LineKind.HEADING, stripped.lstrip(rules.marker).strip())
    if rules.min_length <= len(stripped) <= rules.max_length and stripped.isupper():
        return ClassifiedLine(LineKind.HEADING, stripped)
    return ClassifiedLine(LineKind.BODY, stripped)


def classify_lines(lines: Iterable[str], rules: HeadingRules = DEFAULT_RULES) -> List[ClassifiedLine]:
    return [classify_line(line, rules) for line in lines]


__all__ = [
    "LineKind",
    "LineStyle",
    "ClassifiedLine",
    "HeadingRules",
    "DEFAULT_RULES",
    "classify_line",
    "classify_lines",
]
