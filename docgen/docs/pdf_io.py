"""PDF writer: letterhead block, title and paginated body on A4 portrait.

Layout constants are expressed in millimetres from the top-left corner of the
page and converted to reportlab's bottom-left point coordinates when drawing.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from docgen.errors import RenderError

from .classify import DEFAULT_RULES, HeadingRules, LineKind, classify_line
from .model import DocumentRequest, Letterhead

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

FONT_ENV = "DOCGEN_PDF_FONT"
FONT_BOLD_ENV = "DOCGEN_PDF_FONT_BOLD"

# (regular, bold) TrueType pairs tried when no font is configured
FONT_CANDIDATES = [
    ("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    ("/usr/share/fonts/dejavu/DejaVuSans.ttf", "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf"),
    ("/usr/share/fonts/TTF/DejaVuSans.ttf", "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf"),
    ("/System/Library/Fonts/Supplemental/Arial.ttf", "/System/Library/Fonts/Supplemental/Arial Bold.ttf"),
    ("C:\\Windows\\Fonts\\arial.ttf", "C:\\Windows\\Fonts\\arialbd.ttf"),
]

PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_PT = A4[1]

LINE_HEIGHT = 7.0
TOP_MARGIN = 20.0
BOTTOM_LIMIT = 270.0
LEFT_MARGIN = 25.0
RULE_END = 185.0
TEXT_WIDTH = 140.0
ADDRESS_WIDTH = 110.0
TITLE_WIDTH = 160.0

COMPANY_SIZE = 16
DETAILS_SIZE = 8
TITLE_SIZE = 14

Segment = Tuple[str, str]  # (text, font name)


@dataclass(frozen=True)
class FontSet:
    """Registered reportlab font names for regular and bold text."""

    regular: str = FONT
    bold: str = FONT_BOLD


CORE_FONTS = FontSet()


def _register_ttf(path: str) -> str:
    name = os.path.splitext(os.path.basename(path))[0]
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
    return name


@lru_cache(maxsize=None)
def load_fonts(regular_path: Optional[str] = None, bold_path: Optional[str] = None) -> FontSet:
    """Register a TrueType family and return its font names.

    Doxygen:
    - @param regular_path: TTF file for body text.
    - @param bold_path: TTF file for headings and labels; the regular face is reused when absent.
    - @return: The registered fonts, or Helvetica when `regular_path` does not exist.
    """
    if not regular_path or not os.path.exists(regular_path):
        if regular_path:
            logger.warning("PDF font %s not found; falling back to %s", regular_path, FONT)
        return CORE_FONTS
    regular = _register_ttf(regular_path)
    bold = _register_ttf(bold_path) if bold_path and os.path.exists(bold_path) else regular
    return FontSet(regular, bold)


def default_fonts() -> FontSet:
    """Fonts from DOCGEN_PDF_FONT(_BOLD), else the first installed candidate, else Helvetica."""
    configured = os.environ.get(FONT_ENV)
    if configured:
        return load_fonts(configured, os.environ.get(FONT_BOLD_ENV) or None)
    for regular, bold in FONT_CANDIDATES:
        if os.path.exists(regular):
            return load_fonts(regular, bold)
    return CORE_FONTS


def _width_mm(text: str, font: str, size: float) -> float:
    return stringWidth(text, font, size) / mm


def _split(text: str, font: str, size: float, width_mm: float) -> List[str]:
    return simpleSplit(text, font, size, width_mm * mm) or [""]


class _PdfWriter:
    """Cursor-driven drawing over a reportlab canvas."""

    def __init__(self, out: io.BytesIO, title: str, rules: HeadingRules, fonts: FontSet) -> None:
        self.c = canvas.Canvas(out, pagesize=A4)
        self.c.setTitle(title)
        self.rules = rules
        self.fonts = fonts
        self.y = TOP_MARGIN

    def draw(self, text: str, x: float, font: str, size: float) -> None:
        self.c.setFont(font, size)
        self.c.drawString(x * mm, PAGE_HEIGHT_PT - self.y * mm, text)

    def draw_centered(self, text: str, font: str, size: float) -> None:
        self.draw(text, (PAGE_WIDTH_MM - _width_mm(text, font, size)) / 2, font, size)

    def draw_segments_centered(self, segments: Sequence[Segment], size: float) -> None:
        total = sum(_width_mm(text, font, size) for text, font in segments)
        x = (PAGE_WIDTH_MM - total) / 2
        for text, font in segments:
            self.draw(text, x, font, size)
            x += _width_mm(text, font, size)

    def ensure_room(self) -> None:
        if self.y > BOTTOM_LIMIT:
            self.c.showPage()
            self.y = TOP_MARGIN

    def letterhead(self, lh: Letterhead) -> None:
        regular, bold = self.fonts.regular, self.fonts.bold
        self.draw_centered(lh.company_name, bold, COMPANY_SIZE)
        self.y += LINE_HEIGHT + 8

        first: List[Segment] = []
        for i, (label, value) in enumerate(lh.contact_parts()):
            if i:
                first.append((" | ", regular))
            first.extend([(f"{label} ", bold), (value, regular)])
        self.draw_segments_centered(first, DETAILS_SIZE)
        self.y += LINE_HEIGHT

        self.draw_segments_centered([("Email: ", bold), (lh.email, regular)], DETAILS_SIZE)
        self.y += LINE_HEIGHT

        # Address lines are centered on their own; the label hangs off the first one.
        label = "Address: "
        for i, line in enumerate(_split(lh.address, regular, DETAILS_SIZE, ADDRESS_WIDTH)):
            x = (PAGE_WIDTH_MM - _width_mm(line, regular, DETAILS_SIZE)) / 2
            if i == 0:
                self.draw(label, x - _width_mm(label, bold, DETAILS_SIZE), bold, DETAILS_SIZE)
            self.draw(line, x, regular, DETAILS_SIZE)
            self.y += LINE_HEIGHT

        self.y += LINE_HEIGHT + 5
        self.c.setStrokeColorRGB(0, 0, 0)
        rule_y = PAGE_HEIGHT_PT - self.y * mm
        self.c.line(LEFT_MARGIN * mm, rule_y, RULE_END * mm, rule_y)
        self.y += 15

    def title(self, text: str) -> None:
        if not text.strip():
            return
        for line in _split(text.strip().upper(), self.fonts.bold, TITLE_SIZE, TITLE_WIDTH):
            self.ensure_room()
            self.draw_centered(line, self.fonts.bold, TITLE_SIZE)
            self.y += LINE_HEIGHT
        self.y += 5

    def body(self, text: str) -> None:
        for source in (text or "").splitlines():
            if not source.strip():
                self.ensure_room()
                self.y += LINE_HEIGHT
                continue
            line = classify_line(source, self.rules)
            style = self.rules.style_for(line.kind)
            font = self.fonts.bold if style.bold else self.fonts.regular
            for segment in _split(line.text, font, style.font_size, TEXT_WIDTH):
                self.ensure_room()
                self.draw(segment, LEFT_MARGIN, font, style.font_size)
                self.y += LINE_HEIGHT
            if line.kind is LineKind.HEADING:
                self.y += style.space_after

    def finish(self) -> None:
        self.c.showPage()
        self.c.save()


def write_pdf(
    request: DocumentRequest,
    rules: HeadingRules = DEFAULT_RULES,
    fonts: Optional[FontSet] = None,
) -> bytes:
    """Render a document request into PDF bytes.

    Doxygen:
    - @param request: Title, body text and optional letterhead.
    - @param rules: Heading detection thresholds and per-kind styles.
    - @param fonts: Fonts to draw with; `default_fonts()` when None.
    - @return: The PDF file content.
    - @throws RenderError: If reportlab fails while drawing or serializing.
    """
    out = io.BytesIO()
    try:
        writer = _PdfWriter(out, request.title, rules, fonts or default_fonts())
        writer.letterhead(request.effective_letterhead)
        writer.title(request.title)
        writer.body(request.body_text)
        writer.finish()
    except Exception as e:
        raise RenderError(f"Failed to generate PDF: {e}") from e
    return out.getvalue()


__all__ = ["FontSet", "CORE_FONTS", "load_fonts", "default_fonts", "write_pdf"]
