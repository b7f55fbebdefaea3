from __future__ import annotations

import io
import re
from typing import List, Tuple

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from docgen.errors import RenderError

from .model import DocumentRequest, Letterhead
from .text import split_paragraphs

COMPANY_SIZE = Pt(18)
DETAILS_SIZE = Pt(9)
BODY_SIZE = Pt(12)

# Letterhead paragraphs + title heading emitted ahead of the body.
FIXED_PARAGRAPHS = 4

# Characters XML 1.0 does not allow; tab, LF and CR are kept.
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _xml_text(text: str) -> str:
    return _XML_INVALID.sub("", text)


def _add_runs(paragraph, parts: List[Tuple[str, bool]], size) -> None:
    for text, bold in parts:
        run = paragraph.add_run(_xml_text(text))
        run.bold = bold
        run.font.size = size


def _add_letterhead(d, lh: Letterhead) -> None:
    p = d.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_after = Pt(15)
    _add_runs(p, [(lh.company_name, True)], COMPANY_SIZE)

    first: List[Tuple[str, bool]] = []
    for i, (label, value) in enumerate(lh.contact_parts()):
        first.append((f"{' | ' if i else ''}{label} ", True))
        first.append((value, False))
    p = d.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_after = Pt(10)
    _add_runs(p, first, DETAILS_SIZE)

    p = d.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_after = Pt(20)
    _add_runs(
        p,
        [("Email: ", True), (lh.email, False), (" | Address: ", True), (lh.address, False)],
        DETAILS_SIZE,
    )


def write_docx(request: DocumentRequest) -> bytes:
    """Render a document request into DOCX bytes.

    One body paragraph is emitted per non-blank, blank-line-delimited chunk;
    pagination is left to the word processor.

    Doxygen:
    - @param request: Title, body text and optional letterhead.
    - @return: The .docx file content.
    - @throws RenderError: If python-docx fails while building or saving.
    """
    try:
        d = DocxDocument()
        _add_letterhead(d, request.effective_letterhead)

        heading = d.add_heading(_xml_text(request.title.strip().upper()), level=1)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        heading.paragraph_format.space_after = Pt(20)

        for chunk in split_paragraphs(request.body_text):
            p = d.add_paragraph()
            p.paragraph_format.space_after = Pt(10)
            run = p.add_run(_xml_text(chunk))
            run.font.size = BODY_SIZE

        out = io.BytesIO()
        d.save(out)
    except Exception as e:
        raise RenderError(f"Failed to generate DOC: {e}") from e
    return out.getvalue()


__all__ = ["write_docx", "FIXED_PARAGRAPHS"]
