"""Document assembly layer (PDF, DOCX).

Exposes:
- Data model: Letterhead, DocumentRequest, RenderedDocument, DocumentKind
- Line classification: classify_line, HeadingRules, LineKind
- Writers: write_pdf (reportlab, TrueType fonts via load_fonts), write_docx (python-docx)
- Dispatcher: render_document
"""

from .classify import ClassifiedLine, HeadingRules, LineKind, classify_line
from .docx_io import write_docx
from .model import (
    DEFAULT_LETTERHEAD,
    AgreementFields,
    DocumentKind,
    DocumentRequest,
    Letterhead,
    ProjectFields,
    RenderedDocument,
)
from .pdf_io import FontSet, default_fonts, load_fonts, write_pdf
from .pipeline import render_document
from .text import compose_body, split_paragraphs

__all__ = [
    "ClassifiedLine",
    "HeadingRules",
    "LineKind",
    "classify_line",
    "write_docx",
    "write_pdf",
    "FontSet",
    "default_fonts",
    "load_fonts",
    "render_document",
    "compose_body",
    "split_paragraphs",
    "DEFAULT_LETTERHEAD",
    "AgreementFields",
    "DocumentKind",
    "DocumentRequest",
    "Letterhead",
    "ProjectFields",
    "RenderedDocument",
]
