from __future__ import annotations

import logging
from typing import Union

from .docx_io import write_docx
from .model import DocumentKind, DocumentRequest, RenderedDocument
from .pdf_io import write_pdf

logger = logging.getLogger(__name__)


def render_document(request: DocumentRequest, kind: Union[DocumentKind, str] = DocumentKind.PDF) -> RenderedDocument:
    """Render title + body + letterhead into the requested format.

    - @param kind: `DocumentKind` or its name ("pdf", "docx", "doc").
    - @throws ValueError: Unknown format name.
    - @throws RenderError: The document library failed.
    """
    if not isinstance(kind, DocumentKind):
        kind = DocumentKind.parse(kind)
    if kind is DocumentKind.DOCX:
        content = write_docx(request)
    else:
        content = write_pdf(request)
    logger.info("Rendered %s '%s' (%d bytes)", kind.extension, request.title, len(content))
    return RenderedDocument(content=content, kind=kind)
