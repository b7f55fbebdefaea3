"""High-level pipeline: draft via the LLM → prepend project name → render.

The drafted prose is prefixed with the project name as its first paragraph,
so the project name is the first body line after the letterhead and title.
"""

from __future__ import annotations

from typing import Optional, Union

from docgen.docs import (
    AgreementFields,
    DocumentKind,
    DocumentRequest,
    Letterhead,
    ProjectFields,
    RenderedDocument,
    compose_body,
    render_document,
)
from docgen.llm import Drafter


def generate_proposal_document(
    drafter: Drafter,
    fields: ProjectFields,
    kind: Union[DocumentKind, str] = DocumentKind.PDF,
    title: str = "proposal",
    letterhead: Optional[Letterhead] = None,
) -> RenderedDocument:
    """Draft a proposal and render it.

    Doxygen:
    - @param drafter: Injected drafting handle.
    - @param fields: Structured project inputs.
    - @param kind: Output format (PDF or DOCX).
    - @param title: Title heading, also the download filename stem.
    - @param letterhead: Overrides the default letterhead.
    - @throws UpstreamError: Drafting failed.
    - @throws RenderError: Rendering failed.
    """
    content = drafter.proposal(fields)
    request = DocumentRequest(title=title, body_text=compose_body(fields.project_name, content), letterhead=letterhead)
    return render_document(request, kind)


def generate_agreement_document(
    drafter: Drafter,
    fields: AgreementFields,
    kind: Union[DocumentKind, str] = DocumentKind.PDF,
    title: str = "agreement",
    letterhead: Optional[Letterhead] = None,
) -> RenderedDocument:
    """Draft an agreement and render it; see `generate_proposal_document`."""
    content = drafter.agreement(fields)
    request = DocumentRequest(title=title, body_text=compose_body(fields.project_name, content), letterhead=letterhead)
    return render_document(request, kind)
