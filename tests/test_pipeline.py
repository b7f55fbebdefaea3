import io

import pytest
from docx import Document
from pypdf import PdfReader

from docgen.docs.docx_io import FIXED_PARAGRAPHS
from docgen.docs.model import AgreementFields, DocumentKind, DocumentRequest, ProjectFields
from docgen.docs.pipeline import render_document
from docgen.errors import UpstreamError
from docgen.pipeline import generate_agreement_document, generate_proposal_document

FIELDS = ProjectFields("Acme Redesign", "New storefront", "$75,000")
DRAFT = "EXECUTIVE SUMMARY\n\nWe will deliver a storefront.\n\nNEXT STEPS\n\nSign the proposal."


def test_proposal_pdf_starts_with_project_name(make_drafter):
    doc = generate_proposal_document(make_drafter(DRAFT), FIELDS, DocumentKind.PDF)
    assert doc.kind is DocumentKind.PDF
    assert doc.media_type == "application/pdf"
    assert doc.filename("proposal") == "proposal.pdf"
    text = "\n".join(p.extract_text() or "" for p in PdfReader(io.BytesIO(doc.content)).pages)
    after_title = text[text.index("PROPOSAL") + len("PROPOSAL"):]
    assert after_title.strip().startswith("Acme Redesign")
    assert "We will deliver a storefront." in text


def test_proposal_docx_starts_with_project_name(make_drafter):
    doc = generate_proposal_document(make_drafter(DRAFT), FIELDS, "docx")
    assert doc.filename("proposal") == "proposal.docx"
    paras = Document(io.BytesIO(doc.content)).paragraphs
    assert paras[FIXED_PARAGRAPHS].text == "Acme Redesign"
    assert len(paras) == FIXED_PARAGRAPHS + 5


def test_agreement_document_uses_agreement_draft(make_drafter):
    fields = AgreementFields("Platform", "Build it", "$1", party_a="A Corp", party_b="B LLC")
    doc = generate_agreement_document(make_drafter("PARTIES\n\nA Corp and B LLC"), fields, "docx", title="contract")
    paras = Document(io.BytesIO(doc.content)).paragraphs
    assert paras[FIXED_PARAGRAPHS - 1].text == "CONTRACT"
    assert [p.text for p in paras[FIXED_PARAGRAPHS:]] == ["Platform", "PARTIES", "A Corp and B LLC"]


def test_placeholder_is_rendered_when_model_returns_nothing(make_drafter):
    doc = generate_proposal_document(make_drafter(None), FIELDS, "docx")
    paras = Document(io.BytesIO(doc.content)).paragraphs
    assert paras[-1].text == "No proposal generated."


def test_upstream_error_propagates(make_drafter):
    with pytest.raises(UpstreamError, match="timeout"):
        generate_proposal_document(make_drafter(error=TimeoutError("timeout")), FIELDS)


def test_render_document_rejects_unknown_format():
    with pytest.raises(ValueError):
        render_document(DocumentRequest(title="t", body_text="x"), "odt")
