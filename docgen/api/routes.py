from __future__ import annotations

import re
from typing import Iterable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response

from docgen.docs import DocumentKind, DocumentRequest, RenderedDocument, render_document
from docgen.errors import ValidationError
from docgen.llm import Drafter
from docgen.pipeline import generate_agreement_document, generate_proposal_document

from .errors import failing_as
from .schemas import (
    AGREEMENT_FIELDS,
    PROPOSAL_FIELDS,
    AgreementBody,
    ContentBody,
    ProposalBody,
    missing_fields,
    require_fields,
)

router = APIRouter(prefix="/api", tags=["documents"])

OPERATIONS = [
    "generateProposal",
    "generateAgreement",
    "generatePDF",
    "generateDOC",
    "generateProposalPDF",
    "generateProposalDOC",
    "generateAgreementPDF",
    "generateAgreementDOC",
]

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._ -]+")


def _filename_stem(filename: Optional[str], default: str) -> str:
    stem = _UNSAFE_FILENAME.sub("_", (filename or "").replace("\\", "/").split("/")[-1]).strip(" .")
    return stem or default


def _attachment(doc: RenderedDocument, stem: str) -> Response:
    return Response(
        content=doc.content,
        media_type=doc.media_type,
        headers={"Content-Disposition": f'attachment; filename="{doc.filename(stem)}"'},
    )


def _drafter_for(request: Request, body: ProposalBody, required: Iterable[str]) -> Drafter:
    """Validate the generation fields and pick the drafter for this request.

    The server-wide drafter is used unless the caller supplies `apiKey`;
    without a configured credential `apiKey` becomes a required field.
    """
    state = request.app.state
    api_key = (body.api_key or "").strip()
    missing = missing_fields(body, required)
    if not api_key and state.drafter is None:
        missing.insert(0, "apiKey")
    if missing:
        raise ValidationError.missing(missing)
    if api_key:
        return state.drafter_factory(api_key)
    return state.drafter


@router.get("/test")
def module_status(request: Request):
    settings = request.app.state.settings
    return {
        "success": True,
        "message": "Module loaded successfully",
        "availableFunctions": OPERATIONS,
        "totalFunctions": len(OPERATIONS),
        "expectedFunctions": len(OPERATIONS),
        "model": settings.model,
        "credentialConfigured": request.app.state.drafter is not None,
    }


@router.post("/generate-proposal")
def generate_proposal(request: Request, body: ProposalBody = ProposalBody()):
    drafter = _drafter_for(request, body, PROPOSAL_FIELDS)
    with failing_as("Failed to generate proposal"):
        proposal = drafter.proposal(body.to_fields())
    return {"success": True, "message": "Proposal generated successfully", "data": proposal}


@router.post("/generate-agreement")
def generate_agreement(request: Request, body: AgreementBody = AgreementBody()):
    drafter = _drafter_for(request, body, AGREEMENT_FIELDS)
    with failing_as("Failed to generate agreement"):
        agreement = drafter.agreement(body.to_fields())
    return {"success": True, "message": "Agreement generated successfully", "data": agreement}


def _render_content(request: Request, body: ContentBody, kind: DocumentKind, label: str) -> Response:
    require_fields(body, ["content"])
    stem = _filename_stem(body.filename, "document")
    with failing_as(f"Failed to generate {label}"):
        doc = render_document(
            DocumentRequest(title=stem, body_text=body.content, letterhead=request.app.state.settings.letterhead),
            kind,
        )
    return _attachment(doc, stem)


@router.post("/generate-pdf")
def generate_pdf(request: Request, body: ContentBody = ContentBody()):
    return _render_content(request, body, DocumentKind.PDF, "PDF")


@router.post("/generate-doc")
def generate_doc(request: Request, body: ContentBody = ContentBody()):
    return _render_content(request, body, DocumentKind.DOCX, "DOC")


def _proposal_file(request: Request, body: ProposalBody, kind: DocumentKind, label: str) -> Response:
    drafter = _drafter_for(request, body, PROPOSAL_FIELDS)
    stem = _filename_stem(body.filename, "proposal")
    with failing_as(f"Failed to generate proposal {label}"):
        doc = generate_proposal_document(
            drafter, body.to_fields(), kind, title=stem, letterhead=request.app.state.settings.letterhead
        )
    return _attachment(doc, stem)


def _agreement_file(request: Request, body: AgreementBody, kind: DocumentKind, label: str) -> Response:
    drafter = _drafter_for(request, body, AGREEMENT_FIELDS)
    stem = _filename_stem(body.filename, "agreement")
    with failing_as(f"Failed to generate agreement {label}"):
        doc = generate_agreement_document(
            drafter, body.to_fields(), kind, title=stem, letterhead=request.app.state.settings.letterhead
        )
    return _attachment(doc, stem)


@router.post("/generate-proposal-pdf")
def generate_proposal_pdf(request: Request, body: ProposalBody = ProposalBody()):
    return _proposal_file(request, body, DocumentKind.PDF, "PDF")


@router.post("/generate-proposal-doc")
def generate_proposal_doc(request: Request, body: ProposalBody = ProposalBody()):
    return _proposal_file(request, body, DocumentKind.DOCX, "DOC")


@router.post("/generate-agreement-pdf")
def generate_agreement_pdf(request: Request, body: AgreementBody = AgreementBody()):
    return _agreement_file(request, body, DocumentKind.PDF, "PDF")


@router.post("/generate-agreement-doc")
def generate_agreement_doc(request: Request, body: AgreementBody = AgreementBody()):
    return _agreement_file(request, body, DocumentKind.DOCX, "DOC")
