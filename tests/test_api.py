import io

import pytest
from docx import Document
from fastapi.testclient import TestClient
from pypdf import PdfReader

from docgen.api import create_app
from docgen.config import Settings
from docgen.llm import Drafter

PROPOSAL = {"projectName": "Acme Redesign", "projectDetails": "New storefront", "pricing": "$75,000"}
AGREEMENT = dict(PROPOSAL, partyA="TechCorp Inc.", partyB="DevStudio LLC")


@pytest.fixture
def client(make_drafter):
    return TestClient(create_app(Settings(), drafter=make_drafter("EXECUTIVE SUMMARY\n\nWe will deliver.")))


def test_module_status(client):
    res = client.get("/api/test")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["totalFunctions"] == body["expectedFunctions"] == len(body["availableFunctions"])
    assert "generateProposalPDF" in body["availableFunctions"]
    assert body["credentialConfigured"] is True


def test_generate_proposal_json(client):
    res = client.post("/api/generate-proposal", json=PROPOSAL)
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "Proposal generated successfully",
        "data": "EXECUTIVE SUMMARY\n\nWe will deliver.",
    }


def test_generate_agreement_json(client):
    res = client.post("/api/generate-agreement", json=AGREEMENT)
    assert res.status_code == 200
    assert res.json()["message"] == "Agreement generated successfully"


def test_missing_fields_are_listed_in_wire_names(client):
    res = client.post("/api/generate-proposal", json={"projectName": "Acme", "pricing": "  "})
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Missing required fields: projectDetails, pricing"}


def test_agreement_requires_both_parties(client):
    res = client.post("/api/generate-agreement-pdf", json=dict(PROPOSAL, partyA="TechCorp Inc."))
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required field: partyB"


def test_api_key_required_without_configured_credential():
    client = TestClient(create_app(Settings(api_key=None)))
    res = client.post("/api/generate-proposal", json=PROPOSAL)
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required field: apiKey"
    assert client.get("/api/test").json()["credentialConfigured"] is False


def test_request_api_key_builds_its_own_drafter(make_drafter):
    seen = []

    def factory(key):
        seen.append(key)
        return make_drafter("Drafted with caller key")

    client = TestClient(create_app(Settings(api_key=None), drafter_factory=factory))
    res = client.post("/api/generate-proposal", json=dict(PROPOSAL, apiKey="sk-caller"))
    assert res.status_code == 200
    assert res.json()["data"] == "Drafted with caller key"
    assert seen == ["sk-caller"]


def test_upstream_failure_is_500_with_cause(make_drafter):
    client = TestClient(create_app(Settings(), drafter=make_drafter(error=RuntimeError("quota exceeded"))))
    res = client.post("/api/generate-proposal-pdf", json=PROPOSAL)
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Failed to generate proposal PDF"
    assert "quota exceeded" in body["error"]


def test_generate_pdf_from_content(client):
    res = client.post("/api/generate-pdf", json={"content": "HEADING\n\nSome text.", "filename": "../../report"})
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert res.headers["content-disposition"] == 'attachment; filename="report.pdf"'
    text = PdfReader(io.BytesIO(res.content)).pages[0].extract_text()
    assert "REPORT" in text
    assert "Some text." in text


def test_generate_doc_defaults_filename(client):
    res = client.post("/api/generate-doc", json={"content": "Hello"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/vnd.openxmlformats-officedocument")
    assert res.headers["content-disposition"] == 'attachment; filename="document.docx"'
    assert Document(io.BytesIO(res.content)).paragraphs[-1].text == "Hello"


def test_generate_pdf_requires_content(client):
    res = client.post("/api/generate-pdf", json={"filename": "x"})
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required field: content"


@pytest.mark.parametrize(
    "path, extension",
    [
        ("/api/generate-proposal-pdf", "pdf"),
        ("/api/generate-proposal-doc", "docx"),
    ],
)
def test_proposal_files(client, path, extension):
    res = client.post(path, json=dict(PROPOSAL, filename="acme"))
    assert res.status_code == 200
    assert res.headers["content-disposition"] == f'attachment; filename="acme.{extension}"'


@pytest.mark.parametrize(
    "path, extension",
    [
        ("/api/generate-agreement-pdf", "pdf"),
        ("/api/generate-agreement-doc", "docx"),
    ],
)
def test_agreement_files(client, path, extension):
    res = client.post(path, json=AGREEMENT)
    assert res.status_code == 200
    assert res.headers["content-disposition"] == f'attachment; filename="agreement.{extension}"'


def test_malformed_body_is_400(client):
    res = client.post(
        "/api/generate-proposal", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_unknown_endpoint_is_404(client):
    for res in (client.get("/api/nope"), client.post("/elsewhere", json={})):
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Endpoint not found"}


def test_cors_headers(client):
    res = client.get("/api/test", headers={"Origin": "http://localhost:5173"})
    assert res.headers["access-control-allow-origin"] == "*"


def test_wrong_method_is_reported_as_unknown_endpoint(client):
    for res in (client.get("/api/generate-pdf"), client.post("/api/test")):
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Endpoint not found"}


def test_numeric_fields_are_accepted_as_text(make_client):
    llm = make_client("Drafted")
    client = TestClient(create_app(Settings(), drafter=Drafter(client=llm, model="m")))
    res = client.post("/api/generate-proposal", json=dict(PROPOSAL, pricing=75000))
    assert res.status_code == 200
    prompt = llm.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert "Pricing: 75000" in prompt


def test_missing_body_lists_required_fields(client):
    res = client.post("/api/generate-proposal")
    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "Missing required fields: projectDetails, projectName, pricing",
    }
    res = client.post("/api/generate-doc")
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required field: content"


def test_generate_doc_tolerates_control_characters(client):
    res = client.post("/api/generate-doc", json={"content": "Copied\x0b text\x00 here"})
    assert res.status_code == 200
    assert Document(io.BytesIO(res.content)).paragraphs[-1].text == "Copied\n text here"
