"""
Entry point and compatibility facade for the Draft → Render pipeline.

This module exposes a stable API and a CLI.

Packages:
- docgen.llm: OpenAI client helpers, prompt templates and proposal/agreement drafting
- docgen.docs: Letterhead model, heading classification, PDF and DOCX writers
- docgen.pipeline: High-level orchestration (`generate_proposal_document`)
- docgen.api: FastAPI application (`create_app`)
"""

from __future__ import annotations

import logging
import sys

# LLM client and drafting helpers
from docgen.llm.client import (
    models_path,
    get_picked_model,
    get_openai_client,
    chat_completion,
    test_model_health,
)
from docgen.llm.drafting import (
    Drafter,
    draft_proposal,
    draft_agreement,
    drafter_from_settings,
)

# Document assembly
from docgen.docs import (
    AgreementFields,
    DocumentKind,
    DocumentRequest,
    ProjectFields,
    classify_line,
    render_document,
    write_docx,
    write_pdf,
)

# High-level pipeline
from docgen.pipeline.process import (
    generate_agreement_document,
    generate_proposal_document,
)

__all__ = [
    # config/client
    "models_path",
    "get_picked_model",
    "get_openai_client",
    "chat_completion",
    "test_model_health",
    # drafting
    "Drafter",
    "draft_proposal",
    "draft_agreement",
    "drafter_from_settings",
    # documents
    "AgreementFields",
    "DocumentKind",
    "DocumentRequest",
    "ProjectFields",
    "classify_line",
    "render_document",
    "write_docx",
    "write_pdf",
    # pipeline
    "generate_proposal_document",
    "generate_agreement_document",
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_project_args(p, agreement: bool = False) -> None:
    p.add_argument("--name", "-n", required=True, help="Project name")
    p.add_argument("--details", "-d", required=True, help="Project details")
    p.add_argument("--pricing", "-p", required=True, help="Pricing information")
    p.add_argument("--extra", "-e", default="", help="Additional context for the model")
    if agreement:
        p.add_argument("--party-a", required=True, help="Party A (name, address, representative)")
        p.add_argument("--party-b", required=True, help="Party B (name, address, representative)")
    p.add_argument("--out-format", choices=["text", "pdf", "docx"], default="text", help="Output kind (default: text)")
    p.add_argument("--out", "-o", type=str, help="Output file path (default: <filename>.<ext>)")
    p.add_argument("--filename", type=str, default=None, help="Document title / filename stem")
    p.add_argument("--api-key", type=str, default=None, help="Override the configured API key")


def _write_output(doc, out_path: str | None, stem: str) -> None:
    path = out_path or doc.filename(stem)
    with open(path, "wb") as f:
        f.write(doc.content)
    print(f"Saved {doc.kind.extension.upper()} to: {path}")


def _cli() -> None:
    """CLI for drafting and rendering documents.

    Subcommands:
    proposal:  --name --details --pricing [--extra] [--out-format text|pdf|docx] [--out]
    agreement: same as proposal plus --party-a --party-b
    render:    --file <text file> --title <title> --out-format pdf|docx [--out]
    serve:     [--port] run the HTTP API with uvicorn
    health:    ping the configured model
    """
    import argparse

    from docgen.config import load_settings

    parser = argparse.ArgumentParser(description="Draft proposals/agreements with an LLM and render them to PDF or DOCX.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    _add_project_args(sub.add_parser("proposal", help="Draft a sales proposal"))
    _add_project_args(sub.add_parser("agreement", help="Draft a two-party agreement"), agreement=True)

    render = sub.add_parser("render", help="Render an existing text file")
    render.add_argument("--file", "-f", required=True, help="Path to a UTF-8 text file")
    render.add_argument("--title", "-t", default="document", help="Title heading (default: document)")
    render.add_argument("--out-format", choices=["pdf", "docx"], default="pdf", help="Output format (default: pdf)")
    render.add_argument("--out", "-o", type=str, help="Output file path (default: <title>.<ext>)")

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT env or 3001)")

    sub.add_parser("health", help="Ping the configured model")

    args = parser.parse_args()
    _configure_logging(args.verbose)
    settings = load_settings()

    if args.command == "serve":
        import uvicorn

        from docgen.api import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port or settings.port)
        return

    if args.command == "render":
        with open(args.file, "r", encoding="utf-8") as f:
            body = f.read()
        doc = render_document(
            DocumentRequest(title=args.title, body_text=body, letterhead=settings.letterhead),
            args.out_format,
        )
        _write_output(doc, args.out, args.title)
        return

    try:
        drafter = drafter_from_settings(settings, api_key=getattr(args, "api_key", None))
    except ValueError as e:
        print(f"{e} Set OPENAI_API_KEY, config/models.json or pass --api-key.")
        raise SystemExit(2)

    if args.command == "health":
        test_model_health(drafter.client, drafter.model)
        print(f"Model {drafter.model} is reachable.")
        return

    if args.command == "proposal":
        fields = ProjectFields(args.name, args.details, args.pricing, args.extra)
        stem = args.filename or "proposal"
        if args.out_format == "text":
            print(drafter.proposal(fields))
            return
        doc = generate_proposal_document(drafter, fields, args.out_format, title=stem, letterhead=settings.letterhead)
    else:
        fields = AgreementFields(args.name, args.details, args.pricing, args.extra, args.party_a, args.party_b)
        stem = args.filename or "agreement"
        if args.out_format == "text":
            print(drafter.agreement(fields))
            return
        doc = generate_agreement_document(drafter, fields, args.out_format, title=stem, letterhead=settings.letterhead)
    _write_output(doc, args.out, stem)


if __name__ == "__main__":
    _cli()
