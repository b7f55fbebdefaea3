"""Proposal and agreement drafting with PDF/DOCX rendering.

Packages:
- docgen.llm: OpenAI client helpers, prompt templates and drafting
- docgen.docs: Letterhead model, line classification, PDF and DOCX writers
- docgen.pipeline: End-to-end draft → render orchestration
- docgen.api: FastAPI application exposing the operations over HTTP
"""
