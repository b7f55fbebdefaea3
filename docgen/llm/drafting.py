"""Proposal and agreement drafting over a chat-completion client.

Each call makes a single request with no retry. Client errors are wrapped in
`UpstreamError`; an empty answer yields a placeholder text unless the fallback
is disabled, in which case it is an `UpstreamError` as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from openai import OpenAI

from docgen.docs.model import AgreementFields, ProjectFields
from docgen.errors import UpstreamError

from .client import chat_completion, get_openai_client
from .prompts import build_agreement_messages, build_proposal_messages

logger = logging.getLogger(__name__)

PLACEHOLDERS = {
    "proposal": "No proposal generated.",
    "agreement": "No agreement generated.",
}


def _request_text(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, str]],
    what: str,
    timeout: float | None,
    fallback_on_empty: bool,
) -> str:
    logger.info("Requesting %s draft from model %s", what, model)
    try:
        out = chat_completion(client, model, messages=messages, timeout=timeout)
    except Exception as e:
        raise UpstreamError(f"Failed to generate {what}: {e}") from e
    if out and out.strip():
        return out
    if fallback_on_empty:
        logger.warning("Model %s returned no %s content; using placeholder text", model, what)
        return PLACEHOLDERS[what]
    raise UpstreamError(f"Failed to generate {what}: the model returned no content")


def draft_proposal(
    client: OpenAI,
    model: str,
    fields: ProjectFields,
    timeout: float | None = None,
    fallback_on_empty: bool = True,
    prompts: Optional[Dict[str, str]] = None,
) -> str:
    """Draft a sales proposal for the given project.

    Doxygen:
    - @param client: OpenAI instance to use for the request.
    - @param model: Target model id.
    - @param fields: Project name, details, pricing and optional extra details.
    - @param timeout: Request timeout in seconds; None waits indefinitely.
    - @param fallback_on_empty: Return the placeholder text on an empty answer.
    - @return: Generated proposal prose.
    - @throws UpstreamError: If the request fails (or is empty with fallback off).
    """
    messages = build_proposal_messages(
        fields.project_name,
        fields.project_details,
        fields.pricing,
        fields.extra_details,
        prompts=prompts,
    )
    return _request_text(client, model, messages, "proposal", timeout, fallback_on_empty)


def draft_agreement(
    client: OpenAI,
    model: str,
    fields: AgreementFields,
    timeout: float | None = None,
    fallback_on_empty: bool = True,
    prompts: Optional[Dict[str, str]] = None,
) -> str:
    """Draft a two-party agreement; same contract as `draft_proposal`."""
    messages = build_agreement_messages(
        fields.project_name,
        fields.project_details,
        fields.pricing,
        fields.party_a,
        fields.party_b,
        fields.extra_details,
        prompts=prompts,
    )
    return _request_text(client, model, messages, "agreement", timeout, fallback_on_empty)


@dataclass
class Drafter:
    """Reusable handle binding a client to the drafting settings.

    Built once at startup and injected into the HTTP layer and CLI.
    """

    client: OpenAI
    model: str
    timeout: float | None = None
    fallback_on_empty: bool = True
    prompts: Dict[str, str] = field(default_factory=dict)

    def proposal(self, fields: ProjectFields) -> str:
        return draft_proposal(self.client, self.model, fields, self.timeout, self.fallback_on_empty, self.prompts or None)

    def agreement(self, fields: AgreementFields) -> str:
        return draft_agreement(self.client, self.model, fields, self.timeout, self.fallback_on_empty, self.prompts or None)


def drafter_from_settings(settings, api_key: Optional[str] = None) -> Drafter:
    """Build a `Drafter` from `Settings`; `api_key` overrides the configured key."""
    key = api_key or settings.api_key
    if not key:
        raise ValueError("No API key available for the text-generation service.")
    return Drafter(
        client=get_openai_client(key, settings.base_url),
        model=settings.model,
        timeout=settings.request_timeout,
        fallback_on_empty=settings.fallback_on_empty,
        prompts=dict(settings.prompts),
    )
