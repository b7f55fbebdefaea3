"""LLM (Large Language Model) integration package.

This package provides utilities to work with OpenAI-compatible chat models,
including request helpers, prompt templates and proposal/agreement drafting.
"""

from .client import (
    models_path,
    get_picked_model,
    get_openai_client,
    chat_completion,
    test_model_health,
)
from .drafting import (
    PLACEHOLDERS,
    Drafter,
    draft_agreement,
    draft_proposal,
    drafter_from_settings,
)
from .prompts import (
    build_agreement_messages,
    build_proposal_messages,
    load_prompts,
)

__all__ = [
    "models_path",
    "get_picked_model",
    "get_openai_client",
    "chat_completion",
    "test_model_health",
    "PLACEHOLDERS",
    "Drafter",
    "draft_agreement",
    "draft_proposal",
    "drafter_from_settings",
    "build_agreement_messages",
    "build_proposal_messages",
    "load_prompts",
]
