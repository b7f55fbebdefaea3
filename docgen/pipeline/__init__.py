"""High-level pipeline orchestration for Draft → Render."""

from .process import (
    generate_agreement_document,
    generate_proposal_document,
)

__all__ = [
    "generate_agreement_document",
    "generate_proposal_document",
]
