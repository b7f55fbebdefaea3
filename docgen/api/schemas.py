"""Request bodies. Field names are camelCase on the wire (`projectName`).

Every field is optional at the schema level; presence of the required ones is
checked by `require_fields` so that a missing field is reported as a 400 with
the uniform `{success, message}` body instead of FastAPI's 422.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from docgen.docs.model import AgreementFields, ProjectFields
from docgen.errors import ValidationError


class _Body(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class ContentBody(_Body):
    content: Optional[str] = None
    filename: Optional[str] = None


class ProposalBody(_Body):
    api_key: Optional[str] = None
    project_details: Optional[str] = None
    project_name: Optional[str] = None
    pricing: Optional[str] = None
    extra_details: Optional[str] = None
    filename: Optional[str] = None

    def to_fields(self) -> ProjectFields:
        return ProjectFields(
            project_name=self.project_name or "",
            project_details=self.project_details or "",
            pricing=self.pricing or "",
            extra_details=self.extra_details or "",
        )


class AgreementBody(ProposalBody):
    party_a: Optional[str] = None
    party_b: Optional[str] = None

    def to_fields(self) -> AgreementFields:
        return AgreementFields(
            project_name=self.project_name or "",
            project_details=self.project_details or "",
            pricing=self.pricing or "",
            extra_details=self.extra_details or "",
            party_a=self.party_a or "",
            party_b=self.party_b or "",
        )


PROPOSAL_FIELDS = ("project_details", "project_name", "pricing")
AGREEMENT_FIELDS = PROPOSAL_FIELDS + ("party_a", "party_b")


def missing_fields(body: BaseModel, names: Iterable[str]) -> List[str]:
    """Wire names of the fields in `names` that are absent or blank."""
    return [to_camel(name) for name in names if not (getattr(body, name) or "").strip()]


def require_fields(body: BaseModel, names: Iterable[str]) -> None:
    missing = missing_fields(body, names)
    if missing:
        raise ValidationError.missing(missing)
