from __future__ import annotations

import enum
import json
import os
from dataclasses import dataclass, fields as dc_fields
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Letterhead:
    company_name: str = "TRIOSTACK TECHNOLOGIES PRIVATE LIMITED"
    cin: str = "U62012UP2025PTC226106"
    phone: str = "+91 9211941924"
    website: str = "www.triostack.in"
    email: str = "info@triostack.in"
    address: str = (
        "IIMT LBF, Plot No. 19, 20, near IIMT Group of Colleges, Knowledge Park III, "
        "Greater Noida, Uttar Pradesh 201310"
    )

    def contact_parts(self) -> List[Tuple[str, str]]:
        """Label/value pairs printed on the first details line."""
        return [("CIN:", self.cin), ("Phone:", self.phone), ("Website:", self.website)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Letterhead":
        known = {f.name for f in dc_fields(cls)}
        return cls(**{k: str(v) for k, v in data.items() if k in known and v is not None})

    @classmethod
    def from_json(cls, path: str) -> "Letterhead":
        """Load a letterhead override; a missing file yields the default letterhead."""
        if not os.path.exists(path):
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Letterhead config must be a JSON object: {path}")
        return cls.from_dict(data)


DEFAULT_LETTERHEAD = Letterhead()


class DocumentKind(enum.Enum):
    PDF = ("pdf", "application/pdf")
    DOCX = ("docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")

    @property
    def extension(self) -> str:
        return self.value[0]

    @property
    def media_type(self) -> str:
        return self.value[1]

    @classmethod
    def parse(cls, name: str) -> "DocumentKind":
        norm = str(name or "").strip().lower().lstrip(".")
        if norm in ("doc", "docx"):
            return cls.DOCX
        if norm == "pdf":
            return cls.PDF
        raise ValueError(f"Unsupported document format: '{name}'. Allowed values: pdf, docx.")


@dataclass
class DocumentRequest:
    title: str
    body_text: str
    letterhead: Optional[Letterhead] = None

    @property
    def effective_letterhead(self) -> Letterhead:
        return self.letterhead or DEFAULT_LETTERHEAD


@dataclass
class RenderedDocument:
    content: bytes
    kind: DocumentKind

    @property
    def media_type(self) -> str:
        return self.kind.media_type

    def filename(self, stem: str) -> str:
        return f"{stem}.{self.kind.extension}"


@dataclass
class ProjectFields:
    project_name: str
    project_details: str
    pricing: str
    extra_details: str = ""


@dataclass
class AgreementFields(ProjectFields):
    party_a: str = ""
    party_b: str = ""

    def __post_init__(self) -> None:
        missing = [name for name in ("party_a", "party_b") if not getattr(self, name)]
        if missing:
            raise ValueError(f"Agreement requires {', '.join(missing)}.")


__all__ = [
    "Letterhead",
    "DEFAULT_LETTERHEAD",
    "DocumentKind",
    "DocumentRequest",
    "RenderedDocument",
    "ProjectFields",
    "AgreementFields",
]
