"""Error taxonomy shared by the drafting, rendering and HTTP layers."""

from __future__ import annotations

from typing import List, Optional


class DocgenError(Exception):
    """Base error; `status_code` is the HTTP status the API maps it to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DocgenError):
    """A required request field is missing or blank."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])

    @classmethod
    def missing(cls, fields: List[str]) -> "ValidationError":
        noun = "field" if len(fields) == 1 else "fields"
        return cls(f"Missing required {noun}: {', '.join(fields)}", fields)


class UpstreamError(DocgenError):
    """The text-generation service failed or returned nothing usable."""


class RenderError(DocgenError):
    """A document library failed while building the PDF or DOCX bytes."""
