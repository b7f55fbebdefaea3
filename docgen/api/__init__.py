"""HTTP surface: JSON drafting endpoints and binary document downloads."""

from .app import create_app

__all__ = ["create_app"]
