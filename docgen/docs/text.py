from __future__ import annotations

from typing import List


def split_paragraphs(text: str) -> List[str]:
    """Split text on blank (or whitespace-only) lines; blank chunks are dropped."""
    parts: List[str] = []
    buf: List[str] = []
    for line in (text or "").splitlines():
        if line.strip() == "":
            if buf:
                parts.append("\n".join(buf).strip())
                buf = []
        else:
            buf.append(line)
    if buf:
        parts.append("\n".join(buf).strip())
    return parts


def compose_body(project_name: str, content: str) -> str:
    """Prefix generated prose with the project name as its first paragraph."""
    return f"{project_name.strip()}\n\n{content or ''}"


__all__ = ["split_paragraphs", "compose_body"]
