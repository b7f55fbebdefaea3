"""Prompt templates for proposal and agreement drafting.

Templates have built-in defaults and may be overridden key by key from
config/prompts.json next to models.json.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional

from docgen.config import default_config_dir

logger = logging.getLogger(__name__)


def prompts_path() -> str:
    """Path of the optional prompt override file next to models.json."""
    return os.path.join(default_config_dir(), "prompts.json")


_DEFAULT_PROMPTS = {
    "proposal_system": (
        "You are a professional business proposal writer. Create compelling, well-structured sales "
        "proposals that convert leads to customers."
    ),
    "proposal_user": (
        "Create a professional sales proposal (not an email) formatted with clear headings,\n"
        "based on the following project information:\n\n"
        "Project Name: {project_name}\n"
        "Project Details: {project_details}\n"
        "Pricing: {pricing}\n"
        "{extra_details_line}\n"
        "The proposal should include these sections with clear headings:\n"
        "- EXECUTIVE SUMMARY\n"
        "- PROJECT OVERVIEW\n"
        "- OUR APPROACH\n"
        "- DELIVERABLES\n"
        "- TIMELINE\n"
        "- INVESTMENT\n"
        "- NEXT STEPS\n\n"
        "Use clear, professional headings in ALL CAPS for each section.\n"
        "Make the content compelling and tailored to the specific project."
    ),
    "agreement_system": (
        "You are a legal document writer. Create comprehensive, professional legal agreements that "
        "protect both parties' interests while being clear and enforceable."
    ),
    "agreement_user": (
        "Create a professional legal agreement between two parties, formatted with clear headings,\n"
        "based on the following information:\n\n"
        "Project Name: {project_name}\n"
        "Project Details: {project_details}\n"
        "Pricing: {pricing}\n"
        "Party A: {party_a}\n"
        "Party B: {party_b}\n"
        "{extra_details_line}\n"
        "The agreement should include:\n"
        "- Clear identification of both parties\n"
        "- Project scope and deliverables\n"
        "- Terms and conditions\n"
        "- Payment terms and schedule\n"
        "- Timeline and milestones\n"
        "- Intellectual property rights\n"
        "- Confidentiality clauses\n"
        "- Termination conditions\n"
        "- Legal jurisdiction\n"
        "- Professional legal formatting"
    ),
}


def load_prompts(path: Optional[str] = None) -> Dict[str, str]:
    """Return default templates with any string overrides from `path` applied."""
    prompts = dict(_DEFAULT_PROMPTS)
    path = path or prompts_path()
    if not os.path.exists(path):
        return prompts
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load prompt overrides from %s: %s", path, e)
        return prompts
    if isinstance(data, dict):
        prompts.update({str(k): v for k, v in data.items() if isinstance(v, str)})
    return prompts


def fill_prompt_template(tmpl: str, **values: str) -> str:
    """Safely fill a user-editable template that may contain braces in examples.

    All braces are escaped first, then only the placeholders explicitly
    provided in `values` are restored before calling `str.format`, so text
    like "{id: number}" inside an override does not raise KeyError.
    """
    safe = str(tmpl).replace("{", "{{").replace("}", "}}")
    for key in values.keys():
        safe = safe.replace("{{" + key + "}}", "{" + key + "}")
    return safe.format(**values)


def _extra_line(extra_details: str) -> str:
    extra = (extra_details or "").strip()
    return f"Additional Details: {extra}\n" if extra else ""


def build_proposal_messages(
    project_name: str,
    project_details: str,
    pricing: str,
    extra_details: str = "",
    prompts: Dict[str, str] | None = None,
) -> List[Dict[str, str]]:
    p = prompts or _DEFAULT_PROMPTS
    user = fill_prompt_template(
        p["proposal_user"],
        project_name=project_name,
        project_details=project_details,
        pricing=pricing,
        extra_details_line=_extra_line(extra_details),
    )
    return [
        {"role": "system", "content": p["proposal_system"]},
        {"role": "user", "content": user},
    ]


def build_agreement_messages(
    project_name: str,
    project_details: str,
    pricing: str,
    party_a: str,
    party_b: str,
    extra_details: str = "",
    prompts: Dict[str, str] | None = None,
) -> List[Dict[str, str]]:
    p = prompts or _DEFAULT_PROMPTS
    user = fill_prompt_template(
        p["agreement_user"],
        project_name=project_name,
        project_details=project_details,
        pricing=pricing,
        party_a=party_a,
        party_b=party_b,
        extra_details_line=_extra_line(extra_details),
    )
    return [
        {"role": "system", "content": p["agreement_system"]},
        {"role": "user", "content": user},
    ]


__all__ = [
    "prompts_path",
    "load_prompts",
    "fill_prompt_template",
    "build_proposal_messages",
    "build_agreement_messages",
]
