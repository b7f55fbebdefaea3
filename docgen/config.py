from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import find_dotenv, load_dotenv

from docgen.docs.model import Letterhead

logger = logging.getLogger(__name__)

_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR_ENV = "DOCGEN_CONFIG_DIR"

DEFAULT_MODEL = "gpt-5-nano"
DEFAULT_PORT = 3001

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Settings:
    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    port: int = DEFAULT_PORT
    request_timeout: Optional[float] = None
    fallback_on_empty: bool = True
    letterhead: Letterhead = field(default_factory=Letterhead)
    prompts: Dict[str, str] = field(default_factory=dict)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    norm = raw.strip().lower()
    if norm in _TRUE:
        return True
    if norm in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'.")


def _env_timeout(name: str) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    value = float(raw)
    # <= 0 means no timeout
    return value if value > 0 else None


def default_config_dir() -> str:
    """`DOCGEN_CONFIG_DIR` if set, else `config/` at the project root; read on every call."""
    return os.path.abspath(os.environ.get(CONFIG_DIR_ENV) or os.path.join(_PROJECT_ROOT, "config"))


def load_env_file() -> str:
    """Load the nearest `.env` above the working directory; existing variables win."""
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)
        logger.debug("Loaded environment from %s", path)
    return path


def load_settings(config_dir: Optional[str] = None) -> Settings:
    """Build settings from config/*.json plus environment variables (.env honoured).

    Missing or invalid model configuration is reported as a warning and the
    defaults are kept; the API key then has to come from the environment or
    from each request.
    """
    from docgen.llm.client import get_picked_model
    from docgen.llm.prompts import load_prompts

    load_env_file()
    base = config_dir or default_config_dir()
    settings = Settings()

    models_path = os.path.join(base, "models.json")
    if os.path.exists(models_path):
        try:
            settings.model, settings.api_key, settings.base_url = get_picked_model(models_path)
        except ValueError as e:
            logger.warning("Invalid model configuration in %s: %s", models_path, e)
    else:
        logger.warning("models.json not found at %s; using model %s", models_path, DEFAULT_MODEL)

    if not settings.api_key:
        settings.api_key = os.environ.get("OPENAI_API_KEY") or None
    if not settings.api_key:
        logger.warning("No API key configured; requests must supply 'apiKey'.")

    settings.letterhead = Letterhead.from_json(os.path.join(base, "letterhead.json"))
    settings.prompts = load_prompts(os.path.join(base, "prompts.json"))

    settings.port = int(os.environ.get("PORT") or DEFAULT_PORT)
    settings.request_timeout = _env_timeout("DOCGEN_REQUEST_TIMEOUT")
    settings.fallback_on_empty = _env_bool("DOCGEN_FALLBACK_ON_EMPTY", True)
    return settings
