"""Client utilities for interacting with OpenAI-compatible chat models.

This module contains configuration loading and convenience helpers to
create a client and perform simple chat completions.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Optional, Tuple

from openai import OpenAI

from docgen.config import default_config_dir

DEFAULT_API_KEY_ENV = "OPENAI_API_KEY"


def models_path() -> str:
    """Path of the JSON configuration file with models and keys."""
    return os.path.join(default_config_dir(), "models.json")


def _load_config(path: str) -> Dict:
    """Read the models file; the top level has to be a JSON object.

    Doxygen:
    - @param path: Path to models.json.
    - @return: Parsed configuration dictionary.
    - @throws FileNotFoundError: If the file is missing.
    - @throws ValueError: On invalid JSON or a non-object top level.
    """
    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Model configuration must be a JSON object: {path}")
    return cfg


def get_picked_model(path: Optional[str] = None) -> Tuple[str, Optional[str], Optional[str]]:
    """Return the selected model id, its API key and base URL.

    The configuration file must contain the following structure:
    - model_number_picked: integer index into the "models" array
    - models: list of items with fields:
      - provider: string (e.g., "openai")
      - model: string (e.g., "gpt-5-nano")
      - api_key: string, optional; empty means read `api_key_env`
      - api_key_env: environment variable holding the key (default OPENAI_API_KEY)
      - base_url: optional endpoint for OpenAI-compatible providers

    Doxygen:
    - @param path: models.json to read; `models_path()` when None.
    - @return: (model, api_key, base_url); api_key is None when neither the
      entry nor the environment provides one.
    - @throws ValueError: If index is invalid or the model id is missing.
    """
    cfg = _load_config(path or models_path())
    models: List[Dict] = cfg.get("models", [])
    idx = cfg.get("model_number_picked")

    if not isinstance(idx, int):
        raise ValueError("Config must include integer 'model_number_picked'.")
    if idx < 0 or idx >= len(models):
        raise ValueError("'model_number_picked' is out of range for available models.")

    item = models[idx]
    model = item.get("model")
    if not model:
        raise ValueError("Selected model entry must include 'model'.")
    api_key = item.get("api_key") or os.environ.get(item.get("api_key_env") or DEFAULT_API_KEY_ENV) or None
    return model, api_key, item.get("base_url") or None


def get_openai_client(api_key: str, base_url: Optional[str] = None) -> OpenAI:
    """Create an OpenAI client, optionally pointed at a compatible provider.

    Doxygen:
    - @param api_key: API key for the selected model/provider.
    - @param base_url: Alternative endpoint; None keeps the OpenAI default.
    - @return: Configured `OpenAI` client instance.
    """
    if base_url:
        return OpenAI(api_key=api_key, base_url=base_url)
    return OpenAI(api_key=api_key)


def chat_completion(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, str]],
    timeout: float | None = None,
) -> Optional[str]:
    """Send a chat completion request and return text content.

    Doxygen:
    - @param client: OpenAI instance created by `get_openai_client`.
    - @param model: Target model identifier.
    - @param messages: List of role/content dictionaries for the chat.
    - @param timeout: Request timeout in seconds; None disables timeout.
    - @return: Text content of the first completion choice, None when absent.
    """
    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        timeout=timeout,
    )
    if not completion.choices:
        return None
    return completion.choices[0].message.content


def test_model_health(client: OpenAI, model: str, timeout: float | None = 10.0) -> None:
    """Perform a lightweight health check request.

    Doxygen:
    - @param client: OpenAI instance.
    - @param model: Model identifier.
    - @param timeout: Request timeout in seconds.
    - @throws RuntimeError: If the request fails.
    """
    try:
        _ = chat_completion(client, model, messages=[{"role": "user", "content": "ping"}], timeout=timeout)
    except Exception as e:
        raise RuntimeError(f"Model {model} health check failed: {e}") from e

