from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from docgen.llm import Drafter


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def make_client():
    """Factory for a stubbed OpenAI client: returns `content` or raises `error`."""

    def _make(content="EXECUTIVE SUMMARY\n\nWe will deliver.", error=None):
        client = MagicMock()
        if error is not None:
            client.chat.completions.create.side_effect = error
        else:
            client.chat.completions.create.return_value = _completion(content)
        return client

    return _make


@pytest.fixture
def make_drafter(make_client):
    def _make(content="EXECUTIVE SUMMARY\n\nWe will deliver.", error=None, fallback_on_empty=True):
        return Drafter(client=make_client(content, error), model="test-model", fallback_on_empty=fallback_on_empty)

    return _make
