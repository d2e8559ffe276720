# tests/conftest.py
"""
Common test fixtures for toli.
"""
import json
from typing import Any, Dict, List, Optional

import pytest

from toli.config import ConfigManager
from toli.components.ai.backends.base import LLMBackend
from toli.components.ai.models import CommandOption, ResponseType


class FakeTransport:
    """Stands in for HttpTransport: replays queued replies and records requests."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append({"url": url, "payload": payload})
        if not self.replies:
            raise AssertionError("FakeTransport ran out of replies")
        # The last reply repeats forever
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


class FakeBackend(LLMBackend):
    """Backend with canned answers for CLI tests."""

    name = "fake"

    def __init__(
        self,
        responses: Optional[List[ResponseType]] = None,
        explanation: Optional[ResponseType] = None,
        aliases: Optional[List[CommandOption]] = None,
        error: Optional[Exception] = None,
    ):
        self.responses = responses or []
        self.explanation = explanation
        self.aliases = aliases or []
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    async def translate_to_command(self, query, additional_context):
        self.calls.append(("translate", query, additional_context))
        if self.error:
            raise self.error
        return self.responses

    async def explain_command(self, command, additional_context):
        self.calls.append(("explain", command, additional_context))
        if self.error:
            raise self.error
        return self.explanation

    async def suggest_aliases(self, command, additional_context):
        self.calls.append(("alias", command, additional_context))
        if self.error:
            raise self.error
        return self.aliases

    async def close(self):
        self.closed = True


def ollama_reply(text: str) -> Dict[str, Any]:
    return {"model": "llama2", "response": text, "done": True}


def openai_reply(text: str) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


def options_json(*options: Dict[str, Any]) -> str:
    return json.dumps(list(options))


@pytest.fixture
def fake_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def fake_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend


@pytest.fixture
def replies():
    """Envelope builders for each provider."""
    return {"ollama": ollama_reply, "openai": openai_reply, "options": options_json}


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides the config layer honours."""
    for name in ("OPENAI_API_KEY", "TOLI_BACKEND", "TOLI_OLLAMA_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_config(tmp_path, clean_env):
    """A ConfigManager writing to a temporary file."""
    return ConfigManager(config_file=tmp_path / "config.toml")
