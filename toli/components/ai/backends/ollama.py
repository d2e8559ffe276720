# toli/components/ai/backends/ollama.py
"""Ollama backend for toli.

Talks to a local Ollama server through ``/api/generate``.
"""
import json
from typing import List, Optional, Sequence

from toli.constants import DEFAULT_TEMPERATURE, MAX_ATTEMPTS, OLLAMA_DEFAULT_MODEL
from toli.components.ai.backends.base import LLMBackend, scope_aliases
from toli.components.ai.errors import FormatError
from toli.components.ai.models import Command, CommandOption, ResponseType
from toli.components.ai.prompts import (
    build_alias_prompt,
    build_explain_prompt,
    build_translate_prompt,
    join_prompt,
)
from toli.components.ai.repair import collect_options, translate_with_repair
from toli.components.ai.transport import HttpTransport
from toli.utils.logging import get_logger

logger = get_logger(__name__)


class OllamaBackend(LLMBackend):
    """Local-endpoint backend."""

    name = "ollama"

    def __init__(
        self,
        endpoint: str,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_attempts: int = MAX_ATTEMPTS,
        transport: Optional[HttpTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.model = model or OLLAMA_DEFAULT_MODEL
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._transport = transport or HttpTransport()

    @property
    def generate_url(self) -> str:
        return f"{self.endpoint}/api/generate"

    async def _complete(self, system: str, user: str) -> str:
        payload = {
            "model": self.model,
            "prompt": join_prompt(system, user),
            "stream": False,
            "options": {"temperature": self.temperature},
        }
        data = await self._transport.post_json(self.generate_url, payload)

        text = data.get("response")
        if not isinstance(text, str):
            raise FormatError("Invalid response format: missing 'response' field", raw=json.dumps(data))
        return text

    async def translate_to_command(self, query: str, additional_context: str) -> List[ResponseType]:
        def prompt(failures: Sequence[str]):
            return build_translate_prompt(query, additional_context, failures)

        return await translate_with_repair(self._complete, prompt, self.max_attempts)

    async def explain_command(self, command: str, additional_context: str) -> ResponseType:
        system, user = build_explain_prompt(command, additional_context)
        text = (await self._complete(system, user)).strip()
        if not text:
            raise FormatError("Model returned an empty explanation")
        return Command(option=CommandOption(command=command, explanation=text, confidence=1.0))

    async def suggest_aliases(self, command: str, additional_context: str) -> List[CommandOption]:
        def prompt(failures: Sequence[str]):
            return build_alias_prompt(command, additional_context, failures)

        options = await collect_options(self._complete, prompt, allow_empty=True, max_attempts=self.max_attempts)
        if options is None:
            logger.warning(f"Giving up on alias suggestions for {command!r}")
            return []
        return scope_aliases(options, command)

    async def close(self) -> None:
        await self._transport.close()
