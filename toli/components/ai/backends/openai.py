# toli/components/ai/backends/openai.py
"""OpenAI backend for toli.

Uses the chat completions endpoint of the OpenAI API, or of any server that
speaks the same protocol when ``base_url`` points elsewhere.
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from toli.constants import (
    DEFAULT_TEMPERATURE,
    MAX_ATTEMPTS,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from toli.components.ai.backends.base import LLMBackend, scope_aliases
from toli.components.ai.errors import FormatError
from toli.components.ai.models import Command, CommandOption, ResponseType
from toli.components.ai.prompts import (
    build_alias_prompt,
    build_explain_prompt,
    build_translate_prompt,
)
from toli.components.ai.repair import collect_options, translate_with_repair
from toli.components.ai.transport import HttpTransport
from toli.utils.logging import get_logger

logger = get_logger(__name__)


def extract_message_content(data: Dict[str, Any]) -> str:
    """Pull ``choices[0].message.content`` out of a chat completion envelope."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise FormatError(f"Invalid response format: {e!r}", raw=json.dumps(data)) from e
    if not isinstance(content, str):
        raise FormatError("Invalid response format: message content is not text", raw=json.dumps(data))
    return content


class OpenAIBackend(LLMBackend):
    """Hosted-API backend."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: str = OPENAI_DEFAULT_BASE_URL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_attempts: int = MAX_ATTEMPTS,
        transport: Optional[HttpTransport] = None,
    ):
        self.model = model or OPENAI_DEFAULT_MODEL
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._transport = transport or HttpTransport(
            headers={"Authorization": f"Bearer {api_key}"},
        )

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    async def _complete(self, system: str, user: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": self.temperature,
            "stream": False,
        }
        data = await self._transport.post_json(self.completions_url, payload)
        return extract_message_content(data)

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
