# toli/components/ai/backends/base.py
"""Abstract backend interface for model integrations."""
import re
import shlex
from abc import ABC, abstractmethod
from typing import List, Optional

from toli.components.ai.errors import UnsupportedOperationError
from toli.components.ai.models import CommandOption, ResponseType

_ALIAS_DEFINITION = re.compile(r"^\s*alias\s+[^=\s]+=(.*)$", re.DOTALL)


class LLMBackend(ABC):
    """
    Contract every model integration implements.

    ``translate_to_command`` must always return something displayable.
    ``explain_command`` and ``suggest_aliases`` fail closed with
    ``UnsupportedOperationError`` unless a backend overrides them.
    """

    name: str = "backend"

    @abstractmethod
    async def translate_to_command(self, query: str, additional_context: str) -> List[ResponseType]:
        """Translate a natural language query into classified suggestions."""

    async def explain_command(self, command: str, additional_context: str) -> ResponseType:
        """Explain an existing command."""
        raise UnsupportedOperationError(f"{self.name} does not support explaining commands")

    async def suggest_aliases(self, command: str, additional_context: str) -> List[CommandOption]:
        """Suggest aliases for exactly one command."""
        raise UnsupportedOperationError(f"{self.name} does not support alias suggestions")

    async def close(self) -> None:
        """Release any network resources."""

    async def __aenter__(self) -> "LLMBackend":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _split(text: str) -> List[str]:
    try:
        return shlex.split(text)
    except ValueError:
        return text.split()


def command_words(command: str) -> List[str]:
    """Words of a command line from the program name on, skipping leading ``sudo``/``env`` and VAR=value."""
    words = _split(command)
    for index, token in enumerate(words):
        if token in ("sudo", "env") or re.match(r"^[A-Za-z_][A-Za-z0-9_]*=", token):
            continue
        return words[index:]
    return []


def base_command(command: str) -> Optional[str]:
    """First word of a command line, skipping leading ``sudo``/``env`` and VAR=value."""
    words = command_words(command)
    return words[0] if words else None


def alias_body(definition: str) -> str:
    """The command an ``alias name='body'`` definition runs; the text itself otherwise."""
    match = _ALIAS_DEFINITION.match(definition)
    if not match:
        return definition.strip()
    body = match.group(1).strip()
    if len(body) >= 2 and body[0] == body[-1] and body[0] in ("'", '"'):
        body = body[1:-1]
    return body


def alias_targets(option: CommandOption, command: str) -> bool:
    """Whether an alias suggestion runs ``command`` itself, possibly with extra arguments."""
    target = command_words(command)
    if not target:
        return False
    return command_words(alias_body(option.command))[:len(target)] == target


def scope_aliases(options: List[CommandOption], command: str) -> List[CommandOption]:
    """Drop alias suggestions that run some other command."""
    return [option for option in options if alias_targets(option, command)]
