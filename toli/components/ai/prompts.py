# toli/components/ai/prompts.py
"""
Prompt engineering for toli.

Every prompt is split into a system part (instructions and output format)
and a user part (environment context, the request, and any earlier invalid
replies). Chat backends send the parts as separate messages; completion
backends join them with ``join_prompt``.
"""
from typing import List, Sequence, Tuple

from toli.constants import COMMAND_CONFIDENCE_THRESHOLD, SCRIPT_CONFIDENCE_THRESHOLD
from toli.utils.logging import get_logger

logger = get_logger(__name__)

# Base system instructions
SYSTEM_INSTRUCTIONS = """
You are toli, a command-line assistant.
Your goal is to translate the user's natural language request into shell commands
that fit the user's environment.

Follow these guidelines:
1. Prefer standard commands available on the user's system.
2. Offer up to three alternatives, best first.
3. Keep each explanation to one or two sentences.
4. Be honest about how sure you are: the confidence you report decides whether
   the command is offered for direct execution.
"""

TRANSLATE_RESPONSE_FORMAT = f"""
Expected response format: a JSON array and nothing else, no prose, no code fences.
[
    {{
        "command": "the_shell_command",
        "explanation": "what the command does",
        "confidence": 0.0
    }}
]

Confidence must be a number between 0 and 1:
- {COMMAND_CONFIDENCE_THRESHOLD} or higher: a single command you are sure is correct and safe to run as-is.
- {SCRIPT_CONFIDENCE_THRESHOLD} up to {COMMAND_CONFIDENCE_THRESHOLD}: probably right, or a multi-step script the user should review first.
- below {SCRIPT_CONFIDENCE_THRESHOLD}: a guess.
"""

EXPLAIN_INSTRUCTIONS = """
You are toli, a command-line assistant.
Explain what the given shell command does, flag by flag, in plain language.
Mention anything destructive or surprising. Reply with plain text only.
"""

ALIAS_INSTRUCTIONS = """
You are toli, a command-line assistant.
Suggest short, memorable shell aliases for the one command the user gives you.
Only suggest aliases whose body runs that command (optionally with extra flags).
Never suggest aliases for any other command. If no alias makes sense, return [].
"""

ALIAS_RESPONSE_FORMAT = """
Expected response format: a JSON array and nothing else, no prose, no code fences.
[
    {
        "command": "alias gs='git status'",
        "explanation": "why this alias is useful",
        "confidence": 0.0
    }
]
"""

PREVIOUS_FAILURES_HEADER = """
Your previous responses could not be parsed as the required JSON array.
Here they are, verbatim. Produce valid JSON this time.
"""


def _context_section(additional_context: str) -> str:
    if not additional_context:
        return ""
    return f"User environment:\n{additional_context.strip()}\n"


def format_previous_failures(failures: Sequence[str]) -> str:
    """Render earlier unparseable replies, numbered, for the retry prompt."""
    if not failures:
        return ""
    parts = [PREVIOUS_FAILURES_HEADER.strip()]
    for number, raw in enumerate(failures, start=1):
        parts.append(f"--- invalid response {number} ---\n{raw}\n--- end of response {number} ---")
    return "\n\n".join(parts) + "\n"


def build_translate_prompt(
    query: str,
    additional_context: str,
    failures: Sequence[str] = (),
) -> Tuple[str, str]:
    """
    Build the prompt asking for command suggestions.

    Args:
        query: The user's natural language request.
        additional_context: Free-text description of the user's environment.
        failures: Raw replies from earlier attempts that failed to parse.

    Returns:
        A ``(system, user)`` pair.
    """
    system = f"{SYSTEM_INSTRUCTIONS.strip()}\n\n{TRANSLATE_RESPONSE_FORMAT.strip()}"

    sections: List[str] = []
    context = _context_section(additional_context)
    if context:
        sections.append(context)
    sections.append(f"User request: {query}\n")
    retry = format_previous_failures(failures)
    if retry:
        sections.append(retry)

    user = "\n".join(sections)
    logger.debug(f"Built translate prompt with {len(failures)} previous failure(s)")
    return system, user


def build_explain_prompt(command: str, additional_context: str) -> Tuple[str, str]:
    """Build the prompt asking for a plain-text explanation of ``command``."""
    system = EXPLAIN_INSTRUCTIONS.strip()
    user = _context_section(additional_context) + f"\nCommand: {command}\n"
    return system, user.lstrip("\n")


def build_alias_prompt(
    command: str,
    additional_context: str,
    failures: Sequence[str] = (),
) -> Tuple[str, str]:
    """Build the prompt asking for aliases of exactly ``command``."""
    system = f"{ALIAS_INSTRUCTIONS.strip()}\n\n{ALIAS_RESPONSE_FORMAT.strip()}"

    sections: List[str] = []
    context = _context_section(additional_context)
    if context:
        sections.append(context)
    sections.append(f"Command: {command}\n")
    retry = format_previous_failures(failures)
    if retry:
        sections.append(retry)
    return system, "\n".join(sections)


def join_prompt(system: str, user: str) -> str:
    """Flatten a ``(system, user)`` pair into one completion prompt."""
    return f"{system}\n\n{user}\nResponse:"
