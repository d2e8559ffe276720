# toli/components/ai/parser.py
"""
Turns raw model text into a list of ``CommandOption``.

Models are asked for a bare JSON array but often wrap it in prose or code
fences, or over-escape it. Parsing tries the body of the first code fence,
if any, and then the whole trimmed text. For each it tries the text itself,
an un-escaped copy, and the slice between the first ``[`` and the last ``]``.
"""
import json
import re
from typing import Any, Iterator, List

from pydantic import TypeAdapter, ValidationError

from toli.components.ai.errors import FormatError
from toli.components.ai.models import CommandOption
from toli.utils.logging import get_logger

logger = get_logger(__name__)

_OPTIONS_ADAPTER = TypeAdapter(List[CommandOption])

_CODE_FENCE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)


def unescape_response(text: str) -> str:
    """Undo the usual over-escaping: \\" -> ", \\n -> newline, \\\\ -> \\."""
    return (
        text.replace('\\"', '"')
        .replace("\\n", "\n")
        .replace("\\\\", "\\")
    )


def extract_array(text: str) -> str:
    """Slice from the first '[' to the last ']'; empty string if there is none."""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return ""
    return text[start:end + 1]


def _unwrap_string_literal(text: str) -> str:
    # A reply that is itself one JSON string literal
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            inner = json.loads(text)
        except json.JSONDecodeError:
            return text
        if isinstance(inner, str):
            return inner.strip()
    return text


def _candidates(response_text: str) -> Iterator[str]:
    text = response_text.strip()

    bases = [text]
    fenced = _CODE_FENCE.search(text)
    if fenced:
        bases.insert(0, fenced.group(1).strip())

    seen = set()
    for base in bases:
        base = _unwrap_string_literal(base)
        for variant in (base, unescape_response(base)):
            for candidate in (variant, extract_array(variant)):
                if candidate and candidate not in seen:
                    seen.add(candidate)
                    yield candidate


def parse_command_options(response_text: str) -> List[CommandOption]:
    """
    Parse a model reply into command options.

    Args:
        response_text: The raw completion text.

    Returns:
        The options in the order the model gave them. May be empty when the
        model returned ``[]``.

    Raises:
        FormatError: If no candidate slice is a JSON array of valid options.
    """
    last_error: Any = None
    for candidate in _candidates(response_text):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e
            continue

        if not isinstance(data, list):
            last_error = f"expected a JSON array, got {type(data).__name__}"
            continue

        try:
            options = _OPTIONS_ADAPTER.validate_python(data)
        except ValidationError as e:
            last_error = e
            continue

        logger.debug(f"Parsed {len(options)} command option(s) from model response")
        return options

    logger.debug(f"Could not parse model response: {last_error}")
    raise FormatError(f"Could not parse model response: {last_error}", raw=response_text)
