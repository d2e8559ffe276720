# toli/components/ai/repair.py
"""
Bounded retry loop that feeds unparseable replies back into the prompt.

Each attempt makes exactly one transport call. Transport errors are not
retried here and propagate to the caller; anything that reaches the model
but cannot be parsed is remembered and shown to the model on the next
attempt. The failure list lives only for the duration of one call.
"""
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from toli.constants import MAX_ATTEMPTS
from toli.components.ai.classifier import classify_all
from toli.components.ai.errors import FormatError
from toli.components.ai.models import CommandOption, ResponseType, Uncertain
from toli.components.ai.parser import parse_command_options
from toli.utils.logging import get_logger

logger = get_logger(__name__)

# (system, user) -> raw completion text
CompleteFn = Callable[[str, str], Awaitable[str]]
# earlier failures -> (system, user)
PromptBuilder = Callable[[Sequence[str]], Tuple[str, str]]


async def collect_options(
    complete: CompleteFn,
    build_prompt: PromptBuilder,
    allow_empty: bool = False,
    max_attempts: int = MAX_ATTEMPTS,
) -> Optional[List[CommandOption]]:
    """
    Ask the model until it returns a parseable list of command options.

    Args:
        complete: Sends one prompt and returns the model's raw text.
        build_prompt: Builds the prompt from the failures so far.
        allow_empty: Whether ``[]`` counts as a valid answer.
        max_attempts: Upper bound on transport calls.

    Returns:
        The parsed options, or None once ``max_attempts`` replies have failed.

    Raises:
        TransportError: If the model cannot be reached on any attempt.
    """
    log = logger.with_context(max_attempts=max_attempts)
    failures: List[str] = []

    for attempt in range(1, max_attempts + 1):
        system, user = build_prompt(tuple(failures))

        try:
            raw = await complete(system, user)
        except FormatError as e:
            log.warning(f"Attempt {attempt}: unusable response envelope: {e}")
            failures.append(e.raw)
            continue

        try:
            options = parse_command_options(raw)
        except FormatError as e:
            log.warning(f"Attempt {attempt}: {e}")
            failures.append(raw)
            continue

        if not options and not allow_empty:
            log.warning(f"Attempt {attempt}: model returned no suggestions")
            failures.append(raw)
            continue

        log.debug(f"Got {len(options)} option(s) on attempt {attempt}")
        return options

    logger.error(f"No valid response after {max_attempts} attempts")
    return None


async def translate_with_repair(
    complete: CompleteFn,
    build_prompt: PromptBuilder,
    max_attempts: int = MAX_ATTEMPTS,
) -> List[ResponseType]:
    """
    Run the repair loop and classify the result.

    Exhaustion is not an error: it yields a single ``Uncertain`` entry so
    the caller always has something to show.
    """
    options = await collect_options(complete, build_prompt, max_attempts=max_attempts)
    if options is None:
        return [Uncertain(message=f"failed after {max_attempts} attempts")]
    return classify_all(options)
