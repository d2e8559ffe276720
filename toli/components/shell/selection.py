# toli/components/shell/selection.py
"""
Interactive choice of which suggestion to run.
"""
from typing import List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from toli.components.ai.models import ResponseType, ScriptRecommended, Uncertain
from toli.utils.logging import get_logger

logger = get_logger(__name__)


def executable_responses(responses: Sequence[ResponseType]) -> List[ResponseType]:
    """Everything except advisory ``Uncertain`` entries, in order."""
    return [response for response in responses if not isinstance(response, Uncertain)]


def select_response(responses: Sequence[ResponseType], console: Optional[Console] = None) -> Optional[ResponseType]:
    """
    Pick the response to execute.

    Returns None when nothing is executable or the user declines. A single
    candidate is returned without prompting.
    """
    candidates = executable_responses(responses)
    if not candidates:
        logger.info("No executable suggestions to choose from")
        return None
    if len(candidates) == 1:
        return candidates[0]

    # Numbers match the ones printed next to each suggestion
    numbers = [str(index) for index, response in enumerate(responses, start=1) if response in candidates]
    choice = Prompt.ask(
        "Run which suggestion? (q to cancel)",
        choices=numbers + ["q"],
        default=numbers[0],
        console=console,
    )
    if choice == "q":
        return None
    return responses[int(choice) - 1]


def confirm_script(response: ResponseType, console: Optional[Console] = None) -> bool:
    """Scripts need an explicit yes; direct commands do not."""
    if not isinstance(response, ScriptRecommended):
        return True
    return Confirm.ask("This is a script recommendation. Run it anyway?", default=False, console=console)
