# toli/components/ai/classifier.py
"""
Confidence-based classification of command suggestions.

The prompt asks the model to self-report confidence in the same bands used
here, so the score is trusted as-is.
"""
from typing import Iterable, List

from toli.constants import COMMAND_CONFIDENCE_THRESHOLD, SCRIPT_CONFIDENCE_THRESHOLD
from toli.components.ai.models import (
    Command,
    CommandOption,
    ResponseType,
    ScriptRecommended,
    Uncertain,
)


def classify(option: CommandOption) -> ResponseType:
    """Map one suggestion to its response variant."""
    if option.confidence >= COMMAND_CONFIDENCE_THRESHOLD:
        return Command(option=option)
    if option.confidence >= SCRIPT_CONFIDENCE_THRESHOLD:
        return ScriptRecommended(script=option.command, option=option)
    return Uncertain(message=f"Uncertain about command: {option.command}")


def classify_all(options: Iterable[CommandOption]) -> List[ResponseType]:
    """Classify suggestions, preserving the model's order."""
    return [classify(option) for option in options]
