# toli/components/ai/models.py
"""
Shared response vocabulary spoken by every backend.

A backend turns model output into ``CommandOption`` values and the
classifier turns each of those into exactly one ``ResponseType`` variant.
"""
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CommandOption(BaseModel):
    """A single command suggestion as reported by the model."""
    model_config = ConfigDict(frozen=True)

    command: str = Field(..., min_length=1, description="The suggested shell command")
    explanation: str = Field("", description="What the command does")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model's self-reported confidence")


class ResponseKind(str, Enum):
    COMMAND = "command"
    SCRIPT_RECOMMENDED = "script_recommended"
    UNCERTAIN = "uncertain"


class Command(BaseModel):
    """High-confidence suggestion, safe to offer for direct execution."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[ResponseKind.COMMAND] = ResponseKind.COMMAND
    option: CommandOption


class ScriptRecommended(BaseModel):
    """Medium-confidence suggestion that needs review before it is run."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[ResponseKind.SCRIPT_RECOMMENDED] = ResponseKind.SCRIPT_RECOMMENDED
    script: str
    # Kept for display only; execution uses ``script``
    option: Optional[CommandOption] = None


class Uncertain(BaseModel):
    """Advisory text. Never executable."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[ResponseKind.UNCERTAIN] = ResponseKind.UNCERTAIN
    message: str


ResponseType = Union[Command, ScriptRecommended, Uncertain]


class ClassifiedResponses(BaseModel):
    """Ordered result of a translate call, handy for dumping to JSON."""
    responses: List[ResponseType] = Field(default_factory=list)
