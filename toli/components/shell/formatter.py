# toli/components/shell/formatter.py
"""
Terminal formatter for toli.

Renders classified responses, explanations and alias tables with rich.
"""
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from toli.constants import COMMAND_CONFIDENCE_THRESHOLD, SCRIPT_CONFIDENCE_THRESHOLD
from toli.components.ai.models import (
    Command,
    CommandOption,
    ResponseType,
    ScriptRecommended,
    Uncertain,
)
from toli.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BOX = box.ROUNDED

COLOR_PALETTE = {
    "border": "#ff0055",
    "success": "#00ff99",
    "warning": "#ffcc00",
    "error": "#ff3355",
    "info": "#00c8ff",
    "subtle": "#6c7280",
}


def confidence_color(confidence: float) -> str:
    if confidence >= COMMAND_CONFIDENCE_THRESHOLD:
        return COLOR_PALETTE["success"]
    if confidence >= SCRIPT_CONFIDENCE_THRESHOLD:
        return COLOR_PALETTE["warning"]
    return COLOR_PALETTE["error"]


class TerminalFormatter:
    """Rich output for suggestions."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def _syntax(self, command: str) -> Syntax:
        return Syntax(command, "bash", theme="vim", word_wrap=True, background_color="default")

    def print_command(self, option: CommandOption, title: Optional[str] = None) -> None:
        """Display a command with syntax highlighting, explanation and confidence."""
        title = title or "Command"
        panel = Panel(
            self._syntax(option.command),
            title=f"[bold {COLOR_PALETTE['border']}]{title}[/bold {COLOR_PALETTE['border']}]",
            border_style=COLOR_PALETTE["border"],
            box=DEFAULT_BOX,
            expand=False,
            padding=(0, 1),
        )
        self._console.print(panel)
        if option.explanation:
            self._console.print(option.explanation)
        color = confidence_color(option.confidence)
        self._console.print(f"[bold]Confidence:[/bold] [{color}]{option.confidence:.2f}[/{color}]")

    def print_script(self, response: ScriptRecommended, title: Optional[str] = None) -> None:
        title = title or "Script (review before running)"
        panel = Panel(
            self._syntax(response.script),
            title=f"[bold {COLOR_PALETTE['warning']}]{title}[/bold {COLOR_PALETTE['warning']}]",
            border_style=COLOR_PALETTE["warning"],
            box=DEFAULT_BOX,
            expand=False,
            padding=(0, 1),
        )
        self._console.print(panel)
        if response.option is not None and response.option.explanation:
            self._console.print(response.option.explanation)

    def print_uncertain(self, response: Uncertain) -> None:
        self._console.print(Text(response.message, style=f"italic {COLOR_PALETTE['subtle']}"))

    def print_response(self, response: ResponseType, index: Optional[int] = None) -> None:
        prefix = f"{index}. " if index is not None else ""
        if isinstance(response, Command):
            self.print_command(response.option, title=f"{prefix}Command")
        elif isinstance(response, ScriptRecommended):
            self.print_script(response, title=f"{prefix}Script (review before running)")
        else:
            self.print_uncertain(response)

    def print_responses(self, responses: Sequence[ResponseType]) -> None:
        """Display every response in the model's order, numbered when there are several."""
        numbered = len(responses) > 1
        for index, response in enumerate(responses, start=1):
            self.print_response(response, index if numbered else None)
            if index < len(responses):
                self._console.print("")

    def print_explanation(self, response: ResponseType) -> None:
        if isinstance(response, Command):
            self._console.print(Panel(
                self._syntax(response.option.command),
                border_style=COLOR_PALETTE["info"],
                box=DEFAULT_BOX,
                expand=False,
            ))
            self._console.print(response.option.explanation)
        else:
            self.print_response(response)

    def print_aliases(self, command: str, aliases: List[CommandOption]) -> None:
        if not aliases:
            self._console.print(f"[{COLOR_PALETTE['subtle']}]No sensible alias for[/] {command}")
            return

        table = Table(title=f"Aliases for {command}", box=DEFAULT_BOX, expand=False)
        table.add_column("Alias", style=f"bold {COLOR_PALETTE['info']}")
        table.add_column("Why")
        table.add_column("Confidence", justify="right")
        for option in aliases:
            color = confidence_color(option.confidence)
            table.add_row(option.command, option.explanation, f"[{color}]{option.confidence:.2f}[/{color}]")
        self._console.print(table)

    def print_error(self, title: str, message: str) -> None:
        self._console.print(f"[bold {COLOR_PALETTE['error']}]{title}:[/bold {COLOR_PALETTE['error']}] {message}")


terminal_formatter = TerminalFormatter()
