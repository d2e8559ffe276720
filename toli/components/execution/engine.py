# toli/components/execution/engine.py
"""
Engine for executing a selected suggestion.

This is the execution boundary: only ``Command`` and ``ScriptRecommended``
responses get past ``command_for``. No sandboxing is attempted.
"""
import asyncio
import shlex
from typing import List, Optional

from toli.components.ai.errors import NotExecutableError
from toli.components.ai.models import Command, ResponseType, ScriptRecommended
from toli.utils.logging import get_logger

logger = get_logger(__name__)

# Anything here needs a real shell to mean what the model intended
SHELL_OPERATORS = ("|", "&&", "||", ";", ">", "<", "$(", "`", "*", "?", "~")

COMMAND_NOT_FOUND = 127
CANNOT_EXECUTE = 126


def needs_shell(command: str) -> bool:
    return "\n" in command or any(op in command for op in SHELL_OPERATORS)


def exec_args(command: str) -> Optional[List[str]]:
    """Split a command for direct exec; None when only a shell can make sense of it."""
    try:
        args = shlex.split(command)
    except ValueError:
        return None
    return args or None


class ExecutionEngine:
    """Runs commands with the user's terminal attached."""

    def __init__(self, shell: Optional[str] = None):
        self._shell = shell
        self._logger = logger

    def command_for(self, response: ResponseType) -> str:
        """
        Return the runnable text of a response.

        Raises:
            NotExecutableError: If the response is advisory only.
        """
        if isinstance(response, Command):
            return response.option.command
        if isinstance(response, ScriptRecommended):
            return response.script
        self._logger.warning(f"Refusing to execute advisory response: {response!r}")
        raise NotExecutableError("Uncertain responses cannot be executed")

    async def execute_command(self, command: str, dry_run: bool = False) -> int:
        """
        Execute a shell command and return its exit status.

        Args:
            command: The shell command to execute.
            dry_run: Log the command instead of running it.

        Returns:
            The process exit status.
        """
        self._logger.info(f"Preparing to execute command: {command}")

        if dry_run:
            self._logger.info(f"DRY RUN: Would execute command: {command}")
            return 0

        args = None if needs_shell(command) else exec_args(command)
        try:
            if args is None:
                # Let the shell report unbalanced quotes and the like
                process = await asyncio.create_subprocess_shell(command, executable=self._shell)
            else:
                process = await asyncio.create_subprocess_exec(*args)
        except FileNotFoundError as e:
            self._logger.error(f"Command not found: {e}")
            return COMMAND_NOT_FOUND
        except OSError as e:
            self._logger.error(f"Cannot execute command: {e}")
            return CANNOT_EXECUTE

        returncode = await process.wait()
        self._logger.debug(f"Command completed with return code: {returncode}")
        return returncode

    async def execute_response(self, response: ResponseType, dry_run: bool = False) -> int:
        """Check the execution boundary, then run the response's command."""
        command = self.command_for(response)
        return await self.execute_command(command, dry_run=dry_run)


# Global execution engine instance
execution_engine = ExecutionEngine()
