# tests/test_execution.py
"""Tests for the command execution engine and suggestion selection."""
from unittest.mock import AsyncMock, patch

import pytest

from toli.components.ai.errors import NotExecutableError
from toli.components.ai.models import Command, CommandOption, ScriptRecommended, Uncertain
from toli.components.execution.engine import ExecutionEngine, exec_args, needs_shell
from toli.components.shell.selection import confirm_script, executable_responses, select_response


@pytest.fixture
def engine():
    """Create an execution engine for testing."""
    return ExecutionEngine()


def _command(text, confidence=0.9):
    return Command(option=CommandOption(command=text, explanation="", confidence=confidence))


def test_command_for_accepts_command_and_script(engine):
    assert engine.command_for(_command("ls -la")) == "ls -la"
    assert engine.command_for(ScriptRecommended(script="make && make install")) == "make && make install"


def test_command_for_rejects_uncertain(engine):
    with pytest.raises(NotExecutableError):
        engine.command_for(Uncertain(message="Uncertain about command: rm -rf /"))


@pytest.mark.asyncio
async def test_uncertain_never_reaches_a_process(engine):
    with patch("toli.components.execution.engine.asyncio.create_subprocess_exec", new=AsyncMock()) as mock_exec, \
            patch("toli.components.execution.engine.asyncio.create_subprocess_shell", new=AsyncMock()) as mock_shell:
        with pytest.raises(NotExecutableError):
            await engine.execute_response(Uncertain(message="failed after 5 attempts"))

    mock_exec.assert_not_called()
    mock_shell.assert_not_called()


@pytest.mark.asyncio
async def test_execute_simple_command_exit_status(engine):
    assert await engine.execute_command("true") == 0
    assert await engine.execute_command("false") == 1


@pytest.mark.asyncio
async def test_execute_shell_command_exit_status(engine):
    assert await engine.execute_command("true && exit 3") == 3


@pytest.mark.asyncio
async def test_missing_program_returns_127(engine):
    assert await engine.execute_command("toli-command-that-does-not-exist --flag") == 127


@pytest.mark.asyncio
async def test_unbalanced_quote_goes_to_the_shell(engine):
    with patch("toli.components.execution.engine.asyncio.create_subprocess_exec", new=AsyncMock()) as mock_exec:
        status = await engine.execute_command("echo it's")

    assert status != 0
    mock_exec.assert_not_called()


@pytest.mark.asyncio
async def test_non_executable_target_returns_126(engine, tmp_path):
    assert await engine.execute_command(str(tmp_path)) == 126


@pytest.mark.asyncio
async def test_dry_run_does_not_execute(engine):
    with patch("toli.components.execution.engine.asyncio.create_subprocess_exec", new=AsyncMock()) as mock_exec:
        status = await engine.execute_response(_command("rm -rf build"), dry_run=True)

    assert status == 0
    mock_exec.assert_not_called()


def test_needs_shell():
    assert needs_shell("ls | wc -l")
    assert needs_shell("echo hi > out.txt")
    assert needs_shell("ls *.pdf")
    assert not needs_shell("git status")


def test_exec_args():
    assert exec_args("git commit -m 'first commit'") == ["git", "commit", "-m", "first commit"]
    assert exec_args("echo it's") is None
    assert exec_args("   ") is None


# --- selection ---

def test_executable_responses_filters_uncertain():
    responses = [Uncertain(message="?"), _command("ls"), ScriptRecommended(script="x")]

    assert executable_responses(responses) == responses[1:]


def test_select_response_with_nothing_executable():
    assert select_response([Uncertain(message="failed after 5 attempts")]) is None


def test_select_single_candidate_without_prompting():
    responses = [_command("ls"), Uncertain(message="?")]

    with patch("toli.components.shell.selection.Prompt.ask") as mock_ask:
        assert select_response(responses) == responses[0]

    mock_ask.assert_not_called()


def test_select_among_several_uses_displayed_numbers():
    responses = [Uncertain(message="?"), _command("ls"), _command("ls -la")]

    with patch("toli.components.shell.selection.Prompt.ask", return_value="3") as mock_ask:
        selected = select_response(responses)

    assert selected == responses[2]
    assert mock_ask.call_args.kwargs["choices"] == ["2", "3", "q"]


def test_select_cancel():
    responses = [_command("ls"), _command("ls -la")]

    with patch("toli.components.shell.selection.Prompt.ask", return_value="q"):
        assert select_response(responses) is None


def test_scripts_require_confirmation():
    with patch("toli.components.shell.selection.Confirm.ask", return_value=False) as mock_confirm:
        assert confirm_script(ScriptRecommended(script="make install")) is False
        assert confirm_script(_command("ls")) is True

    mock_confirm.assert_called_once()
