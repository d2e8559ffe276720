# toli/components/cli/main.py
"""
Main command-line interface for toli.
"""
import asyncio
import traceback
from typing import List, NoReturn

import typer

from toli import __version__
from toli.constants import APP_DESCRIPTION
from toli.config import AppConfig, BackendKind, OllamaConfig, OpenAIConfig, config_manager
from toli.components.ai.backends import create_backend
from toli.components.ai.errors import (
    ConfigurationError,
    FormatError,
    NotExecutableError,
    ToliError,
    TransportError,
    UnsupportedOperationError,
)
from toli.components.ai.models import ClassifiedResponses
from toli.components.execution import execution_engine
from toli.components.shell import confirm_script, select_response, terminal_formatter
from toli.utils.logging import setup_logging, get_logger

app = typer.Typer(help=APP_DESCRIPTION)

# Free-form words may carry the target command's own flags
PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}
logger = get_logger(__name__)
console = terminal_formatter.console

ERROR_TITLES = {
    TransportError: "Could not reach the model",
    FormatError: "Model responded but the response was unusable",
    UnsupportedOperationError: "Not supported",
    ConfigurationError: "Configuration error",
    NotExecutableError: "Refusing to execute",
}


def version_callback(value: bool):
    """Display version information and exit."""
    if value:
        console.print(f"toli version: {__version__}")
        raise typer.Exit()


def _fail(error: ToliError) -> NoReturn:
    """Report a toli error and exit with status 1."""
    title = next(
        (label for kind, label in ERROR_TITLES.items() if isinstance(error, kind)),
        "Error",
    )
    logger.error(f"{title}: {error}")
    terminal_formatter.print_error(title, str(error))
    if config_manager.config.debug:
        console.print(traceback.format_exc())
    raise typer.Exit(1)


@app.callback()
def main(
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug mode"
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """toli: natural language interface for shell commands"""
    setup_logging(debug=debug)
    config = config_manager.load_config()
    if config.debug and not debug:
        setup_logging(debug=True)
    config.debug = config.debug or debug


async def _translate(config: AppConfig, query: str):
    async with create_backend(config) as backend:
        return await backend.translate_to_command(query, config.additional_context)


async def _explain(config: AppConfig, command: str):
    async with create_backend(config) as backend:
        return await backend.explain_command(command, config.additional_context)


async def _aliases(config: AppConfig, command: str):
    async with create_backend(config) as backend:
        return await backend.suggest_aliases(command, config.additional_context)


@app.command(context_settings=PASSTHROUGH)
def request(
    query: List[str] = typer.Argument(
        ..., help="What you want to do, in plain language."
    ),
    execute: bool = typer.Option(
        False, "--execute", "-e", help="Execute the chosen command."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be executed without running it."
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the classified suggestions as JSON."
    ),
):
    """Translate a natural language request into shell commands."""
    full_query = " ".join(query)
    config = config_manager.config

    try:
        responses = asyncio.run(_translate(config, full_query))
    except ToliError as e:
        _fail(e)

    if as_json:
        console.print_json(ClassifiedResponses(responses=responses).model_dump_json())
    else:
        terminal_formatter.print_responses(responses)

    if not (execute or dry_run):
        return

    selected = select_response(responses, console=console)
    if selected is None:
        console.print("Nothing to execute.")
        raise typer.Exit(1)
    if not confirm_script(selected, console=console):
        console.print("Cancelled.")
        raise typer.Exit(1)

    try:
        status = asyncio.run(execution_engine.execute_response(selected, dry_run=dry_run))
    except ToliError as e:
        _fail(e)
    raise typer.Exit(status)


@app.command(context_settings=PASSTHROUGH)
def explain(
    command: List[str] = typer.Argument(
        ..., help="The command to explain."
    ),
):
    """Explain what an existing command does."""
    full_command = " ".join(command)
    config = config_manager.config

    try:
        response = asyncio.run(_explain(config, full_command))
    except ToliError as e:
        _fail(e)

    terminal_formatter.print_explanation(response)


@app.command(context_settings=PASSTHROUGH)
def alias(
    command: List[str] = typer.Argument(
        ..., help="The command to suggest aliases for."
    ),
):
    """Suggest shell aliases for a command."""
    full_command = " ".join(command)
    config = config_manager.config

    try:
        aliases = asyncio.run(_aliases(config, full_command))
    except ToliError as e:
        _fail(e)

    terminal_formatter.print_aliases(full_command, aliases)


@app.command()
def init():
    """
    Configure the backend toli talks to.
    """
    current = config_manager.config
    console.print(f"Configuring toli ({config_manager.config_file})")

    backend = typer.prompt(
        "Backend (ollama/openai)", default=current.backend.value
    ).strip().lower()
    try:
        kind = BackendKind(backend)
    except ValueError:
        console.print(f"[red]Unknown backend:[/red] {backend}")
        raise typer.Exit(1)

    openai = current.openai or OpenAIConfig()
    ollama = current.ollama or OllamaConfig()
    if kind == BackendKind.OPENAI:
        if openai.api_key and typer.confirm("Keep the existing API key?", default=True):
            api_key = openai.api_key
        else:
            api_key = typer.prompt("OpenAI API key", hide_input=True)
        model = typer.prompt("Model", default=openai.model)
        openai = openai.model_copy(update={"api_key": api_key, "model": model})
    else:
        endpoint = typer.prompt("Ollama endpoint", default=ollama.endpoint)
        model = typer.prompt("Model", default=ollama.model)
        ollama = ollama.model_copy(update={"endpoint": endpoint, "model": model})

    additional_context = typer.prompt(
        "Describe your environment (shell, OS, tools)", default=current.additional_context
    )

    config_manager.update(current.model_copy(update={
        "backend": kind,
        "openai": openai,
        "ollama": ollama,
        "additional_context": additional_context,
    }))
    config_manager.save_config()
    console.print("[green]Configuration saved successfully![/green]")


if __name__ == "__main__":
    app()
