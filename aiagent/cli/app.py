"""Main Typer application and shared utilities."""

import logging
import os

import typer

from aiagent.cli.console import Icons, console, print_error, print_header
from aiagent.version import __version__

APP_NAME = "AI Agent"
APP_DESCRIPTION = "Summaries, reports, emails and web scraping from your local LLM"

app = typer.Typer(
    name="aiagent",
    help=f"{Icons.ROBOT} {APP_DESCRIPTION}",
    add_completion=False,
    pretty_exceptions_show_locals=False,
    no_args_is_help=False,  # Allow no args to start interactive mode
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        print_header(f"{APP_NAME} v{__version__}", APP_DESCRIPTION)
        raise typer.Exit()


def use_model(model: str | None):
    """Point every later settings lookup at another model."""
    if model:
        os.environ["AIAGENT_OLLAMA_MODEL"] = model


def set_verbose(verbose: bool):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("aiagent").setLevel(logging.DEBUG)


def check_connection() -> bool:
    """Check Ollama connection with helpful error."""
    from aiagent.llm.client import check_ollama_health

    with console.status("[cyan]Checking Ollama connection...[/cyan]", spinner="dots"):
        healthy, error = check_ollama_health()

    if not healthy:
        print_error("Cannot connect to Ollama", error)
        console.print()
        console.print("[dim]Troubleshooting:[/dim]")
        console.print("  1. Is Ollama running? [cyan]ollama serve[/cyan]")
        console.print("  2. Check the URL: [cyan]aiagent config[/cyan]")
        console.print("  3. Test connection: [cyan]curl http://localhost:11434/api/tags[/cyan]")
        return False

    return True


ModelOption = typer.Option(
    None,
    "--model", "-m",
    help="Ollama model to use (defaults to config)"
)

VerboseOption = typer.Option(
    False,
    "--verbose", "-v",
    help="Show detailed output"
)
