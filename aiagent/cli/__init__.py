"""AI Agent CLI.

Usage:
    aiagent                          # Interactive chat mode
    aiagent chat "question"          # Quick question
    aiagent summarize "long text"    # Run one action directly
    aiagent serve                    # Start the HTTP API
"""

import logging
from typing import Optional

import typer

from aiagent.cli.app import app, set_verbose, use_model, version_callback
from aiagent.cli.commands import (
    ask,
    config,
    doctor,
    email,
    models,
    report,
    route,
    scrape,
    serve,
    summarize,
)
from aiagent.cli.commands.ask import interactive_mode
from aiagent.cli.console import console

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model to use"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """🤖 AI Agent - summaries, reports, emails and web scraping.

    Run without a command to chat interactively, or use a command to run
    one action.

    Examples:
        aiagent                                   # Interactive chat
        aiagent chat "Write a report on solar power"
        aiagent scrape https://example.com        # One action
    """
    use_model(model)
    set_verbose(verbose)

    if ctx.invoked_subcommand is not None:
        return

    from aiagent.cli.app import check_connection
    from aiagent.orchestrator.router import Router

    if not check_connection():
        raise typer.Exit(code=1)

    interactive_mode(Router())


app.command(name="chat")(ask)
app.command()(summarize)
app.command()(report)
app.command()(email)
app.command()(scrape)
app.command()(route)
app.command()(serve)
app.command()(models)
app.command()(config)
app.command()(doctor)


def main():
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main", "console"]
