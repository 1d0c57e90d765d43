"""Action commands - run a single executor, or preview routing."""

import typer

from aiagent.cli.app import ModelOption, VerboseOption, check_connection, set_verbose, use_model
from aiagent.cli.console import console, print_error, print_result
from aiagent.orchestrator.models import ActionKind, ActionResult

JsonOption = typer.Option(False, "--json", help="Output the result as JSON")


def _run(kind: ActionKind, output_json: bool, needs_llm: bool = True, **args: str) -> None:
    from aiagent.tools import create_default_registry

    if needs_llm and not output_json and not check_connection():
        raise typer.Exit(code=1)

    registry = create_default_registry()
    if output_json:
        result = registry.execute(kind, args)
    else:
        with console.status(f"[cyan]Running {kind.value}...[/cyan]", spinner="dots"):
            result = registry.execute(kind, args)

    _emit(result, output_json)


def _emit(result: ActionResult, output_json: bool) -> None:
    if output_json:
        console.print_json(result.model_dump_json())
    else:
        print_result(result)
    if not result.ok:
        raise typer.Exit(code=1)


def summarize(
    text: str = typer.Argument(..., help="Text to summarize"),
    model: str = ModelOption,
    output_json: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    """Summarize text in a few sentences."""
    use_model(model)
    set_verbose(verbose)
    _run(ActionKind.SUMMARIZE, output_json, text=text)


def report(
    topic: str = typer.Argument(..., help="Topic of the report"),
    model: str = ModelOption,
    output_json: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    """Generate a brief, structured report on a topic."""
    use_model(model)
    set_verbose(verbose)
    _run(ActionKind.REPORT, output_json, topic=topic)


def email(
    subject: str = typer.Option(..., "--subject", "-s", help="Email subject"),
    recipient: str = typer.Option(..., "--to", "-t", help="Who the email is for"),
    content: str = typer.Option(..., "--content", "-c", help="What the email should say"),
    model: str = ModelOption,
    output_json: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    """Draft an email."""
    use_model(model)
    set_verbose(verbose)
    _run(ActionKind.EMAIL, output_json, subject=subject, recipient=recipient, content=content)


def scrape(
    url: str = typer.Argument(..., help="Page to scrape"),
    output_json: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    """Fetch a web page and show the start of its text."""
    set_verbose(verbose)
    _run(ActionKind.SCRAPE, output_json, needs_llm=False, url=url)


def route(
    request: str = typer.Argument(..., help="Request to route"),
    model: str = ModelOption,
    verbose: bool = VerboseOption,
):
    """Show which action a request would be routed to, without running it."""
    from aiagent.llm.client import LLMError
    from aiagent.orchestrator.router import Router

    use_model(model)
    set_verbose(verbose)

    try:
        decision = Router(mode="classify").classify(request)
    except LLMError as e:
        print_error("AI Error", str(e))
        raise typer.Exit(code=1)

    console.print_json(decision.model_dump_json())
