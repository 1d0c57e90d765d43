"""Config commands - model management and settings."""

import typer
from rich import box
from rich.panel import Panel
from rich.table import Table

from aiagent.cli.console import Icons, console, print_error, print_info, print_success


def models():
    """List available Ollama models."""
    from aiagent.config import settings
    from aiagent.llm.client import check_ollama_health, list_models

    with console.status("[cyan]Connecting to Ollama...[/cyan]", spinner="dots"):
        healthy, error = check_ollama_health()

    if not healthy:
        print_error("Cannot connect to Ollama", error)
        raise typer.Exit(code=1)

    available = list_models()

    if not available:
        print_info("No models found. Install one with: [cyan]ollama pull mistral[/cyan]")
        raise typer.Exit(code=0)

    current = settings.ollama_model

    console.print()
    table = Table(title=f"{Icons.ROBOT} Available Models", box=box.ROUNDED)
    table.add_column("Model", style="cyan")
    table.add_column("Status", width=10)

    for model in sorted(available):
        is_current = model == current or model.split(":")[0] == current
        status = f"[green]{Icons.SUCCESS} active[/green]" if is_current else ""
        table.add_row(model, status)

    console.print(table)
    console.print()
    console.print(f"[dim]Default model:[/dim] {current}")
    console.print("[dim]Change with:[/dim] AIAGENT_OLLAMA_MODEL=<model> or --model <model>")


def config():
    """Show current configuration."""
    from aiagent.config import settings

    console.print()
    console.print(Panel(
        f"[bold]Current Configuration[/bold]\n\n"
        f"[dim]Ollama URL:[/dim]     {settings.ollama_url}\n"
        f"[dim]Model:[/dim]          {settings.ollama_model}\n"
        f"[dim]Timeout:[/dim]        {settings.ollama_timeout}s\n"
        f"[dim]Max Tokens:[/dim]     {settings.max_tokens}\n"
        f"[dim]Routing:[/dim]        {settings.routing_mode}\n"
        f"[dim]Scrape limit:[/dim]   {settings.scrape_max_chars} chars, "
        f"{settings.scrape_timeout}s timeout\n"
        f"[dim]Server:[/dim]         {settings.server_host}:{settings.server_port}",
        title=f"{Icons.GEAR} Config",
        border_style="cyan",
        box=box.ROUNDED,
    ))
    console.print()
    console.print("[dim]Override with AIAGENT_* environment variables or a .env file[/dim]")


Check = tuple[str, bool, str]


def _check_backend() -> list[Check]:
    from aiagent.config import settings
    from aiagent.llm.client import check_model_exists, check_ollama_health, list_models

    healthy, error = check_ollama_health()
    if not healthy:
        return [("Ollama connection", False, error or "Not running")]

    results = [("Ollama connection", True, settings.ollama_url)]
    model = settings.ollama_model
    if check_model_exists(model):
        results.append((f"Model ({model})", True, "Available"))
    else:
        available = list_models()
        hint = f"Not found. Try: {available[0]}" if available else "No models installed"
        results.append((f"Model ({model})", False, hint))
    return results


def _check_prompts() -> list[Check]:
    """Every prompt template must accept the fields its executor fills in."""
    from aiagent.llm import prompts

    samples = {
        "SUMMARIZER_PROMPT": {"text": "x"},
        "REPORT_PROMPT": {"topic": "x"},
        "EMAIL_PROMPT": {"subject": "x", "recipient": "x", "content": "x"},
        "CLASSIFIER_PROMPT": {"request": "x"},
    }
    broken = []
    for name, fields in samples.items():
        try:
            getattr(prompts, name).format(**fields)
        except (KeyError, IndexError, ValueError) as e:
            broken.append(f"{name}: {e}")
    if broken:
        return [("Prompt templates", False, "; ".join(broken))]
    return [("Prompt templates", True, f"{len(samples)} templates OK")]


def doctor():
    """Check that the backend, the model and the prompts are ready."""
    from aiagent.config import settings

    console.print()
    console.print(Panel.fit(f"[bold]{Icons.ROBOT} AI Agent Health Check[/bold]", border_style="cyan"))
    console.print()

    with console.status("[cyan]Running checks...[/cyan]", spinner="dots"):
        checks = _check_backend() + _check_prompts()
    checks.append(("Routing mode", True, settings.routing_mode))

    table = Table(box=box.ROUNDED, show_header=True)
    table.add_column("Check", style="cyan", width=25)
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim", max_width=40)
    for name, passed, detail in checks:
        mark = f"[green]{Icons.SUCCESS}[/green]" if passed else f"[red]{Icons.ERROR}[/red]"
        table.add_row(name, mark, detail)

    console.print(table)
    console.print()

    failed = [name for name, passed, _ in checks if not passed]
    if failed:
        print_error(f"{len(failed)} check(s) failed", ", ".join(failed))
        raise typer.Exit(code=1)

    print_success("All checks passed! AI Agent is ready to use.")
