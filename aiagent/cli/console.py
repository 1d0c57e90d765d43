"""Console utilities and theming for the AI Agent CLI."""

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.theme import Theme

from aiagent.orchestrator.models import ActionResult, FailureKind

THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "dim": "dim",
        "highlight": "bold cyan",
        "muted": "bright_black",
        "user": "bold green",
        "assistant": "cyan",
    }
)

console = Console(theme=THEME)


class Icons:
    """Consistent icons across the CLI."""

    SUCCESS = "✓"
    ERROR = "✗"
    ARROW = "→"
    ROBOT = "🤖"
    ROCKET = "🚀"
    GEAR = "⚙"
    WARNING = "⚠"


def print_header(title: str, subtitle: str | None = None):
    """Print a styled header."""
    content = f"[bold]{title}[/bold]"
    if subtitle:
        content += f"\n[dim]{subtitle}[/dim]"
    console.print(Panel(content, box=box.ROUNDED, border_style="cyan", padding=(0, 2)))


def print_success(message: str):
    console.print(f"[success]{Icons.SUCCESS}[/success] {message}")


def print_error(message: str, detail: str | None = None):
    console.print(f"[error]{Icons.ERROR}[/error] {message}")
    if detail:
        console.print(f"  [dim]{escape(detail)}[/dim]")


def print_warning(message: str):
    console.print(f"[warning]{Icons.WARNING}[/warning] {message}")


def print_info(message: str):
    console.print(f"[info]{Icons.ARROW}[/info] {message}")


FAILURE_MESSAGES = {
    FailureKind.BACKEND: "AI service error",
    FailureKind.SCRAPE: "Could not scrape the page",
    FailureKind.INVALID_REQUEST: "Invalid request",
}


def print_result(result: ActionResult, title: str | None = None):
    """Render an ActionResult: the output in a panel, or a friendly error."""
    if result.ok:
        console.print(
            Panel(
                Markdown(result.output or "_(empty)_"),
                title=title or f"{Icons.ROBOT} {result.action.value}",
                title_align="left",
                border_style="cyan",
                box=box.ROUNDED,
            )
        )
    else:
        print_error(FAILURE_MESSAGES.get(result.failure, "Error"), result.error)
