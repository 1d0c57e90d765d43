"""Ask command - single questions and the interactive chat loop."""

from enum import Enum
from typing import Optional

import typer
from rich.markup import escape

from aiagent.cli.app import ModelOption, VerboseOption, check_connection, set_verbose, use_model
from aiagent.cli.console import Icons, console, print_error, print_result, print_warning
from aiagent.orchestrator.models import ActionKind, Role
from aiagent.orchestrator.router import Router
from aiagent.orchestrator.session import ConversationSession


class RoutingModeChoice(str, Enum):
    delegate = "delegate"
    classify = "classify"


def ask(
    question: Optional[str] = typer.Argument(None, help="Question to ask (enters interactive mode if omitted)"),
    model: Optional[str] = ModelOption,
    mode: Optional[RoutingModeChoice] = typer.Option(
        None, "--mode", help="Routing mode (defaults to config)"
    ),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Enter interactive chat mode"),
    verbose: bool = VerboseOption,
):
    """Ask the assistant something (quick chat mode).

    Examples:
        aiagent chat "Summarize this: ..."
        aiagent chat -i                      # Interactive mode
        aiagent chat --mode delegate "Hi"    # Skip action routing
    """
    use_model(model)
    set_verbose(verbose)

    if not check_connection():
        raise typer.Exit(code=1)

    router = Router(mode=mode.value if mode else None)

    if interactive or question is None:
        interactive_mode(router)
    else:
        single_question(question, router)


def single_question(question: str, router: Router):
    """Handle a single question in a fresh session."""
    from aiagent.config import settings

    if len(question) > settings.max_input_chars:
        print_warning(f"Question too long (max {settings.max_input_chars:,} characters)")
        raise typer.Exit(code=1)

    session = ConversationSession()
    with console.status("[cyan]Thinking...[/cyan]", spinner="dots"):
        result = session.submit(question, router.respond)

    if result is None:
        print_warning("Empty question. Please provide a question.")
        raise typer.Exit(code=1)

    console.print()
    print_result(result)
    if not result.ok:
        raise typer.Exit(code=1)


def interactive_mode(router: Router):
    """Run an interactive chat session."""
    from aiagent.config import get_settings

    console.clear()
    _show_welcome(get_settings().ollama_model, router.mode)

    session = ConversationSession()

    while True:
        try:
            user_input = _get_styled_input()

            if not user_input:
                continue

            if user_input.startswith("/"):
                result = _handle_command(user_input, session, router)
                if result == "quit":
                    break
                if isinstance(result, ConversationSession):
                    session = result
                continue

            console.print()
            with console.status("  [cyan]AI is thinking...[/cyan]", spinner="dots"):
                outcome = session.submit(user_input, router.respond)

            if outcome is None:
                continue

            console.print(f"  [dim]╭─ {Icons.ROBOT} [/dim][assistant]{outcome.action.value}[/assistant]")
            if outcome.ok:
                for line in (outcome.output or "").split("\n"):
                    console.print("  [dim]│[/dim]  ", end="")
                    console.print(line, markup=False)
            else:
                console.print(f"  [dim]│[/dim]  [red]{Icons.ERROR} {escape(outcome.error or '')}[/red]")
            console.print("  [dim]╰─────[/dim]")
            console.print()

        except KeyboardInterrupt:
            console.print("\n[dim]  Ctrl+C pressed. Type /quit to exit.[/dim]\n")
        except EOFError:
            _show_goodbye()
            break


def _show_welcome(model: str, mode: str):
    console.print()
    console.print(f"  [bold cyan]╭{'─' * 50}╮[/bold cyan]")
    console.print(f"  [bold cyan]│[/bold cyan]  {Icons.ROBOT} [bold]AI Agent[/bold]                                      [bold cyan]│[/bold cyan]")
    console.print(f"  [bold cyan]│[/bold cyan]  [dim]Summaries, reports, emails, web scraping[/dim]        [bold cyan]│[/bold cyan]")
    console.print(f"  [bold cyan]╰{'─' * 50}╯[/bold cyan]")
    console.print()
    console.print(f"  [dim]Model:[/dim] [cyan]{model}[/cyan]   [dim]Routing:[/dim] [cyan]{mode}[/cyan]")
    console.print("  [dim]Type a request or /help for commands[/dim]")
    console.print()


def _show_goodbye():
    console.print()
    console.print("  [dim]Goodbye! 👋[/dim]")
    console.print()


def _get_styled_input() -> str:
    """Read one request; a trailing backslash continues onto the next line."""
    console.print("  [green]╭─ Enter your request ─────────────────────────────╮[/green]")
    console.print("  [green]│[/green] ", end="")

    lines = []
    try:
        while True:
            if lines:
                console.print("  [green]│[/green] ", end="")
            line = input()
            if line.endswith("\\"):
                lines.append(line[:-1])
            else:
                lines.append(line)
                break
    except (KeyboardInterrupt, EOFError):
        console.print()
        console.print(f"  [green]╰{'─' * 51}╯[/green]")
        raise

    console.print(f"  [green]╰{'─' * 51}╯[/green]")

    return "\n".join(lines).strip()


def _handle_command(user_input: str, session: ConversationSession, router: Router):
    """Handle slash commands. Returns 'quit', a replacement session, or None."""
    cmd_parts = user_input.split(maxsplit=1)
    cmd = cmd_parts[0].lower()
    args = cmd_parts[1] if len(cmd_parts) > 1 else ""

    if cmd in ("/quit", "/q", "/exit"):
        _show_goodbye()
        return "quit"

    elif cmd in ("/help", "/h", "/?"):
        _show_help()
        return None

    elif cmd in ("/clear", "/c"):
        console.print()
        console.print(f"  [green]{Icons.SUCCESS}[/green] Started a new conversation")
        console.print()
        return ConversationSession()

    elif cmd == "/route":
        console.print()
        if not args:
            console.print("  [dim]Usage: /route <request>[/dim]")
        else:
            from aiagent.llm.client import LLMError

            try:
                with console.status("  [cyan]Routing...[/cyan]", spinner="dots"):
                    decision = router.classify(args)
            except LLMError as e:
                print_error("AI Error", str(e))
            else:
                console.print(f"  [dim]Action:[/dim] [cyan]{decision.action.value}[/cyan]")
                if decision.action != ActionKind.GENERAL:
                    for key, value in decision.args.items():
                        preview = value[:60] + "..." if len(value) > 60 else value
                        console.print(f"    [dim]{key}:[/dim] ", end="")
                        console.print(preview, markup=False)
        console.print()
        return None

    elif cmd == "/history":
        console.print()
        turns = session.turns
        if turns:
            console.print(f"  [dim]{len(turns)} messages[/dim]")
            for turn in turns[-6:]:
                role_icon = "[green]>[/green]" if turn.role == Role.USER else f"[cyan]{Icons.ROBOT}[/cyan]"
                preview = turn.content[:50] + "..." if len(turn.content) > 50 else turn.content
                console.print(f"    {role_icon} ", end="")
                console.print(preview, markup=False)
        else:
            console.print("  [dim]No history yet[/dim]")
        console.print()
        return None

    else:
        console.print()
        print_warning(f"Unknown: {cmd}. Type /help for commands")
        console.print()
        return None


def _show_help():
    console.print()
    console.print("  [bold]Commands:[/bold]")
    console.print()
    console.print("    [cyan]/route[/cyan] <text>  Show which action a request would use")
    console.print("    [cyan]/clear[/cyan]         Start a new conversation")
    console.print("    [cyan]/history[/cyan]       Show recent messages")
    console.print("    [cyan]/help[/cyan]          Show this help")
    console.print("    [cyan]/quit[/cyan]          Exit")
    console.print()
    console.print("  [bold]Tips:[/bold]")
    console.print("    • End a line with \\\\ to continue on next line")
    console.print()
