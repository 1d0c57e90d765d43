"""Serve command - HTTP API server."""

import typer
from rich import box
from rich.panel import Panel

from aiagent.cli.console import Icons, console


def serve(
    host: str = typer.Option(None, "--host", "-h", help="Host to bind to (defaults to config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port to bind to (defaults to config)"),
    reload: bool = typer.Option(False, "--reload/--no-reload", help="Enable auto-reload on changes"),
):
    """Start the HTTP API server."""
    import uvicorn

    from aiagent.config import settings

    host = host or settings.server_host
    port = port or settings.server_port
    url = f"http://{host}:{port}"

    console.print()
    console.print(Panel.fit(
        f"[bold green]{Icons.ROCKET} AI Agent Server[/bold green]\n\n"
        f"[dim]URL:[/dim] {url}\n"
        f"[dim]Docs:[/dim] {url}/docs\n"
        f"[dim]Reload:[/dim] {'enabled' if reload else 'disabled'}\n"
        f"[dim]Press Ctrl+C to stop[/dim]",
        border_style="green",
        box=box.ROUNDED,
    ))

    uvicorn.run(
        "aiagent.orchestrator.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="warning",
    )
