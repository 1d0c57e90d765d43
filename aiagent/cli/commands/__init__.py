"""Commands package - modular command modules."""

from aiagent.cli.commands.actions import email, report, route, scrape, summarize
from aiagent.cli.commands.ask import ask
from aiagent.cli.commands.config import config, doctor, models
from aiagent.cli.commands.serve import serve

__all__ = [
    "ask", "summarize", "report", "email", "scrape", "route",
    "serve", "models", "config", "doctor",
]
