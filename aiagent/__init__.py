"""AI Agent - a conversational assistant backed by a local LLM.

Routes free-form requests to summarizing, report writing, email drafting,
web scraping or general chat, and keeps the conversation as an append-only
log of turns.
"""

from aiagent.version import __version__

__all__ = [
    "__version__",
    "cli",
    "config",
    "llm",
    "orchestrator",
    "tools",
]
