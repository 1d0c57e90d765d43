"""Orchestrator module for AI Agent."""

__all__ = [
    "ActionResult",
    "ConversationSession",
    "RouteDecision",
    "Router",
    "SessionStore",
    "ToolRegistry",
    "Turn",
]


def __getattr__(name: str):
    """Lazy import to avoid circular imports and missing deps errors."""
    if name == "Router":
        from aiagent.orchestrator.router import Router
        return Router
    if name in ("ConversationSession", "SessionStore"):
        from aiagent.orchestrator import session
        return getattr(session, name)
    if name in ("ActionResult", "RouteDecision", "Turn"):
        from aiagent.orchestrator import models
        return getattr(models, name)
    if name == "ToolRegistry":
        from aiagent.orchestrator.tool_registry import ToolRegistry
        return ToolRegistry
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
