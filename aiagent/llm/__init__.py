"""LLM client module for AI Agent."""

__all__ = ["call_llm", "call_llm_json", "LLMError", "LLMResponseFormatError"]


def __getattr__(name: str):
    """Lazy import."""
    if name in __all__:
        from aiagent.llm import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
