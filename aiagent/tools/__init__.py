"""Action executors for AI Agent."""

__all__ = [
    "chat_tools",
    "email_tools",
    "text_tools",
    "web_tools",
    "create_default_registry",
]


def create_default_registry():
    """Create a ToolRegistry with every action registered."""
    from aiagent.orchestrator.models import (
        ActionKind,
        EmailRequest,
        GeneralRequest,
        ReportRequest,
        ScrapeRequest,
        SummarizeRequest,
    )
    from aiagent.orchestrator.tool_registry import ToolRegistry
    from aiagent.tools import chat_tools, email_tools, text_tools, web_tools

    registry = ToolRegistry()
    registry.register(ActionKind.SUMMARIZE, SummarizeRequest, text_tools.summarize_text)
    registry.register(ActionKind.REPORT, ReportRequest, text_tools.generate_report)
    registry.register(ActionKind.EMAIL, EmailRequest, email_tools.write_email)
    registry.register(ActionKind.SCRAPE, ScrapeRequest, web_tools.fetch_page_text)
    registry.register(ActionKind.GENERAL, GeneralRequest, chat_tools.respond_to_request)
    return registry
