"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from aiagent.orchestrator.models import (
    ActionKind,
    EmailRequest,
    GeneralRequest,
    ReportRequest,
    ScrapeRequest,
    SummarizeRequest,
)
from aiagent.orchestrator.tool_registry import ToolRegistry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep AIAGENT_* variables from the host out of the tests."""
    for name in (
        "AIAGENT_OLLAMA_MODEL",
        "AIAGENT_ROUTING_MODE",
        "AIAGENT_SCRAPE_MAX_CHARS",
        "AIAGENT_SCRAPE_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stub_registry():
    """A registry whose executors answer without any backend."""
    registry = ToolRegistry()
    registry.register(ActionKind.GENERAL, GeneralRequest, lambda message: f"echo: {message}")
    registry.register(ActionKind.SUMMARIZE, SummarizeRequest, lambda text: "short version")
    registry.register(ActionKind.REPORT, ReportRequest, lambda topic: f"Report on {topic}")
    registry.register(
        ActionKind.EMAIL,
        EmailRequest,
        lambda subject, recipient, content: f"To {recipient}: {subject}",
    )
    registry.register(ActionKind.SCRAPE, ScrapeRequest, lambda url: "page text")
    return registry


@pytest.fixture
def html_response():
    """Build a fake successful requests.Response carrying HTML."""

    def _make(html: str):
        response = MagicMock()
        response.text = html
        response.status_code = 200
        response.raise_for_status = MagicMock()
        return response

    return _make
