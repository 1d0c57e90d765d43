"""Text generation actions: summaries and reports."""

import logging

from aiagent.llm.client import call_llm
from aiagent.llm.prompts import (
    REPORT_PROMPT,
    REPORT_SYSTEM,
    SUMMARIZER_PROMPT,
    SUMMARIZER_SYSTEM,
)

logger = logging.getLogger(__name__)


def summarize_text(text: str) -> str:
    """Condense text into a few sentences using the LLM.

    Raises:
        LLMError: If the backend call fails.
    """
    logger.debug(f"Summarizing {len(text)} characters")
    return call_llm(SUMMARIZER_PROMPT.format(text=text), system=SUMMARIZER_SYSTEM)


def generate_report(topic: str) -> str:
    """Write a brief structured report on a topic using the LLM.

    Raises:
        LLMError: If the backend call fails.
    """
    logger.debug(f"Generating report on: {topic[:80]}")
    return call_llm(REPORT_PROMPT.format(topic=topic), system=REPORT_SYSTEM)
