"""General chat: answer a request with the assistant's system prompt."""

from aiagent.llm.client import call_llm
from aiagent.llm.prompts import ASSISTANT_SYSTEM


def respond_to_request(message: str) -> str:
    """
    Forward a free-text request to the LLM and return the reply verbatim.

    Exactly one backend call, no retries. Failures propagate as LLMError.
    """
    return call_llm(message, system=ASSISTANT_SYSTEM)
