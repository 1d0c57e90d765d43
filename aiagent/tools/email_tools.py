"""Email drafting action."""

from aiagent.llm.client import call_llm
from aiagent.llm.prompts import EMAIL_PROMPT, EMAIL_SYSTEM


def write_email(subject: str, recipient: str, content: str) -> str:
    """
    Draft an email body from a subject, recipient and content notes.

    The recipient is passed through as written; it is not validated as an
    address.

    Raises:
        LLMError: If the backend call fails.
    """
    prompt = EMAIL_PROMPT.format(subject=subject, recipient=recipient, content=content)
    return call_llm(prompt, system=EMAIL_SYSTEM)
