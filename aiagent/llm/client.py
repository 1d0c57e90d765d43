"""LLM client using the official Ollama Python library.

Every generative call in the project goes through ``call_llm``: one
non-streaming ``generate`` request with an optional system instruction.
``call_llm_json`` layers Ollama's JSON mode and a repair pass on top for
the request classifier.
"""

import json
import logging
import re
from typing import Any

import ollama
from ollama import RequestError, ResponseError

from aiagent.config import get_settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when a call to the generative backend fails."""

    pass


class LLMResponseFormatError(LLMError):
    """Raised when a JSON-mode reply cannot be parsed after all retries."""

    pass


_client: ollama.Client | None = None


def _get_host() -> str:
    """Get the Ollama host URL."""
    s = get_settings()
    host = s.ollama_url.replace("/api/generate", "").replace("/api/chat", "")
    if host.endswith("/"):
        host = host[:-1]
    return host


def _get_client() -> ollama.Client:
    """Get or create the Ollama client singleton."""
    global _client
    if _client is None:
        s = get_settings()
        _client = ollama.Client(host=_get_host(), timeout=s.ollama_timeout)
    return _client


def call_llm(
    prompt: str,
    system: str | None = None,
    force_json: bool = False,
) -> str:
    """
    Calls Ollama once and returns the raw text output.

    Args:
        prompt: The prompt to send to the model
        system: Optional system instruction (role prompt)
        force_json: If True, use Ollama's JSON mode to force valid JSON output

    Returns:
        The model's response text

    Raises:
        LLMError: If the LLM request fails.
    """
    s = get_settings()
    active_model = s.ollama_model
    try:
        client = _get_client()
        logger.debug(
            f"Calling LLM with model={active_model}, force_json={force_json}"
        )

        kwargs = {
            "model": active_model,
            "prompt": prompt,
            "options": {
                "num_predict": s.max_tokens,
                "num_ctx": s.num_ctx,
            },
        }
        if system:
            kwargs["system"] = system
        if force_json:
            kwargs["format"] = "json"

        response = client.generate(**kwargs)
        return response.response

    except RequestError as e:
        raise LLMError(f"Cannot connect to Ollama. Is it running? Error: {e}") from e
    except ResponseError as e:
        raise LLMError(f"Ollama error: {e}") from e
    except TimeoutError as e:
        raise LLMError(
            f"Request timed out. The model may be slow or overloaded. "
            f"Try increasing AIAGENT_OLLAMA_TIMEOUT (current: {s.ollama_timeout}s)"
        ) from e
    except Exception as e:
        raise LLMError(f"LLM request failed: {e}") from e


def call_llm_json(prompt: str, system: str | None = None) -> dict[str, Any]:
    """
    Calls Ollama in JSON mode and returns the parsed object.

    Retries with a reminder appended when the reply cannot be parsed, and
    falls back to ``repair_json`` before giving up.

    Raises:
        LLMResponseFormatError: If JSON parsing fails after all retries
        LLMError: If the backend call itself fails
    """
    s = get_settings()
    max_retries = s.max_json_retries

    for attempt in range(max_retries + 1):
        current_prompt = prompt
        if attempt > 0:
            logger.info(f"JSON retry attempt {attempt + 1}/{max_retries + 1}")
            current_prompt = (
                prompt
                + "\n\nREMINDER: Output ONLY valid JSON. No markdown, no code blocks, no explanation. Start with { and end with }."
            )

        raw = call_llm(current_prompt, system=system, force_json=True)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            try:
                data = repair_json(raw)
            except ValueError as e:
                logger.warning(f"JSON parse failed (attempt {attempt + 1}): {e}")
                continue

        if isinstance(data, dict):
            return data
        logger.warning(f"Expected a JSON object, got {type(data).__name__}")

    raise LLMResponseFormatError(
        f"Failed to get valid JSON after {max_retries + 1} attempts."
    )


_FENCE = re.compile(r"```[a-zA-Z]*\s*")

_QUOTE_FIXES = [
    (re.compile(r",\s*([}\]])"), r"\1"),
    (re.compile(r"'\s*:"), '":'),
    (re.compile(r"([{,])\s*'"), r'\1 "'),
    (re.compile(r":\s*'([^']*)'"), r': "\1"'),
]


def _first_object(text: str) -> str:
    """Slice out the first balanced ``{...}`` span, closing it if truncated."""
    start = text.find("{")
    if start == -1:
        raise ValueError("No JSON object found in response")

    depth = 0
    in_string = False
    escaped = False
    for i, char in enumerate(text[start:], start):
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif not in_string and char == "{":
            depth += 1
        elif not in_string and char == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    end = text.rfind("}")
    return text[start : end + 1] if end > start else text[start:] + "}"


def _escape_raw_whitespace(json_like: str) -> str:
    """Escape literal newlines and tabs that sit inside string values."""
    out = []
    in_string = False
    escaped = False
    for char in json_like:
        if in_string and not escaped and char in "\n\t":
            out.append("\\n" if char == "\n" else "\\t")
            continue
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        out.append(char)
    return "".join(out)


def repair_json(text: str) -> dict[str, Any]:
    """
    Best-effort parse of a JSON object out of a sloppy model reply.

    Handles markdown fences, prose around the object, raw newlines inside
    strings, trailing commas and single quotes.

    Raises:
        ValueError: If no object can be recovered.
    """
    json_like = _escape_raw_whitespace(_first_object(_FENCE.sub("", text)))
    for pattern, replacement in _QUOTE_FIXES:
        json_like = pattern.sub(replacement, json_like)

    try:
        return json.loads(json_like)
    except json.JSONDecodeError as e:
        raise ValueError("Could not parse response as JSON") from e


def list_models() -> list[str]:
    """List available models from Ollama."""
    try:
        client = _get_client()
        response = client.list()
        return [model.model for model in response.models]
    except Exception as e:
        logger.warning(f"Failed to list models: {e}")
        return []


def check_model_exists(model_name: str | None = None) -> bool:
    """Check if a model exists in Ollama, ignoring the tag."""
    model = model_name or get_settings().ollama_model
    models = list_models()
    return any(m == model or m.split(":")[0] == model.split(":")[0] for m in models)


def check_ollama_health() -> tuple[bool, str | None]:
    """Check if Ollama is running and accessible.

    Returns:
        Tuple of (is_healthy, error_message)
    """
    try:
        client = _get_client()
        client.list()
        return True, None
    except RequestError as e:
        return False, f"Connection refused. Is Ollama running? ({e})"
    except ResponseError as e:
        return False, f"Ollama error: {e}"
    except Exception as e:
        return False, f"Unknown error: {e}"
