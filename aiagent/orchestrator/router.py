"""Request routing.

A request can be handled two ways:

- ``delegate``: the whole request goes to the general assistant prompt and
  the model's reply is the answer (one backend call).
- ``classify``: the model first picks an action and fills its arguments as
  JSON, then the chosen executor runs through the registry.

Either way ``respond`` returns an ActionResult, so callers see a typed
success or failure rather than an exception or a sentinel string.
"""

import logging
from typing import Literal

from pydantic import ValidationError

from aiagent.config import get_settings
from aiagent.llm.client import LLMError, LLMResponseFormatError, call_llm_json
from aiagent.llm.prompts import CLASSIFIER_PROMPT, CLASSIFIER_SYSTEM
from aiagent.orchestrator.models import (
    ActionKind,
    ActionResult,
    FailureKind,
    RouteDecision,
)
from aiagent.orchestrator.tool_registry import ToolRegistry
from aiagent.tools import chat_tools, create_default_registry

logger = logging.getLogger(__name__)

RoutingMode = Literal["delegate", "classify"]


class Router:
    """Turns a free-text request into a chosen action and its result."""

    def __init__(
        self,
        registry: ToolRegistry | None = None,
        mode: RoutingMode | None = None,
    ):
        self.registry = registry or create_default_registry()
        self.mode = mode or get_settings().routing_mode

    def route(self, request_text: str) -> str:
        """Answer a request with the general assistant prompt.

        Raises:
            LLMError: If the backend call fails.
        """
        return chat_tools.respond_to_request(request_text)

    def classify(self, request_text: str) -> RouteDecision:
        """
        Ask the model which action fits the request.

        Malformed or incomplete model output falls back to a general
        decision carrying the user's own text.

        Raises:
            LLMError: If the backend call itself fails.
        """
        fallback = RouteDecision(
            action=ActionKind.GENERAL, args={"message": request_text}
        )

        try:
            data = call_llm_json(
                CLASSIFIER_PROMPT.format(request=request_text),
                system=CLASSIFIER_SYSTEM,
            )
        except LLMResponseFormatError as e:
            logger.warning(f"Classifier returned unusable output: {e}")
            return fallback

        try:
            decision = RouteDecision(
                action=data.get("action"), args=data.get("args") or {}
            )
        except ValidationError as e:
            logger.warning(
                f"Classifier output is not a valid decision "
                f"(action={data.get('action')!r}, args={data.get('args')!r})"
            )
            logger.debug(f"Validation error: {e}")
            return fallback

        if decision.action == ActionKind.GENERAL:
            # The general responder always gets the user's own words
            return fallback

        try:
            self.registry.validate(decision.action, decision.args)
        except (KeyError, ValidationError) as e:
            logger.warning(
                f"Classifier arguments do not fit {decision.action.value}: {e}"
            )
            return fallback

        logger.debug(f"Routed request to {decision.action.value}")
        return decision

    def dispatch(self, decision: RouteDecision) -> ActionResult:
        """Run the action a decision names."""
        return self.registry.execute(decision.action, decision.args)

    def respond(self, request_text: str) -> ActionResult:
        """Route a request according to the configured mode and run it."""
        if self.mode == "classify":
            try:
                decision = self.classify(request_text)
            except LLMError as e:
                logger.error(f"Routing failed: {e}")
                return ActionResult.failed(ActionKind.GENERAL, FailureKind.BACKEND, str(e))
            return self.dispatch(decision)

        return self.registry.execute(ActionKind.GENERAL, {"message": request_text})
