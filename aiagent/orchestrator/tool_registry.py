import logging
from typing import Any, Callable, Dict, List, NamedTuple, Type

from pydantic import BaseModel, ValidationError

from aiagent.llm.client import LLMError
from aiagent.orchestrator.models import ActionKind, ActionResult, FailureKind
from aiagent.tools.web_tools import WebOperationError

logger = logging.getLogger(__name__)


class RegisteredAction(NamedTuple):
    request_model: Type[BaseModel]
    func: Callable[..., str]


class ToolRegistry:
    """Registry of action executors, each paired with its request schema."""

    def __init__(self):
        self.tools: Dict[ActionKind, RegisteredAction] = {}

    def register(
        self,
        kind: ActionKind,
        request_model: Type[BaseModel],
        func: Callable[..., str],
    ) -> None:
        """Register an executor. It is called with the request model's fields."""
        logger.debug(f"Registering action: {kind.value}")
        self.tools[kind] = RegisteredAction(request_model, func)

    def get(self, kind: ActionKind) -> RegisteredAction:
        """Get a registered action by kind."""
        if kind not in self.tools:
            available = ", ".join(k.value for k in self.tools)
            raise KeyError(f"Action '{kind.value}' not registered. Available: {available}")
        return self.tools[kind]

    def list_tools(self) -> List[ActionKind]:
        """List all registered action kinds."""
        return list(self.tools.keys())

    def has(self, kind: ActionKind) -> bool:
        """Check if an action is registered."""
        return kind in self.tools

    def validate(self, kind: ActionKind, args: dict[str, Any]) -> BaseModel:
        """Build the action's request model from raw arguments.

        Raises:
            KeyError: If the action is not registered.
            ValidationError: If the arguments do not fit the request model.
        """
        return self.get(kind).request_model(**args)

    def execute(self, kind: ActionKind, args: dict[str, Any]) -> ActionResult:
        """
        Run one action and report the outcome as an ActionResult.

        Fields the request model does not declare are ignored.

        Backend and scrape failures are returned as failed results rather
        than raised. Any other exception is a bug and propagates.
        """
        registered = self.get(kind)

        try:
            request = registered.request_model(**args)
        except ValidationError as e:
            return ActionResult.failed(kind, FailureKind.INVALID_REQUEST, str(e))

        try:
            output = registered.func(**request.model_dump())
        except LLMError as e:
            logger.error(f"Action {kind.value} failed: {e}")
            return ActionResult.failed(kind, FailureKind.BACKEND, str(e))
        except WebOperationError as e:
            logger.warning(f"Action {kind.value} failed: {e}")
            return ActionResult.failed(kind, FailureKind.SCRAPE, str(e))

        return ActionResult.success(kind, output)
