from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Who authored a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class SessionState(str, Enum):
    """Conversation lifecycle states."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class ActionKind(str, Enum):
    """Actions a request can be routed to."""

    SUMMARIZE = "summarize"
    REPORT = "report"
    SCRAPE = "scrape"
    EMAIL = "email"
    GENERAL = "general"


class FailureKind(str, Enum):
    """Why an action did not produce output."""

    BACKEND = "backend"
    SCRAPE = "scrape"
    INVALID_REQUEST = "invalid_request"


class Turn(BaseModel):
    """One message in the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


# Per-action request schemas. Each executor owns its own input contract.


class SummarizeRequest(BaseModel):
    text: str


class ReportRequest(BaseModel):
    topic: str


class EmailRequest(BaseModel):
    subject: str
    recipient: str
    content: str


class ScrapeRequest(BaseModel):
    url: str


class GeneralRequest(BaseModel):
    message: str


class ActionResult(BaseModel):
    """Outcome of running one action: output on success, a failure kind otherwise."""

    action: ActionKind
    ok: bool
    output: str | None = None
    failure: FailureKind | None = None
    error: str | None = None

    @classmethod
    def success(cls, action: ActionKind, output: str) -> "ActionResult":
        return cls(action=action, ok=True, output=output)

    @classmethod
    def failed(
        cls, action: ActionKind, failure: FailureKind, error: str
    ) -> "ActionResult":
        return cls(action=action, ok=False, failure=failure, error=error)


class RouteDecision(BaseModel):
    """The action chosen for a request, with its arguments."""

    action: ActionKind
    args: dict[str, str] = {}

    @field_validator("args", mode="before")
    @classmethod
    def _stringify_args(cls, value):
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items() if v is not None}
        return value


# API models


class ChatRequest(BaseModel):
    message: str
    session_id: str | None = None


class RouteRequest(BaseModel):
    message: str


class ConversationView(BaseModel):
    """Everything a front-end needs to render a session."""

    session_id: str
    state: SessionState
    pending: bool
    turns: list[Turn] = Field(default_factory=list)
    last_error: ActionResult | None = None


class ChatResponse(BaseModel):
    session_id: str
    result: ActionResult
    conversation: ConversationView
