"""AI Agent API server: conversations, routing and direct action calls.

Endpoints are plain ``def`` functions so FastAPI runs the blocking LLM and
HTTP calls in its threadpool.
"""

import logging

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from aiagent.config import settings
from aiagent.llm.client import LLMError
from aiagent.orchestrator.deps import get_router, get_session_store
from aiagent.orchestrator.models import (
    ActionKind,
    ActionResult,
    ChatRequest,
    ChatResponse,
    ConversationView,
    RouteDecision,
    RouteRequest,
)
from aiagent.orchestrator.router import Router
from aiagent.orchestrator.session import SessionBusyError, SessionStore
from aiagent.version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="AI Agent API",
    description="Conversational assistant for summaries, reports, emails and web scraping",
    version=__version__,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions gracefully."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
        },
    )


def _validate_message(message: str) -> str:
    message = message.strip()
    if not message:
        raise HTTPException(status_code=422, detail="Message must not be empty")
    if len(message) > settings.max_input_chars:
        raise HTTPException(
            status_code=422,
            detail=f"Message too long (max {settings.max_input_chars:,} characters)",
        )
    return message


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "model": settings.ollama_model,
        "routing_mode": settings.routing_mode,
    }


@app.post("/chat", response_model=ChatResponse)
def chat(
    request: ChatRequest,
    router: Router = Depends(get_router),
    store: SessionStore = Depends(get_session_store),
) -> ChatResponse:
    """Submit one user turn and wait for the assistant's reply."""
    message = _validate_message(request.message)
    session = store.get_or_create(request.session_id)

    try:
        result = session.submit(message, router.respond)
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ChatResponse(session_id=session.id, result=result, conversation=session.view())


@app.get("/sessions/{session_id}", response_model=ConversationView)
def get_session(
    session_id: str, store: SessionStore = Depends(get_session_store)
) -> ConversationView:
    """Get a session's turns and pending state."""
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session.view()


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Forget a session."""
    if not store.remove(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted", "session_id": session_id}


@app.post("/route", response_model=RouteDecision)
def route_request(
    request: RouteRequest, router: Router = Depends(get_router)
) -> RouteDecision:
    """Show which action a request would be routed to, without running it."""
    message = _validate_message(request.message)
    try:
        return router.classify(message)
    except LLMError as e:
        logger.error(f"LLM error: {e}")
        raise HTTPException(status_code=503, detail=str(e))


@app.post("/actions/{kind}", response_model=ActionResult)
def run_action(
    kind: ActionKind,
    args: dict[str, str] = Body(...),
    router: Router = Depends(get_router),
) -> ActionResult:
    """Run one action directly with its own request fields."""
    return router.registry.execute(kind, args)
