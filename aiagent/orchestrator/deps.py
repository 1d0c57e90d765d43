"""
Shared dependencies: the router and the session store.

Both are process-wide singletons; FastAPI endpoints receive them through
``Depends`` so tests can swap them with ``app.dependency_overrides``.
"""

from functools import lru_cache

from aiagent.orchestrator.router import Router
from aiagent.orchestrator.session import SessionStore


@lru_cache(maxsize=1)
def get_router() -> Router:
    """Get the singleton router, configured from settings."""
    return Router()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Get the singleton in-memory session store."""
    return SessionStore()
