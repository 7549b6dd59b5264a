"""
FastAPI dependency-injection helpers.
"""

from typing import Optional

from fastapi import Request, HTTPException

from api.session_store import SessionData, get_session
from config.settings import Config
from core.app_state import AppState
from services.backend_client import BackendClient


def get_session_data(request: Request) -> SessionData:
    """Return the current session, creating one if needed."""
    session_id: str = request.state.session_id
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=401, detail="Session expired")
    return session


def require_data(request: Request) -> SessionData:
    """Like get_session_data but also asserts a dataset is loaded."""
    session = get_session_data(request)
    if session.controller.dataset is None:
        raise HTTPException(status_code=400, detail="No dataset loaded")
    return session


def get_app_state(request: Request) -> AppState:
    """Process-wide state created at start-up."""
    app_state: Optional[AppState] = getattr(request.app.state, "app_state", None)
    if app_state is None:
        raise HTTPException(status_code=503, detail="Application state not initialised")
    return app_state


def get_backend_client(request: Request) -> BackendClient:
    """Backend client authenticated with the current session token."""
    app_state: Optional[AppState] = getattr(request.app.state, "app_state", None)
    return BackendClient(
        Config.load().backend,
        token_provider=(lambda: app_state.token) if app_state else None,
    )
