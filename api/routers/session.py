"""
User session endpoints: store the backend token, log out.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_app_state
from api.models.requests import TokenRequest
from api.models.responses import SessionStatusResponse
from core.app_state import AppState

router = APIRouter(prefix="/api/session", tags=["session"])


def _status(app_state: AppState) -> SessionStatusResponse:
    return SessionStatusResponse(
        authenticated=app_state.authenticated,
        favorite_count=len(app_state.favorites.ids),
    )


@router.get("", response_model=SessionStatusResponse)
def session_status(app_state: AppState = Depends(get_app_state)):
    return _status(app_state)


@router.put("/token", response_model=SessionStatusResponse)
def set_token(body: TokenRequest, app_state: AppState = Depends(get_app_state)):
    app_state.set_token(body.token)
    return _status(app_state)


@router.post("/logout", response_model=SessionStatusResponse)
def logout(app_state: AppState = Depends(get_app_state)):
    app_state.logout()
    return _status(app_state)
