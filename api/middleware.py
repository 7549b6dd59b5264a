"""
Session cookie middleware.

Every browser tab gets its own view-state controller, found through an
HTTP-only cookie. New controllers share the process-wide favorites.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api.session_store import SESSION_TTL_SECONDS, create_session, get_session
from core.favorites import FavoritesStore

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"


def _shared_favorites(request: Request) -> Optional[FavoritesStore]:
    app_state = getattr(request.app.state, "app_state", None)
    return app_state.favorites if app_state is not None else None


class SessionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        session_id = request.cookies.get(SESSION_COOKIE)

        if session_id is None or get_session(session_id) is None:
            session_id = create_session(_shared_favorites(request))
            logger.debug("Started dashboard session %s", session_id)

        request.state.session_id = session_id
        response: Response = await call_next(request)

        # sliding expiry, in step with the store's TTL
        response.set_cookie(
            key=SESSION_COOKIE,
            value=session_id,
            httponly=True,
            samesite="lax",
            max_age=SESSION_TTL_SECONDS,
        )
        return response
