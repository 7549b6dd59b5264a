"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import SessionMiddleware
from api.session_store import cleanup_expired
from api.routers import dataset, insights, session, view
from config.settings import Config, configure_logging
from core.app_state import AppState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load durable user state and periodically clean up expired sessions."""
    configure_logging()
    app.state.app_state = AppState.start(Config.load())

    async def _cleanup_loop():
        while True:
            await asyncio.sleep(300)  # every 5 minutes
            removed = cleanup_expired()
            if removed:
                logger.info("Removed %d expired session(s)", removed)

    task = asyncio.create_task(_cleanup_loop())
    yield
    task.cancel()
    app.state.app_state.close()


app = FastAPI(
    title="Equipment Analytics API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - allow the React dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session cookie middleware
app.add_middleware(SessionMiddleware)

# Register routers
app.include_router(dataset.router)
app.include_router(view.router)
app.include_router(insights.router)
app.include_router(session.router)


@app.get("/health")
def health():
    return {"status": "healthy"}
