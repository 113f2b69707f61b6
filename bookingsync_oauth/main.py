"""
FastAPI application exposing the BookingSync login flow.

This module wires dependencies and configures the application.
The OAuth client is in bookingsync_oauth/core, adapters in
bookingsync_oauth/infrastructure.
"""

import logging
import os
from contextlib import asynccontextmanager

# Configure logging FIRST, before other local imports
from bookingsync_oauth.logging_config import setup_global_logging

setup_global_logging()

# Now import other modules (they will use the configured logging)
from fastapi import FastAPI  # noqa: E402
from starlette.middleware.sessions import SessionMiddleware  # noqa: E402

from bookingsync_oauth.oauth import router as oauth_router  # noqa: E402
from bookingsync_oauth.oauth.dependencies import get_transport  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Closes the shared HTTP transport on shutdown.
    """
    logger.info("Application starting up...")
    yield
    logger.info("Shutting down application...")
    get_transport().close()
    get_transport.cache_clear()


app = FastAPI(
    title="BookingSync OAuth",
    description="BookingSync OAuth2 login",
    version="1.0.0",
    lifespan=lifespan,
)

# Session middleware keeps the OAuth2 state between connect and callback
SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY")
if not SESSION_SECRET_KEY:
    raise ValueError("SESSION_SECRET_KEY is not set in the environment.")
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET_KEY)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(oauth_router.router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
