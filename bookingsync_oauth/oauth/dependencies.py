"""
FastAPI dependencies for the BookingSync OAuth endpoints.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status

from bookingsync_oauth.core.oauth_service import OAuth2Client
from bookingsync_oauth.infrastructure.http_transport import HttpxTransport
from bookingsync_oauth.oauth.config import (
    BookingSyncConfig,
    create_oauth_client,
    get_bookingsync_config,
)


logger = logging.getLogger(__name__)


@lru_cache()
def get_transport() -> HttpxTransport:
    """
    Provide the HTTP transport dependency.

    Uses lru_cache for singleton behavior - one connection pool for the app.
    """
    return HttpxTransport()


def get_oauth_client(
    config: Annotated[BookingSyncConfig, Depends(get_bookingsync_config)],
    transport: Annotated[HttpxTransport, Depends(get_transport)],
) -> OAuth2Client:
    """
    Provide the BookingSync OAuth client.

    Raises:
        HTTPException: 503 if BookingSync credentials are not configured
    """
    if not config.is_configured():
        logger.warning("BookingSync OAuth requested but not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="BookingSync OAuth is not configured",
        )
    return create_oauth_client(config, transport)


BookingSyncClient = Annotated[OAuth2Client, Depends(get_oauth_client)]
