"""
BookingSync OAuth2 configuration and client factory.

Credentials are loaded from environment variables by the application.
The provider adapter and the client only ever receive explicit values.
"""

import os
import logging
from dataclasses import dataclass, field
from functools import lru_cache

from bookingsync_oauth.core.exceptions import ConfigurationError
from bookingsync_oauth.core.oauth_service import OAuth2Client
from bookingsync_oauth.core.ports import HttpTransport
from bookingsync_oauth.infrastructure.http_transport import HttpxTransport
from bookingsync_oauth.infrastructure.oauth_providers import (
    BOOKINGSYNC_BASE_URL,
    BookingSyncProvider,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingSyncConfig:
    """
    BookingSync OAuth configuration.

    Loaded from environment variables by from_env(). Immutable once built.
    """

    client_id: str | None
    client_secret: str | None
    redirect_uri: str | None
    base_url: str = BOOKINGSYNC_BASE_URL
    scopes: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "BookingSyncConfig":
        """Load configuration from environment variables."""
        scopes = os.getenv("BOOKINGSYNC_SCOPES", "")
        return cls(
            client_id=os.getenv("BOOKINGSYNC_CLIENT_ID"),
            client_secret=os.getenv("BOOKINGSYNC_CLIENT_SECRET"),
            redirect_uri=os.getenv("BOOKINGSYNC_REDIRECT_URI"),
            base_url=os.getenv("BOOKINGSYNC_BASE_URL", BOOKINGSYNC_BASE_URL),
            scopes=scopes.split(),
        )

    def is_configured(self) -> bool:
        """Check if all required settings are present."""
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    def validate(self) -> None:
        """Validate required configuration. Call at startup to fail fast."""
        if not self.client_id:
            raise ConfigurationError("BOOKINGSYNC_CLIENT_ID is required")
        if not self.client_secret:
            raise ConfigurationError("BOOKINGSYNC_CLIENT_SECRET is required")
        if not self.redirect_uri:
            raise ConfigurationError("BOOKINGSYNC_REDIRECT_URI is required")


@lru_cache()
def get_bookingsync_config() -> BookingSyncConfig:
    """Get BookingSync configuration singleton."""
    return BookingSyncConfig.from_env()


def create_oauth_client(
    config: BookingSyncConfig | None = None,
    transport: HttpTransport | None = None,
) -> OAuth2Client:
    """
    Create an OAuth2 client wired to the BookingSync provider.

    Args:
        config: BookingSync configuration (uses default if not provided)
        transport: HTTP transport (a new HttpxTransport if not provided)

    Returns:
        Configured OAuth2Client

    Raises:
        ConfigurationError: If credentials are missing
    """
    if config is None:
        config = get_bookingsync_config()
    config.validate()

    provider = BookingSyncProvider(base_url=config.base_url, scopes=config.scopes)
    logger.info("Created BookingSync OAuth client", extra={"base_url": config.base_url})

    return OAuth2Client(
        provider=provider,
        transport=transport or HttpxTransport(),
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=config.redirect_uri,
    )
