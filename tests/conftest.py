"""
Shared test configuration and fixtures.
"""

import os
from unittest.mock import patch

import httpx
import pytest

from bookingsync_oauth.core.oauth_service import OAuth2Client
from bookingsync_oauth.infrastructure.oauth_providers import BookingSyncProvider

# SessionMiddleware needs a secret before the app module is imported
with patch.dict(os.environ, {"SESSION_SECRET_KEY": "test-secret"}):
    from bookingsync_oauth.main import app  # noqa: F401


class FakeTransport:
    """
    In-memory HttpTransport.

    Returns queued responses in order and records every request sent.
    """

    def __init__(self):
        self.responses: list[httpx.Response] = []
        self.requests: list[dict] = []

    def queue(self, status_code: int, json=None, text: str | None = None) -> None:
        """Queue the next response."""
        if text is not None:
            self.responses.append(httpx.Response(status_code, text=text))
        else:
            self.responses.append(httpx.Response(status_code, json=json))

    def send(self, method, url, headers=None, data=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers or {}, "data": data}
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)


@pytest.fixture
def transport():
    """Fake transport with no queued responses."""
    return FakeTransport()


@pytest.fixture
def provider():
    """BookingSync provider with default settings."""
    return BookingSyncProvider()


@pytest.fixture
def oauth_client(provider, transport):
    """OAuth2 client wired to the BookingSync provider and a fake transport."""
    return OAuth2Client(
        provider=provider,
        transport=transport,
        client_id="mock_client_id",
        client_secret="mock_secret",
        redirect_uri="none",
    )


@pytest.fixture
def access_token_body():
    """Token endpoint response body."""
    return {
        "access_token": "mock_access_token",
        "expires": 3600,
        "refresh_token": "mock_refresh_token",
        "uid": 1,
    }


@pytest.fixture
def accounts_body():
    """Resource owner endpoint response body."""
    return {
        "accounts": [
            {
                "id": "mock_id",
                "business_name": "mock_business_name",
                "email": "mock_email",
                "status": "mock_status",
            }
        ]
    }
