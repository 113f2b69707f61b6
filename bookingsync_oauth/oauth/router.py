"""
BookingSync login endpoints.

- GET /oauth/bookingsync/connect - Start OAuth flow
- GET /oauth/bookingsync/callback - Handle callback, store the account

The CSRF state lives in the Starlette session between the two requests.
"""

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from bookingsync_oauth.core.exceptions import (
    IdentityProviderError,
    MalformedResponseError,
)
from bookingsync_oauth.oauth.dependencies import BookingSyncClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth/bookingsync", tags=["oauth"])

SESSION_STATE_KEY = "bookingsync_oauth_state"
SESSION_ACCOUNT_KEY = "bookingsync_account"


@router.get("/connect")
def connect(request: Request, client: BookingSyncClient):
    """
    Start OAuth2 authorization flow.

    Stores a fresh state in the session and redirects the user to the
    BookingSync authorization page.
    """
    url, state = client.create_authorization_url()
    request.session[SESSION_STATE_KEY] = state

    logger.info("Starting BookingSync OAuth flow")

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/callback")
def callback(
    request: Request,
    client: BookingSyncClient,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """
    Handle OAuth2 callback from BookingSync.

    Verifies the state, exchanges the code for a token and loads the
    authenticated account into the session.

    Args:
        request: Starlette request (carries the session)
        client: BookingSync OAuth client
        code: Authorization code
        state: State echoed back by the provider
        error: Error code when the user denied access

    Returns:
        The authenticated account

    Raises:
        HTTPException: 400 on a state mismatch, 401 when login fails
    """
    expected_state = request.session.pop(SESSION_STATE_KEY, None)

    if error:
        logger.warning(f"BookingSync authorization denied: {error}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="BookingSync login failed",
        )

    if not state or not expected_state or not secrets.compare_digest(
        state.encode(), expected_state.encode()
    ):
        logger.warning("OAuth state mismatch on BookingSync callback")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OAuth state",
        )

    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code",
        )

    try:
        token = client.get_access_token("authorization_code", code=code)
        owner = client.get_resource_owner(token)
    except (IdentityProviderError, MalformedResponseError) as e:
        logger.error(
            f"BookingSync login failed: {e}",
            extra={"error_type": type(e).__name__},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="BookingSync login failed",
        )

    account = owner.to_dict()
    request.session[SESSION_ACCOUNT_KEY] = account

    logger.info(
        "BookingSync login succeeded",
        extra={"account_id": owner.id},
    )

    return {
        "status": "success",
        "account": account,
    }
