"""
OAuth 2.0 provider implementations.
"""

import logging
from typing import Any

from pydantic import ValidationError

from bookingsync_oauth.core.domain import (
    AccessToken,
    AccountsResponse,
    ResourceOwner,
    error_message,
)
from bookingsync_oauth.core.exceptions import (
    IdentityProviderError,
    MalformedResponseError,
)
from bookingsync_oauth.core.ports import HttpResponse


logger = logging.getLogger(__name__)

BOOKINGSYNC_BASE_URL = "https://www.bookingsync.com"


class BookingSyncProvider:
    """OAuth provider for BookingSync."""

    scope_separator = " "
    access_token_resource_owner_id = "uid"

    def __init__(
        self,
        base_url: str = BOOKINGSYNC_BASE_URL,
        scopes: list[str] | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._scopes = list(scopes) if scopes else ["public"]

    def base_authorization_url(self) -> str:
        return f"{self.base_url}/oauth/authorize"

    def base_access_token_url(self, params: dict[str, Any]) -> str:
        return f"{self.base_url}/oauth/token"

    def default_scopes(self) -> list[str]:
        return list(self._scopes)

    def authorization_parameters(self, options: dict[str, Any]) -> dict[str, Any]:
        """Add ``approval_prompt``; caller options win on collision."""
        return {"approval_prompt": "auto", **options}

    def resource_owner_details_url(self, token: AccessToken) -> str:
        return f"{self.base_url}/api/v3/accounts"

    def check_response(self, response: HttpResponse, body: Any) -> None:
        """
        Raise IdentityProviderError for error responses.

        A response is an error when its status is 400 or above, or when the
        body has an ``error`` key (BookingSync sometimes answers 200 with one).

        Raises:
            IdentityProviderError: With the normalized message, the status
                code and the raw body
        """
        has_error_key = isinstance(body, dict) and "error" in body
        if response.status_code < 400 and not has_error_key:
            return

        message = error_message(
            body, default=response.reason_phrase or "Identity provider error"
        )
        logger.warning(
            f"BookingSync returned an error: {message}",
            extra={"status_code": response.status_code},
        )
        raise IdentityProviderError(message, response.status_code, body)

    def create_resource_owner(self, body: Any, token: AccessToken) -> ResourceOwner:
        """
        Build the ResourceOwner from the account listing.

        The listing is expected to hold the single account the token was
        issued for. When several come back the first one is used.

        Raises:
            MalformedResponseError: No accounts, or an account without the
                required keys
        """
        try:
            parsed = AccountsResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid accounts response: {e}") from e

        if len(parsed.accounts) > 1:
            logger.warning(
                f"Expected one account, got {len(parsed.accounts)}; using the first",
                extra={"resource_owner_id": token.resource_owner_id},
            )

        return ResourceOwner.from_account(parsed.accounts[0])
