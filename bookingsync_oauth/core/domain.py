"""
Core domain models for the OAuth2 client.

AccessToken and ResourceOwner are what callers get back. The wire models
(TokenResponse, AccountsResponse, ErrorBody) describe what the provider
sends and are validated before anything is built from them.
"""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bookingsync_oauth.core.exceptions import MalformedResponseError


# Values above this are absolute timestamps, anything below is an offset.
ONE_DECADE_SECONDS = 315537897


# =============================================================================
# Wire models
# =============================================================================


class TokenResponse(BaseModel):
    """Token endpoint response body."""

    access_token: str = Field(description="Bearer token")
    expires_in: int | None = Field(default=None, description="Lifetime in seconds")
    expires: int | None = Field(
        default=None, description="Lifetime in seconds or expiry timestamp"
    )
    refresh_token: str | None = Field(default=None, description="Refresh token")

    model_config = ConfigDict(extra="allow")


class AccountRecord(BaseModel):
    """One entry of the account listing."""

    id: int | str
    business_name: str | None
    email: str | None
    status: str | None

    model_config = ConfigDict(extra="allow")


class AccountsResponse(BaseModel):
    """Resource owner endpoint response body."""

    accounts: list[AccountRecord] = Field(min_length=1)

    model_config = ConfigDict(extra="allow")


class ErrorDetail(BaseModel):
    """Structured form of the ``error`` key."""

    message: str | None = None

    model_config = ConfigDict(extra="allow")


class ErrorBody(BaseModel):
    """
    Error response body.

    ``error`` is either a plain string or an object with a ``message``.
    """

    error: str | ErrorDetail
    error_description: str | None = None

    model_config = ConfigDict(extra="allow")


def error_message(body: Any, default: str) -> str:
    """
    Normalize the ``error`` key of a response body into one message.

    Args:
        body: Decoded response body (dict, text or None)
        default: Message used when the body carries nothing usable

    Returns:
        The string error, the nested error message, or ``default``
    """
    if not isinstance(body, dict) or body.get("error") in (None, ""):
        return default

    try:
        parsed = ErrorBody.model_validate(body)
    except ValidationError:
        return str(body["error"])

    if isinstance(parsed.error, ErrorDetail):
        return parsed.error.message or default
    return parsed.error


# =============================================================================
# Domain models
# =============================================================================


class AccessToken(BaseModel):
    """
    OAuth2 access token.

    Built once from a token response and never changed afterwards.
    ``expires`` is a Unix timestamp.
    """

    access_token: str = Field(description="Bearer token")
    expires: int | None = Field(default=None, description="Expiry (Unix epoch)")
    refresh_token: str | None = Field(default=None, description="Refresh token")
    resource_owner_id: str | None = Field(
        default=None, description="Identifier of the account owning the token"
    )
    values: dict[str, Any] = Field(
        default_factory=dict, description="Other fields of the token response"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_response(
        cls,
        body: Any,
        resource_owner_id_key: str | None = None,
        now: int | None = None,
    ) -> "AccessToken":
        """
        Create an AccessToken from a decoded token response.

        Args:
            body: Decoded JSON body of the token endpoint
            resource_owner_id_key: Body key holding the resource owner id
            now: Current Unix time (defaults to the system clock)

        Returns:
            AccessToken instance

        Raises:
            MalformedResponseError: If the body is not a valid token response
        """
        try:
            parsed = TokenResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid token response: {e}") from e

        if now is None:
            now = int(time.time())

        expires = None
        if parsed.expires_in is not None:
            expires = now + parsed.expires_in
        elif parsed.expires is not None:
            expires = parsed.expires
            if expires <= ONE_DECADE_SECONDS:
                expires = now + expires

        resource_owner_id = None
        if resource_owner_id_key and body.get(resource_owner_id_key) is not None:
            resource_owner_id = str(body[resource_owner_id_key])

        values = {
            key: value
            for key, value in (parsed.model_extra or {}).items()
            if key != resource_owner_id_key
        }

        return cls(
            access_token=parsed.access_token,
            expires=expires,
            refresh_token=parsed.refresh_token,
            resource_owner_id=resource_owner_id,
            values=values,
        )

    def has_expired(self) -> bool:
        """Check if the token is past its expiry."""
        if self.expires is None:
            raise ValueError('"expires" is not set on the token')
        return self.expires < time.time()

    def to_dict(self) -> dict[str, Any]:
        """Export in token response shape, skipping unset fields."""
        data = dict(self.values)
        data["access_token"] = self.access_token
        if self.refresh_token is not None:
            data["refresh_token"] = self.refresh_token
        if self.expires is not None:
            data["expires"] = self.expires
        if self.resource_owner_id is not None:
            data["resource_owner_id"] = self.resource_owner_id
        return data

    def __str__(self) -> str:
        return self.access_token


class ResourceOwner(BaseModel):
    """
    Authenticated BookingSync account.

    Values are stored as received; the provider adapter validates the
    response before building one.
    """

    id: int | str = Field(description="Account ID")
    business_name: str | None = Field(description="Account business name")
    email: str | None = Field(description="Account email")
    status: str | None = Field(description="Account status")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_account(cls, account: AccountRecord | dict[str, Any]) -> "ResourceOwner":
        """Create a ResourceOwner from one account record."""
        if isinstance(account, dict):
            account = AccountRecord.model_validate(account)
        return cls(
            id=account.id,
            business_name=account.business_name,
            email=account.email,
            status=account.status,
        )

    def to_dict(self) -> dict[str, Any]:
        """Ordered snapshot of the account fields."""
        return {
            "id": self.id,
            "business_name": self.business_name,
            "email": self.email,
            "status": self.status,
        }
