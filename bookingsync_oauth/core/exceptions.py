"""
Domain exceptions for the OAuth2 client.

Transport failures are not wrapped here: httpx errors reach the caller
unchanged. Everything the client itself decides is a failure is one of
the exceptions below.
"""

from typing import Any


class OAuthClientError(Exception):
    """Base exception for OAuth2 client errors."""

    pass


class IdentityProviderError(OAuthClientError):
    """
    Raised when the identity provider rejects or fails a request.

    Produced by the provider adapter when the response has an error status
    or the body carries an ``error`` key. The message is for diagnostics and
    is not guaranteed to be safe to show to end users.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status_code})"


class MalformedResponseError(OAuthClientError):
    """
    Raised when a successful response does not have the expected shape.

    Examples: a token response without ``access_token`` or an account
    listing without any account.
    """

    pass


class InvalidGrantError(OAuthClientError):
    """Raised for an unsupported grant type or a missing grant parameter."""

    pass


class ConfigurationError(OAuthClientError):
    """Raised when required client configuration is missing."""

    pass
