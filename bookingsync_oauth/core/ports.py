"""
Port definitions (interfaces) for the OAuth2 client.

The generic client in oauth_service depends on these contracts only.
Infrastructure adapters implement them: a provider adapter for the
identity provider specifics and a transport for HTTP.
"""

from typing import Any, Protocol

from bookingsync_oauth.core.domain import AccessToken, ResourceOwner


class HttpResponse(Protocol):
    """The part of an HTTP response the client reads."""

    status_code: int

    @property
    def reason_phrase(self) -> str: ...

    @property
    def text(self) -> str: ...

    def json(self) -> Any: ...


class HttpTransport(Protocol):
    """
    Port (interface) for sending HTTP requests.

    Implemented by HttpxTransport. Tests inject fakes. Transport failures
    are raised as-is and never retried by the client.
    """

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Send one request and return the response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            data: Form fields sent url-encoded in the body

        Returns:
            The response, whatever its status code
        """
        ...


class ProviderAdapter(Protocol):
    """
    Port (interface) for identity provider specifics.

    Supplies endpoint URLs, default scopes and authorization parameters,
    and maps raw responses to domain models or errors.
    """

    scope_separator: str
    access_token_resource_owner_id: str | None

    def base_authorization_url(self) -> str:
        """URL the user is redirected to for authorization."""
        ...

    def base_access_token_url(self, params: dict[str, Any]) -> str:
        """URL the authorization code is exchanged at."""
        ...

    def default_scopes(self) -> list[str]:
        """Scopes requested when the caller passes none."""
        ...

    def authorization_parameters(self, options: dict[str, Any]) -> dict[str, Any]:
        """Add provider parameters to the authorization query."""
        ...

    def resource_owner_details_url(self, token: AccessToken) -> str:
        """URL of the authenticated resource owner."""
        ...

    def check_response(self, response: HttpResponse, body: Any) -> None:
        """Raise IdentityProviderError if the response is an error."""
        ...

    def create_resource_owner(self, body: Any, token: AccessToken) -> ResourceOwner:
        """Map a successful resource owner response to a ResourceOwner."""
        ...
