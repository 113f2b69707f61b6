"""
Generic OAuth 2.0 authorization code client.

The client knows the protocol steps and nothing about a particular
identity provider: endpoints, scopes and response mapping come from the
ProviderAdapter it is composed with, HTTP goes through the HttpTransport.
"""

import logging
from typing import Any

from authlib.common.security import generate_token
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from bookingsync_oauth.core.domain import AccessToken, ResourceOwner
from bookingsync_oauth.core.exceptions import (
    ConfigurationError,
    InvalidGrantError,
    MalformedResponseError,
)
from bookingsync_oauth.core.ports import HttpResponse, HttpTransport, ProviderAdapter


logger = logging.getLogger(__name__)

STATE_LENGTH = 32


class OAuth2Client:
    """
    OAuth 2.0 client for the authorization code grant.

    Holds only immutable configuration; every call is independent.
    """

    # Grant type -> parameter it cannot do without
    GRANT_PARAMETERS = {
        "authorization_code": "code",
        "refresh_token": "refresh_token",
    }

    def __init__(
        self,
        provider: ProviderAdapter,
        transport: HttpTransport,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ):
        if not client_id or not client_secret:
            raise ConfigurationError("client_id and client_secret are required")
        if not redirect_uri:
            raise ConfigurationError("redirect_uri is required")

        self.provider = provider
        self.transport = transport
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    def create_authorization_url(self, **options: Any) -> tuple[str, str]:
        """
        Build the URL the user is redirected to.

        A new state is generated for every call unless one is passed in.
        The caller must keep it to verify the callback.

        Args:
            **options: Query parameters overriding the defaults
                (state, scope, redirect_uri, provider parameters)

        Returns:
            Tuple of (authorization URL, state)
        """
        params = self.provider.authorization_parameters(options)

        state = params.pop("state", None) or generate_token(STATE_LENGTH)
        response_type = params.pop("response_type", None) or "code"
        redirect_uri = params.pop("redirect_uri", None) or self.redirect_uri
        params.pop("client_id", None)

        scope = params.pop("scope", None)
        if scope is None:
            scope = self.provider.default_scopes()
        if isinstance(scope, (list, tuple)):
            scope = self.provider.scope_separator.join(scope)

        url = prepare_grant_uri(
            self.provider.base_authorization_url(),
            self.client_id,
            response_type,
            redirect_uri=redirect_uri,
            scope=scope,
            state=state,
            **params,
        )
        return url, state

    def get_access_token(
        self, grant: str = "authorization_code", **params: Any
    ) -> AccessToken:
        """
        Request an access token from the token endpoint.

        Args:
            grant: "authorization_code" or "refresh_token"
            **params: Grant parameters (code or refresh_token)

        Returns:
            The parsed AccessToken

        Raises:
            InvalidGrantError: Unsupported grant or missing grant parameter
            IdentityProviderError: The provider returned an error
            MalformedResponseError: The response is not a token response
        """
        required = self.GRANT_PARAMETERS.get(grant)
        if required is None:
            raise InvalidGrantError(f"Unsupported grant type: {grant}")
        if not params.get(required):
            raise InvalidGrantError(
                f"Missing required parameter '{required}' for grant '{grant}'"
            )

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": grant,
        }
        data.update({key: str(value) for key, value in params.items()})

        url = self.provider.base_access_token_url(data)
        logger.info(f"Requesting access token ({grant})", extra={"url": url})

        response = self.transport.send(
            "POST", url, headers={"Accept": "application/json"}, data=data
        )
        body = self._parse_response(response)
        self.provider.check_response(response, body)

        return AccessToken.from_response(
            body, self.provider.access_token_resource_owner_id
        )

    def get_resource_owner(self, token: AccessToken) -> ResourceOwner:
        """
        Fetch the account the token was issued for.

        Raises:
            IdentityProviderError: The provider returned an error
            MalformedResponseError: The response has no usable account
        """
        url = self.provider.resource_owner_details_url(token)
        headers = {"Accept": "application/json"}
        headers.update(self.get_authorization_headers(token))

        response = self.transport.send("GET", url, headers=headers)
        body = self._parse_response(response)
        self.provider.check_response(response, body)

        owner = self.provider.create_resource_owner(body, token)
        logger.info("Fetched resource owner", extra={"account_id": owner.id})
        return owner

    def get_authorization_headers(self, token: AccessToken) -> dict[str, str]:
        """Headers authenticating a request with the token."""
        return {"Authorization": f"Bearer {token.access_token}"}

    @staticmethod
    def _parse_response(response: HttpResponse) -> Any:
        """
        Decode a JSON response body.

        Error responses with a non-JSON body are returned as text so the
        provider can still report them.
        """
        try:
            return response.json()
        except ValueError as e:
            if response.status_code >= 400:
                return response.text
            raise MalformedResponseError(
                f"Response body is not valid JSON (HTTP {response.status_code})"
            ) from e
