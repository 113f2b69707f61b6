"""
Tests for AccessToken, ResourceOwner and error body normalization.
"""

import pytest
from pydantic import ValidationError

from bookingsync_oauth.core.domain import (
    AccessToken,
    ResourceOwner,
    error_message,
)
from bookingsync_oauth.core.exceptions import MalformedResponseError


NOW = 1_700_000_000


class TestAccessToken:
    """Tests for AccessToken model."""

    def test_expires_in_is_offset(self):
        token = AccessToken.from_response(
            {"access_token": "T", "expires_in": 3600}, now=NOW
        )

        assert token.expires == NOW + 3600

    def test_expires_offset(self):
        token = AccessToken.from_response({"access_token": "T", "expires": 3600}, now=NOW)

        assert token.expires == NOW + 3600

    def test_expires_timestamp_kept(self):
        token = AccessToken.from_response(
            {"access_token": "T", "expires": NOW + 60}, now=NOW
        )

        assert token.expires == NOW + 60

    def test_expires_in_wins_over_expires(self):
        token = AccessToken.from_response(
            {"access_token": "T", "expires_in": 10, "expires": 3600}, now=NOW
        )

        assert token.expires == NOW + 10

    def test_no_expiry(self):
        token = AccessToken.from_response({"access_token": "T"})

        assert token.expires is None
        with pytest.raises(ValueError):
            token.has_expired()

    def test_has_expired(self):
        assert AccessToken(access_token="T", expires=NOW).has_expired() is True

    def test_resource_owner_id_is_stringified(self):
        token = AccessToken.from_response(
            {"access_token": "T", "uid": 1}, resource_owner_id_key="uid"
        )

        assert token.resource_owner_id == "1"
        assert "uid" not in token.values

    def test_resource_owner_id_missing(self):
        token = AccessToken.from_response(
            {"access_token": "T"}, resource_owner_id_key="uid"
        )

        assert token.resource_owner_id is None

    def test_extra_values_kept(self):
        token = AccessToken.from_response(
            {"access_token": "T", "token_type": "Bearer", "scope": "public"}
        )

        assert token.values == {"token_type": "Bearer", "scope": "public"}

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"refresh_token": "R"},
            {"access_token": None},
            {"access_token": "T", "expires_in": "soon"},
            "access_token=T",
        ],
    )
    def test_invalid_response_raises(self, body):
        with pytest.raises(MalformedResponseError):
            AccessToken.from_response(body)

    def test_token_is_immutable(self):
        token = AccessToken(access_token="T")

        with pytest.raises(ValidationError):
            token.access_token = "other"

    def test_to_dict(self):
        token = AccessToken.from_response(
            {"access_token": "T", "expires": 3600, "refresh_token": "R", "uid": 1},
            resource_owner_id_key="uid",
            now=NOW,
        )

        assert token.to_dict() == {
            "access_token": "T",
            "refresh_token": "R",
            "expires": NOW + 3600,
            "resource_owner_id": "1",
        }

    def test_str_is_token(self):
        assert str(AccessToken(access_token="T")) == "T"


class TestResourceOwner:
    """Tests for ResourceOwner model."""

    def test_from_account_dict(self):
        owner = ResourceOwner.from_account(
            {
                "id": "mock_id",
                "business_name": "mock_business_name",
                "email": "mock_email",
                "status": "mock_status",
                "website": "ignored",
            }
        )

        assert owner.id == "mock_id"
        assert owner.business_name == "mock_business_name"
        assert owner.email == "mock_email"
        assert owner.status == "mock_status"

    def test_to_dict_is_ordered(self):
        owner = ResourceOwner(
            id=7, business_name="Villas", email="hi@villas.test", status="trial"
        )

        assert list(owner.to_dict()) == ["id", "business_name", "email", "status"]
        assert owner.to_dict()["id"] == 7

    def test_owner_is_immutable(self):
        owner = ResourceOwner(id=7, business_name=None, email=None, status=None)

        with pytest.raises(ValidationError):
            owner.email = "new@villas.test"


class TestErrorMessage:
    """Tests for error body normalization."""

    def test_string_error(self):
        assert error_message({"error": "mock_error"}, "default") == "mock_error"

    def test_structured_error(self):
        body = {"error": {"message": "mock_error"}, "error_description": "desc"}

        assert error_message(body, "default") == "mock_error"

    def test_structured_error_without_message(self):
        assert error_message({"error": {"code": 12}}, "default") == "default"

    def test_unexpected_error_type(self):
        assert error_message({"error": 42}, "default") == "42"

    @pytest.mark.parametrize("body", [{"error": None}, {"error": ""}])
    def test_empty_error_uses_default(self, body):
        assert error_message(body, "default") == "default"

    @pytest.mark.parametrize("body", [None, "text body", {"detail": "x"}, []])
    def test_no_error_key(self, body):
        assert error_message(body, "default") == "default"
