"""
Tests for RefreshTokenAuth credential exchange.

Credentials.refresh is patched; no token endpoint is contacted.
"""

from unittest.mock import patch

import pytest
from google.auth.exceptions import RefreshError, TransportError as GoogleTransportError
from google.oauth2.credentials import Credentials

from driveriver.drive.auth import RefreshTokenAuth
from driveriver.errors import AuthError


@pytest.fixture
def auth():
    return RefreshTokenAuth("client-id", "client-secret", "refresh-token")


class TestRefreshTokenAuth:
    """Tests for RefreshTokenAuth."""

    def test_credentials_built_from_config(self, auth):
        creds = auth.credentials
        assert creds.client_id == "client-id"
        assert creds.client_secret == "client-secret"
        assert creds.refresh_token == "refresh-token"
        assert creds.token is None

    def test_get_token_refreshes_when_missing(self, auth):
        def fake_refresh(request):
            auth.credentials.token = "fresh"

        with patch.object(Credentials, "refresh", side_effect=fake_refresh) as mock_refresh:
            assert auth.get_token() == "fresh"
            assert auth.get_token() == "fresh"
        assert mock_refresh.call_count == 1
        assert auth.refreshes == 1

    def test_refresh_rejected(self, auth):
        """A rejected refresh token becomes AuthError."""
        with patch.object(Credentials, "refresh", side_effect=RefreshError("invalid_grant")):
            with pytest.raises(AuthError):
                auth.refresh()
        assert auth.refreshes == 0

    def test_token_endpoint_unreachable(self, auth):
        with patch.object(Credentials, "refresh", side_effect=GoogleTransportError("down")):
            with pytest.raises(AuthError):
                auth.get_token()
