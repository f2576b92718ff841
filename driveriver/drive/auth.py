"""
OAuth credential exchange for Drive River.

Exchanges a long-lived refresh token for short-lived access tokens.
"""

import logging
from typing import Optional

from google.auth.exceptions import RefreshError, TransportError as GoogleTransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from ..errors import AuthError

logger = logging.getLogger(__name__)


class RefreshTokenAuth:
    """
    Manages OAuth 2.0 credentials built from a client id/secret and refresh token.

    No interactive flow: the refresh token is obtained out of band and
    supplied through configuration.
    """

    SCOPES = ["https://www.googleapis.com/auth/drive.readonly"]
    TOKEN_URI = "https://oauth2.googleapis.com/token"

    def __init__(self, client_id: str, client_secret: str, refresh_token: str):
        """
        Initialize the credential holder.

        Args:
            client_id: OAuth client id
            client_secret: OAuth client secret
            refresh_token: Long-lived refresh token for the drive owner
        """
        self._credentials = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=self.TOKEN_URI,
            client_id=client_id,
            client_secret=client_secret,
            scopes=self.SCOPES,
        )
        self._refreshes = 0

    @property
    def refreshes(self) -> int:
        """Number of successful credential exchanges."""
        return self._refreshes

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def refresh(self) -> Credentials:
        """
        Run the credential exchange and return fresh credentials.

        Blocks until the token endpoint answers.

        Raises:
            AuthError: If the refresh token is rejected or the endpoint is unreachable
        """
        logger.info("Establishing connection to Google Drive")
        try:
            self._credentials.refresh(Request())
        except RefreshError as e:
            logger.error("Refresh token rejected: %s", e)
            raise AuthError(f"Could not refresh credentials: {e}") from e
        except GoogleTransportError as e:
            logger.error("Token endpoint unreachable: %s", e)
            raise AuthError(f"Could not reach token endpoint: {e}") from e
        self._refreshes += 1
        logger.info("Connection established.")
        return self._credentials

    def get_token(self) -> Optional[str]:
        """
        Get a usable access token, refreshing first if none is held or it expired.

        Returns:
            Access token string
        """
        if not self._credentials.token or self._credentials.expired:
            self.refresh()
        return self._credentials.token
