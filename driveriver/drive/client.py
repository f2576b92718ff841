"""
Google Drive API client for Drive River.

Handles all HTTP interactions with the Google Drive v2 API.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

from ..errors import AuthError, TransportError
from ..models import ChangePage, FolderRecord
from .auth import RefreshTokenAuth

logger = logging.getLogger(__name__)

# Status codes worth another attempt at the transport layer
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


@dataclass
class DriveClientConfig:
    """Configuration for DriveClient."""
    timeout: int = 60
    max_retries: int = 3
    backoff: float = 1.0
    page_size: int = 1000
    chunk_size: int = 32768


class DriveClient:
    """
    Google Drive API client.

    Implements the remote session used by the resolver, poller and
    download resolver: credential exchange, folder listing, change pages
    and byte downloads.
    """

    API_BASE = "https://www.googleapis.com/drive/v2"
    API_FILES = f"{API_BASE}/files"
    API_CHANGES = f"{API_BASE}/changes"

    FOLDER_FIELDS = "nextPageToken, items(id, title, parents(id))"
    CHANGE_FIELDS = (
        "nextPageToken, largestChangeId, items(id, fileId, deleted, "
        "file(id, title, mimeType, parents(id), downloadUrl, exportLinks, labels(trashed)))"
    )

    def __init__(self, auth: RefreshTokenAuth, config: Optional[DriveClientConfig] = None):
        """
        Initialize the Drive client.

        Args:
            auth: Credential holder used for bearer tokens
            config: Client configuration
        """
        self.auth = auth
        self.config = config or DriveClientConfig()
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    def reset_api_calls(self):
        """Reset the API call counter."""
        self._api_calls = 0

    def _get_headers(self) -> dict:
        """Get request headers."""
        return {"Authorization": f"Bearer {self.auth.get_token()}"}

    def _request_with_retry(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Make a request, retrying timeouts and transient server errors.

        A 401 is never retried here; it surfaces as AuthError so the caller
        can re-authenticate.
        """
        timeout = kwargs.pop("timeout", self.config.timeout)
        last_error = None

        for attempt in range(self.config.max_retries):
            try:
                response = requests.request(
                    method, url, timeout=timeout, headers=self._get_headers(), **kwargs
                )
                self._api_calls += 1
                if response.status_code == 401:
                    response.close()
                    raise AuthError(f"Authorization rejected for {url}")
                if response.status_code in RETRYABLE_STATUS_CODES and attempt < self.config.max_retries - 1:
                    logger.info("Got %s from %s, retrying", response.status_code, url)
                    response.close()
                    time.sleep(self.config.backoff * 2 ** attempt)
                    continue
                response.raise_for_status()
                return response
            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                last_error = e
                if attempt < self.config.max_retries - 1:
                    time.sleep(self.config.backoff * 2 ** attempt)
                    continue
                raise TransportError(f"Request to {url} failed: {e}") from e
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                raise TransportError(f"Request to {url} failed: {e}", status_code=status) from e
            except requests.exceptions.RequestException as e:
                raise TransportError(f"Request to {url} failed: {e}") from e

        raise TransportError(f"Request failed after {self.config.max_retries} attempts: {last_error}")

    def _get_json(self, url: str, params: dict) -> dict:
        """GET a JSON object, treating an undecodable body as a transport failure."""
        response = self._request_with_retry("GET", url, params=params)
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}", status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise TransportError(f"Expected a JSON object from {url}", status_code=response.status_code)
        return data

    def authenticate(self):
        """
        Re-run the credential exchange.

        Returns:
            Fresh credentials

        Raises:
            AuthError: If the exchange fails
        """
        return self.auth.refresh()

    def list_folders(self, query: str) -> list[FolderRecord]:
        """
        List all folders matching a search query.

        Handles pagination.

        Args:
            query: Drive v2 search query

        Returns:
            List of folder records, in listing order
        """
        folders = []
        page_token = None

        while True:
            params = {
                "q": query,
                "fields": self.FOLDER_FIELDS,
                "maxResults": self.config.page_size,
            }
            if page_token:
                params["pageToken"] = page_token

            data = self._get_json(self.API_FILES, params)

            folders.extend(FolderRecord.from_dict(item) for item in data.get("items", []))
            page_token = data.get("nextPageToken")

            if not page_token:
                break

        return folders

    def list_changes(self, start_change_id: Optional[int] = None, page_token: Optional[str] = None) -> ChangePage:
        """
        Get one page of the change feed.

        Args:
            start_change_id: First change id to include (None for the whole feed)
            page_token: Continuation token from the previous page

        Returns:
            ChangePage with items, continuation token and largest change id
        """
        params = {
            "fields": self.CHANGE_FIELDS,
            "maxResults": self.config.page_size,
        }
        if start_change_id is not None:
            params["startChangeId"] = str(start_change_id)
        if page_token:
            params["pageToken"] = page_token

        return ChangePage.from_dict(self._get_json(self.API_CHANGES, params))

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download a url fully into memory.

        Args:
            url: Download or export url

        Returns:
            Response body

        Raises:
            TransportError: If the request or the body stream fails
        """
        response = self._request_with_retry("GET", url, stream=True)
        try:
            return b"".join(response.iter_content(chunk_size=self.config.chunk_size))
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Download from {url} interrupted: {e}") from e
        finally:
            response.close()
