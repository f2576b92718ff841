"""
Interface the sync core expects from a remote drive connection.
"""

from typing import Optional, Protocol

from ..models import ChangePage, FolderRecord


class RemoteSession(Protocol):
    """Anything that can authenticate, list folders and changes, and fetch bytes."""

    def authenticate(self): ...

    def list_folders(self, query: str) -> list[FolderRecord]: ...

    def list_changes(self, start_change_id: Optional[int] = None, page_token: Optional[str] = None) -> ChangePage: ...

    def fetch_bytes(self, url: str) -> bytes: ...
