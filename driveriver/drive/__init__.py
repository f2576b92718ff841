"""
Google Drive interaction module.

Handles authentication, the API client, and search queries.
"""

from .auth import RefreshTokenAuth
from .client import DriveClient, DriveClientConfig
from .session import RemoteSession

__all__ = [
    "RefreshTokenAuth",
    "DriveClient",
    "DriveClientConfig",
    "RemoteSession",
]
