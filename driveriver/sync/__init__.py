"""
Sync core module.

Handles folder scope resolution, change polling and filtering, and
content download.
"""

from .hierarchy import FolderScope, FolderHierarchyResolver, build_scope, collect_parents
from .scope_filter import is_in_scope
from .poller import ChangePoller, poll
from .download import fetch_content, get_download_url, get_mime_type, resolve_download
from .river import DriveRiver, LoggingSink, Sink, SyncReport

__all__ = [
    # Hierarchy
    "FolderScope",
    "FolderHierarchyResolver",
    "build_scope",
    "collect_parents",
    # Filter
    "is_in_scope",
    # Poller
    "ChangePoller",
    "poll",
    # Download
    "fetch_content",
    "get_download_url",
    "get_mime_type",
    "resolve_download",
    # River
    "DriveRiver",
    "LoggingSink",
    "Sink",
    "SyncReport",
]
