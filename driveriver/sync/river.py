"""
Sync cycle orchestration for Drive River.

Runs one cycle: resolve the folder scope, poll changes since the caller's
cursor, and hand each accepted change to a sink.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

from ..drive.session import RemoteSession
from ..errors import AuthError
from ..models import ChangeRecord, FileRef
from .download import fetch_content, get_mime_type
from .hierarchy import FolderHierarchyResolver, FolderScope
from .poller import ChangePoller, reauthenticate

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Receives resolved content and deletions for indexing."""

    def index(self, file: FileRef, content: Optional[bytes], mime_type: str) -> None: ...

    def delete(self, change: ChangeRecord) -> None: ...


class LoggingSink:
    """Sink that only logs what it receives."""

    def index(self, file: FileRef, content: Optional[bytes], mime_type: str) -> None:
        size = len(content) if content is not None else 0
        logger.info("index %s '%s' (%s, %d bytes)", file.id, file.title, mime_type, size)

    def delete(self, change: ChangeRecord) -> None:
        logger.info("delete %s", change.file_id)


@dataclass
class SyncReport:
    """Outcome of one sync cycle. The caller stores `cursor`."""
    cursor: int
    indexed: int = 0
    deleted: int = 0
    empty: int = 0  # indexed without content
    duration_seconds: float = 0.0


class DriveRiver:
    """Runs sync cycles against one drive and optional root folder."""

    def __init__(self, session: RemoteSession, sink: Sink, root_folder_name: Optional[str] = None):
        """
        Initialize the river.

        Args:
            session: Remote drive session
            sink: Receiver for indexed content and deletions
            root_folder_name: Top-level folder to watch (None for the whole drive)
        """
        self.session = session
        self.sink = sink
        self.root_folder_name = root_folder_name or None
        self.scope = FolderScope.whole_drive()

    def refresh_scope(self) -> FolderScope:
        """
        Re-resolve the folder scope, replacing the previous snapshot whole.

        A rejected token re-authenticates the session before the error is
        raised, as the poller does.
        """
        if self.root_folder_name is None:
            scope = FolderScope.whole_drive()
        else:
            try:
                scope = FolderHierarchyResolver(self.session).resolve(self.root_folder_name)
            except AuthError:
                reauthenticate(self.session)
                raise
        self.scope = scope
        return scope

    def run_once(self, last_seen_cursor: Optional[int] = None) -> SyncReport:
        """
        Run one sync cycle.

        Scope resolution failures abort before any change is processed.
        Poll failures propagate with no cursor. Download failures only
        leave that file without content.

        Args:
            last_seen_cursor: Cursor returned by the previous cycle (None on first run)

        Returns:
            SyncReport carrying the new cursor
        """
        start = time.time()
        scope = self.refresh_scope()
        changes = ChangePoller(self.session, scope).poll(last_seen_cursor)

        report = SyncReport(cursor=changes.cursor)
        for change in changes.changes:
            if change.is_deletion:
                self.sink.delete(change)
                report.deleted += 1
                continue

            content = fetch_content(self.session, change.file)
            if content is None:
                report.empty += 1
            self.sink.index(change.file, content, get_mime_type(change.file))
            report.indexed += 1

        report.duration_seconds = time.time() - start
        logger.info(
            "Sync cycle done: %d indexed, %d deleted, cursor %d",
            report.indexed, report.deleted, report.cursor,
        )
        return report
