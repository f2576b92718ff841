"""
Incremental change polling for Drive River.

Pages through the remote change feed from a caller-held cursor and keeps
only the changes under the watched folder scope.
"""

import logging
from typing import Optional

from ..constants import NO_CHANGE_ID
from ..drive.session import RemoteSession
from ..errors import AuthError
from ..models import ChangeRecord, DriveChanges
from .hierarchy import FolderScope
from .scope_filter import is_in_scope

logger = logging.getLogger(__name__)


def reauthenticate(session: RemoteSession):
    """
    Re-run the credential exchange after a rejected token.

    A failed exchange is logged, not raised, so the caller can re-raise
    the error that triggered it.
    """
    logger.info("Token rejected. Refreshing the credentials.")
    try:
        session.authenticate()
    except AuthError as e:
        logger.error("Authorization exception while refreshing Google Drive credentials: %s", e)


class ChangePoller:
    """
    Retrieves in-scope changes since a cursor.

    The cursor returned is the largest change id reported by any page, even
    when the changes carrying it were filtered out. Those changes are not
    revisited if the scope later grows.
    """

    def __init__(self, session: RemoteSession, scope: Optional[FolderScope] = None):
        self.session = session
        self.scope = scope if scope is not None else FolderScope.whole_drive()

    def poll(self, last_seen_cursor: Optional[int] = None) -> DriveChanges:
        """
        Get the in-scope changes after a cursor.

        On an authorization failure the session re-authenticates and the
        original error is raised; the caller decides whether to poll again
        with the same cursor. Any other failure propagates as is. No cursor
        is returned on failure.

        Args:
            last_seen_cursor: Largest change id already processed (None on first run)

        Returns:
            DriveChanges with the new cursor and accepted changes in feed order
        """
        logger.info("Getting drive changes since %s", last_seen_cursor)
        scope = self.scope
        start_change_id = last_seen_cursor + 1 if last_seen_cursor is not None else None

        accepted: list[ChangeRecord] = []
        largest_change_id = NO_CHANGE_ID
        page_token = None

        while True:
            try:
                page = self.session.list_changes(start_change_id, page_token)
            except AuthError:
                reauthenticate(self.session)
                raise

            logger.info("Found %d items in this changes page", len(page.items))
            logger.info("  largest changes id is %d", page.largest_change_id)
            accepted.extend(change for change in page.items if is_in_scope(change, scope))
            largest_change_id = max(largest_change_id, page.largest_change_id)

            page_token = page.next_page_token
            if not page_token:
                break

        if last_seen_cursor is not None:
            largest_change_id = max(largest_change_id, last_seen_cursor)

        logger.info("Accepted %d changes, new cursor is %d", len(accepted), largest_change_id)
        return DriveChanges(cursor=largest_change_id, changes=tuple(accepted))


def poll(session: RemoteSession, last_seen_cursor: Optional[int] = None,
         scope: Optional[FolderScope] = None) -> DriveChanges:
    """Poll the change feed once. See ChangePoller.poll."""
    return ChangePoller(session, scope).poll(last_seen_cursor)
