"""
Change filtering against a resolved folder scope.
"""

from ..models import ChangeRecord
from .hierarchy import FolderScope


def is_in_scope(change: ChangeRecord, scope: FolderScope) -> bool:
    """
    Decide whether a change belongs to the watched subtree.

    Every change is in scope for the whole drive. Otherwise the changed
    file must have at least one parent folder in the scope. Changes without
    a file, or whose file lists no parents, are out of scope.

    Args:
        change: Change from the remote feed
        scope: Resolved folder scope

    Returns:
        True if the change should be processed
    """
    if scope.is_whole_drive:
        return True

    if change.file is None or not change.file.parent_folder_ids:
        return False

    folder_ids = scope.folder_ids
    return any(parent_id in folder_ids for parent_id in change.file.parent_folder_ids)
