"""
Folder hierarchy resolution for Drive River.

The Drive API has no "descendants of X" query, so the set of folders under
the root folder is rebuilt from a flat listing of every folder and its
parent pointer.
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..drive.queries import all_folders_query, root_folder_query
from ..drive.session import RemoteSession
from ..errors import AmbiguousNameError, HierarchyCycleError, NotFoundError, PreconditionError
from ..models import FolderInfo, FolderRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FolderScope:
    """
    Immutable snapshot of the folders a sync cycle watches.

    A scope without a root folder id stands for the whole drive.
    """
    root_folder_id: Optional[str] = None
    folders: tuple[FolderInfo, ...] = ()
    names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    @classmethod
    def whole_drive(cls) -> "FolderScope":
        return cls()

    @property
    def is_whole_drive(self) -> bool:
        return self.root_folder_id is None

    @cached_property
    def folder_ids(self) -> frozenset[str]:
        return frozenset(f.id for f in self.folders)

    def contains(self, folder_id: str) -> bool:
        """Check if a folder id is in scope (always True for the whole drive)."""
        if self.is_whole_drive:
            return True
        return folder_id in self.folder_ids

    def folder_name(self, folder_id: str) -> Optional[str]:
        """Get the title of any folder seen while resolving, in scope or not."""
        return self.names.get(folder_id)

    def __len__(self) -> int:
        return len(self.folders)


def collect_parents(folder_id: str, ancestry: Mapping[str, str]) -> list[str]:
    """
    Get the ancestors of a folder, nearest first.

    The chain ends with the first id that has no recorded parent of its own,
    which for a well-formed drive is the drive root.

    Args:
        folder_id: Folder to start from
        ancestry: Mapping of folder id to parent id

    Returns:
        Ancestor ids, nearest first ([] if the folder has no recorded parent)

    Raises:
        HierarchyCycleError: If the chain revisits a folder
    """
    ancestors = []
    visited = {folder_id}
    current = folder_id

    while current in ancestry:
        parent_id = ancestry[current]
        logger.debug("Direct parent of %s is %s", current, parent_id)
        ancestors.append(parent_id)
        if parent_id in visited:
            raise HierarchyCycleError(folder_id, [folder_id] + ancestors)
        visited.add(parent_id)
        current = parent_id

    return ancestors


def build_scope(root_folder_id: str, folders: Iterable[FolderRecord], root_name: str = "") -> FolderScope:
    """
    Classify a flat folder listing against a root folder.

    A folder is in scope when its ancestor chain ends at the drive root
    with the root folder directly below it. The folder and every ancestor
    up to (not including) the drive root are then added.

    Args:
        root_folder_id: Id of the searched root folder
        folders: Flat listing of every folder in the drive
        root_name: Title of the root folder, used when the listing lacks it

    Returns:
        FolderScope ordered and deduplicated by id
    """
    ancestry: dict[str, str] = {}
    names: dict[str, str] = {root_folder_id: root_name}

    for folder in folders:
        if folder.parent_id:
            ancestry[folder.id] = folder.parent_id
            names[folder.id] = folder.name

    in_scope = {root_folder_id}
    for folder_id in ancestry:
        if folder_id == root_folder_id:
            continue
        try:
            parents = collect_parents(folder_id, ancestry)
        except HierarchyCycleError as e:
            logger.warning("Skipping folder with broken hierarchy: %s", e)
            continue
        logger.debug("Parents of %s are %s", folder_id, parents)
        # Last parent is the drive root, so the searched root folder is the one before
        if len(parents) > 1 and parents[-2] == root_folder_id:
            in_scope.add(folder_id)
            in_scope.update(parents[:-1])

    infos = tuple(sorted(FolderInfo(fid, names.get(fid, "")) for fid in in_scope))
    return FolderScope(
        root_folder_id=root_folder_id,
        folders=infos,
        names=MappingProxyType(names),
    )


class FolderHierarchyResolver:
    """Resolves a root folder name into the scope of folders beneath it."""

    def __init__(self, session: RemoteSession):
        self.session = session

    def find_root_folder(self, folder_name: str) -> FolderRecord:
        """
        Find the single top-level folder with the given name.

        Raises:
            PreconditionError: If the name is empty
            NotFoundError: If no top-level folder has that name
            AmbiguousNameError: If several do
        """
        if not folder_name:
            raise PreconditionError(folder_name, "Root folder name must not be empty")

        matches = self.session.list_folders(root_folder_query(folder_name))
        logger.info("Found %d folders matching root folder '%s'", len(matches), folder_name)
        if not matches:
            raise NotFoundError(folder_name)
        if len(matches) > 1:
            raise AmbiguousNameError(folder_name, len(matches))

        root = matches[0]
        logger.info("Id of root folder '%s' is %s", folder_name, root.id)
        return root

    def resolve(self, folder_name: str) -> FolderScope:
        """
        Build the scope of folders under a top-level folder.

        Args:
            folder_name: Title of the root folder

        Returns:
            FolderScope holding the root folder id and every folder beneath it
        """
        logger.info("Retrieving subfolders under folder '%s', this may take a while...", folder_name)
        root = self.find_root_folder(folder_name)
        folders = self.session.list_folders(all_folders_query())
        scope = build_scope(root.id, folders, root_name=root.name or folder_name)
        logger.info("%d of %d folders are in scope", len(scope), len(folders))
        return scope
