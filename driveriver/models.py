"""
Data types shared by the resolver, poller, and download resolver.

Remote payloads follow the Drive v2 resource shapes (``title``, ``parents``
as a list of ``{"id": ...}`` references, ``largestChangeId`` as a string).
"""

from dataclasses import dataclass, field
from typing import Optional


def _parent_ids(data: dict) -> list[str]:
    """Extract parent ids from a Drive file resource, in listed order."""
    parents = data.get("parents") or []
    return [p["id"] for p in parents if p.get("id")]


@dataclass(frozen=True)
class FolderRecord:
    """One remote folder from a flat listing snapshot."""
    id: str
    name: str
    parent_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "FolderRecord":
        # Only the first parent counts for ancestry
        parents = _parent_ids(data)
        return cls(
            id=data["id"],
            name=data.get("title", ""),
            parent_id=parents[0] if parents else None,
        )


@dataclass(frozen=True, order=True)
class FolderInfo:
    """
    A folder confirmed to be in scope.

    Equality, hashing and ordering use the id only; the name is metadata.
    """
    id: str
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class FileRef:
    """The remote file a change refers to."""
    id: str
    mime_type: str = ""
    title: str = ""
    parent_folder_ids: tuple[str, ...] = ()
    download_url: Optional[str] = None
    export_links: dict[str, str] = field(default_factory=dict, hash=False)
    trashed: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "FileRef":
        labels = data.get("labels") or {}
        return cls(
            id=data["id"],
            mime_type=data.get("mimeType", ""),
            title=data.get("title", ""),
            parent_folder_ids=tuple(_parent_ids(data)),
            download_url=data.get("downloadUrl"),
            export_links=dict(data.get("exportLinks") or {}),
            trashed=bool(labels.get("trashed", False)),
        )


@dataclass(frozen=True)
class ChangeRecord:
    """One remote mutation event from the change feed."""
    change_id: int
    file: Optional[FileRef] = None
    file_id: Optional[str] = None
    deleted: bool = False

    @property
    def is_deletion(self) -> bool:
        """True when the change removes the file from the index."""
        return self.deleted or self.file is None or self.file.trashed

    @classmethod
    def from_dict(cls, data: dict) -> "ChangeRecord":
        file_data = data.get("file")
        file = FileRef.from_dict(file_data) if file_data else None
        return cls(
            change_id=int(data["id"]),
            file=file,
            file_id=data.get("fileId") or (file.id if file else None),
            deleted=bool(data.get("deleted", False)),
        )


@dataclass
class ChangePage:
    """One page of the remote change feed."""
    items: list[ChangeRecord]
    next_page_token: Optional[str]
    largest_change_id: int

    @classmethod
    def from_dict(cls, data: dict) -> "ChangePage":
        return cls(
            items=[ChangeRecord.from_dict(item) for item in data.get("items", [])],
            next_page_token=data.get("nextPageToken") or None,
            largest_change_id=int(data.get("largestChangeId", -1)),
        )


@dataclass(frozen=True)
class DriveChanges:
    """Result of one poll: the new cursor and the in-scope changes."""
    cursor: int
    changes: tuple[ChangeRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.changes)
