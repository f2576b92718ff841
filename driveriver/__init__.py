"""
Drive River - incremental change feed for a Google Drive folder.

Resolves which folders sit under a configured top-level folder, polls the
drive's change feed from a caller-held cursor, and hands in-scope changes
with their content to an indexing sink.

Import from submodules directly:
    from driveriver.config import RiverConfig
    from driveriver.drive import DriveClient, RefreshTokenAuth
    from driveriver.sync import DriveRiver, FolderHierarchyResolver, ChangePoller
"""

__version__ = "0.1.0"
