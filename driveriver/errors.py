"""
Exceptions raised by Drive River.
"""

from typing import Optional


class DriveRiverError(Exception):
    """Base class for all Drive River errors."""


class ConfigError(DriveRiverError):
    """Configuration is missing or malformed."""


class PreconditionError(DriveRiverError):
    """The configured root folder cannot be used as a sync scope."""

    def __init__(self, folder_name: str, message: str):
        super().__init__(message)
        self.folder_name = folder_name


class NotFoundError(PreconditionError):
    """No top-level folder has the configured name."""

    def __init__(self, folder_name: str):
        super().__init__(
            folder_name,
            f"'{folder_name}' does not seem to be a valid folder in the drive root",
        )


class AmbiguousNameError(PreconditionError):
    """Several top-level folders share the configured name."""

    def __init__(self, folder_name: str, count: int):
        super().__init__(
            folder_name,
            f"{count} folders named '{folder_name}' found in the drive root",
        )
        self.count = count


class HierarchyCycleError(DriveRiverError):
    """A folder's parent chain loops back on itself."""

    def __init__(self, folder_id: str, chain: list[str]):
        super().__init__(f"Parent chain of {folder_id} loops: {' -> '.join(chain)}")
        self.folder_id = folder_id
        self.chain = chain


class RemoteError(DriveRiverError):
    """A call to the remote drive failed."""


class AuthError(RemoteError):
    """Credentials were rejected, expired, or could not be refreshed."""


class TransportError(RemoteError):
    """Network or API failure other than an authorization problem."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
