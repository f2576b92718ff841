"""
Configuration management for Drive River.

Config files:
- river.json: OAuth client credentials, refresh token and root folder name
- cursor file: the last change id processed, held by the caller between runs

Environment variables override values from river.json.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .drive.client import DriveClientConfig
from .errors import ConfigError

# Environment variable -> config key
ENV_OVERRIDES = {
    "DRIVE_CLIENT_ID": "client_id",
    "DRIVE_CLIENT_SECRET": "client_secret",
    "DRIVE_REFRESH_TOKEN": "refresh_token",
    "DRIVE_ROOT_FOLDER": "root_folder_name",
}


@dataclass
class RiverConfig:
    """Credentials and scope for one drive."""
    client_id: str
    client_secret: str
    refresh_token: str
    root_folder_name: Optional[str] = None  # None syncs the whole drive
    timeout: int = 60
    max_retries: int = 3

    def __post_init__(self):
        missing = [k for k in ("client_id", "client_secret", "refresh_token") if not getattr(self, k)]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")
        self.root_folder_name = self.root_folder_name or None

    @property
    def is_whole_drive(self) -> bool:
        return self.root_folder_name is None

    def client_config(self) -> DriveClientConfig:
        return DriveClientConfig(timeout=self.timeout, max_retries=self.max_retries)

    def to_dict(self) -> dict:
        d = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": self.refresh_token,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }
        if self.root_folder_name:
            d["root_folder_name"] = self.root_folder_name
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "RiverConfig":
        return cls(
            client_id=data.get("client_id", ""),
            client_secret=data.get("client_secret", ""),
            refresh_token=data.get("refresh_token", ""),
            root_folder_name=data.get("root_folder_name"),
            timeout=int(data.get("timeout", 60)),
            max_retries=int(data.get("max_retries", 3)),
        )

    @classmethod
    def load(cls, path: Optional[Path] = None, environ: Optional[dict] = None) -> "RiverConfig":
        """
        Load configuration from a JSON file, then apply environment overrides.

        Args:
            path: Path to river.json (skipped if None or missing)
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigError: If the file is unreadable or credentials are missing
        """
        environ = os.environ if environ is None else environ
        data = {}

        if path is not None and path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                raise ConfigError(f"Could not load {path}: {e}") from e

        for env_key, key in ENV_OVERRIDES.items():
            if environ.get(env_key):
                data[key] = environ[env_key]

        return cls.from_dict(data)


class CursorFile:
    """
    Stores the last processed change id between runs.

    The sync core never persists its own progress; this is the caller's side.
    """

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> Optional[int]:
        """
        Get the stored cursor, or None for a first run.

        Only a missing file counts as a first run. An unreadable or malformed
        file raises ConfigError so a damaged cursor is never replaced by the
        cursor of a full re-scan.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise ConfigError(f"Could not read cursor file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Cursor file {self.path} must hold a JSON object")
        cursor = data.get("last_change_id")
        if cursor is not None and (isinstance(cursor, bool) or not isinstance(cursor, int)):
            raise ConfigError(f"Cursor file {self.path} has an invalid last_change_id: {cursor!r}")
        return cursor

    def write(self, cursor: int):
        """Save the cursor returned by a successful cycle."""
        with open(self.path, "w") as f:
            json.dump({"last_change_id": cursor}, f, indent=2)
