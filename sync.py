#!/usr/bin/env python3
"""
Drive River - run one incremental sync cycle against a Google Drive folder.

Reads credentials from river.json (or DRIVE_* environment variables), resumes
from the cursor file, logs every in-scope change, and saves the new cursor
only when the cycle succeeds.
"""

import argparse
import logging
import sys
from pathlib import Path

from driveriver.config import CursorFile, RiverConfig
from driveriver.drive import DriveClient, RefreshTokenAuth
from driveriver.errors import AuthError, DriveRiverError
from driveriver.sync import DriveRiver, LoggingSink

# ============================================================================
# Configuration
# ============================================================================

CONFIG_FILE = "river.json"
CURSOR_FILE = "river_cursor.json"


def get_app_dir() -> Path:
    """Get the directory where the app is located (for user-writable files)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    return Path(__file__).parent


def build_river(config: RiverConfig) -> DriveRiver:
    """Wire a river from configuration."""
    auth = RefreshTokenAuth(config.client_id, config.client_secret, config.refresh_token)
    client = DriveClient(auth, config.client_config())
    return DriveRiver(client, LoggingSink(), root_folder_name=config.root_folder_name)


# ============================================================================
# Main Application
# ============================================================================


def run(config_path: Path, cursor_path: Path, retry_auth: bool = True) -> int:
    """
    Run one sync cycle and store the new cursor.

    An authorization failure has already triggered re-authentication, so
    the cycle is retried once from the same cursor.

    Returns:
        Process exit code
    """
    config = RiverConfig.load(config_path)
    cursor_file = CursorFile(cursor_path)
    river = build_river(config)

    last_seen = cursor_file.read()
    try:
        report = river.run_once(last_seen)
    except AuthError:
        if not retry_auth:
            raise
        logging.getLogger(__name__).info("Retrying cycle from cursor %s", last_seen)
        report = river.run_once(last_seen)

    cursor_file.write(report.cursor)
    print(f"Indexed {report.indexed}, deleted {report.deleted}, cursor {report.cursor}"
          f" ({report.duration_seconds:.1f}s)")
    return 0


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="Drive River - sync changes from a Google Drive folder"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=get_app_dir() / CONFIG_FILE,
        help=f"Path to config file (default: {CONFIG_FILE} next to the app)"
    )
    parser.add_argument(
        "--cursor",
        type=Path,
        default=get_app_dir() / CURSOR_FILE,
        help=f"Path to cursor file (default: {CURSOR_FILE} next to the app)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-folder and per-change details"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        sys.exit(run(args.config, args.cursor))
    except DriveRiverError as e:
        print(f"Sync failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        sys.exit(0)
