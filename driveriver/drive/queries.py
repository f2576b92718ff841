"""
Drive search query builders for Drive River.
"""

from ..constants import DRIVE_ROOT_ALIAS, FOLDER_MIME_TYPE


def escape_query_value(value: str) -> str:
    """
    Escape a string literal for a Drive search query.

    Backslashes and single quotes must be backslash-escaped inside the
    quoted value.

    Args:
        value: Raw string value

    Returns:
        Escaped string, without surrounding quotes
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


def root_folder_query(folder_name: str) -> str:
    """
    Query for folders with the given title directly under the drive root.

    Args:
        folder_name: Exact folder title to match

    Returns:
        Drive v2 search query string
    """
    return (
        f"title = '{escape_query_value(folder_name)}'"
        f" and mimeType = '{FOLDER_MIME_TYPE}'"
        f" and '{DRIVE_ROOT_ALIAS}' in parents"
        " and trashed = false"
    )


def all_folders_query() -> str:
    """Query for every folder in the drive, at any depth."""
    return f"mimeType = '{FOLDER_MIME_TYPE}' and trashed = false"
