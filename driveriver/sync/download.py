"""
Download url resolution and content retrieval for Drive River.

Binary files are fetched through their direct download url. Google Docs
and Sheets have no raw bytes and are exported as PDF instead.
"""

import logging
from typing import Optional

from ..constants import PDF_EXPORTED_MIME_TYPES, PDF_MIME_TYPE
from ..drive.session import RemoteSession
from ..errors import RemoteError
from ..models import FileRef

logger = logging.getLogger(__name__)


def get_download_url(file: FileRef) -> Optional[str]:
    """Pick the url to fetch a file's bytes from, or None if there is none."""
    if file.download_url:
        return file.download_url
    if file.mime_type in PDF_EXPORTED_MIME_TYPES:
        return file.export_links.get(PDF_MIME_TYPE)
    return None


def get_mime_type(file: FileRef) -> str:
    """Get the MIME type to index a file's content under."""
    # A direct download keeps its own type even for native documents
    if not file.download_url and file.mime_type in PDF_EXPORTED_MIME_TYPES:
        return PDF_MIME_TYPE
    return file.mime_type


def resolve_download(file: FileRef) -> tuple[Optional[str], str]:
    """
    Resolve the download url and normalized MIME type for a file.

    Args:
        file: File reference from a change

    Returns:
        Tuple of (url or None, normalized MIME type)
    """
    return get_download_url(file), get_mime_type(file)


def fetch_content(session: RemoteSession, file: FileRef) -> Optional[bytes]:
    """
    Download a file's content into memory.

    Failures are logged and reported as no content so one bad file never
    aborts the sync cycle.

    Args:
        session: Remote session used for the GET
        file: File to download

    Returns:
        File bytes, or None if there is no url or the download failed
    """
    url = get_download_url(file)
    if not url:
        logger.debug("No download url for %s (%s)", file.id, file.mime_type)
        return None

    logger.info("Downloading file content from %s", url)
    try:
        return session.fetch_bytes(url)
    except RemoteError as e:
        logger.warning("Could not download %s: %s", file.id, e)
        return None
