"""
Tests for download url resolution and content retrieval.
"""

import pytest

from driveriver.constants import DOCUMENT_MIME_TYPE, PDF_MIME_TYPE, SPREADSHEET_MIME_TYPE
from driveriver.errors import AuthError, TransportError
from driveriver.models import FileRef
from driveriver.sync.download import fetch_content, resolve_download

PDF_LINK = "https://docs.google.com/export?id=doc&exportFormat=pdf"


def make_file(mime_type, download_url=None, export_links=None):
    return FileRef(id="f1", mime_type=mime_type, download_url=download_url,
                   export_links=export_links or {})


class TestResolveDownload:
    """Tests for resolve_download() rule order."""

    def test_binary_file_direct_url(self):
        """A direct download url is used as is, with the original MIME type."""
        file = make_file("image/png", download_url="http://x/y")
        assert resolve_download(file) == ("http://x/y", "image/png")

    def test_document_exported_as_pdf(self):
        file = make_file(DOCUMENT_MIME_TYPE, export_links={PDF_MIME_TYPE: PDF_LINK})
        assert resolve_download(file) == (PDF_LINK, PDF_MIME_TYPE)

    def test_spreadsheet_exported_as_pdf(self):
        file = make_file(SPREADSHEET_MIME_TYPE, export_links={
            "text/csv": "https://csv", PDF_MIME_TYPE: PDF_LINK,
        })
        assert resolve_download(file) == (PDF_LINK, PDF_MIME_TYPE)

    def test_document_without_pdf_link(self):
        """A native document with no PDF export has no url but is still typed PDF."""
        file = make_file(DOCUMENT_MIME_TYPE, export_links={"text/plain": "https://txt"})
        assert resolve_download(file) == (None, PDF_MIME_TYPE)

    def test_direct_url_wins_over_export(self):
        """The first rule wins: a direct url keeps the declared MIME type."""
        file = make_file(DOCUMENT_MIME_TYPE, download_url="http://x/doc",
                         export_links={PDF_MIME_TYPE: PDF_LINK})
        assert resolve_download(file) == ("http://x/doc", DOCUMENT_MIME_TYPE)

    def test_empty_download_url_ignored(self):
        file = make_file(DOCUMENT_MIME_TYPE, download_url="", export_links={PDF_MIME_TYPE: PDF_LINK})
        assert resolve_download(file) == (PDF_LINK, PDF_MIME_TYPE)

    def test_no_url_at_all(self):
        """Other native types (e.g. slides) have nothing to fetch."""
        file = make_file("application/vnd.google-apps.presentation")
        assert resolve_download(file) == (None, "application/vnd.google-apps.presentation")


class TestFetchContent:
    """Tests for fetch_content() soft failures."""

    def test_returns_bytes(self, make_session):
        session = make_session(contents={"http://x/y": b"hello"})
        assert fetch_content(session, make_file("text/plain", "http://x/y")) == b"hello"

    def test_no_url_is_no_content(self, make_session):
        session = make_session()
        assert fetch_content(session, make_file("application/vnd.google-apps.form")) is None
        assert session.fetched == []

    @pytest.mark.parametrize("error", [TransportError("reset", status_code=None), AuthError("expired")])
    def test_failure_is_no_content(self, make_session, error):
        """Download failures are reported as no content instead of raising."""
        session = make_session(contents={"http://x/y": error})
        assert fetch_content(session, make_file("text/plain", "http://x/y")) is None
