"""
Tests for parsing Drive v2 resources into models.
"""

from driveriver.models import ChangePage, ChangeRecord, FileRef, FolderRecord


class TestFolderRecord:
    """FolderRecord.from_dict() keeps only the first parent."""

    def test_first_parent_used(self):
        record = FolderRecord.from_dict({"id": "A", "title": "Alpha", "parents": [{"id": "P1"}, {"id": "P2"}]})
        assert record.parent_id == "P1"

    def test_missing_parents(self):
        assert FolderRecord.from_dict({"id": "A", "title": "Alpha"}).parent_id is None


class TestChangeRecord:
    """Tests for ChangeRecord parsing and deletion detection."""

    def test_trashed_file_is_deletion(self):
        change = ChangeRecord.from_dict({
            "id": "7",
            "file": {"id": "f", "mimeType": "text/plain", "labels": {"trashed": True}},
        })
        assert change.change_id == 7
        assert change.file_id == "f"
        assert change.is_deletion

    def test_live_file_is_not_deletion(self):
        change = ChangeRecord.from_dict({"id": "8", "fileId": "f", "file": {"id": "f"}})
        assert not change.is_deletion

    def test_export_links_copied(self):
        file = FileRef.from_dict({"id": "f", "exportLinks": {"application/pdf": "https://pdf"}})
        assert file.export_links == {"application/pdf": "https://pdf"}
        assert file.download_url is None


class TestChangePage:
    def test_defaults_for_empty_payload(self):
        result = ChangePage.from_dict({})
        assert result.items == []
        assert result.next_page_token is None
        assert result.largest_change_id == -1

    def test_empty_token_is_end(self):
        assert ChangePage.from_dict({"nextPageToken": ""}).next_page_token is None
