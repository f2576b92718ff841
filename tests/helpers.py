"""Shared builders for Drive River tests."""

from driveriver.models import ChangePage, ChangeRecord, FileRef, FolderRecord


class FakeSession:
    """
    In-memory remote session.

    Change pages are addressed by position: the first request (no page token)
    gets pages[0], and a page token "N" gets pages[N]. A page entry that is an
    exception is raised instead of returned.
    """

    def __init__(self, folders_by_query=None, pages=None, contents=None):
        self.folders_by_query = folders_by_query or {}
        self.pages = pages or [ChangePage(items=[], next_page_token=None, largest_change_id=-1)]
        self.contents = contents or {}
        self.change_requests = []
        self.fetched = []
        self.authentications = 0
        self.auth_error = None

    def authenticate(self):
        self.authentications += 1
        if self.auth_error:
            raise self.auth_error

    def list_folders(self, query):
        return list(self.folders_by_query.get(query, []))

    def list_changes(self, start_change_id=None, page_token=None):
        self.change_requests.append((start_change_id, page_token))
        page = self.pages[int(page_token) if page_token else 0]
        if isinstance(page, Exception):
            raise page
        return page

    def fetch_bytes(self, url):
        self.fetched.append(url)
        content = self.contents[url]
        if isinstance(content, Exception):
            raise content
        return content


def folder(folder_id, parent_id=None, name=None):
    return FolderRecord(id=folder_id, name=name or f"Folder {folder_id}", parent_id=parent_id)


def change(change_id, parents=(), file_id=None, mime_type="text/plain", download_url=None,
           export_links=None, deleted=False, no_file=False):
    file_id = file_id or f"file-{change_id}"
    file = None if no_file else FileRef(
        id=file_id,
        mime_type=mime_type,
        title=f"{file_id}.txt",
        parent_folder_ids=tuple(parents),
        download_url=download_url,
        export_links=export_links or {},
    )
    return ChangeRecord(change_id=change_id, file=file, file_id=file_id, deleted=deleted)


def page(items, largest, next_token=None):
    return ChangePage(items=list(items), next_page_token=next_token, largest_change_id=largest)

