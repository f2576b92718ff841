"""
Shared constants for Drive River.
"""

# Google Drive native MIME types
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

# Native types that have no raw bytes, exported as PDF instead
PDF_MIME_TYPE = "application/pdf"
PDF_EXPORTED_MIME_TYPES = {DOCUMENT_MIME_TYPE, SPREADSHEET_MIME_TYPE}

# Implicit id of the drive's top-level folder in queries
DRIVE_ROOT_ALIAS = "root"

# Cursor value before any change has been seen
NO_CHANGE_ID = -1
