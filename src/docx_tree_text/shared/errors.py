"""Exception types raised while reading a docx package.

The tree model and builder never raise for well-formed input; everything here
belongs to the archive-reading layer that runs before any tree node is built.
Each exception keeps the path it was raised for and is raised with the
underlying error chained as ``__cause__``.
"""

from pathlib import Path
from typing import Optional, Union


class DocumentReadError(Exception):
    """Base exception for failures to obtain a document's body XML."""

    category = "document_read_error"

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class ArchiveUnreadableError(DocumentReadError):
    """The path is missing, is not a file, or is not a valid zip archive."""

    category = "archive_unreadable"


class MissingBodyEntryError(DocumentReadError):
    """The archive does not contain the expected body entry."""

    category = "missing_body_entry"

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        entry: Optional[str] = None
    ):
        super().__init__(message, path)
        self.entry = entry


class MalformedDocumentError(DocumentReadError):
    """The body entry is not well-formed XML or lacks a body element."""

    category = "malformed_document"
