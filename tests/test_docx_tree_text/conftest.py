"""Shared fixtures: WordprocessingML snippets and docx packages on disk."""

import struct
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="xml" ContentType="application/xml"/>'
    "</Types>"
)


def _paragraph(*runs: str) -> str:
    body = "".join(
        f'<w:r><w:rPr><w:b/></w:rPr><w:t xml:space="preserve">{text}</w:t></w:r>'
        for text in runs
    )
    return f"<w:p><w:pPr/>{body}</w:p>"


def _table(rows: List[List[str]]) -> str:
    cells = "".join(
        "<w:tr>"
        + "".join(f"<w:tc><w:tcPr/>{_paragraph(text)}</w:tc>" for text in row)
        + "</w:tr>"
        for row in rows
    )
    return f"<w:tbl><w:tblPr/>{cells}</w:tbl>"


def _document(body_xml: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}">'
        f"<w:body>{body_xml}</w:body></w:document>"
    )


@pytest.fixture
def paragraph_xml() -> Callable[..., str]:
    """Build a ``w:p`` element with one run per text argument."""
    return _paragraph


@pytest.fixture
def table_xml() -> Callable[[List[List[str]]], str]:
    """Build a ``w:tbl`` element from rows of cell texts."""
    return _table


@pytest.fixture
def document_xml() -> Callable[[str], str]:
    """Wrap body XML into a complete ``word/document.xml``."""
    return _document


@pytest.fixture
def make_docx(tmp_path: Path) -> Callable[..., Path]:
    """Write a docx package into the test's temporary directory.

    ``body_xml`` is wrapped into a document; ``raw_document`` replaces the
    whole entry; ``entries`` maps extra archive names to content and
    ``include_document=False`` leaves the body entry out.
    """

    def _make(
        body_xml: str = "",
        name: str = "document.docx",
        raw_document: Optional[str] = None,
        entries: Optional[Dict[str, str]] = None,
        include_document: bool = True,
        entry_name: str = "word/document.xml",
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("[Content_Types].xml", CONTENT_TYPES)
            if include_document:
                content = raw_document if raw_document is not None else _document(body_xml)
                archive.writestr(entry_name, content)
            for entry, content in (entries or {}).items():
                archive.writestr(entry, content)
        return path

    return _make


@pytest.fixture
def corrupt_entry() -> Callable[..., Path]:
    """Flip bytes in the middle of an entry's compressed data, in place."""

    def _corrupt(path: Path, entry_name: str = "word/document.xml", length: int = 20) -> Path:
        with zipfile.ZipFile(path) as archive:
            info = archive.getinfo(entry_name)
        data = bytearray(path.read_bytes())
        offset = info.header_offset
        name_length, extra_length = struct.unpack("<HH", data[offset + 26:offset + 30])
        start = offset + 30 + name_length + extra_length
        middle = start + max(info.compress_size - length, 0) // 2
        for index in range(middle, min(middle + length, start + info.compress_size)):
            data[index] ^= 0xFF
        path.write_bytes(bytes(data))
        return path

    return _corrupt


@pytest.fixture
def corrupt_docx(make_docx, corrupt_entry) -> Path:
    """A docx whose deflated ``word/document.xml`` is damaged."""
    body = "".join(_paragraph(f"Line {index}: {index * 7919}") for index in range(200))
    return corrupt_entry(make_docx(body, name="corrupt.docx"))
