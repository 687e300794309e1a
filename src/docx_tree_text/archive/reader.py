"""Reading the body XML of a docx package.

A docx file is a zip archive whose main body lives in ``word/document.xml``.
This module opens the archive, reads that entry, parses it with lxml and
locates ``w:body``. Every failure surfaces as a distinct ``DocumentReadError``
subclass with the inner error chained; nothing is retried.
"""

import time
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from lxml import etree

from docx_tree_text.shared import (
    DEFAULT_BODY_ENTRY,
    ArchiveUnreadableError,
    MalformedDocumentError,
    MissingBodyEntryError,
    get_logger,
)
from docx_tree_text.tree.source import WORDPROCESSINGML_NS

MS_PER_SECOND = 1000


@dataclass(frozen=True)
class DocumentXML:
    """The parsed body entry of a docx package.

    Attributes:
        path: Archive the entry was read from
        entry: Name of the entry inside the archive
        content: Raw bytes of the entry
        encoding: Encoding declared by (or assumed for) the entry
        namespaces: Prefix to URI mapping declared on the document root;
            the default namespace, if any, is keyed by None
        root: Parsed root element
    """

    path: str
    entry: str
    content: bytes
    encoding: str
    namespaces: Dict[Optional[str], str]
    root: etree._Element = field(repr=False, compare=False)

    @property
    def text(self) -> str:
        """Decoded text of the body XML stream."""
        return self.content.decode(self.encoding)


def xpath_namespaces(namespaces: Mapping[Optional[str], str]) -> Dict[str, str]:
    """Build the ``namespaces=`` argument for lxml XPath calls.

    XPath cannot address the default namespace, so the None prefix is dropped.
    The ``w`` prefix is bound to WordprocessingML when the document does not
    declare it itself.
    """
    bundle = {prefix: uri for prefix, uri in namespaces.items() if prefix}
    bundle.setdefault("w", WORDPROCESSINGML_NS)
    return bundle


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def read_document_xml(
    path: Union[str, Path],
    entry: str = DEFAULT_BODY_ENTRY,
    correlation_id: Optional[str] = None
) -> DocumentXML:
    """Read and parse the body entry of a docx package.

    Args:
        path: Path to the docx file
        entry: Archive entry holding the body XML
        correlation_id: Optional correlation ID for request tracking

    Returns:
        DocumentXML with the decoded stream and its root namespace map

    Raises:
        ArchiveUnreadableError: If the path is not a readable zip archive or
            the body entry cannot be decompressed
        MissingBodyEntryError: If the archive lacks ``entry``
        MalformedDocumentError: If the entry is not well-formed XML
    """
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "archive_reader")
    path_obj = Path(path)

    if not path_obj.is_file():
        message = (
            f"File not found: {path_obj}" if not path_obj.exists()
            else f"Path is not a file: {path_obj}"
        )
        logger.error(message, extra={"file_path": str(path_obj)}, exc_info=False)
        raise ArchiveUnreadableError(message, path_obj)

    try:
        with zipfile.ZipFile(path_obj) as archive:
            content = archive.read(entry)
    except KeyError as e:
        logger.error(
            "Body entry missing from archive",
            extra={"file_path": str(path_obj), "entry": entry},
            exc_info=False,
        )
        raise MissingBodyEntryError(
            f"Archive {path_obj} has no entry {entry!r}", path_obj, entry
        ) from e
    except (zipfile.BadZipFile, OSError) as e:
        logger.error("Archive could not be opened", extra={"file_path": str(path_obj)})
        raise ArchiveUnreadableError(
            f"Not a readable zip archive: {path_obj}: {e}", path_obj
        ) from e
    except (zlib.error, EOFError, RuntimeError, NotImplementedError) as e:
        logger.error(
            "Body entry could not be decompressed",
            extra={"file_path": str(path_obj), "entry": entry},
        )
        raise ArchiveUnreadableError(
            f"Cannot decompress entry {entry!r} of {path_obj}: {e}", path_obj
        ) from e

    try:
        root = etree.fromstring(content, parser=_xml_parser())
    except etree.XMLSyntaxError as e:
        logger.error("Body entry is not well-formed XML", extra={"file_path": str(path_obj)})
        raise MalformedDocumentError(
            f"Entry {entry!r} of {path_obj} is not well-formed XML: {e}", path_obj
        ) from e

    encoding = root.getroottree().docinfo.encoding or "UTF-8"
    document = DocumentXML(
        path=str(path_obj),
        entry=entry,
        content=content,
        encoding=encoding,
        namespaces=dict(root.nsmap),
        root=root,
    )

    logger.info(
        "Document XML loaded",
        extra={
            "file_path": str(path_obj),
            "entry": entry,
            "content_length": len(content),
            "namespace_count": len(document.namespaces),
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        },
    )
    return document


def find_body(document: DocumentXML) -> etree._Element:
    """Locate the ``w:body`` element of a loaded document.

    Raises:
        MalformedDocumentError: If the document has no body element
    """
    namespaces = xpath_namespaces(document.namespaces)
    matches = document.root.xpath("/w:document/w:body", namespaces=namespaces)
    if not matches:
        raise MalformedDocumentError(
            f"Entry {document.entry!r} of {document.path} has no w:body element",
            document.path,
        )
    return matches[0]
