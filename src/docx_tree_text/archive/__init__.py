"""Archive layer: reading and parsing the body XML of docx packages."""

from .reader import DocumentXML, find_body, read_document_xml, xpath_namespaces

__all__ = [
    "DocumentXML",
    "find_body",
    "read_document_xml",
    "xpath_namespaces",
]
