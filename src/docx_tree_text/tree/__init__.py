"""Document tree model and builder for docx text extraction.

Key Components:
    Table, TableRow, TableCell, Paragraph, Run: immutable tree node variants
    DocumentTreeBuilder: classifies source nodes and builds tree nodes
    SourceNode, TextFragment: builder input records
    from_element, body_nodes: lxml adapter producing source nodes
"""

from .builder import DocumentTreeBuilder, build, iter_build
from .model import (
    DocumentNode,
    DocumentTreeNode,
    Paragraph,
    Run,
    Table,
    TableCell,
    TableRow,
)
from .source import SourceNode, TextFragment, body_nodes, from_element

__all__ = [
    "DocumentNode",
    "DocumentTreeNode",
    "Paragraph",
    "Run",
    "Table",
    "TableCell",
    "TableRow",
    "DocumentTreeBuilder",
    "build",
    "iter_build",
    "SourceNode",
    "TextFragment",
    "body_nodes",
    "from_element",
]
