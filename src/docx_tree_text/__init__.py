"""docx-tree-text.

Extracts readable text from the body of WordprocessingML (docx) documents by
modelling it as a tree of tables, rows, cells, paragraphs and runs, and
flattening that tree with caller-supplied delimiters per level.

Progressive API Disclosure:
- Level 1: Simple functions - extract_text(), extract()
- Level 2: Configured extractor - DocxTextExtractor class
- Level 3: Core pieces - build() source nodes, render() tree nodes
"""

__version__ = "0.1.0"
__author__ = "docx-tree-text Team"

# Level 1 and 2: docx files in, text out
from .api import DocxTextExtractor, extract, extract_text, render, render_with_config

# Configuration and results
from .shared import DelimiterConfig, ExtractionResult, ExtractorConfig

# Level 3: tree model and builder
from .tree import (
    DocumentTreeNode,
    Paragraph,
    Run,
    SourceNode,
    Table,
    TableCell,
    TableRow,
    TextFragment,
    build,
    iter_build,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple extraction functions
    "extract",
    "extract_text",

    # Level 2: Configured extractor
    "DocxTextExtractor",

    # Level 3: Build and render
    "build",
    "iter_build",
    "render",
    "render_with_config",

    # Tree model and source nodes
    "DocumentTreeNode",
    "Paragraph",
    "Run",
    "SourceNode",
    "Table",
    "TableCell",
    "TableRow",
    "TextFragment",

    # Configuration and results
    "DelimiterConfig",
    "ExtractionResult",
    "ExtractorConfig",
]
