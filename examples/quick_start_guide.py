#!/usr/bin/env python3
"""
Quick Start Guide for docx-tree-text.

Builds a small document tree by hand, renders it with different delimiters,
then writes a minimal docx package and extracts it end to end.
"""

import sys
import tempfile
import zipfile
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docx_tree_text import (
    DelimiterConfig,
    DocxTextExtractor,
    ExtractorConfig,
    SourceNode,
    TextFragment,
    build,
    render,
)

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def cell(text):
    run = SourceNode("run", {"text": [TextFragment(text)]})
    paragraph = SourceNode("paragraph", {"run": [run]})
    return SourceNode("cell", {"paragraph": [paragraph]})


def tree_example():
    """Build and render a table from source nodes."""
    print("🌳 Step 1: Build and render a tree")
    print("-" * 35)

    table = SourceNode("table", {"row": [
        SourceNode("row", {"cell": [cell("Name"), cell("Qty")]}),
        SourceNode("row", {"cell": [cell("Bolts"), cell("40")]}),
    ]})
    nodes = build([table, SourceNode("sectPr")])

    print(f"✅ Built {len(nodes)} node(s); the sectPr node was filtered out")
    print(render(nodes)[0])
    print(nodes[0].render_text(DelimiterConfig(cell=",", row="\n")))


def extraction_example():
    """Write a tiny docx package and extract it."""
    print("\n📄 Step 2: Extract a docx file")
    print("-" * 35)

    body = (
        "<w:p><w:r><w:t>Inventory</w:t></w:r></w:p>"
        "<w:tbl><w:tr>"
        "<w:tc><w:p><w:r><w:t>Bolts</w:t></w:r></w:p></w:tc>"
        "<w:tc><w:p><w:r><w:t>40</w:t></w:r></w:p></w:tc>"
        "</w:tr></w:tbl>"
    )
    document = f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "inventory.docx"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("word/document.xml", document)

        extractor = DocxTextExtractor(ExtractorConfig.plain_text())
        result = extractor.extract(path)

    for text in result.texts:
        print(repr(text))
    print(f"📊 Statistics: {extractor.statistics}")


def main():
    """Main function."""
    tree_example()
    extraction_example()

    print("\n✅ All examples completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
