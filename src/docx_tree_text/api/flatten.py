"""Flattening driver: rendering built tree nodes to text.

The driver is a one-to-one map: N input nodes yield N strings, each rendered
independently. It never joins across nodes.
"""

import os
from typing import Iterable, List, Optional

from docx_tree_text.shared import DelimiterConfig
from docx_tree_text.tree.model import DocumentTreeNode


def render(
    nodes: Iterable[DocumentTreeNode],
    *,
    run_delimiter: Optional[str] = "",
    paragraph_delimiter: Optional[str] = "",
    cell_delimiter: Optional[str] = " | ",
    row_delimiter: Optional[str] = os.linesep,
) -> List[str]:
    """Render each node to text with per-level delimiters.

    Args:
        nodes: Built tree nodes of any variant
        run_delimiter: Separator between runs of a paragraph
        paragraph_delimiter: Separator between paragraphs of a cell
        cell_delimiter: Separator between cells of a row
        row_delimiter: Separator between rows of a table

    Returns:
        One rendered string per input node, in input order

    Examples:
        >>> from docx_tree_text.tree import Paragraph, Run
        >>> render([Paragraph((Run(("A",)), Run(("B",))))], run_delimiter=" ")
        ['A B']
    """
    config = DelimiterConfig(
        run=run_delimiter,
        paragraph=paragraph_delimiter,
        cell=cell_delimiter,
        row=row_delimiter,
    )
    return render_with_config(nodes, config)


def render_with_config(
    nodes: Iterable[DocumentTreeNode], config: Optional[DelimiterConfig] = None
) -> List[str]:
    """Render each node with a ready-made delimiter configuration.

    ``None`` selects ``DelimiterConfig.defaults()``.
    """
    if config is None:
        config = DelimiterConfig.defaults()
    return [node.render_text(config) for node in nodes]
