"""Tree building engine for docx text extraction.

This module classifies source nodes by tag name and recursively constructs
the matching document tree node from the node's named children. Source nodes
are any objects exposing a ``tag`` string and a ``children`` mapping from
child tag to a sequence of child nodes (see ``docx_tree_text.tree.source``).

Nodes whose tag matches no variant produce nothing: formatting-only siblings
such as section properties are filtered out transparently. Filtered tags are
reported on the DEBUG log channel and counted in ``BuildStatistics``.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from docx_tree_text.shared import BuildStatistics, get_logger
from docx_tree_text.tree.model import (
    DocumentTreeNode,
    Paragraph,
    Run,
    Table,
    TableCell,
    TableRow,
)

TABLE_TAG = "table"
ROW_TAG = "row"
CELL_TAG = "cell"
PARAGRAPH_TAG = "paragraph"
RUN_TAG = "run"
TEXT_TAG = "text"

# Source tag -> child tag the produced node is built from
CHILD_TAGS: Dict[str, str] = {
    TABLE_TAG: ROW_TAG,
    ROW_TAG: CELL_TAG,
    CELL_TAG: PARAGRAPH_TAG,
    PARAGRAPH_TAG: RUN_TAG,
    RUN_TAG: TEXT_TAG,
}


def _children_of(node: Any, child_tag: str) -> Sequence[Any]:
    children = getattr(node, "children", None)
    if not children:
        return ()
    return children.get(child_tag, ())


def _fragment_text(fragment: Any) -> Optional[str]:
    """Return a fragment's text: a direct string or a string ``text`` property."""
    if isinstance(fragment, str):
        return fragment
    text = getattr(fragment, "text", None)
    if isinstance(text, str):
        return text
    return None


class DocumentTreeBuilder:
    """Builds typed document trees from sequences of source nodes.

    A builder keeps running statistics across calls, so one instance can be
    reused for every document of a batch and report totals at the end.

    Examples:
        >>> from docx_tree_text.tree.source import SourceNode
        >>> run = SourceNode("run", {"text": ["Hello"]})
        >>> paragraph = SourceNode("paragraph", {"run": [run]})
        >>> builder = DocumentTreeBuilder()
        >>> [node.render_text() for node in builder.build([paragraph])]
        ['Hello']
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self.statistics = BuildStatistics()

        self._builders: Dict[str, Callable[[Any], DocumentTreeNode]] = {
            TABLE_TAG: self._build_table,
            ROW_TAG: self._build_row,
            CELL_TAG: self._build_cell,
            PARAGRAPH_TAG: self._build_paragraph,
            RUN_TAG: self._build_run,
        }

    def build(self, nodes: Iterable[Any]) -> List[DocumentTreeNode]:
        """Build one tree node per recognised source node, in input order.

        Args:
            nodes: Source nodes exposing ``tag`` and ``children``

        Returns:
            Tree nodes for the matched subset of ``nodes``
        """
        return list(self.iter_build(nodes))

    def iter_build(self, nodes: Iterable[Any]) -> Iterator[DocumentTreeNode]:
        """Lazily build tree nodes; unmatched source nodes yield nothing."""
        built = 0
        skipped = 0
        for node in nodes:
            tree_node = self.build_node(node)
            if tree_node is None:
                skipped += 1
                continue
            built += 1
            yield tree_node

        self.logger.info(
            "Tree building completed",
            extra={"built_nodes": built, "skipped_nodes": skipped},
        )

    def build_node(self, node: Any) -> Optional[DocumentTreeNode]:
        """Build the tree node for a single source node, or None if unmatched."""
        tag = getattr(node, "tag", None)
        builder = self._builders.get(tag) if isinstance(tag, str) else None
        if builder is None:
            self._skip(tag)
            return None
        return builder(node)

    def reset_statistics(self) -> None:
        """Reset the builder's running statistics."""
        self.statistics = BuildStatistics()

    def _skip(self, tag: Any) -> None:
        tag_name = tag if isinstance(tag, str) else repr(tag)
        self.statistics.record_skipped_tag(tag_name)
        self.logger.debug("Skipping unrecognised source node", extra={"tag": tag_name})

    def _build_children(self, node: Any, child_tag: str) -> List[Any]:
        built = []
        builder = self._builders[child_tag]
        for child in _children_of(node, child_tag):
            if getattr(child, "tag", None) != child_tag:
                self._skip(getattr(child, "tag", None))
                continue
            built.append(builder(child))
        return built

    def _build_table(self, node: Any) -> Table:
        self.statistics.tables += 1
        return Table(tuple(self._build_children(node, ROW_TAG)))

    def _build_row(self, node: Any) -> TableRow:
        self.statistics.rows += 1
        return TableRow(tuple(self._build_children(node, CELL_TAG)))

    def _build_cell(self, node: Any) -> TableCell:
        self.statistics.cells += 1
        return TableCell(tuple(self._build_children(node, PARAGRAPH_TAG)))

    def _build_paragraph(self, node: Any) -> Paragraph:
        self.statistics.paragraphs += 1
        return Paragraph(tuple(self._build_children(node, RUN_TAG)))

    def _build_run(self, node: Any) -> Run:
        self.statistics.runs += 1
        fragments = []
        for fragment in _children_of(node, TEXT_TAG):
            text = _fragment_text(fragment)
            if text is None:
                self.statistics.skipped_fragments += 1
                continue
            fragments.append(text)
        return Run(tuple(fragments))


def build(nodes: Iterable[Any], correlation_id: Optional[str] = None) -> List[DocumentTreeNode]:
    """Build document tree nodes from source nodes.

    Args:
        nodes: Source nodes exposing ``tag`` and ``children``
        correlation_id: Optional correlation ID for request tracking

    Returns:
        One tree node per source node whose tag is recognised, in order
    """
    return DocumentTreeBuilder(correlation_id).build(nodes)


def iter_build(
    nodes: Iterable[Any], correlation_id: Optional[str] = None
) -> Iterator[DocumentTreeNode]:
    """Lazy counterpart of ``build``."""
    return DocumentTreeBuilder(correlation_id).iter_build(nodes)
