"""Document tree model for flattening WordprocessingML bodies into text.

A built document is a fixed five-level hierarchy:

    Table -> TableRow -> TableCell -> Paragraph -> Run

Every level is an immutable dataclass holding a tuple of children of exactly
the next level down. Rendering folds the children's text with the single
delimiter that belongs to the node's level, so the same tree can be rendered
any number of times with different delimiter configurations.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Type, Union

from docx_tree_text.shared.config import DelimiterConfig

_UNSET = DelimiterConfig()


def _join(delimiter: Optional[str], parts: Iterable[str]) -> str:
    """Join rendered children; an unset delimiter concatenates directly."""
    if delimiter is None:
        return "".join(parts)
    return delimiter.join(parts)


def _freeze_children(node: "DocumentNode", child_type: Type["DocumentNode"]) -> None:
    children = tuple(node.children)
    for child in children:
        if not isinstance(child, child_type):
            raise TypeError(
                f"{type(node).__name__} children must be {child_type.__name__} "
                f"instances, got {type(child).__name__}"
            )
    object.__setattr__(node, "children", children)


@dataclass(frozen=True)
class DocumentNode:
    """Base of every tree node. A node with nothing to render yields ""."""

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        """Render this node to text using ``config`` delimiters."""
        return ""


@dataclass(frozen=True)
class Run(DocumentNode):
    """Smallest text-bearing unit: a contiguous span of formatted text.

    A run may hold several text fragments; they are always concatenated
    directly, never delimiter-joined.
    """

    fragments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        fragments = tuple(self.fragments)
        for fragment in fragments:
            if not isinstance(fragment, str):
                raise TypeError(
                    f"Run fragments must be strings, got {type(fragment).__name__}"
                )
        object.__setattr__(self, "fragments", fragments)

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        return "".join(self.fragments)


@dataclass(frozen=True)
class Paragraph(DocumentNode):
    """Ordered runs, joined with the run delimiter."""

    children: Tuple[Run, ...] = ()

    def __post_init__(self) -> None:
        _freeze_children(self, Run)

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        config = config or _UNSET
        return _join(config.run, (run.render_text(config) for run in self.children))


@dataclass(frozen=True)
class TableCell(DocumentNode):
    """Ordered paragraphs, joined with the paragraph delimiter."""

    children: Tuple[Paragraph, ...] = ()

    def __post_init__(self) -> None:
        _freeze_children(self, Paragraph)

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        config = config or _UNSET
        return _join(
            config.paragraph,
            (paragraph.render_text(config) for paragraph in self.children),
        )


@dataclass(frozen=True)
class TableRow(DocumentNode):
    """Ordered cells, joined with the cell delimiter."""

    children: Tuple[TableCell, ...] = ()

    def __post_init__(self) -> None:
        _freeze_children(self, TableCell)

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        config = config or _UNSET
        return _join(config.cell, (cell.render_text(config) for cell in self.children))


@dataclass(frozen=True)
class Table(DocumentNode):
    """Ordered rows, joined with the row delimiter."""

    children: Tuple[TableRow, ...] = ()

    def __post_init__(self) -> None:
        _freeze_children(self, TableRow)

    def render_text(self, config: Optional[DelimiterConfig] = None) -> str:
        config = config or _UNSET
        return _join(config.row, (row.render_text(config) for row in self.children))


DocumentTreeNode = Union[Table, TableRow, TableCell, Paragraph, Run]

NODE_TYPES: Tuple[Type[DocumentNode], ...] = (Table, TableRow, TableCell, Paragraph, Run)
