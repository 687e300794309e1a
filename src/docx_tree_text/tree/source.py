"""Source nodes consumed by the tree builder, and the lxml adapter producing them.

The builder only needs a tag and named children, so source nodes are plain
immutable records. ``from_element`` converts WordprocessingML elements
(``w:tbl``, ``w:tr``, ``w:tc``, ``w:p``, ``w:r``, ``w:t``) into them using
namespace-aware XPath over each element's direct children.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from lxml import etree

from docx_tree_text.tree.builder import CHILD_TAGS, RUN_TAG, TEXT_TAG

WORDPROCESSINGML_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

DEFAULT_NAMESPACES: Dict[str, str] = {"w": WORDPROCESSINGML_NS}

# WordprocessingML local name -> builder tag
LOCAL_TAGS: Dict[str, str] = {
    "tbl": "table",
    "tr": "row",
    "tc": "cell",
    "p": "paragraph",
    "r": "run",
    "t": TEXT_TAG,
}

_LOCAL_NAMES = {tag: local for local, tag in LOCAL_TAGS.items()}


@dataclass(frozen=True)
class TextFragment:
    """A text-bearing leaf exposing its value through ``text``."""

    text: Optional[str] = None


@dataclass(frozen=True)
class SourceNode:
    """A source node: a tag plus child nodes grouped by child tag.

    Leaf text is not stored here; a run keeps it on the ``TextFragment``s
    under its ``text`` key.
    """

    tag: str
    children: Mapping[str, Sequence[Any]] = field(default_factory=dict)


def _child_xpath(child_tag: str) -> str:
    return f"w:{_LOCAL_NAMES[child_tag]}"


def from_element(
    element: etree._Element, namespaces: Optional[Mapping[str, str]] = None
) -> SourceNode:
    """Convert a WordprocessingML element into a source node.

    Elements outside the five structural kinds keep their local name and get
    no children, so the builder filters them out.

    Args:
        element: lxml element from a document body
        namespaces: XPath prefix mapping; must bind ``w`` to WordprocessingML

    Returns:
        SourceNode mirroring the element's structure
    """
    namespaces = dict(namespaces or DEFAULT_NAMESPACES)
    local_name = etree.QName(element).localname
    tag = LOCAL_TAGS.get(local_name)
    if tag is None or tag == TEXT_TAG:
        return SourceNode(local_name)

    child_tag = CHILD_TAGS[tag]
    matches = element.xpath(_child_xpath(child_tag), namespaces=namespaces)
    if tag == RUN_TAG:
        children: List[Any] = [TextFragment(match.text) for match in matches]
    else:
        children = [from_element(match, namespaces) for match in matches]
    return SourceNode(tag, {child_tag: children})


def body_nodes(
    body: etree._Element, namespaces: Optional[Mapping[str, str]] = None
) -> List[SourceNode]:
    """Convert every element child of ``w:body`` into a source node, in order."""
    namespaces = dict(namespaces or DEFAULT_NAMESPACES)
    return [from_element(child, namespaces) for child in body.xpath("*")]
