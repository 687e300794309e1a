"""Result objects and statistics for docx text extraction."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class BuildStatistics:
    """Counters collected while building document trees from source nodes."""

    tables: int = 0
    rows: int = 0
    cells: int = 0
    paragraphs: int = 0
    runs: int = 0
    skipped_fragments: int = 0
    skipped_tags: Dict[str, int] = field(default_factory=dict)

    @property
    def total_nodes(self) -> int:
        """Total number of tree nodes built at every level."""
        return self.tables + self.rows + self.cells + self.paragraphs + self.runs

    @property
    def total_skipped_tags(self) -> int:
        """Number of source nodes filtered out because of their tag."""
        return sum(self.skipped_tags.values())

    def record_skipped_tag(self, tag: str) -> None:
        """Count a source node whose tag matched no node variant."""
        self.skipped_tags[tag] = self.skipped_tags.get(tag, 0) + 1

    def merge(self, other: "BuildStatistics") -> None:
        """Add another set of counters into this one."""
        self.tables += other.tables
        self.rows += other.rows
        self.cells += other.cells
        self.paragraphs += other.paragraphs
        self.runs += other.runs
        self.skipped_fragments += other.skipped_fragments
        for tag, count in other.skipped_tags.items():
            self.skipped_tags[tag] = self.skipped_tags.get(tag, 0) + count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": self.tables,
            "rows": self.rows,
            "cells": self.cells,
            "paragraphs": self.paragraphs,
            "runs": self.runs,
            "total_nodes": self.total_nodes,
            "skipped_fragments": self.skipped_fragments,
            "skipped_tags": dict(self.skipped_tags),
        }


@dataclass
class ExtractionResult:
    """Text extracted from one document, with build statistics and timing.

    ``texts`` holds one rendered string per top-level body node (paragraph or
    table) in document order.
    """

    source: str
    texts: List[str] = field(default_factory=list)
    statistics: BuildStatistics = field(default_factory=BuildStatistics)
    processing_time_ms: float = 0.0
    correlation_id: Optional[str] = None

    @property
    def node_count(self) -> int:
        """Number of top-level nodes rendered."""
        return len(self.texts)

    @property
    def text(self) -> str:
        """All rendered nodes joined by the platform line separator."""
        return os.linesep.join(self.texts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.source,
            "success": True,
            "node_count": self.node_count,
            "texts": list(self.texts),
            "statistics": self.statistics.to_dict(),
            "processing_time_ms": self.processing_time_ms,
        }
