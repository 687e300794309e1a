"""High-level extraction API: docx path in, rendered text out.

Pipeline per document:
    1. read and parse the body entry (``archive.reader``)
    2. convert ``w:body`` children into source nodes (``tree.source``)
    3. build the typed document tree (``tree.builder``)
    4. render one string per top-level node (``api.flatten``)

Read failures propagate as ``DocumentReadError`` subclasses; they are counted
and logged but never retried or swallowed.
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from docx_tree_text.api.flatten import render_with_config
from docx_tree_text.archive import find_body, read_document_xml, xpath_namespaces
from docx_tree_text.shared import (
    BuildStatistics,
    DocumentReadError,
    ExtractionResult,
    ExtractorConfig,
    get_logger,
)
from docx_tree_text.tree import DocumentTreeBuilder, body_nodes

PathType = Union[str, Path]

MS_PER_SECOND = 1000


class DocxTextExtractor:
    """Reusable extractor applying one configuration to many documents.

    Attributes:
        config: Extraction configuration
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> extractor = DocxTextExtractor(ExtractorConfig.plain_text())
        >>> result = extractor.extract("report.docx")
        >>> print(result.text)
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ExtractorConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "docx_extractor")

        self._documents = 0
        self._failures = 0
        self._build_statistics = BuildStatistics()
        self._total_processing_time = 0.0

    def extract(self, path: PathType) -> ExtractionResult:
        """Extract the rendered text of every top-level body node of a document.

        Args:
            path: Path to the docx file

        Returns:
            ExtractionResult with one string per paragraph or table

        Raises:
            DocumentReadError: If the archive or its body XML cannot be read
        """
        start_time = time.time()
        try:
            document = read_document_xml(
                path, self.config.body_entry, self.correlation_id
            )
            body = find_body(document)
        except DocumentReadError as e:
            self._failures += 1
            self.logger.warning(
                "Document could not be read",
                extra={"file_path": str(path), "category": e.category},
            )
            raise

        builder = DocumentTreeBuilder(self.correlation_id)
        tree = builder.build(body_nodes(body, xpath_namespaces(document.namespaces)))
        texts = render_with_config(tree, self.config.delimiters)

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._documents += 1
        self._build_statistics.merge(builder.statistics)
        self._total_processing_time += processing_time

        self.logger.info(
            "Document extracted",
            extra={
                "file_path": str(path),
                "node_count": len(texts),
                "skipped_tags": builder.statistics.total_skipped_tags,
                "processing_time_ms": processing_time,
            },
        )

        return ExtractionResult(
            source=str(path),
            texts=texts,
            statistics=builder.statistics,
            processing_time_ms=processing_time,
            correlation_id=self.correlation_id,
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get extractor usage statistics."""
        attempts = self._documents + self._failures
        return {
            "documents_extracted": self._documents,
            "documents_failed": self._failures,
            "success_rate": self._documents / attempts if attempts > 0 else 0.0,
            "nodes_built": self._build_statistics.total_nodes,
            "skipped_tags": dict(self._build_statistics.skipped_tags),
            "total_processing_time_ms": self._total_processing_time,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset extractor usage statistics."""
        self._documents = 0
        self._failures = 0
        self._build_statistics = BuildStatistics()
        self._total_processing_time = 0.0

        self.logger.info("Extractor statistics reset")


def extract(path: PathType, config: Optional[ExtractorConfig] = None) -> ExtractionResult:
    """Extract a document's text with statistics and timing.

    Raises:
        DocumentReadError: If the archive or its body XML cannot be read
    """
    return DocxTextExtractor(config).extract(path)


def extract_text(path: PathType, config: Optional[ExtractorConfig] = None) -> List[str]:
    """Extract one rendered string per top-level body node of a document.

    Examples:
        >>> extract_text("table.docx")
        ['R1C1 | R1C2\\nR2C1 | R2C2']
    """
    return extract(path, config).texts
