"""Shared utilities for docx text extraction.

This module provides configuration objects, error types, result types,
and logging helpers used across the tree, archive, API and CLI layers.
"""

from .config import (
    DEFAULT_BODY_ENTRY,
    ConfigError,
    ConfigValidationError,
    DelimiterConfig,
    ExtractorConfig,
)
from .errors import (
    ArchiveUnreadableError,
    DocumentReadError,
    MalformedDocumentError,
    MissingBodyEntryError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    BuildStatistics,
    ExtractionResult,
)

__all__ = [
    "DEFAULT_BODY_ENTRY",
    "ConfigError",
    "ConfigValidationError",
    "DelimiterConfig",
    "ExtractorConfig",
    "ArchiveUnreadableError",
    "DocumentReadError",
    "MalformedDocumentError",
    "MissingBodyEntryError",
    "CorrelationLogger",
    "get_logger",
    "BuildStatistics",
    "ExtractionResult",
]
