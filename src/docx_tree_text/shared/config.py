"""Configuration classes for docx text extraction.

This module provides the delimiter configuration consumed by the tree model
and the extractor configuration consumed by the API and CLI layers.
"""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_BODY_ENTRY = "word/document.xml"

_DELIMITER_FIELDS = ("run", "paragraph", "cell", "row")
_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class DelimiterConfig:
    """Separators used when flattening each level of the document tree.

    Each field is independent. ``None`` means the level is unset and its
    children are concatenated directly; ``""`` is an explicit empty separator.
    Both produce the same text but are distinct configuration states.

    Attributes:
        run: Separator placed between runs of a paragraph
        paragraph: Separator placed between paragraphs of a table cell
        cell: Separator placed between cells of a table row
        row: Separator placed between rows of a table
    """

    run: Optional[str] = None
    paragraph: Optional[str] = None
    cell: Optional[str] = None
    row: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate delimiter values."""
        for name in _DELIMITER_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigValidationError(
                    f"{name} delimiter must be a string or None, "
                    f"got {type(value).__name__}",
                    field_name=name,
                )

    @classmethod
    def defaults(cls) -> "DelimiterConfig":
        """Create the flattening defaults: cells split by " | ", rows by lines."""
        return cls(run="", paragraph="", cell=" | ", row=os.linesep)

    def with_overrides(self, **kwargs: Optional[str]) -> "DelimiterConfig":
        """Create a new configuration with specific delimiters replaced."""
        unknown = sorted(set(kwargs) - set(_DELIMITER_FIELDS))
        if unknown:
            raise ConfigValidationError(
                f"Unknown delimiter field(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=list(_DELIMITER_FIELDS),
            )
        return replace(self, **kwargs)

    def is_set(self, name: str) -> bool:
        """Check whether a level has a delimiter, including an explicit ""."""
        if name not in _DELIMITER_FIELDS:
            raise ConfigValidationError(
                f"Unknown delimiter field: {name}",
                field_name=name,
                suggestions=list(_DELIMITER_FIELDS),
            )
        return getattr(self, name) is not None

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert delimiters to dictionary format."""
        return {name: getattr(self, name) for name in _DELIMITER_FIELDS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DelimiterConfig":
        """Create delimiters from a dictionary, rejecting unknown keys."""
        return cls().with_overrides(**data)


@dataclass(frozen=True)
class ExtractorConfig:
    """Configuration for extracting text from docx packages.

    Immutable, so a single instance can be shared by every worker of a batch.
    """

    delimiters: DelimiterConfig = field(default_factory=DelimiterConfig.defaults)
    body_entry: str = DEFAULT_BODY_ENTRY
    correlation_id: Optional[str] = None
    logging_level: str = "INFO"

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the extractor configuration."""
        if not isinstance(self.delimiters, DelimiterConfig):
            raise ConfigValidationError(
                "delimiters must be a DelimiterConfig instance",
                field_name="delimiters",
            )
        if not self.body_entry:
            raise ConfigValidationError(
                "body_entry cannot be empty",
                field_name="body_entry",
                suggestions=[DEFAULT_BODY_ENTRY],
            )
        if self.logging_level not in _LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=_LOGGING_LEVELS,
            )

    def override(self, **kwargs: Any) -> "ExtractorConfig":
        """Create a new configuration with specific overrides.

        Delimiter fields are addressed with a ``delimiters__`` prefix.

        Example:
            >>> config = ExtractorConfig()
            >>> tabbed = config.override(delimiters__cell="\\t", name="tabbed")
        """
        delimiter_overrides: Dict[str, Any] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if key.startswith("delimiters__"):
                delimiter_overrides[key.split("__", 1)[1]] = value
            else:
                top_level[key] = value

        if delimiter_overrides:
            base = top_level.get("delimiters", self.delimiters)
            top_level["delimiters"] = base.with_overrides(**delimiter_overrides)

        return replace(self, **top_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "delimiters": self.delimiters.to_dict(),
            "body_entry": self.body_entry,
            "correlation_id": self.correlation_id,
            "logging_level": self.logging_level,
            "name": self.name,
            "description": self.description,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractorConfig":
        """Create configuration from dictionary.

        Missing keys keep their defaults. A ``delimiters`` mapping overrides
        only the levels it names.

        Raises:
            ConfigValidationError: If the dictionary holds unknown keys or
                invalid values
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration key(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )

        values = dict(data)
        if "delimiters" in values:
            delimiters = values["delimiters"]
            if not isinstance(delimiters, dict):
                raise ConfigValidationError(
                    "delimiters must be a mapping", field_name="delimiters"
                )
            values["delimiters"] = DelimiterConfig.defaults().with_overrides(
                **delimiters
            )
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ExtractorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ExtractorConfig":
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read
            ConfigValidationError: If its content is not a valid configuration
        """
        path = Path(config_path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(content)

    # Preset factory methods
    @classmethod
    def tabular(cls) -> "ExtractorConfig":
        """Create preset that renders tables as " | "-separated lines."""
        return cls(
            delimiters=DelimiterConfig.defaults(),
            name="tabular",
            description="Cells separated by ' | ', rows by the line separator",
        )

    @classmethod
    def plain_text(cls) -> "ExtractorConfig":
        """Create preset producing tab-separated cells and one line per paragraph."""
        return cls(
            delimiters=DelimiterConfig(run="", paragraph="\n", cell="\t", row="\n"),
            name="plain_text",
            description="Cells separated by tabs, paragraphs and rows by newlines",
        )


PRESETS = {
    "tabular": ExtractorConfig.tabular,
    "plain_text": ExtractorConfig.plain_text,
}
