"""Command-line interface module for docx-tree-text.

This module provides the ``extract`` command for batch text extraction with
delimiter presets and configuration files.
"""

from .main import main

__all__ = ["main"]
