"""Public API: flattening built trees and extracting text from docx files."""

from .extractor import DocxTextExtractor, extract, extract_text
from .flatten import render, render_with_config

__all__ = [
    "DocxTextExtractor",
    "extract",
    "extract_text",
    "render",
    "render_with_config",
]
