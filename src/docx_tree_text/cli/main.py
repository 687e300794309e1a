"""Main CLI entry point for the docx-tree-text command-line tool.

Extracts text from one or many docx files, rendering tables with
configurable per-level delimiters.
"""

import argparse
import json
import logging
import os
import re
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from docx_tree_text import __version__
from docx_tree_text.api import DocxTextExtractor
from docx_tree_text.shared import (
    ConfigError,
    DocumentReadError,
    ExtractorConfig,
    get_logger,
)
from docx_tree_text.shared.config import PRESETS

DOCX_SUFFIXES = {".docx", ".docm", ".dotx"}

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "\\": "\\"}
_ESCAPE_PATTERN = re.compile(r"\\(.)")


def unescape_delimiter(value: str) -> str:
    """Translate backslash escapes (``\\t``, ``\\n``, ``\\r``, ``\\\\``) in a delimiter."""
    return _ESCAPE_PATTERN.sub(
        lambda match: _ESCAPES.get(match.group(1), match.group(0)), value
    )


def positive_int(value: str) -> int:
    """Parse a strictly positive integer option value."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


class DocxProcessor:
    """Core extraction logic for CLI operations."""

    def __init__(self, config: ExtractorConfig, max_workers: Optional[int] = None):
        self.config = config
        self.max_workers = max_workers
        self.logger = get_logger(__name__, config.correlation_id, "cli_processor")

    def process_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Extract a single document; read failures become error entries."""
        try:
            result = DocxTextExtractor(self.config).extract(file_path)
        except DocumentReadError as e:
            return {
                "file": str(file_path),
                "success": False,
                "category": e.category,
                "error": str(e),
            }
        return result.to_dict()

    def find_docx_files(self, path: Path, recursive: bool = True) -> Iterator[Path]:
        """Find docx files in path.

        Explicit file paths are yielded whatever their suffix so that a bad
        file is reported rather than silently ignored.
        """
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            for candidate in sorted(path.glob(pattern)):
                if candidate.is_file() and candidate.suffix.lower() in DOCX_SUFFIXES:
                    yield candidate
        else:
            yield path

    def batch_process(self, paths: List[Path], recursive: bool = True) -> List[Dict[str, Any]]:
        """Process many documents, returning results in input order."""
        all_files: List[Path] = []
        for path in paths:
            all_files.extend(self.find_docx_files(path, recursive))

        if not all_files:
            return []

        self.logger.info(
            "Starting batch extraction",
            extra={"file_count": len(all_files), "max_workers": self.max_workers},
        )

        if len(all_files) == 1 or self.max_workers == 1:
            return [self.process_single_file(file_path) for file_path in all_files]

        with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self.process_single_file, all_files))


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="docx-tree-text",
        description="Extract text from docx files with configurable table delimiters"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract text from docx files")
    extract_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="docx files or directories to extract"
    )
    extract_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    extract_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    extract_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    extract_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    extract_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Delimiter preset (default: tabular)"
    )
    for level in ("run", "paragraph", "cell", "row"):
        extract_parser.add_argument(
            f"--{level}-delimiter",
            help=f"Separator between {level}s; backslash escapes are honoured"
        )
    extract_parser.add_argument(
        "--workers", "-w",
        type=positive_int,
        help="Number of parallel workers"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def build_config(args: argparse.Namespace) -> ExtractorConfig:
    """Resolve the extractor configuration from file, preset and overrides."""
    if args.config:
        config = ExtractorConfig.from_file(args.config)
    else:
        config = ExtractorConfig.tabular()

    if args.preset:
        config = config.override(delimiters=PRESETS[args.preset]().delimiters)

    overrides = {}
    for level in ("run", "paragraph", "cell", "row"):
        value = getattr(args, f"{level}_delimiter")
        if value is not None:
            overrides[f"delimiters__{level}"] = unescape_delimiter(value)
    if overrides:
        config = config.override(**overrides)

    return config


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format extraction results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2, ensure_ascii=False)

    lines = []
    show_headers = len(results) > 1
    for result in results:
        if not result.get("success", False):
            lines.append(
                f"! {result['file']}: {result.get('category', 'error')}: "
                f"{result.get('error', '')}"
            )
            continue
        if show_headers:
            lines.append(f"# {result['file']}")
        lines.extend(result.get("texts", []))

    return os.linesep.join(lines)


def cmd_extract(args: argparse.Namespace) -> int:
    """Handle extract command."""
    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if not (args.verbose or args.quiet):
        logging.getLogger("docx_tree_text").setLevel(config.logging_level)

    processor = DocxProcessor(config, max_workers=args.workers)
    results = processor.batch_process(args.paths, args.recursive)

    formatted_output = format_results(results, args.format)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8", newline="") as handle:
                handle.write(formatted_output)
            print(f"Results written to {args.output}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(formatted_output)

    if not results:
        return 1

    successful = sum(1 for r in results if r.get("success", False))
    return 0 if successful == len(results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "extract":
            return cmd_extract(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
