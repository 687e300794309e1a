"""Tests for the CLI main module."""

import argparse
import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from docx_tree_text.cli.main import (
    DocxProcessor,
    build_config,
    create_argument_parser,
    format_results,
    main,
    positive_int,
    unescape_delimiter,
)
from docx_tree_text.shared import ExtractorConfig


@pytest.fixture
def table_docx(make_docx, paragraph_xml, table_xml):
    return make_docx(
        paragraph_xml("Title") + table_xml([["a", "b"], ["c", "d"]]),
        name="table.docx",
    )


class TestUnescapeDelimiter:
    """Test backslash escape handling for delimiter options."""

    @pytest.mark.parametrize("raw,expected", [
        ("\\t", "\t"),
        ("\\n", "\n"),
        ("a\\r\\nb", "a\r\nb"),
        ("\\\\", "\\"),
        (" | ", " | "),
        ("\\x", "\\x"),
    ])
    def test_escapes(self, raw, expected):
        """Test supported escapes are translated and others kept."""
        assert unescape_delimiter(raw) == expected


class TestArgumentParser:
    """Test argument parsing and configuration resolution."""

    def test_extract_defaults(self):
        """Test default option values."""
        args = create_argument_parser().parse_args(["extract", "a.docx"])

        assert args.command == "extract"
        assert args.paths == [Path("a.docx")]
        assert args.format == "text"
        assert args.preset is None
        assert args.cell_delimiter is None

    def test_build_config_defaults_to_tabular(self):
        """Test the configuration with no options."""
        args = create_argument_parser().parse_args(["extract", "a.docx"])

        assert build_config(args).delimiters == ExtractorConfig.tabular().delimiters

    def test_build_config_preset_and_overrides(self):
        """Test explicit delimiters win over the preset."""
        args = create_argument_parser().parse_args([
            "extract", "a.docx", "--preset", "plain_text", "--row-delimiter", "\\n\\n",
        ])

        config = build_config(args)

        assert config.delimiters.cell == "\t"
        assert config.delimiters.row == "\n\n"

    def test_build_config_from_file(self, tmp_path):
        """Test a configuration file is loaded before overrides."""
        config_path = tmp_path / "cli.json"
        config_path.write_text(json.dumps({"delimiters": {"cell": ";"}}))
        args = create_argument_parser().parse_args([
            "extract", "a.docx", "--config", str(config_path), "--run-delimiter", "-",
        ])

        config = build_config(args)

        assert config.delimiters.cell == ";"
        assert config.delimiters.run == "-"

    def test_workers_option(self):
        """Test a positive worker count is accepted."""
        args = create_argument_parser().parse_args(["extract", "a.docx", "--workers", "3"])

        assert args.workers == 3

    @pytest.mark.parametrize("value", ["0", "-2", "two"])
    def test_workers_rejects_non_positive(self, value, capsys):
        """Test invalid worker counts exit with a usage error."""
        with pytest.raises(SystemExit) as exc:
            create_argument_parser().parse_args(["extract", "a.docx", "--workers", value])

        assert exc.value.code == 2
        assert "--workers" in capsys.readouterr().err

    def test_positive_int(self):
        """Test the worker count parser directly."""
        assert positive_int("1") == 1
        with pytest.raises(argparse.ArgumentTypeError, match="positive integer"):
            positive_int("0")


class TestDocxProcessor:
    """Test the batch processor."""

    def test_process_single_file_success(self, table_docx):
        """Test a successful extraction entry."""
        processor = DocxProcessor(ExtractorConfig())

        result = processor.process_single_file(table_docx)

        assert result["success"] is True
        assert result["file"] == str(table_docx)
        assert result["texts"] == ["Title", "a | b" + os.linesep + "c | d"]

    def test_process_single_file_failure(self, tmp_path):
        """Test a read failure becomes an error entry."""
        processor = DocxProcessor(ExtractorConfig())

        result = processor.process_single_file(tmp_path / "missing.docx")

        assert result["success"] is False
        assert result["category"] == "archive_unreadable"
        assert "File not found" in result["error"]

    def test_process_single_file_corrupt_entry(self, corrupt_docx):
        """Test a damaged compressed body entry becomes an error entry."""
        processor = DocxProcessor(ExtractorConfig())

        result = processor.process_single_file(corrupt_docx)

        assert result["success"] is False
        assert result["file"] == str(corrupt_docx)
        assert result["category"] == "archive_unreadable"

    def test_batch_continues_after_corrupt_entry(self, corrupt_docx, table_docx):
        """Test one damaged document does not stop the batch."""
        processor = DocxProcessor(ExtractorConfig(), max_workers=1)

        results = processor.batch_process([corrupt_docx, table_docx])

        assert [r["success"] for r in results] == [False, True]
        assert results[1]["texts"][0] == "Title"

    def test_find_docx_files_directory(self, make_docx, tmp_path):
        """Test directory discovery honours suffixes and recursion."""
        top = make_docx(name="one.docx")
        nested = make_docx(name="sub/two.docx")
        (tmp_path / "notes.txt").write_text("ignored")
        processor = DocxProcessor(ExtractorConfig())

        assert list(processor.find_docx_files(tmp_path, recursive=False)) == [top]
        assert sorted(processor.find_docx_files(tmp_path)) == sorted([top, nested])

    def test_find_docx_files_explicit_file(self, tmp_path):
        """Test explicit paths are passed through whatever their suffix."""
        path = tmp_path / "report.bin"
        processor = DocxProcessor(ExtractorConfig())

        assert list(processor.find_docx_files(path)) == [path]

    def test_batch_preserves_input_order(self, make_docx, paragraph_xml):
        """Test results follow the order of the given paths."""
        paths = [make_docx(paragraph_xml(name), name=f"{name}.docx") for name in "cab"]
        processor = DocxProcessor(ExtractorConfig(), max_workers=1)

        results = processor.batch_process(paths)

        assert [r["texts"] for r in results] == [["c"], ["a"], ["b"]]

    def test_batch_with_no_files(self, tmp_path):
        """Test an empty directory yields no results."""
        assert DocxProcessor(ExtractorConfig()).batch_process([tmp_path]) == []


class TestFormatResults:
    """Test output formatting."""

    def test_text_single_document(self):
        """Test a single document prints only its texts."""
        results = [{"file": "a.docx", "success": True, "texts": ["x", "y"]}]

        assert format_results(results, "text") == "x" + os.linesep + "y"

    def test_text_several_documents_with_failure(self):
        """Test headers and failure lines for batches."""
        results = [
            {"file": "a.docx", "success": True, "texts": ["x"]},
            {"file": "b.docx", "success": False, "category": "missing_body_entry",
             "error": "no entry"},
        ]

        assert format_results(results, "text") == (
            os.linesep.join(["# a.docx", "x", "! b.docx: missing_body_entry: no entry"])
        )

    def test_json(self):
        """Test JSON output keeps non-ASCII text readable."""
        results = [{"file": "a.docx", "success": True, "texts": ["café"]}]

        output = format_results(results, "json")

        assert json.loads(output) == results
        assert "café" in output


class TestMain:
    """Test the CLI entry point."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_extract_text_output(self, table_docx, capsys):
        """Test text extraction to stdout with a custom cell delimiter."""
        exit_code = main([
            "extract", str(table_docx), "--cell-delimiter", "\\t", "--row-delimiter", "\\n",
        ])

        assert exit_code == 0
        assert capsys.readouterr().out == "Title" + os.linesep + "a\tb\nc\td\n"

    def test_extract_json_output(self, table_docx, capsys):
        """Test JSON output carries texts and statistics."""
        exit_code = main(["extract", str(table_docx), "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data[0]["texts"][0] == "Title"
        assert data[0]["statistics"]["tables"] == 1

    def test_extract_failure_exit_code(self, table_docx, make_docx, capsys):
        """Test one failing document makes the batch exit with 1."""
        broken = make_docx(include_document=False, name="broken.docx")

        exit_code = main(["extract", str(table_docx), str(broken), "--workers", "1"])

        out = capsys.readouterr().out
        assert exit_code == 1
        assert f"# {table_docx}" in out
        assert f"! {broken}: missing_body_entry" in out

    def test_extract_to_output_file(self, table_docx, tmp_path, capsys):
        """Test writing results to a file."""
        output = tmp_path / "out.txt"

        exit_code = main(["extract", str(table_docx), "--output", str(output)])

        assert exit_code == 0
        assert output.read_bytes().decode("utf-8").startswith("Title" + os.linesep)
        assert "Results written to" in capsys.readouterr().err

    def test_bad_config_file(self, table_docx, tmp_path, capsys):
        """Test an invalid configuration file is reported."""
        config_path = tmp_path / "bad.json"
        config_path.write_text("{broken")

        exit_code = main(["extract", str(table_docx), "--config", str(config_path)])

        assert exit_code == 1
        assert "Error loading configuration" in capsys.readouterr().err

    def test_keyboard_interrupt(self, table_docx, capsys):
        """Test interruption exit code."""
        with patch("docx_tree_text.cli.main.cmd_extract", side_effect=KeyboardInterrupt):
            assert main(["extract", str(table_docx)]) == 130

        assert "interrupted" in capsys.readouterr().err
