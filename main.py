"""CLI entry point for the bookmark importer.

Reads a Netscape bookmark HTML export, parses it into import data, and
optionally validates it or reports an advisory pre-scan. Each mode is a
small handler so the dispatch in ``main`` stays flat.
"""

from __future__ import annotations

# Standard library imports (alphabetical within groups)
import argparse
import asyncio
import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

# Third-party imports
from dotenv import load_dotenv

# Internal imports
from bookmark_importer.html_parser import ParseFailure, create_html_parser
from bookmark_importer.reader import ExportReadError, read_export

if TYPE_CHECKING:  # pragma: no cover
    from bookmark_importer.html_parser import HtmlImportParser
    from bookmark_importer.models import ImportData, ValidationResult

STAGES: dict[int, str] = {
    1: "Read bookmark export",
    2: "Parse bookmarks",
    3: "Validate import data",
    4: "Write JSON output",
}


def configure_logging(*, verbose: bool) -> None:
    """Configure root logging (debug when verbose).

    verbose: when True, sets DEBUG level; otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def log_stage(stage_number: int, message: str, *args: object) -> None:
    """Log a message prefixed with a stage label."""
    stage_label = STAGES.get(stage_number, f"Stage {stage_number}")
    logger = logging.getLogger("bookmark_importer")
    logger.info("[%s] %s", stage_label, message % args if args else message)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import Netscape bookmark HTML exports")
    parser.add_argument(
        "--input",
        help=(
            "Path to the exported bookmarks HTML file. If omitted, the environment variable"
            " BOOKMARKS_EXPORT_FILE is used."
        ),
    )
    parser.add_argument(
        "--json-output",
        default="import.json",
        help="Path to emit the parsed import data as JSON",
    )
    parser.add_argument(
        "--mode",
        choices=("parse", "validate", "stats"),
        default="validate",
        help=(
            "Workflow: 'parse'→JSON import data; 'validate'→parse, validate and write both;"
            " 'stats'→advisory pre-scan only."
        ),
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _resolve_input(path_arg: str | None) -> Path:
    resolved = path_arg or os.getenv("BOOKMARKS_EXPORT_FILE")
    if not resolved:
        msg = "No input file provided. Supply --input or set BOOKMARKS_EXPORT_FILE in env."
        raise SystemExit(msg)
    path = Path(resolved)
    if not path.exists():
        msg = f"Bookmark export not found: {path}"
        raise SystemExit(msg)
    return path


def _read_content(input_path: Path) -> str:
    log_stage(1, "Reading %s", input_path)
    try:
        return read_export(input_path)
    except ExportReadError as exc:
        raise SystemExit(str(exc)) from exc


def _write_json(payload: dict[str, object], output_path: Path) -> None:
    log_stage(4, "Writing %s", output_path)
    output_path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8",
    )


def _parse(parser: HtmlImportParser, content: str) -> ImportData:
    log_stage(2, "Parsing %d characters", len(content))
    try:
        return asyncio.run(parser.parse(content))
    except ParseFailure as exc:
        raise SystemExit(str(exc)) from exc


def _handle_stats(parser: HtmlImportParser, content: str) -> int:
    stats = parser.estimate_stats(content)
    log_stage(
        2,
        "Estimated %d bookmarks in %d folders (%d bytes, encoding %s)",
        stats.estimated_bookmarks,
        stats.estimated_folders,
        stats.file_size,
        stats.encoding,
    )
    print(json.dumps(stats.model_dump(by_alias=True), indent=2))  # noqa: T201
    return 0


def _handle_parse(parser: HtmlImportParser, content: str, output_path: Path) -> int:
    data = _parse(parser, content)
    _write_json({"data": data.model_dump(mode="json")}, output_path)
    return 0


def _report_validation(result: ValidationResult) -> None:
    logger = logging.getLogger("bookmark_importer")
    for error in result.errors:
        logger.error("%s: %s (%r)", error.field, error.message, error.value)
    for warning in result.warnings:
        logger.warning("%s: %s (%r)", warning.field, warning.message, warning.value)


def _handle_validate(parser: HtmlImportParser, content: str, output_path: Path) -> int:
    data = _parse(parser, content)
    log_stage(3, "Validating %d bookmarks", data.metadata.total_items)
    result = asyncio.run(parser.validate(data))
    _report_validation(result)
    _write_json(
        {"data": data.model_dump(mode="json"), "validation": result.model_dump(mode="json")},
        output_path,
    )
    if not result.valid:
        log_stage(3, "Validation failed with %d errors", len(result.errors))
        return 1
    log_stage(3, "Validation passed with %d warnings", len(result.warnings))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the bookmark importer CLI."""
    load_dotenv()
    args = _parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = _resolve_input(args.input)
    content = _read_content(input_path)
    parser = create_html_parser()

    if args.mode == "stats":
        return _handle_stats(parser, content)
    if args.mode == "parse":
        return _handle_parse(parser, content, Path(args.json_output))
    return _handle_validate(parser, content, Path(args.json_output))


if __name__ == "__main__":
    raise SystemExit(main())
