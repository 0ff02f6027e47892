"""CLI entry point for SFAF Kit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from sfafkit import __version__, logger
from sfafkit.codec import parse_record
from sfafkit.compliance import run_full_compliance
from sfafkit.exceptions import PackageError
from sfafkit.export import export_record, persist_export
from sfafkit.logging import configure_logging
from sfafkit.reference_data import get_reference_data
from sfafkit.report import render_compliance_report
from sfafkit.schema import get_field_spec
from sfafkit.settings import Settings, get_settings
from sfafkit.typing.enums import ExportFormat

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfafkit.typing.models import ComplianceReport, Record

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NON_COMPLIANT = 2


def _export_format_from_cli(value: str) -> ExportFormat:
    """Convert `--format` CLI value into an export format.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        ExportFormat: Selected format.
    """
    try:
        return ExportFormat.from_str(value.lower())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sfafkit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Check an SFAF record for MCEB Pub 7 compliance")
    validate_parser.add_argument("input_path", type=Path)
    validate_parser.add_argument("--json", action="store_true", dest="as_json", help="Print the report as JSON")

    export_parser = subparsers.add_parser("export", help="Convert an SFAF record to SFAF, JSON or CSV")
    export_parser.add_argument("input_path", type=Path)
    export_parser.add_argument(
        "--format",
        type=_export_format_from_cli,
        default=ExportFormat.SFAF,
        dest="export_format",
    )
    export_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    report_parser = subparsers.add_parser("report", help="Print a categorized compliance report")
    report_parser.add_argument("input_path", type=Path)

    field_parser = subparsers.add_parser("field", help="Show the schema definition of a field")
    field_parser.add_argument("field_id")

    return parser


def _load_record(path: Path, settings: Settings) -> Record:
    """Read and parse an SFAF text file.

    Args:
        path (Path): Input file.
        settings (Settings): Runtime settings providing the import skip list.

    Returns:
        Record: Parsed record.
    """
    text = path.read_text(encoding="utf-8")
    return parse_record(text, skip_fields=settings.import_skip_field_set)


def _assess(path: Path, settings: Settings) -> ComplianceReport:
    record = _load_record(path, settings)
    return run_full_compliance(record, reference=get_reference_data(settings))


def _print_summary(report: ComplianceReport) -> None:
    for missing in report.missing_fields:
        print(f"MISSING {missing.field_id}: {missing.reason}")
    for violation in report.occurrence_violations:
        print(f"OCCURRENCES {violation.field_id}: {violation.actual_count} > {violation.max_allowed}")
    for error in report.format_errors:
        print(f"ERROR {error.field_id}/{error.occurrence_index:02d}: {error.message}")
    for warning in report.warnings:
        print(f"WARNING {warning.field_id}: {warning.message}")
    print("COMPLIANT" if report.is_valid else "NON-COMPLIANT")


def _run_command(args: argparse.Namespace, settings: Settings) -> int:
    """Dispatch a parsed subcommand.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        int: Exit code.
    """
    if args.command == "field":
        spec = get_field_spec(args.field_id)
        if spec is None:
            logger.error("Unknown field", extra={"field_id": args.field_id})
            return EXIT_ERROR
        print(spec.model_dump_json(indent=2))
        return EXIT_OK

    if args.command == "export":
        record = _load_record(args.input_path, settings)
        content = export_record(record, args.export_format, publication=settings.publication_reference)
        if args.output_path is None:
            sys.stdout.write(content)
        else:
            persist_export(content, args.output_path)
            logger.info("Export completed", extra={"output_path": str(args.output_path)})
        return EXIT_OK

    report = _assess(args.input_path, settings)
    if args.command == "report":
        sys.stdout.write(render_compliance_report(report))
        return EXIT_OK

    if args.as_json:
        print(report.model_dump_json(indent=2))
    else:
        _print_summary(report)
    return EXIT_OK if report.is_valid else EXIT_NON_COMPLIANT


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (Sequence[str] | None): Arguments; `sys.argv[1:]` when omitted.

    Returns:
        int: Exit code (0 for success, 1 for error, 2 for a non-compliant record).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        return _run_command(args, settings)
    except OSError:
        logger.exception("Cannot access input or output file")
        return EXIT_ERROR
    except PackageError:
        logger.exception("SFAF processing failed")
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
