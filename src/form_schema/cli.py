"""
form-schema command line entry point.

Usage:
    # Validate a stored form record
    form-schema validate form.json

    # Initial values of every page (or of one page)
    form-schema defaults form.json --page page-1

    # Rewrite a legacy record in the canonical encoding
    form-schema normalize form.json

    # Normalize answers for submission
    form-schema transform form.json answers.json
"""

import argparse
import json
import logging
import sys
from typing import Any

from form_schema import __version__
from form_schema.codec import deserialize_form_schema, serialize_form_schema
from form_schema.config import get_config
from form_schema.diagnostics import DiagnosticReport, setup_logging
from form_schema.engine import (
    generate_form_default_values,
    generate_page_default_values,
    transform_form_data_for_submission,
)
from form_schema.models.form import FormSchema
from form_schema.validation import validate_form_schema

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


class InputError(Exception):
    """Raised when an input file cannot be read or parsed."""


def _load_json(path: str) -> Any:
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise InputError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputError(f"{path} is not valid JSON: {exc.msg} (line {exc.lineno})") from exc


def _load_schema(path: str, report: DiagnosticReport) -> FormSchema:
    record = _load_json(path)
    if not isinstance(record, dict):
        raise InputError(f"{path} does not contain a form record (expected a JSON object)")
    return deserialize_form_schema(record, diagnostics=report)


def _emit(payload: Any) -> None:
    indent = get_config().indent_json_output or None
    print(json.dumps(payload, indent=indent, ensure_ascii=False))


def _diagnostics_payload(report: DiagnosticReport) -> list[dict[str, Any]]:
    return [diagnostic.model_dump(exclude_none=True) for diagnostic in report.diagnostics]


# -- Commands ----------------------------------------------------------------


def cmd_validate(args: argparse.Namespace) -> int:
    report = DiagnosticReport()
    schema = _load_schema(args.file, report)
    result = validate_form_schema(schema)

    _emit({
        "valid": result.is_valid,
        "errors": result.to_error_dict(),
        "diagnostics": _diagnostics_payload(report),
    })
    return EXIT_OK if result.is_valid else EXIT_INVALID


def cmd_defaults(args: argparse.Namespace) -> int:
    schema = _load_schema(args.file, DiagnosticReport())

    if args.page is None:
        _emit(generate_form_default_values(schema))
        return EXIT_OK

    page = schema.get_page(args.page)
    if page is None:
        print(f"Error: no page with id {args.page!r}", file=sys.stderr)
        return EXIT_INVALID
    _emit(generate_page_default_values(page))
    return EXIT_OK


def cmd_normalize(args: argparse.Namespace) -> int:
    report = DiagnosticReport()
    schema = _load_schema(args.file, report)
    _emit(serialize_form_schema(schema))

    if get_config().verbose_output:
        for diagnostic in report.diagnostics:
            print(f"[{diagnostic.code}] {diagnostic.message}", file=sys.stderr)
    return EXIT_OK


def cmd_transform(args: argparse.Namespace) -> int:
    schema = _load_schema(args.file, DiagnosticReport())
    data = _load_json(args.data)
    if not isinstance(data, dict):
        raise InputError(f"{args.data} does not contain answers (expected a JSON object)")

    if args.page is None:
        fields = schema.all_fields()
    else:
        page = schema.get_page(args.page)
        if page is None:
            print(f"Error: no page with id {args.page!r}", file=sys.stderr)
            return EXIT_INVALID
        fields = page.fields

    _emit(transform_form_data_for_submission(fields, data))
    return EXIT_OK


# -- Parser ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    config = get_config()

    parser = argparse.ArgumentParser(
        prog="form-schema",
        description="Validate, normalize and derive values from stored form records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  success
  1  validation failed (or the requested page does not exist)
  2  an input file could not be read

Environment Variables:
  FORM_SCHEMA_LOG_LEVEL        Log level (default: WARNING)
  FORM_SCHEMA_LOG_DIAGNOSTICS  Log decode diagnostics as warnings (default: true)
  FORM_SCHEMA_LIST_SEPARATOR   Separator of legacy list values (default: ,)
  FORM_SCHEMA_INDENT_JSON      Indentation of JSON output (default: 2)
  FORM_SCHEMA_VERBOSE          Print extra detail to stderr (default: false)
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this JSON-lines file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate every field and the layout of a form")
    validate.add_argument("file", help="Form record (JSON)")
    validate.set_defaults(handler=cmd_validate)

    defaults = subparsers.add_parser("defaults", help="Print the initial values of a form's fields")
    defaults.add_argument("file", help="Form record (JSON)")
    defaults.add_argument("--page", default=None, help="Only this page (by id)")
    defaults.set_defaults(handler=cmd_defaults)

    normalize = subparsers.add_parser("normalize", help="Re-encode a record in the canonical representation")
    normalize.add_argument("file", help="Form record (JSON)")
    normalize.set_defaults(handler=cmd_normalize)

    transform = subparsers.add_parser("transform", help="Normalize answers for submission")
    transform.add_argument("file", help="Form record (JSON)")
    transform.add_argument("data", help="Answers keyed by field id (JSON)")
    transform.add_argument("--page", default=None, help="Only this page's fields (by id)")
    transform.set_defaults(handler=cmd_transform)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level.upper(), file_path=args.log_file)

    try:
        return args.handler(args)
    except InputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_UNREADABLE


if __name__ == "__main__":
    sys.exit(main())
