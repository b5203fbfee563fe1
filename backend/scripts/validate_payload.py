#!/usr/bin/env python3
"""Validate JSON payloads against a rule set from the command line.

The payload file holds one JSON object, or a list of objects for batch
validation. Rules come from a YAML/JSON mapping of field name to rule
string, or from a built-in resource.

Prints the normalized data or the error report as JSON on stdout.
Exit codes: 0 valid, 1 invalid, 2 unreadable input.

Run with: python3 -m scripts.validate_payload payload.json --resource construction_stages
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from core.config import settings
from core.errors import AppError, Err, ErrorCode, Ok, Result, file_not_found, file_read_error, try_result, validation_error
from core.logging import bind_context, clear_context, cli_logger, configure_logging
from core.validation import BoundaryValidator, RuleValidator
from models import RESOURCES

EXIT_VALID, EXIT_INVALID, EXIT_INPUT_ERROR = 0, 1, 2

log = cli_logger()


def read_text(source: str) -> Result[str, AppError]:
    """Read a file, or stdin for '-'."""
    if source == "-":
        return try_result(sys.stdin.read, code=ErrorCode.E6002_FILE_READ_ERROR, origin="cli")
    path = Path(source)
    if not path.is_file():
        return file_not_found(path, origin="cli")
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return file_read_error(path, str(e), origin="cli")


def load_payload(source: str) -> Result[Any, AppError]:
    def decode(text: str) -> Result[Any, AppError]:
        result = try_result(lambda: json.loads(text), code=ErrorCode.E2021_INVALID_JSON, origin="cli")
        if result.is_err():
            return result
        payload = result.unwrap()
        items = payload if isinstance(payload, list) else [payload]
        if not all(isinstance(item, dict) for item in items):
            return validation_error("Payload must be a JSON object or a list of objects",
                code=ErrorCode.E2021_INVALID_JSON, origin="cli")
        return result

    return read_text(source).and_then(decode)


def load_rules(source: str) -> Result[dict[str, str], AppError]:
    """Rule set from a YAML or JSON file: {field: rule string}."""
    def decode(text: str) -> Result[dict[str, str], AppError]:
        result = try_result(lambda: yaml.safe_load(text), code=ErrorCode.E2021_INVALID_JSON, origin="cli")
        if result.is_err():
            return result
        rules = result.unwrap()
        if not isinstance(rules, dict) or not all(isinstance(v, str) for v in rules.values()):
            return validation_error("Rules file must map field names to rule strings",
                code=ErrorCode.E2030_RULE_CONFIGURATION, origin="cli", path=source)
        return Ok({str(k): v for k, v in rules.items()})

    return read_text(source).and_then(decode)


def render(result: Result, *, batch: bool) -> tuple[dict[str, Any], int]:
    """Output document and exit code for a validation result."""
    match result:
        case Ok(data):
            return {"valid": True, "data": data}, EXIT_VALID
        case Err(errors) if batch:
            return {
                "valid": False,
                "errors": [{"index": idx, **err.metadata.get("report", {})} for idx, err in errors],
            }, EXIT_INVALID
        case Err(error):
            return {"valid": False, **error.metadata.get("report", {})}, EXIT_INVALID


def run(args: argparse.Namespace) -> int:
    """Validate the payload named by parsed arguments. Returns the exit code."""
    rules_result = Ok(RESOURCES[args.resource]) if args.resource else load_rules(args.rules)
    payload_result = load_payload(args.payload)
    validator_result = try_result(
        lambda: RuleValidator(check_missing=args.check_missing or None),
        code=ErrorCode.E2030_RULE_CONFIGURATION,
        origin="cli",
    )
    for result in (rules_result, payload_result, validator_result):
        if result.is_err():
            error = result.unwrap_err()
            log.error("input_rejected", error_code=error.code.name, message=error.message)
            print(json.dumps(error.to_dict(), indent=2, ensure_ascii=False))
            return EXIT_INPUT_ERROR

    boundary = BoundaryValidator(rules_result.unwrap(), validator_result.unwrap())
    payload = payload_result.unwrap()
    batch = isinstance(payload, list)
    if batch:
        result = boundary.parse_batch(payload, max_errors=args.max_errors)
    else:
        result = boundary.parse_ingress(payload)

    document, code = render(result, batch=batch)
    print(json.dumps(document, indent=2, ensure_ascii=False))
    return code


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate JSON payloads against field rule strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 -m scripts.validate_payload stage.json --resource construction_stages
  python3 -m scripts.validate_payload - --rules rules.yaml < stage.json
        """,
    )
    parser.add_argument("payload", help="JSON payload file, or '-' for stdin")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--rules", help="YAML or JSON file mapping field names to rule strings")
    source.add_argument("--resource", choices=sorted(RESOURCES), help="Use a built-in resource rule set")
    parser.add_argument("--check-missing", action="store_true",
                        help="Also validate fields that have rules but are absent from the payload")
    parser.add_argument("--max-errors", type=int, default=50, help="Batch mode: stop after this many failures")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level (default: %(default)s)")
    parser.add_argument("--json-logs", action="store_true", default=settings.LOG_JSON, help="Emit JSON log lines")

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs)
    bind_context(command="validate_payload", source=args.payload)
    try:
        return run(args)
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
