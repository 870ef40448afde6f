"""Command line interface for certificate scanning and expiry checks."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

from .config import load_extraction_config, load_lifecycle_config, load_ocr_settings
from .evaluate import evaluate_manifest, iter_manifest
from .extract.schemas import ExtractionResult
from .io.writers import dumps, write_json, write_jsonl
from .lifecycle.status import (
    QualificationError,
    confirm_qualification,
    days_until_expiry,
    expiry_alerts,
    qualification_status,
)
from .pipeline.scan import scan_certificate_bytes, scan_certificate_text

_COMMANDS = {"scan", "status", "alerts", "eval"}


def _emit(data: Any, output: Optional[Path] = None) -> None:
    if output:
        write_json(output, data)
    else:
        print(dumps(data, indent=2))


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}") from exc


def _common_options(*, suppress: bool) -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand.

    The subcommand copies use SUPPRESS so they do not reset a value given
    before the subcommand.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Enable debug logging",
    )
    common.add_argument(
        "--config",
        type=Path,
        default=argparse.SUPPRESS if suppress else None,
        help="YAML file overriding packaged defaults",
    )
    return common


def _cmd_scan(args) -> None:
    if not args.path:
        raise SystemExit("Provide a file path")
    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    config = load_extraction_config(args.config)
    if args.text:
        result = scan_certificate_text(
            path.read_text(encoding="utf-8"),
            fallback_name=args.employee_name,
            config=config,
            regex_rules_path=args.regex_rules,
            regex_debug=args.regex_debug,
        )
    else:
        ocr = load_ocr_settings(args.config)
        result = scan_certificate_bytes(
            path.read_bytes(),
            fallback_name=args.employee_name,
            lang=args.lang or ocr.lang,
            dpi=ocr.dpi,
            psm=ocr.psm,
            binarize=ocr.binarize,
            config=config,
            regex_rules_path=args.regex_rules,
            regex_debug=args.regex_debug,
        )
    _emit(result, args.output)


def _cmd_status(args) -> None:
    lifecycle = load_lifecycle_config(args.config)
    reminder_days = args.reminder_days if args.reminder_days is not None else lifecycle.notification_days
    try:
        days = days_until_expiry(args.expiry, today=args.today)
        status = qualification_status(args.expiry, reminder_days, today=args.today)
    except QualificationError as exc:
        raise SystemExit(str(exc)) from exc
    _emit(
        {
            "expiry_date": args.expiry,
            "days_until_expiry": days,
            "status": status.value,
            "label": status.label,
        }
    )


def _cmd_alerts(args) -> None:
    """Reminders for a JSONL file of {holder, title, valid_from, expiry_date[, notification_days]}."""
    if not args.records.exists():
        raise SystemExit(f"File not found: {args.records}")
    lifecycle = load_lifecycle_config(args.config)
    records = []
    for line_no, item in enumerate(iter_manifest(args.records), start=1):
        try:
            qual = confirm_qualification(
                ExtractionResult.empty(),
                title=item.get("title", ""),
                valid_from=item.get("valid_from", ""),
                expiry_date=item.get("expiry_date", ""),
                notification_days=int(item.get("notification_days", lifecycle.notification_days)),
            )
        except QualificationError as exc:
            raise SystemExit(f"{args.records}:{line_no}: {exc}") from exc
        records.append((item.get("holder", ""), qual))

    window = args.recently_expired_days
    if window is None:
        window = lifecycle.recently_expired_days
    alerts = expiry_alerts(records, today=args.today, recently_expired_days=window)
    _emit({"alerts": alerts}, args.output)


def _cmd_eval(args) -> None:
    summary, rows = evaluate_manifest(args.manifest, config=load_extraction_config(args.config), lang=args.lang)
    print(dumps({"summary": summary}, indent=2))
    if args.output:
        write_jsonl(args.output, rows)


def _with_default_command(argv: list) -> list:
    # Allow `certscan /path/to/card.jpg` as shorthand for `certscan scan ...`
    if any(arg in _COMMANDS for arg in argv):
        return argv
    if any(not arg.startswith("-") for arg in argv):
        return ["scan", *argv]
    return argv


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Extract certificate details from scans and track expiry.",
        parents=[_common_options(suppress=False)],
    )
    common = _common_options(suppress=True)
    sub = parser.add_subparsers(dest="cmd")

    scan = sub.add_parser("scan", parents=[common], help="OCR a certificate and pre-fill its fields")
    scan.add_argument("path", nargs="?", help="Path to PDF, image, or (with --text) OCR text")
    scan.add_argument("--text", action="store_true", help="Treat the input as already-recognized text")
    scan.add_argument("--employee-name", default=None, help="Fallback holder name when none is found")
    scan.add_argument("--output", type=Path, default=None, help="Write JSON output to file")
    scan.add_argument("--lang", default=None, help="OCR language(s), e.g. eng, eng+deu (default: from config)")
    scan.add_argument("--regex-rules", default=None, help="Path to YAML regex rules for extra fields")
    scan.add_argument("--regex-debug", action="store_true", help="Include regex debug trace in output")

    status = sub.add_parser("status", parents=[common], help="Show the status of a qualification expiry date")
    status.add_argument("expiry", help="Expiry date (YYYY-MM-DD)")
    status.add_argument("--reminder-days", type=int, default=None, help="Days before expiry to flag as expiring")
    status.add_argument("--today", type=_parse_day, default=None, help="Override today's date (YYYY-MM-DD)")

    alerts = sub.add_parser("alerts", parents=[common], help="List expiry reminders for stored qualifications")
    alerts.add_argument("records", type=Path, help="JSONL with {holder, title, valid_from, expiry_date} entries")
    alerts.add_argument(
        "--recently-expired-days",
        type=int,
        default=None,
        help="Keep reminding this many days after expiry (default: from config)",
    )
    alerts.add_argument("--today", type=_parse_day, default=None, help="Override today's date (YYYY-MM-DD)")
    alerts.add_argument("--output", type=Path, default=None, help="Write JSON output to file")

    evaluate = sub.add_parser("eval", parents=[common], help="Evaluate field extraction against a JSONL manifest")
    evaluate.add_argument("manifest", type=Path, help="JSONL with {text|path, expected} entries")
    evaluate.add_argument("--lang", default="eng", help="OCR language(s) for path entries")
    evaluate.add_argument("--output", type=Path, default=None, help="Write per-doc results JSONL")

    args = parser.parse_args(_with_default_command(sys.argv[1:]))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd is None:
        parser.print_help()
        raise SystemExit(2)
    if args.cmd == "scan":
        _cmd_scan(args)
    elif args.cmd == "status":
        _cmd_status(args)
    elif args.cmd == "alerts":
        _cmd_alerts(args)
    elif args.cmd == "eval":
        _cmd_eval(args)


if __name__ == "__main__":
    main()
