"""Command line interface for inspecting and feeding the survey store."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cli import output
from core.aggregator.distribution import SurveyAggregator
from core.config import Settings, load_settings
from core.errors import SatRateError
from core.store.base import KeyValueStore
from core.store.factory import open_store
from core.submission.writer import SubmissionWriter

logger = logging.getLogger(__name__)

FORMATS = ["json", "md", "table"]


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="satrate", description="Survey submission store toolkit")
    parser.add_argument("--config", type=Path, default=Path("satrate.yml"), help="Path to CLI configuration file")
    parser.add_argument("--store", help="Store URL (s3://bucket/root, file://dir, memory://name)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # submit -----------------------------------------------------------------
    submit_cmd = subparsers.add_parser("submit", help="Store one survey submission")
    submit_cmd.add_argument("--payload", required=True, help="JSON file with the submission, or - for stdin")
    submit_cmd.add_argument("--output", type=Path)

    # results ----------------------------------------------------------------
    results_cmd = subparsers.add_parser("results", help="Aggregate stored submissions")
    results_cmd.add_argument("--format", choices=FORMATS, help="Output format override")
    results_cmd.add_argument("--output", type=Path)

    # export -----------------------------------------------------------------
    export_cmd = subparsers.add_parser("export", help="Dump stored submissions as JSON lines")
    export_cmd.add_argument("--output", type=Path)

    return parser


def app(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(base=load_settings(args.config))
        settings = settings.merge_cli(store_url=args.store, format_override=getattr(args, "format", None))
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else settings.log_level,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.command == "submit":
            return _cmd_submit(args, settings)
        if args.command == "results":
            return _cmd_results(args, settings)
        if args.command == "export":
            return _cmd_export(args, settings)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except SatRateError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    except Exception as exc:  # pragma: no cover - reported as a generic failure
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_submit(args: argparse.Namespace, settings: Settings) -> int:
    store = _open(settings)
    try:
        payload = output.read_payload(args.payload)
    except OSError as exc:
        raise CLIError(f"Cannot read payload {args.payload}: {exc.strerror or exc}") from exc
    ack = SubmissionWriter(store).submit(payload)
    output.emit(ack, "json", output_path=args.output)
    return 0


def _cmd_results(args: argparse.Namespace, settings: Settings) -> int:
    store = _open(settings)
    summary = SurveyAggregator(page_size=settings.page_size).aggregate(store)
    fmt = settings.default_format
    if fmt == "json":
        output.emit(summary, fmt, output_path=args.output)
    else:
        rendered = f"totalResponses: {summary.total_responses}\n\n{output.render(summary.rows(), fmt)}"
        output.write_text(rendered, output_path=args.output)
    return 0


def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    store = _open(settings)
    aggregator = SurveyAggregator(page_size=settings.page_size)
    records = []
    for key, submission in aggregator.iter_items(store):
        if isinstance(submission, dict):
            records.append({**submission, "_id": key})
        else:
            records.append({"_id": key, "value": submission})
    logger.info("Exporting %d submissions", len(records))
    output.write_jsonl(records, output_path=args.output)
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _open(settings: Settings) -> KeyValueStore:
    if settings.default_format not in FORMATS:
        raise CLIError(f"Unsupported format in configuration: {settings.default_format}")
    return open_store(settings.store_url)


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
