"""Command-line utilities for digital_footprint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .estimation import FootprintEstimator
from .export import build_export_payload, write_export
from .logging_pipeline import (
    StructuredLogSession,
    close_sessions,
    configure_plain_logging,
    configure_structured_logging,
)
from .settings import get_settings
from .submission import submit_survey


def _read_stdin() -> str | None:
    """Read JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_json(path: str | None, stdin_payload: str | None) -> dict[str, object]:
    """Load JSON data from file or stdin."""
    if path:
        text = Path(path).read_text(encoding="utf-8")
        return _parse_json_dict(text)
    if stdin_payload:
        return _parse_json_dict(stdin_payload)
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _parse_json_dict(payload: str) -> dict[str, object]:
    """Parse a JSON string and ensure the result is a dictionary."""

    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Input JSON must be an object at the top level.")
    return {str(key): value for key, value in data.items()}


def _extract_form(data: dict[str, object]) -> dict[str, object]:
    """Accept either a bare survey response or a previous export record."""

    form = data.get("form")
    if isinstance(form, dict) and "participantId" in data:
        return {str(key): value for key, value in form.items()}
    return data


def _parse_overrides(pairs: list[str]) -> dict[str, object]:
    """Parse ``KEY=VALUE`` override arguments."""

    overrides: dict[str, object] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid override {pair!r}; expected KEY=VALUE.")
        overrides[key.strip()] = value.strip()
    return overrides


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digital-footprint",
        description="Estimate the annual carbon footprint of digital device usage.",
    )
    parser.add_argument(
        "command",
        choices=("estimate", "export", "submit"),
        help="estimate: print results; export: write survey JSON; submit: POST it.",
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a survey response or export JSON. If omitted, reads stdin.",
    )
    parser.add_argument("--config", "-c", help="Emission factor config file.")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override an emission factor, e.g. --set gridIntensity=0.5.",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        help="Directory for exports (defaults to FOOTPRINT_EXPORT_DIR or '.').",
    )
    parser.add_argument(
        "--endpoint",
        help="Submission URL (defaults to FOOTPRINT_WEBHOOK_URL).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit structured JSON logs on stderr.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the footprint CLI and return a process exit code."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    level = logging.DEBUG if args.verbose else logging.WARNING
    sessions: list[StructuredLogSession] = []
    if args.log_json:
        sessions.append(
            configure_structured_logging(
                logging.getLogger("digital_footprint"), level=level
            )
        )
    else:
        configure_plain_logging(level)

    try:
        settings = get_settings()
        data = _load_json(args.input, None if args.input else _read_stdin())
        response = _extract_form(data)

        estimator = FootprintEstimator.from_environment(args.config, settings=settings)
        if args.overrides:
            estimator = estimator.with_overrides(_parse_overrides(args.overrides))
        breakdown = estimator.estimate(response)

        if args.command == "estimate":
            print(json.dumps(estimator.summarize(response), indent=2))
            return 0

        if args.command == "export":
            payload = build_export_payload(response, breakdown)
            output_dir = args.output_dir or settings.export_dir or "."
            path = write_export(payload, output_dir)
            print(str(path))
            return 0

        outcome = submit_survey(
            response,
            breakdown,
            endpoint_url=args.endpoint or settings.webhook_url,
            timeout=settings.submit_timeout,
        )
        print(
            json.dumps(
                {
                    "status": outcome.status,
                    "message": outcome.message,
                    "results": outcome.payload["results"],
                },
                separators=(",", ":"),
            )
        )
        return 0 if outcome.ok else 1

    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        close_sessions(sessions)


if __name__ == "__main__":
    raise SystemExit(main())
