"""memoscope CLI - Deterministic command-line interface for the narrative analyzers.

Usage:
    python -m memoscope analyze [--input PATH] [--dismiss MSG ...]
    python -m memoscope blind-spots --section KEY [--dismiss MSG ...] [--input PATH]
    python -m memoscope evidence --section KEY [--input PATH]
    python -m memoscope pain [--input PATH]
    python -m memoscope pricing [--input PATH]
    python -m memoscope resolve --stage STAGE [--name NAME] [--category CAT] [--input PATH]
    python -m memoscope serve [--host HOST] [--port PORT]

analyze, pricing and resolve read a JSON object mapping section keys to
answer text. The other commands read plain text. Input comes from stdin
when --input is omitted. Output is key-sorted JSON on stdout.

Exit codes:
    0: Success
    1: Internal error (unexpected)
    2: Invalid input
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from pydantic import BaseModel

from memoscope.analysis.blind_spots import detect_blind_spots
from memoscope.analysis.evidence import build_evidence_report
from memoscope.analysis.pain import build_pain_report
from memoscope.assumptions.models import CompanyDescriptor
from memoscope.assumptions.resolver import resolve_anchored_assumptions
from memoscope.config import ConfigError, Settings, load_settings
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.patterns.library import resolve_section
from memoscope.report import analyze_responses

logger = logging.getLogger(__name__)


def _output_json(data: Any) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False))


def _dump(model: BaseModel | list[BaseModel]) -> Any:
    if isinstance(model, list):
        return [item.model_dump(mode="json") for item in model]
    return model.model_dump(mode="json")


def _make_error(code: str, message: str) -> dict[str, Any]:
    """Create a deterministic error object."""
    return {"error": {"code": code, "message": message}}


def _fail(code: str, message: str) -> int:
    _output_json(_make_error(code, message))
    return 2


def _read_text_input(input_path: str | None) -> tuple[str | None, str | None]:
    """Read raw text from file or stdin.

    Returns:
        Tuple of (text, error_message). If error_message is not None,
        text should be ignored.
    """
    try:
        if input_path:
            with open(input_path, encoding="utf-8") as f:
                return f.read(), None
        return sys.stdin.read(), None
    except FileNotFoundError:
        return None, f"File not found: {input_path}"
    except OSError as e:
        return None, f"Cannot read input: {e}"


def _load_responses(input_path: str | None) -> tuple[dict[str, Any] | None, str | None]:
    """Load a JSON response map from file or stdin."""
    content, error_msg = _read_text_input(input_path)
    if error_msg is not None or content is None:
        return None, error_msg
    if not content.strip():
        return None, "Empty input"
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return None, f"Invalid JSON: {e}"
    if not isinstance(data, dict):
        return None, "Input must be a JSON object mapping section keys to answers"
    return data, None


def cmd_analyze(args: argparse.Namespace) -> int:
    responses, error_msg = _load_responses(args.input)
    if error_msg is not None or responses is None:
        return _fail("INVALID_INPUT", error_msg or "Empty input")
    report = analyze_responses(responses, frozenset(args.dismiss or ()))
    _output_json(_dump(report))
    return 0


def cmd_blind_spots(args: argparse.Namespace) -> int:
    if resolve_section(args.section) is None:
        return _fail("INVALID_SECTION", f"Unknown section: '{args.section}'")
    text, error_msg = _read_text_input(args.input)
    if error_msg is not None:
        return _fail("INVALID_INPUT", error_msg)
    spots = detect_blind_spots(text, args.section, args.dismiss or ())
    _output_json({"blind_spots": _dump(spots), "section_key": args.section})
    return 0


def cmd_evidence(args: argparse.Namespace) -> int:
    if resolve_section(args.section) is None:
        return _fail("INVALID_SECTION", f"Unknown section: '{args.section}'")
    text, error_msg = _read_text_input(args.input)
    if error_msg is not None:
        return _fail("INVALID_INPUT", error_msg)
    _output_json(_dump(build_evidence_report(text, args.section)))
    return 0


def cmd_pain(args: argparse.Namespace) -> int:
    text, error_msg = _read_text_input(args.input)
    if error_msg is not None:
        return _fail("INVALID_INPUT", error_msg)
    _output_json(_dump(build_pain_report(text)))
    return 0


def cmd_pricing(args: argparse.Namespace) -> int:
    responses, error_msg = _load_responses(args.input)
    if error_msg is not None or responses is None:
        return _fail("INVALID_INPUT", error_msg or "Empty input")
    metrics = extract_pricing_metrics(
        responses.get("business_model"),
        responses.get("traction"),
        responses,
        market_text=responses.get("market"),
    )
    _output_json(_dump(metrics))
    return 0


def cmd_resolve(args: argparse.Namespace, settings: Settings) -> int:
    responses, error_msg = _load_responses(args.input)
    if error_msg is not None or responses is None:
        return _fail("INVALID_INPUT", error_msg or "Empty input")
    company = CompanyDescriptor(name=args.name, category=args.category, stage=args.stage)
    assumptions = asyncio.run(
        resolve_anchored_assumptions(
            None,
            responses,
            None,
            company,
            settings.build_estimator(),
        )
    )
    _output_json(_dump(assumptions))
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from memoscope.api.main import create_app

    app = create_app(settings.build_estimator())

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="memoscope",
        description="memoscope - Narrative analysis and scoring for investment memos",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_input(sub: argparse.ArgumentParser, what: str) -> None:
        sub.add_argument(
            "--input",
            required=False,
            default=None,
            metavar="PATH",
            help=f"Path to {what} (reads from stdin if omitted)",
        )

    analyze_parser = subparsers.add_parser("analyze", help="Full report for a response map")
    add_input(analyze_parser, "JSON response map")
    analyze_parser.add_argument(
        "--dismiss", action="append", metavar="MSG", help="Blind-spot message to suppress"
    )

    blind_parser = subparsers.add_parser("blind-spots", help="Detect risky narrative language")
    blind_parser.add_argument("--section", required=True, metavar="KEY", help="Section key")
    blind_parser.add_argument(
        "--dismiss", action="append", metavar="MSG", help="Blind-spot message to suppress"
    )
    add_input(blind_parser, "section text")

    evidence_parser = subparsers.add_parser("evidence", help="Grade evidence completeness")
    evidence_parser.add_argument("--section", required=True, metavar="KEY", help="Section key")
    add_input(evidence_parser, "section text")

    pain_parser = subparsers.add_parser("pain", help="Score problem-narrative intensity")
    add_input(pain_parser, "problem text")

    pricing_parser = subparsers.add_parser("pricing", help="Extract pricing metrics")
    add_input(pricing_parser, "JSON response map")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve the anchored primary metric")
    add_input(resolve_parser, "JSON response map")
    resolve_parser.add_argument("--stage", required=True, help="Funding stage, e.g. pre-seed")
    resolve_parser.add_argument("--name", default="", help="Company name")
    resolve_parser.add_argument("--category", default="", help="Company category")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API (needs uvicorn)")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success
        1: Internal error (unexpected)
        2: Invalid input or configuration
    """
    try:
        parser = create_parser()
        args = parser.parse_args(argv)

        try:
            settings = load_settings()
        except ConfigError as e:
            return _fail("INVALID_CONFIG", str(e))

        logging.basicConfig(
            level=settings.log_level_value,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if args.command is None:
            parser.print_help()
            return 0

        if args.command == "analyze":
            return cmd_analyze(args)
        if args.command == "blind-spots":
            return cmd_blind_spots(args)
        if args.command == "evidence":
            return cmd_evidence(args)
        if args.command == "pain":
            return cmd_pain(args)
        if args.command == "pricing":
            return cmd_pricing(args)
        if args.command == "resolve":
            return cmd_resolve(args, settings)
        if args.command == "serve":
            return cmd_serve(args, settings)

        return 0

    except Exception as e:
        # Unexpected errors return exit code 1
        logger.exception("Unhandled CLI error")
        _output_json(_make_error("INTERNAL_ERROR", str(e)))
        return 1


if __name__ == "__main__":
    sys.exit(main())
