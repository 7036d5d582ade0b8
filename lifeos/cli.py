"""Command line for the governance engine.

Usage:
    python -m lifeos govern request.yaml                 # full evaluation, JSON
    python -m lifeos govern request.yaml --format yaml   # same, as YAML
    python -m lifeos govern request.yaml --audit         # also log the audit trail
    python -m lifeos govern request.yaml --strict        # exit 3 when deferred
    python -m lifeos classify --energy 80 --clarity 85 --stress 20 --confidence 80 --load 20
    python -m lifeos constitution                        # print the static tables

A request file is a YAML (or JSON) document with ``assessment``,
``business``, ``financial``, ``relational`` and ``decision`` sections and
an optional ``previous_state_id``.  Keys may be snake_case or camelCase.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from lifeos.audit import LoggingAuditSink, record_pipeline_audit
from lifeos.config import LifeOSSettings, OutputFormat, configure_logging, get_settings
from lifeos.governance import (
    CLASSIFIER_WEIGHTS,
    CONSTITUTION_VERSION,
    DECISION_TYPES,
    DOMAINS,
    SCENARIOS,
    STATES,
    THRESHOLDS,
    VALID_TRANSITIONS,
    Assessment,
    GovernanceError,
    GovernanceRequest,
    Verdict,
    classify_state,
    govern_request,
)
from lifeos.governance.pipeline import to_plain

#: Exit status of ``govern --strict`` when the verdict is a deferral.
EXIT_DEFERRED = 3


def _emit(data: Any, fmt: OutputFormat) -> None:
    if fmt is OutputFormat.YAML:
        print(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), end="")
    else:
        print(json.dumps(data, ensure_ascii=False, indent=2))


def load_request(path: Path) -> GovernanceRequest:
    """Read a request document from *path*.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the document is not a YAML/JSON mapping.
    """
    text = path.read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"not valid YAML/JSON: {exc}") from exc
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError("top level must be a mapping")
    return GovernanceRequest.model_validate(document)


def cmd_govern(args: argparse.Namespace, settings: LifeOSSettings) -> int:
    """Run a full evaluation of a request file."""
    request_path = Path(args.request_file)
    if not request_path.exists():
        print(f"ERROR: Request file not found: {request_path}", file=sys.stderr)
        return 1

    try:
        request = load_request(request_path)
        if args.previous_state:
            request = request.model_copy(update={"previous_state_id": args.previous_state})
        result = govern_request(request)
    except (OSError, ValueError, GovernanceError) as exc:
        print(f"ERROR: Failed to evaluate {request_path}: {exc}", file=sys.stderr)
        return 1

    if args.audit or settings.audit_enabled:
        sink = LoggingAuditSink(settings.audit_logger)
        record_pipeline_audit(sink, args.user_id or settings.default_user_id, request, result)

    _emit(result.as_dict(), OutputFormat(args.format or settings.output_format))

    if args.strict and result.verdict is Verdict.DEFER:
        return EXIT_DEFERRED
    return 0


def cmd_classify(args: argparse.Namespace, settings: LifeOSSettings) -> int:
    """Quick capacity-state check from the five assessment metrics."""
    assessment = Assessment(
        energy=args.energy,
        clarity=args.clarity,
        stress=args.stress,
        confidence=args.confidence,
        load=args.load,
    )
    classification = classify_state(assessment)
    state = classification.state
    _emit(
        {
            "state_id": state.id.value,
            "label": state.label,
            "severity": state.severity,
            "score": classification.score,
            "confidence": classification.confidence,
        },
        OutputFormat(args.format or settings.output_format),
    )
    return 0


def cmd_constitution(args: argparse.Namespace, settings: LifeOSSettings) -> int:
    """Print the static constitution tables."""
    _emit(
        {
            "version": CONSTITUTION_VERSION,
            "states": to_plain(STATES),
            "valid_transitions": to_plain(VALID_TRANSITIONS),
            "decision_types": to_plain(DECISION_TYPES),
            "domains": to_plain(DOMAINS),
            "thresholds": to_plain(THRESHOLDS),
            "classifier_weights": dict(CLASSIFIER_WEIGHTS),
            "scenarios": to_plain(SCENARIOS),
        },
        OutputFormat(args.format or settings.output_format),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifeos",
        description="Deterministic decision governance",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_format(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-f",
            "--format",
            choices=[f.value for f in OutputFormat],
            help="Output format (default: LIFEOS_OUTPUT_FORMAT or json)",
        )

    # govern
    p_govern = sub.add_parser("govern", help="Evaluate a decision request file")
    p_govern.add_argument("request_file", help="Path to a YAML/JSON request")
    p_govern.add_argument("--previous-state", help="Last known capacity state id")
    p_govern.add_argument("--audit", action="store_true", help="Log the audit trail")
    p_govern.add_argument("--user-id", help="User id stamped on audit entries")
    p_govern.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit {EXIT_DEFERRED} when the verdict is a deferral",
    )
    add_format(p_govern)
    p_govern.set_defaults(func=cmd_govern)

    # classify
    p_classify = sub.add_parser("classify", help="Quick capacity-state check")
    for metric in ("energy", "clarity", "stress", "confidence", "load"):
        p_classify.add_argument(f"--{metric}", type=float, default=0.0, help="0-100")
    add_format(p_classify)
    p_classify.set_defaults(func=cmd_classify)

    # constitution
    p_constitution = sub.add_parser("constitution", help="Print the static tables")
    add_format(p_constitution)
    p_constitution.set_defaults(func=cmd_constitution)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
