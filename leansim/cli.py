# leansim/cli.py
# -----------------------------------------------------------------------------
# Command-line caller for the engine
#   leansim simulate [FILE | --demo]
#   leansim review   [FILE | --demo]
#   leansim explain  METRIC [--health poor|fair|good]
# -----------------------------------------------------------------------------
from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from loguru import logger

from leansim.core.errors import FieldIssue, InvalidInputError
from leansim.core.logging import setup_logging
from leansim.schemas.simulation import FinancialInputs, Health
from leansim.services.metric_help import METRIC_HELP, help_for, interpret
from leansim.services.review import review_inputs
from leansim.services.simulation import coerce_inputs, demo_inputs, simulate

EXIT_INVALID_INPUT = 2


def _load_inputs(args: argparse.Namespace) -> FinancialInputs:
    if args.demo:
        return demo_inputs()
    try:
        if args.file in (None, "-"):
            raw = json.load(sys.stdin)
        else:
            with open(args.file, encoding="utf-8") as f:
                raw = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInputError([FieldIssue("inputs", f"Invalid JSON: {e}")]) from e
    return coerce_inputs(raw)


def cmd_simulate(args: argparse.Namespace) -> int:
    result = simulate(_load_inputs(args))
    logger.info("overall health: {}", result.overall_health.value)
    print(result.model_dump_json(by_alias=True, indent=2))
    return 0


def cmd_review(args: argparse.Namespace) -> int:
    advisories = review_inputs(_load_inputs(args))
    print(json.dumps([a.model_dump(by_alias=True) for a in advisories], indent=2))
    return 0


def cmd_explain(args: argparse.Namespace) -> int:
    entry = help_for(args.metric)
    print(entry.label)
    print(entry.description)
    for tip in entry.tips:
        print(f"- {tip}")
    if args.health:
        print(interpret(args.metric, Health(args.health)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leansim",
        description="Financial viability check for an early-stage business.",
    )
    parser.add_argument("--log-level", default=None, help="loguru level (default: settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func, text in (
        ("simulate", cmd_simulate, "compute metrics, health and recommendations"),
        ("review", cmd_review, "list advisory warnings about the inputs"),
    ):
        p = sub.add_parser(name, help=text)
        p.add_argument("file", nargs="?", help="JSON inputs file ('-' or omitted: stdin)")
        p.add_argument("--demo", action="store_true", help="use the demo business")
        p.set_defaults(func=func)

    p = sub.add_parser("explain", help="describe a result metric")
    p.add_argument("metric", choices=sorted(METRIC_HELP))
    p.add_argument("--health", choices=[h.value for h in Health])
    p.set_defaults(func=cmd_explain)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except InvalidInputError as e:
        logger.warning("rejected inputs: {}", e)
        for field, messages in e.by_field().items():
            for message in messages:
                print(f"{field}: {message}", file=sys.stderr)
        return EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())
