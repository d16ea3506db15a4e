"""Command line interface for inspecting how expressions are parsed."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .core.config import get_settings
from .core.logging import get_logger, setup_logging
from .parser import Context, ParseError, Parser

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathruntime",
        description="Parse a math expression and print the resulting term.",
    )
    parser.add_argument(
        "expression",
        help='Expression to parse, e.g. "3x + sin(y)".',
    )
    parser.add_argument(
        "--no-split",
        dest="split_identifiers",
        action="store_false",
        default=None,
        help='Keep multi-letter identifiers such as "xy" intact.',
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for resolving randomized operator groups like {+|-}.",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the processed token stream instead of the term.",
    )
    parser.add_argument(
        "--context",
        type=Path,
        help="YAML file with function tables (replaces the default context).",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default from MATHRUNTIME_LOG_LEVEL).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(update={"LOG_LEVEL": args.log_level})
    setup_logging(settings)

    try:
        parser = Parser.from_settings(settings)
        if args.context:
            parser.context = Context.from_yaml(args.context)
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.seed is not None:
        parser.rng = random.Random(args.seed)

    try:
        if args.tokens:
            print(" ".join(parser.tokenize(args.expression, args.split_identifiers)))
            return 0
        term = parser.parse(args.expression, args.split_identifiers)
    except ParseError as exc:
        logger.info("Rejected expression", extra={"expression": args.expression})
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(repr(term))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
