"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import logging
import random
import sys

from email_threat_scorer.app.run import run_chat, run_once
from email_threat_scorer.config.settings import load_config, write_default_config
from email_threat_scorer.core.errors import ConfigError, EmailParseError
from email_threat_scorer.core.logs import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="email-threat-scorer")
    parser.add_argument("--text", help="Analyze a single input: JSON object, raw EML text or plain body text.")
    parser.add_argument("--file", help="Analyze an .eml file.")
    parser.add_argument("--config", help="Path to a YAML config file.")
    parser.add_argument("--format", choices=("json", "text"), default="json", help="Report output format.")
    parser.add_argument("--seed", type=int, help="Seed for the classifier perturbation.")
    parser.add_argument("--init-config", metavar="PATH", help="Write the default YAML config to PATH and exit.")
    parser.add_argument("--log-level", help="Override the configured log level, e.g. DEBUG.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.init_config:
        try:
            target = write_default_config(args.init_config)
        except ConfigError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(f"config written to {target}")
        return 0

    try:
        config, _ = load_config(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    setup_logging(args.log_level or config.log_level)

    seed = args.seed if args.seed is not None else config.classifier_seed
    rng = random.Random(seed) if seed is not None else None

    if args.text is not None or args.file:
        try:
            print(run_once(config, text=args.text, path=args.file, output_format=args.format, rng=rng))
        except EmailParseError as exc:
            logger.debug("input rejected: %s", exc)
            print(f"error: {exc}", file=sys.stderr)
            return 1
        return 0

    run_chat(config, rng=rng)
    return 0
