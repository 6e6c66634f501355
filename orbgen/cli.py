"""Command line entry point for the Orbiter payload wizard."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import ConfigurationError, load_wizard_config
from .console import run_wizard
from .errors import InternalStateError, UnsupportedFeatureError
from .wizard import Screen, Wizard

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_INTERNAL = 70
EXIT_ABORTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbgen",
        description="Interactively build an Orbiter payload and print it to stdout",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: ~/.orbgen.yaml when present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for diagnostics written to stderr",
    )
    parser.add_argument(
        "--no-random",
        action="store_true",
        help="Disable the 'r' shortcut that fills address fields with random test bytes",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.no_random:
        overrides["allow_random_values"] = False
    try:
        config = load_wizard_config(config_path=args.config, overrides=overrides)
    except ConfigurationError as exc:
        parser.exit(EXIT_FAILED, f"error: {exc}\n")

    logging.basicConfig(level=config.log_level_number)
    wizard = Wizard.from_config(config)

    try:
        run_wizard(wizard)
    except UnsupportedFeatureError as exc:
        logger.critical("Unimplemented feature selected: %s", exc.name)
        parser.exit(EXIT_INTERNAL, f"fatal: {exc} (feature not implemented)\n")
    except InternalStateError as exc:
        logger.critical("Internal wizard error: %s", exc)
        parser.exit(EXIT_INTERNAL, f"fatal: internal error: {exc}\n")

    if wizard.screen is Screen.DONE:
        # Printed outside the interactive screens so the full payload can be copied.
        print(wizard.payload)
        return
    if wizard.screen is Screen.FAILED:
        parser.exit(EXIT_FAILED, f"error: {wizard.session.error}\n")
    parser.exit(EXIT_ABORTED, "aborted: no payload generated\n")


if __name__ == "__main__":
    main(sys.argv[1:])
