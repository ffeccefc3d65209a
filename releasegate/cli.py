"""CLI entrypoint for the release branch gate."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Verifier


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="releasegate",
        description=(
            "Verify that a release branch carries exactly three commits on top of its base: "
            "a merge, a hash-injection commit and a checksum commit."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a configuration file (defaults to <repo>/{CONFIG_FILENAME}).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write debug logs to this file in addition to stderr.",
    )
    parser.add_argument(
        "base",
        nargs="?",
        default=None,
        help="Base branch the release sits on (defaults to origin/develop).",
    )
    parser.add_argument(
        "head",
        nargs="?",
        default=None,
        help="Tip of the release branch (defaults to HEAD).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    config_path = Path(args.config) if args.config else Path(args.repo)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"releasegate: {exc}\n")

    verifier = Verifier()
    signal = verifier.run(args.repo, args.base, args.head, config=config)
    return int(signal)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
