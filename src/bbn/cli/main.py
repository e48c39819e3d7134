"""
bbn CLI.
"""

import argparse
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from bbn.cli.commands import check, demo, infer, query, show

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: str) -> None:
    """Attach a rich handler to the root logger once."""
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    root.setLevel(level.upper())


def main(argv=None):
    parser = argparse.ArgumentParser(prog="bbn", description="Bayesian belief network inference")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("BBN_LOG_LEVEL", "WARNING").upper(),
        help="DEBUG, INFO, WARNING or ERROR (env: BBN_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command")

    infer.add_subparser(subparsers)
    query.add_subparser(subparsers)
    check.add_subparser(subparsers)
    show.add_subparser(subparsers)
    demo.add_subparser(subparsers)

    args = parser.parse_args(argv)
    # choices only apply to values given on the command line
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid BBN_LOG_LEVEL: '{args.log_level}' (choose from {', '.join(LOG_LEVELS)})")
    configure_logging(args.log_level)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
