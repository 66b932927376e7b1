"""Command-line entry point: ``init``, ``took`` and ``dropped`` subcommands."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from . import init as init_cmd
from . import took as took_cmd

__all__ = ["main"]

_VERSION = "0.1.0"


def _global_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        metavar="PATH",
        default=argparse.SUPPRESS,
        help="Path to the TOML config file. Defaults to ~/.config/scout/config.toml.",
    )
    common.add_argument(
        "--watchlist",
        metavar="PATH",
        default=argparse.SUPPRESS,
        help="Path to the YAML watchlist file. Defaults to ~/.config/scout/watchlist.yaml.",
    )
    common.add_argument(
        "--ledger",
        metavar="PATH",
        default=argparse.SUPPRESS,
        help="Path to the JSONL contribution ledger. Defaults to ~/.config/scout/ledger.jsonl.",
    )
    return common


def _build_parser() -> argparse.ArgumentParser:
    common = _global_options()
    parser = argparse.ArgumentParser(
        prog="scout",
        description="Rank open-source issues worth contributing to",
        parents=[common],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    init_parser = commands.add_parser(
        "init",
        parents=[common],
        help="Write starter config and watchlist files under ~/.config/scout/.",
    )
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite existing config and watchlist files."
    )

    took_parser = commands.add_parser(
        "took",
        parents=[common],
        help="Record a contribution in the local ledger.",
    )
    took_parser.add_argument("issue", metavar="OWNER/REPO#N", help="Issue reference.")

    dropped_parser = commands.add_parser(
        "dropped",
        parents=[common],
        help="Record an investigated-and-abandoned issue in the local ledger.",
    )
    dropped_parser.add_argument("issue", metavar="OWNER/REPO#N", help="Issue reference.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the chosen subcommand; return the exit code."""
    args = _build_parser().parse_args(argv)
    config = getattr(args, "config", None)
    watchlist = getattr(args, "watchlist", None)
    ledger = getattr(args, "ledger", None)

    if args.command == "init":
        return init_cmd.run(config, watchlist, args.force)
    if args.command == "took":
        return took_cmd.run(ledger, args.issue, took_cmd.DEFAULT_EVENT)
    return took_cmd.run(ledger, args.issue, took_cmd.DROPPED_EVENT)


if __name__ == "__main__":
    raise SystemExit(main())