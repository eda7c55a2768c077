"""Roost CLI — inspect and validate state registries.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — hierarchical state trees for routers.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging threshold while the registry is loaded",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost states ------------------------------------------------------
    states_parser = subparsers.add_parser("states", help="List resolved states")
    states_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.routes:registry)",
    )
    states_parser.add_argument(
        "--pending",
        action="store_true",
        help="Also list declarations still waiting for a parent",
    )

    # -- roost check -------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Fail if any declaration is waiting for a missing parent"
    )
    check_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.routes:registry)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Console scripts don't put the working directory on sys.path
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    if args.command == "states":
        from roost.cli._states import run_states

        run_states(args)
    elif args.command == "check":
        from roost.cli._check import run_check

        run_check(args)
