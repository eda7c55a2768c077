"""``roost check`` — declaration completeness check.

Resolves an import string to a roost Registry and fails if any
declaration is still waiting for a parent that was never registered.
Exits with code 1 if so.
"""

import argparse
import sys

from roost.cli._resolve import resolve_registry
from roost.errors import ConfigurationError, UnresolvedStates


def run_check(args: argparse.Namespace) -> None:
    """Validate that every declaration in ``args.registry`` resolved."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    waiting = registry.pending
    if waiting:
        print(f"Error: {UnresolvedStates(waiting)}", file=sys.stderr)
        raise SystemExit(1)

    print(f"OK: {len(registry)} states resolved.")
