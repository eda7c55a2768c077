"""``roost states`` — list resolved states.

Resolves an import string to a roost Registry and prints every state
with its URL pattern and parameters.
"""

import argparse
import sys

from roost.cli._resolve import resolve_registry
from roost.errors import ConfigurationError


def run_states(args: argparse.Namespace) -> None:
    """Print a NAME / URL / PARAMS table for ``args.registry``."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # Build rows: (name, url, params)
    rows: list[tuple[str, str, str]] = []
    for state in registry:
        name = state.name or "(root)"
        if state.abstract:
            name = f"{name} [abstract]"
        url = str(state.url) if state.url is not None else "-"
        params = ", ".join(state.params) or "-"
        rows.append((name, url or "/", params))

    # Column widths
    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_url = max(max(len(r[1]) for r in rows), 3)  # "URL" header

    fmt = f"{{:<{max_name}}}  {{:<{max_url}}}  {{}}"
    print(fmt.format("NAME", "URL", "PARAMS"))
    sep_len = max_name + max_url + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for name, url, params in rows:
        print(fmt.format(name, url, params))

    if args.pending:
        waiting = registry.pending
        if not waiting:
            return
        print()
        print("Waiting for a parent:")
        for parent, names in sorted(waiting.items()):
            print(f"  {parent}: {', '.join(names)}")
