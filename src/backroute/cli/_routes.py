"""``backroute routes`` — list registered endpoints.

Prints every endpoint with its patterns in the order they are tried.
"""

import argparse
import sys

from backroute.cli._load import load_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of ENDPOINT and PATTERNS for ``args.router``."""
    try:
        router = load_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (identifier, "  ".join(t.pattern for t in templates))
        for identifier, templates in router.registry.items()
    ]
    if not rows:
        print("No endpoints registered.")
        return

    width = max(max(len(r[0]) for r in rows), len("ENDPOINT"))
    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("ENDPOINT", "PATTERNS"))
    sep_len = width + 2 + max(len(r[1]) for r in rows)
    print("-" * min(sep_len, 80))
    for identifier, patterns in rows:
        print(fmt.format(identifier, patterns))
