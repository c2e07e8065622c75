"""``backroute resolve`` — resolve one endpoint from the command line.

Arguments are given as ``name=value`` pairs and passed through as
strings, in order.
"""

import argparse
import sys
from dataclasses import replace

from backroute.cli._load import load_router
from backroute.errors import BackrouteError
from backroute.routing.resolver import ReverseRouter


def parse_pairs(raw: list[str]) -> list[tuple[str, str]]:
    """Split ``name=value`` strings. Raises ``ValueError`` on a missing ``=``."""
    pairs: list[tuple[str, str]] = []
    for item in raw:
        name, sep, value = item.partition("=")
        if not sep or not name:
            msg = f"Expected name=value, got {item!r}"
            raise ValueError(msg)
        pairs.append((name, value))
    return pairs


def run_resolve(args: argparse.Namespace) -> None:
    """Print the URL for ``args.endpoint`` built from ``args.args``."""
    try:
        router = load_router(args.router)
        pairs = parse_pairs(args.args)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.external is not None:
        config = replace(router.config, external_base=args.external)
        router = ReverseRouter(config, router.registry)
        pairs.append((config.external_arg, True))

    try:
        url = router.resolve_url(args.endpoint, pairs)
    except BackrouteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(url)
