"""Backroute CLI — inspect endpoint tables and resolve URLs.

Entry point registered as ``backroute`` in ``pyproject.toml``::

    [project.scripts]
    backroute = "backroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``backroute`` command."""
    parser = argparse.ArgumentParser(
        prog="backroute",
        description="Backroute — build URLs from endpoint names.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- backroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered endpoints")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp.urls:router)",
    )

    # -- backroute resolve ------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve an endpoint to a URL")
    resolve_parser.add_argument(
        "router",
        help="Import string (e.g. myapp.urls:router)",
    )
    resolve_parser.add_argument("endpoint", help="Endpoint identifier (e.g. user.show)")
    resolve_parser.add_argument(
        "args",
        nargs="*",
        metavar="name=value",
        help="Path or query arguments",
    )
    resolve_parser.add_argument(
        "--external",
        default=None,
        metavar="BASE",
        help="Build an absolute URL under BASE (e.g. https://example.com)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from backroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from backroute.cli._url import run_resolve

        run_resolve(args)
