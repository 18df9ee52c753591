"""Perch CLI — inspect and validate routing files.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — load XML routing files into route tables.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each loaded and imported file",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes of a routing file")
    routes_parser.add_argument("file", help="Routing file, directory or glob")
    routes_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip XML schema validation",
    )
    routes_parser.add_argument(
        "--json",
        action="store_true",
        help="Print every route field as JSON",
    )

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a routing file")
    check_parser.add_argument("file", help="Routing file, directory or glob")
    check_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip XML schema validation",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        from perch.cli._load import configure_logging

        configure_logging()

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
