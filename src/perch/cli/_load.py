"""Shared loading for ``perch routes`` and ``perch check``.

Builds a ``LoaderConfig`` from the parsed arguments and turns loader
errors into a one-line message on stderr and exit code 1.
"""

import argparse
import logging
import sys

from perch.config import LoaderConfig
from perch.errors import PerchError
from perch.loader import load_routes
from perch.routing.table import RouteTable


def configure_logging() -> None:
    """Send perch's DEBUG records to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger("perch")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def load_from_args(args: argparse.Namespace) -> RouteTable:
    """Load ``args.file``, exiting with status 1 on any loader error."""
    config = LoaderConfig(validate_schema=not args.no_validate)
    try:
        return load_routes(args.file, config)
    except PerchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
