"""``perch check`` — routing file validation command.

Loads a routing file with every import resolved and reports the number
of routes.  Exits with code 1 if loading fails.
"""

import argparse

from perch.cli._load import load_from_args


def run_check(args: argparse.Namespace) -> None:
    table = load_from_args(args)
    print(f"OK: {len(table)} routes loaded from {args.file}")
