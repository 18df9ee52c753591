"""``perch routes`` — list the routes of a routing file.

Loads the file with every import resolved and prints one row per route
with name, methods, schemes, host and path.
"""

import argparse
import json

from perch.cli._load import load_from_args

_ANY = "ANY"


def run_routes(args: argparse.Namespace) -> None:
    """Print the loaded route table as text columns or JSON."""
    table = load_from_args(args)

    if args.json:
        payload = {name: route.to_dict() for name, route in table}
        print(json.dumps(payload, indent=2, sort_keys=False))
        return

    if not len(table):
        print("No routes defined.")
        return

    # Build rows: (name, methods, schemes, host, path)
    rows: list[tuple[str, str, str, str, str]] = []
    for name, route in table:
        rows.append(
            (
                name,
                "|".join(route.methods) or _ANY,
                "|".join(route.schemes) or _ANY,
                route.host or _ANY,
                route.path,
            )
        )

    headers = ("NAME", "METHOD", "SCHEME", "HOST", "PATH")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(4)]

    fmt = "  ".join(f"{{:<{width}}}" for width in widths) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 8 + max(len(row[4]) for row in rows), 80))
    for row in rows:
        print(fmt.format(*row))
