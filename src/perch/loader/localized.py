"""Localized routes and import prefixes.

A route may declare one path per locale; it then expands into one entry
per locale, named ``<name>.<locale>``, each carrying ``_locale`` and
``_canonical_route`` defaults and a ``_locale`` requirement.  Import
prefixes may be localized the same way.
"""

import re
from collections.abc import Mapping

from perch.errors import MissingLocalePrefix
from perch.routing.route import Route
from perch.routing.table import RouteTable
from perch.routing.values import StringValue


def _localize(route: Route, locale: str, canonical: str) -> None:
    route.defaults["_locale"] = StringValue(locale)
    route.defaults["_canonical_route"] = StringValue(canonical)
    route.requirements["_locale"] = re.escape(locale)


def create_localized_route(
    table: RouteTable,
    name: str,
    path: str | Mapping[str, str],
    name_prefix: str = "",
    prefixes: Mapping[str, str] | None = None,
    source: str = "",
) -> RouteTable:
    """Create the route(s) for *name* and add them to *table*.

    Returns a table holding just the created routes (the same objects that
    were added to *table*) so callers can apply attributes to all of them.
    """
    created = RouteTable()

    if isinstance(path, Mapping):
        if prefixes is None:
            paths = dict(path)
        else:
            missing = [locale for locale in prefixes if locale not in path]
            if missing:
                msg = (
                    f'Route "{name}" in file "{source}" is missing routes for '
                    f'locale(s) "{", ".join(missing)}".'
                )
                raise MissingLocalePrefix(msg, source)
            paths = {}
            for locale, locale_path in path.items():
                if locale not in prefixes:
                    msg = (
                        f'Route "{name}" in file "{source}" has locale "{locale}" '
                        f"with no corresponding prefix."
                    )
                    raise MissingLocalePrefix(msg, source)
                paths[locale] = prefixes[locale] + locale_path
    elif prefixes is not None:
        paths = {locale: prefix + path for locale, prefix in prefixes.items()}
    else:
        route = Route(path)
        table.add(name_prefix + name, route)
        created.add(name_prefix + name, route)
        return created

    for locale, locale_path in paths.items():
        route = Route(locale_path)
        _localize(route, locale, name_prefix + name)
        table.add(f"{name_prefix}{name}.{locale}", route)
        created.add(f"{name_prefix}{name}.{locale}", route)

    return created


def add_prefix_to_table(
    table: RouteTable,
    prefix: str | Mapping[str, str],
    trailing_slash_on_root: bool = True,
    source: str = "",
) -> None:
    """Apply an import prefix to every route of *table*.

    With per-locale prefixes, non-localized routes are cloned once per
    locale and localized routes take their own locale's prefix.  With
    *trailing_slash_on_root* disabled, an imported root path ``/`` yields
    the bare prefix (``/api`` instead of ``/api/``).
    """
    if isinstance(prefix, Mapping):
        prefixes = {locale: value.strip().strip("/") for locale, value in prefix.items()}
        for name, route in table:
            locale = route.get_default("_locale")
            base = "" if not trailing_slash_on_root and route.path == "/" else route.path
            if locale is None:
                table.remove(name)
                for prefix_locale, locale_prefix in prefixes.items():
                    localized = route.copy()
                    _localize(localized, prefix_locale, name)
                    localized.set_path(f"/{locale_prefix}{base}")
                    table.add(f"{name}.{prefix_locale}", localized)
            elif locale not in prefixes:
                msg = (
                    f'Route "{name}" with locale "{locale}" is missing a corresponding '
                    f'prefix in its parent collection (file "{source}").'
                )
                raise MissingLocalePrefix(msg, source)
            else:
                route.set_path(f"/{prefixes[locale]}{base}")
        return

    table.add_prefix(prefix)
    if not trailing_slash_on_root:
        trimmed = prefix.strip().strip("/")
        root_path = f"/{trimmed}/" if trimmed else "/"
        for _name, route in table:
            if route.path == root_path:
                route.set_path(root_path.rstrip("/"))
