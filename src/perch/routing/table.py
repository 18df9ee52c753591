"""Ordered, name-keyed route table with bulk operations.

A table is created empty for every loaded routing file, filled in one
pass, and handed back to the caller.  Imports fold a child table into the
parent with ``add_table`` after rewriting it with the bulk setters below.
"""

from collections.abc import Iterator

from perch.routing.route import Route
from perch.routing.values import StringValue, TypedValue


class RouteTable:
    """Routes keyed by unique name, in insertion order.

    Usage::

        table = RouteTable()
        table.add("blog_show", Route("/blog/{slug}"))
        table.add_prefix("/en")
        table.add_name_prefix("en_")
        table.get("en_blog_show").path  # "/en/blog/{slug}"
    """

    __slots__ = ("_resources", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._resources: list[str] = []

    # -- Entries ----------------------------------------------------------

    def add(self, name: str, route: Route) -> None:
        """Add *route* under *name*.

        Re-adding an existing name replaces that entry in place; it keeps
        its original position in the table.
        """
        self._routes[name] = route

    def get(self, name: str) -> Route | None:
        return self._routes.get(name)

    def remove(self, *names: str) -> None:
        for name in names:
            self._routes.pop(name, None)

    def names(self) -> list[str]:
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[tuple[str, Route]]:
        return iter(list(self._routes.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __repr__(self) -> str:
        return f"RouteTable({self.names()!r})"

    # -- Resources ------------------------------------------------------------

    @property
    def resources(self) -> tuple[str, ...]:
        """Source files this table was built from, without duplicates."""
        return tuple(self._resources)

    def add_resource(self, resource: str) -> None:
        if resource not in self._resources:
            self._resources.append(resource)

    # -- Merging -----------------------------------------------------------

    def add_table(self, other: "RouteTable") -> None:
        """Append every route of *other*, preserving its order.

        Names already present are replaced at their existing position.
        """
        for name, route in other:
            self._routes[name] = route
        for resource in other.resources:
            self.add_resource(resource)

    # -- Bulk rewrites ----------------------------------------------------------

    def add_prefix(self, prefix: str) -> None:
        """Prepend *prefix* to every path.

        The prefix is trimmed of whitespace and slashes; an empty prefix
        leaves the table untouched.
        """
        prefix = prefix.strip().strip("/")
        if not prefix:
            return
        for route in self._routes.values():
            route.set_path(f"/{prefix}{route.path}")

    def add_name_prefix(self, prefix: str) -> None:
        """Prepend *prefix* to every route name, keeping table order.

        ``_canonical_route`` defaults of localized routes follow the rename.
        """
        renamed: dict[str, Route] = {}
        for name, route in self._routes.items():
            canonical = route.defaults.get("_canonical_route")
            if isinstance(canonical, StringValue):
                route.defaults["_canonical_route"] = StringValue(prefix + canonical.value)
            renamed[prefix + name] = route
        self._routes = renamed

    def set_host(self, host: str) -> None:
        for route in self._routes.values():
            route.host = host

    def set_condition(self, condition: str | None) -> None:
        for route in self._routes.values():
            route.condition = condition

    def set_schemes(self, schemes: tuple[str, ...] | list[str]) -> None:
        for route in self._routes.values():
            route.set_schemes(schemes)

    def set_methods(self, methods: tuple[str, ...] | list[str]) -> None:
        for route in self._routes.values():
            route.set_methods(methods)

    def add_defaults(self, defaults: dict[str, TypedValue]) -> None:
        """Merge *defaults* into every route without overwriting existing keys."""
        if not defaults:
            return
        for route in self._routes.values():
            route.add_defaults(defaults)

    def add_requirements(self, requirements: dict[str, str]) -> None:
        if not requirements:
            return
        for route in self._routes.values():
            route.add_requirements(requirements)

    def add_options(self, options: dict[str, TypedValue]) -> None:
        if not options:
            return
        for route in self._routes.values():
            route.add_options(options)
