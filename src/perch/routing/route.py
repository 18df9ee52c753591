"""Route definition built by the loaders."""

from dataclasses import dataclass, field
from typing import Any

from perch.routing.values import TypedValue, wrap


def normalize_path(path: str) -> str:
    """Return *path* trimmed, with exactly one leading slash.

    ``""`` and ``"/"`` both normalize to ``"/"``.
    """
    return "/" + path.strip().lstrip("/")


@dataclass(slots=True)
class Route:
    """A single route entry.

    Routes are mutable while a route table is being built: loaders apply
    prefixes, hosts and defaults in place.  The route's name is its key in
    the owning ``RouteTable``, not an attribute of the route.
    """

    path: str = "/"
    host: str = ""
    schemes: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    defaults: dict[str, TypedValue] = field(default_factory=dict)
    requirements: dict[str, str] = field(default_factory=dict)
    options: dict[str, TypedValue] = field(default_factory=dict)
    condition: str | None = None

    def __post_init__(self) -> None:
        self.path = normalize_path(self.path)
        self.methods = tuple(method.upper() for method in self.methods)

    # -- Setters ----------------------------------------------------------

    def set_path(self, path: str) -> None:
        self.path = normalize_path(path)

    def set_schemes(self, schemes: tuple[str, ...] | list[str]) -> None:
        self.schemes = tuple(schemes)

    def set_methods(self, methods: tuple[str, ...] | list[str]) -> None:
        self.methods = tuple(method.upper() for method in methods)

    def set_default(self, key: str, value: Any) -> None:
        self.defaults[key] = wrap(value)

    def set_requirement(self, key: str, pattern: str) -> None:
        self.requirements[key] = pattern

    # -- Non-overwriting merges ----------------------------------------------

    def add_defaults(self, defaults: dict[str, TypedValue]) -> None:
        """Merge *defaults*, keeping any key this route already defines."""
        for key, value in defaults.items():
            self.defaults.setdefault(key, value)

    def add_requirements(self, requirements: dict[str, str]) -> None:
        for key, pattern in requirements.items():
            self.requirements.setdefault(key, pattern)

    def add_options(self, options: dict[str, TypedValue]) -> None:
        for key, value in options.items():
            self.options.setdefault(key, value)

    # -- Introspection ------------------------------------------------------

    def get_default(self, key: str) -> Any:
        """Return the unwrapped default for *key*, or None."""
        value = self.defaults.get(key)
        return None if value is None else value.unwrap()

    def copy(self) -> "Route":
        """Return an independent copy (the mappings are copied, values are immutable)."""
        return Route(
            path=self.path,
            host=self.host,
            schemes=self.schemes,
            methods=self.methods,
            defaults=dict(self.defaults),
            requirements=dict(self.requirements),
            options=dict(self.options),
            condition=self.condition,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the route, used by ``perch routes --json``."""
        return {
            "path": self.path,
            "host": self.host,
            "schemes": list(self.schemes),
            "methods": list(self.methods),
            "defaults": {key: value.unwrap() for key, value in self.defaults.items()},
            "requirements": dict(self.requirements),
            "options": {key: value.unwrap() for key, value in self.options.items()},
            "condition": self.condition,
        }
