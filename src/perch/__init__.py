"""Perch — declarative XML routing files, loaded into ordered route tables.

Routes and imports are declared in XML; perch parses them, resolves every
import (prefixes, name prefixes, locale-aware paths, attribute overrides)
and hands back one ``RouteTable`` for the dispatch layer.

Basic usage::

    from perch import load_routes

    table = load_routes("config/routes.xml")
    route = table.get("blog_show")
    route.path                          # "/blog/{slug}"
    route.get_default("_controller")    # "blog.show"
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "ImportResolutionError",
    "LoaderConfig",
    "PerchError",
    "Route",
    "RouteTable",
    "RoutingFileError",
    "XmlFileLoader",
    "load_routes",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "perch.errors",
    "ImportResolutionError": "perch.errors",
    "LoaderConfig": "perch.config",
    "PerchError": "perch.errors",
    "Route": "perch.routing.route",
    "RouteTable": "perch.routing.table",
    "RoutingFileError": "perch.errors",
    "XmlFileLoader": "perch.loader.xml_file",
    "load_routes": "perch.loader",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API; lxml is only imported on first use."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
