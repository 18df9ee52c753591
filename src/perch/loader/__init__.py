"""Routing loaders — turn routing files into route tables.

Usage::

    from perch.loader import load_routes

    table = load_routes("config/routes.xml")
    for name, route in table:
        print(name, route.path)
"""

from pathlib import Path

from perch.config import LoaderConfig
from perch.loader.base import FileLoader
from perch.loader.directory import DirectoryLoader
from perch.loader.locator import FileLocator
from perch.loader.resolver import LoaderResolver
from perch.loader.xml_file import XmlFileLoader
from perch.routing.table import RouteTable

__all__ = [
    "DirectoryLoader",
    "FileLoader",
    "FileLocator",
    "LoaderResolver",
    "XmlFileLoader",
    "create_loader",
    "load_routes",
]


def create_loader(config: LoaderConfig | None = None) -> XmlFileLoader:
    """Build an XML loader wired to a resolver that also knows directories."""
    config = config or LoaderConfig()
    locator = FileLocator(config.search_paths)
    xml_loader = XmlFileLoader(locator, config)
    LoaderResolver([xml_loader, DirectoryLoader(locator, config)])
    return xml_loader


def load_routes(
    resource: str | Path,
    config: LoaderConfig | None = None,
    type: str | None = None,  # noqa: A002
) -> RouteTable:
    """Load a routing file (or directory, or glob) into one route table."""
    loader = create_loader(config)
    imported = loader.import_resource(str(resource), type)
    if isinstance(imported, RouteTable):
        return imported

    table = RouteTable()
    for sub_table in imported or []:
        table.add_table(sub_table)
    return table
