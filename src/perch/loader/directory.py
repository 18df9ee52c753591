"""Directory loader — import every routing file in a directory."""

import logging
from pathlib import Path

from perch.loader.base import FileLoader
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.loader")


class DirectoryLoader(FileLoader):
    """Loads all supported files of a directory, recursing into subdirectories.

    Selected with ``type="directory"`` or a resource ending in ``/``.
    Entries are imported in name order; hidden entries and files no
    registered loader supports are skipped.
    """

    def supports(self, resource: str, type: str | None = None) -> bool:  # noqa: A002
        if type == "directory":
            return True
        return type is None and isinstance(resource, str) and resource.endswith("/")

    def load(self, resource: str, type: str | None = None) -> RouteTable:  # noqa: A002
        directory = Path(str(self.locator.locate(resource, self.current_dir)))

        table = RouteTable()
        table.add_resource(str(directory))

        for entry in sorted(directory.iterdir()):
            if entry.name.startswith("."):
                continue
            sub_type = "directory" if entry.is_dir() else None
            sub_path = f"{entry}/" if entry.is_dir() else str(entry)
            if not self.can_import(sub_path, sub_type):
                logger.debug("Skipping %s: no loader supports it", entry)
                continue

            self.set_current_dir(directory)
            imported = self.import_resource(sub_path, sub_type, False, str(directory))
            if isinstance(imported, RouteTable):
                table.add_table(imported)

        return table
