"""File loader base — shared import machinery for routing loaders.

``FileLoader.import_resource`` is what an ``<import>`` element calls: it
expands glob patterns, picks the loader for each resource through the
resolver, locates the file relative to the importing file, and guards
against circular and runaway import chains.
"""

import glob
import logging
import re
from pathlib import Path

from perch.config import LoaderConfig
from perch.errors import (
    CircularImport,
    ImportResolutionError,
    ImportTooDeep,
    LoaderNotFound,
    PerchError,
)
from perch.loader.locator import FileLocator
from perch.loader.resolver import LoaderResolver
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.loader")

_GLOB_CHARS = "*?[{"
_BRACES = re.compile(r"\{([^{}]*)\}")

ImportResult = RouteTable | list[RouteTable] | None


class FileLoader:
    """Base class for loaders that read routing resources from disk.

    Subclasses implement ``supports()`` and ``load()``.
    """

    def __init__(self, locator: FileLocator, config: LoaderConfig | None = None) -> None:
        self.locator = locator
        self.config = config or LoaderConfig()
        self.resolver: LoaderResolver | None = None
        self.current_dir: str | None = None
        self._chain: list[str] = []

    # -- Loader protocol --------------------------------------------------------

    def supports(self, resource: str, type: str | None = None) -> bool:  # noqa: A002
        raise NotImplementedError

    def load(self, resource: str, type: str | None = None) -> RouteTable:  # noqa: A002
        raise NotImplementedError

    # -- Import machinery ----------------------------------------------------------

    def set_current_dir(self, directory: str | Path) -> None:
        self.current_dir = str(directory)

    def resolve(self, resource: str, type: str | None = None) -> "FileLoader":  # noqa: A002
        """Return the loader for *resource*: this one if it supports it, else the resolver's pick."""
        if self.supports(resource, type):
            return self
        if self.resolver is None:
            msg = f'Cannot find a loader for resource "{resource}".'
            raise LoaderNotFound(msg, resource=resource)
        return self.resolver.resolve(resource, type)

    def can_import(self, resource: str, type: str | None = None) -> bool:  # noqa: A002
        try:
            self.resolve(resource, type)
        except LoaderNotFound:
            return False
        return True

    def import_resource(
        self,
        resource: str,
        type: str | None = None,  # noqa: A002
        ignore_errors: bool = False,
        source: str | None = None,
        exclude: tuple[str, ...] | list[str] = (),
    ) -> ImportResult:
        """Load *resource* and return its route table(s).

        Glob resources return a single table when one file matches, a list
        when several do, and None when nothing matches.
        """
        if any(char in resource for char in _GLOB_CHARS) and "\n" not in resource:
            return self._import_glob(resource, type, ignore_errors, source, exclude)
        return self._do_import(resource, type, ignore_errors, source)

    def _import_glob(
        self,
        pattern: str,
        type: str | None,  # noqa: A002
        ignore_errors: bool,
        source: str | None,
        exclude: tuple[str, ...] | list[str],
    ) -> ImportResult:
        excluded = {path for excl in exclude if excl for path in self._glob(excl)}

        results: list[RouteTable] = []
        for path in self._glob(pattern):
            if not Path(path).is_file() or _is_excluded(path, excluded):
                continue
            table = self._do_import(path, None if type == "glob" else type, ignore_errors, source)
            if table is not None:
                results.append(table)

        if not results:
            logger.warning("Import pattern %r (from %s) matched no routing files", pattern, source)
            return None
        return results[0] if len(results) == 1 else results

    def _glob(self, pattern: str) -> list[str]:
        base = Path(pattern)
        if not base.is_absolute() and self.current_dir is not None:
            base = Path(self.current_dir) / pattern
        matches = {
            str(Path(match).resolve())
            for expanded in _expand_braces(str(base))
            for match in glob.glob(expanded, recursive=True)
        }
        return sorted(matches)

    def _do_import(
        self,
        resource: str,
        type: str | None,  # noqa: A002
        ignore_errors: bool,
        source: str | None,
    ) -> RouteTable | None:
        try:
            loader, located = self._find(resource, type, source)
            chain = self._import_chain()
            if located in chain:
                raise CircularImport([*chain, located])
            if len(chain) >= self.config.max_import_depth:
                msg = (
                    f'Importing "{resource}" from "{source}" exceeds the maximum '
                    f"import depth of {self.config.max_import_depth}."
                )
                raise ImportTooDeep(msg, resource=resource, source=source)

            chain.append(located)
            try:
                table = loader.load(located, type)
            finally:
                chain.pop()
            logger.debug("Loaded %d routes from %s", len(table), located)
            return table
        except CircularImport:
            raise
        except PerchError:
            if ignore_errors:
                logger.warning("Ignoring routing resource %r imported from %s", resource, source, exc_info=True)
                return None
            raise
        except OSError as exc:
            if ignore_errors:
                logger.warning("Ignoring routing resource %r imported from %s", resource, source, exc_info=True)
                return None
            msg = f'Cannot import resource "{resource}" from "{source}": {exc}'
            raise ImportResolutionError(msg, resource=resource, source=source) from exc

    def _find(
        self,
        resource: str,
        type: str | None,  # noqa: A002
        source: str | None,
    ) -> tuple["FileLoader", str]:
        """Pick the loader for *resource* and locate it, naming *source* on failure."""
        try:
            loader = self.resolve(resource, type)
            return loader, str(loader.locator.locate(resource, self.current_dir))
        except ImportResolutionError as exc:
            if source is None:
                raise
            msg = f'{exc} (imported from "{source}")'
            raise exc.__class__(msg, resource=resource, source=source) from exc

    def _import_chain(self) -> list[str]:
        # Shared through the resolver so that chains crossing loaders are seen.
        if self.resolver is not None:
            return self.resolver.loading
        return self._chain


def _expand_braces(pattern: str) -> list[str]:
    """Expand the first ``{a,b}`` group of *pattern*, recursively."""
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(_expand_braces(head + option + tail))
    return expanded


def _is_excluded(path: str, excluded: set[str]) -> bool:
    candidate = Path(path)
    return any(candidate == Path(excl) or Path(excl) in candidate.parents for excl in excluded)
