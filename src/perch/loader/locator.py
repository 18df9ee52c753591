"""File locator — resolve resource names to files on disk."""

from pathlib import Path

from perch.errors import ResourceNotFound


class FileLocator:
    """Resolve routing resource names against a list of directories.

    Relative names are tried against the importing file's directory first
    (the working directory when there is none), then against each search
    path in order.
    """

    __slots__ = ("search_paths",)

    def __init__(self, search_paths: tuple[str | Path, ...] | list[str | Path] = ()) -> None:
        self.search_paths = tuple(Path(p) for p in search_paths)

    def locate(
        self,
        name: str,
        current_dir: str | Path | None = None,
        first: bool = True,
    ) -> str | list[str]:
        """Return the path of *name*, or every match when *first* is False.

        Raises ``ResourceNotFound`` when nothing matches.
        """
        if not name:
            msg = "An empty resource name is not a valid file."
            raise ResourceNotFound(msg, resource=name)

        candidate = Path(name)
        if candidate.is_absolute():
            if candidate.exists():
                resolved = str(candidate.resolve())
                return resolved if first else [resolved]
            msg = f'The file "{name}" does not exist.'
            raise ResourceNotFound(msg, resource=name)

        directories = [Path(current_dir) if current_dir is not None else Path.cwd()]
        directories.extend(self.search_paths)

        found: list[str] = []
        for directory in directories:
            path = directory / name
            if path.exists():
                resolved = str(path.resolve())
                if first:
                    return resolved
                if resolved not in found:
                    found.append(resolved)

        if not found:
            searched = ", ".join(str(d) for d in directories)
            msg = f'The file "{name}" does not exist (in: {searched}).'
            raise ResourceNotFound(msg, resource=name)
        return found
