"""Loader resolver — pick the loader that supports a resource."""

from typing import TYPE_CHECKING

from perch.errors import LoaderNotFound

if TYPE_CHECKING:
    from perch.loader.base import FileLoader


class LoaderResolver:
    """Holds the registered loaders and selects one per resource.

    Registering a loader also points it back at this resolver so it can
    import resources handled by its siblings.
    """

    __slots__ = ("_loaders", "loading")

    def __init__(self, loaders: "list[FileLoader] | None" = None) -> None:
        self._loaders: list[FileLoader] = []
        # Files currently being loaded, outermost first
        self.loading: list[str] = []
        for loader in loaders or ():
            self.add_loader(loader)

    def add_loader(self, loader: "FileLoader") -> None:
        self._loaders.append(loader)
        loader.resolver = self

    @property
    def loaders(self) -> "tuple[FileLoader, ...]":
        return tuple(self._loaders)

    def resolve(self, resource: str, type: str | None = None) -> "FileLoader":  # noqa: A002
        """Return the first loader supporting *resource*.

        Raises ``LoaderNotFound`` when none does.
        """
        for loader in self._loaders:
            if loader.supports(resource, type):
                return loader
        hint = f' (type "{type}")' if type else ""
        msg = f'Cannot find a loader for resource "{resource}"{hint}.'
        raise LoaderNotFound(msg, resource=resource)
