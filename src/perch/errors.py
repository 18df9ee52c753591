"""Perch exception hierarchy.

Shared across the document provider, the loaders, and the route table so
every module raises and catches the same types.  Every error raised while
reading a routing file carries the path of that file.
"""

from collections.abc import Iterable


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a ``LoaderConfig`` is invalid."""


# ---------------------------------------------------------------------------
# Routing file errors: the document itself is wrong
# ---------------------------------------------------------------------------


class RoutingFileError(PerchError, ValueError):
    """A routing file could not be turned into a route table.

    ``path`` is the file being processed when the error was detected.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class MissingRequiredAttribute(RoutingFileError):  # noqa: N818
    """A required attribute (``id``, ``path``, ``resource``) is absent or empty."""

    def __init__(self, element: str, attribute: str, path: str, detail: str = "") -> None:
        self.element = element
        self.attribute = attribute
        message = detail or (
            f'The <{element}> element in file "{path}" must have a "{attribute}" attribute.'
        )
        super().__init__(message, path)


class MutuallyExclusiveAttributes(RoutingFileError):  # noqa: N818
    """An attribute and the equivalent child elements were both given."""


class UnknownElement(RoutingFileError):  # noqa: N818
    """A namespaced element with an unrecognized tag was found."""

    def __init__(self, tag: str, path: str, expected: Iterable[str]) -> None:
        self.tag = tag
        self.expected = tuple(expected)
        super().__init__(
            f'Unknown tag "{tag}" used in file "{path}". Expected {_quoted_choice(self.expected)}.',
            path,
        )


class ConflictingDefault(RoutingFileError):  # noqa: N818
    """A synthesized default (``_controller``, ``_stateless``) was also set by a child."""

    def __init__(self, key: str, attribute: str, owner: str, path: str) -> None:
        self.key = key
        super().__init__(
            f'The routing file "{path}" must not specify both the "{attribute}" '
            f'attribute and the defaults key "{key}" for {owner}.',
            path,
        )


class InvalidValue(RoutingFileError):
    """A typed ``<int>`` or ``<float>`` value could not be parsed."""


class NestingTooDeep(RoutingFileError):  # noqa: N818
    """Typed default values are nested deeper than the configured ceiling."""


class MissingLocalePrefix(RoutingFileError):  # noqa: N818
    """A localized route has no prefix (or path) for one of its locales."""


class XmlSyntaxError(RoutingFileError):
    """The file is empty or is not well-formed XML."""


class SchemaValidationError(RoutingFileError):
    """The document does not validate against the routing schema.

    ``errors`` holds one formatted line per schema violation.
    """

    def __init__(self, path: str, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        lines = "\n".join(f"  {line}" for line in self.errors)
        super().__init__(f'Unable to validate routing file "{path}":\n{lines}', path)


# ---------------------------------------------------------------------------
# Import resolution errors: the referenced resource cannot be loaded
# ---------------------------------------------------------------------------


class ImportResolutionError(PerchError):
    """An imported resource could not be located or loaded.

    ``resource`` is what was asked for; ``source`` is the file that asked.
    """

    def __init__(self, message: str, resource: str = "", source: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.source = source


class ResourceNotFound(ImportResolutionError):  # noqa: N818
    """The resource does not exist on disk."""


class LoaderNotFound(ImportResolutionError):  # noqa: N818
    """No registered loader supports the resource and type."""


class CircularImport(ImportResolutionError):  # noqa: N818
    """A resource imports itself, directly or through other files."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain = tuple(chain)
        joined = " > ".join(self.chain)
        super().__init__(
            f"Circular reference detected while importing routing files: {joined}",
            resource=self.chain[-1] if self.chain else "",
        )


class ImportTooDeep(ImportResolutionError):  # noqa: N818
    """Imports are nested deeper than the configured ceiling."""


def _quoted_choice(names: tuple[str, ...]) -> str:
    quoted = [f'"{name}"' for name in names]
    if len(quoted) <= 1:
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]
