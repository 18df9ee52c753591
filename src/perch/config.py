"""Loader configuration.

LoaderConfig is a frozen dataclass shared by every loader created for one
load. The namespace and schema default to the Symfony routing grammar.
"""

from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError

ROUTING_NAMESPACE = "http://symfony.com/schema/routing"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schema" / "routing-1.0.xsd"


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Loader configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LoaderConfig(validate_schema=False, search_paths=("config/routes",))
    """

    # Document
    namespace: str = ROUTING_NAMESPACE
    schema_path: str | Path = DEFAULT_SCHEMA_PATH
    validate_schema: bool = True

    # Recursion ceilings
    max_value_depth: int = 64  # <list>/<map> nesting inside a <default>
    max_import_depth: int = 32  # <import> chains across files

    # Locator
    search_paths: tuple[str | Path, ...] = ()  # Tried after the importing file's directory

    def __post_init__(self) -> None:
        if self.max_value_depth < 1:
            msg = f"max_value_depth must be at least 1, got {self.max_value_depth}"
            raise ConfigurationError(msg)
        if self.max_import_depth < 1:
            msg = f"max_import_depth must be at least 1, got {self.max_import_depth}"
            raise ConfigurationError(msg)
        if not self.namespace:
            msg = "namespace must not be empty"
            raise ConfigurationError(msg)
