"""Document provider — parse a routing file with lxml and validate it.

Entity resolution and network access are disabled: routing files may come
from operators or third-party bundles.
"""

import logging
import threading
from pathlib import Path

from lxml import etree

from perch.errors import SchemaValidationError, XmlSyntaxError

logger = logging.getLogger("perch.document")

_schema_cache: dict[str, etree.XMLSchema] = {}
_schema_lock = threading.Lock()


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
        huge_tree=False,
    )


def get_schema(schema_path: str | Path) -> etree.XMLSchema:
    """Compile the schema at *schema_path*, once per path."""
    key = str(Path(schema_path).resolve())
    with _schema_lock:
        schema = _schema_cache.get(key)
        if schema is None:
            schema = etree.XMLSchema(etree.parse(key, _parser()))
            _schema_cache[key] = schema
    return schema


def load_document(
    path: str | Path,
    schema_path: str | Path | None = None,
    validate: bool = True,
) -> etree._Element:
    """Parse *path* and return its root element.

    Raises ``XmlSyntaxError`` for empty or malformed files and
    ``SchemaValidationError`` (listing every violation) when *validate* is
    set and the document does not conform to *schema_path*.
    """
    path = str(path)
    content = Path(path).read_bytes()
    if not content.strip():
        msg = f'Routing file "{path}" is empty; it does not contain valid XML.'
        raise XmlSyntaxError(msg, path)

    try:
        root = etree.fromstring(content, _parser(), base_url=path)
    except etree.XMLSyntaxError as exc:
        msg = f'Routing file "{path}" does not contain valid XML: {exc}'
        raise XmlSyntaxError(msg, path) from exc

    if validate and schema_path is not None:
        schema = get_schema(schema_path)
        if not schema.validate(root):
            errors = [
                f"[{entry.level_name} {entry.type_name}] {entry.message.strip()} "
                f"(in {path} - line {entry.line}, column {entry.column})"
                for entry in schema.error_log
            ]
            raise SchemaValidationError(path, errors)

    logger.debug("Parsed routing document %s", path)
    return root
