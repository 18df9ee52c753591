"""Typed value parser for ``<default>`` elements.

A default is either plain text (a string) or exactly one nested typed
element::

    <default key="page"><int>1</int></default>
    <default key="tags">
        <list><string>a</string><string>b</string></list>
    </default>
    <default key="limits">
        <map><int key="max">10</int><bool key="strict">true</bool></map>
    </default>

``xsi:nil="true"`` makes any level an explicit null.
"""

import re

from lxml import etree

from perch.errors import InvalidValue, NestingTooDeep, UnknownElement
from perch.loader.elements import attribute, child_elements, is_nil, local_name, text_content
from perch.routing.values import (
    FLOAT_PATTERN,
    INT_PATTERN,
    NULL,
    BoolValue,
    FloatValue,
    IntValue,
    ListValue,
    MapValue,
    StringValue,
    TypedValue,
)

VALUE_TAGS = ("bool", "int", "float", "string", "list", "map")


def parse_default(
    element: etree._Element,
    path: str,
    namespace: str,
    max_depth: int = 64,
) -> TypedValue:
    """Parse a ``<default>`` element into a typed value.

    Only the first nested typed element is used; with none, the element's
    trimmed text is the value.
    """
    if is_nil(element):
        return NULL

    for child in child_elements(element, namespace):
        return parse_value_node(child, path, namespace, max_depth, depth=1)

    return StringValue(text_content(element))


def parse_value_node(
    node: etree._Element,
    path: str,
    namespace: str,
    max_depth: int = 64,
    depth: int = 1,
) -> TypedValue:
    """Recursively parse one typed element (``<bool>``, ``<list>``, ...)."""
    if depth > max_depth:
        msg = (
            f'Default values in file "{path}" are nested deeper than '
            f"{max_depth} levels (line {node.sourceline})."
        )
        raise NestingTooDeep(msg, path)

    if is_nil(node):
        return NULL

    tag = local_name(node)
    match tag:
        case "bool":
            return BoolValue(text_content(node) in ("true", "1"))
        case "int":
            return IntValue(int(_numeric_text(node, INT_PATTERN, path)))
        case "float":
            return FloatValue(float(_numeric_text(node, FLOAT_PATTERN, path)))
        case "string":
            return StringValue(text_content(node))
        case "list":
            return ListValue(
                tuple(
                    parse_value_node(item, path, namespace, max_depth, depth + 1)
                    for item in child_elements(node, namespace)
                )
            )
        case "map":
            entries: dict[str, TypedValue] = {}
            for item in child_elements(node, namespace):
                entries[attribute(item, "key")] = parse_value_node(
                    item, path, namespace, max_depth, depth + 1
                )
            return MapValue(entries)
        case _:
            raise UnknownElement(tag, path, VALUE_TAGS)


def _numeric_text(node: etree._Element, pattern: re.Pattern[str], path: str) -> str:
    """Trimmed text of *node*, which must be a plain decimal literal."""
    text = text_content(node)
    if pattern.fullmatch(text) is None:
        msg = (
            f'Invalid <{local_name(node)}> value "{text}" in file "{path}" '
            f"(line {node.sourceline})."
        )
        raise InvalidValue(msg, path)
    return text
