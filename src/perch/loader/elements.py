"""Namespace-aware element helpers over lxml trees.

The loaders only need a handful of capabilities from an element: its local
name and namespace, its element children, attribute lookup and trimmed text.
"""

from collections.abc import Iterator

from lxml import etree

from perch.config import XSI_NAMESPACE


def is_element(node: object) -> bool:
    """True for elements; False for comments, processing instructions and entities."""
    return isinstance(getattr(node, "tag", None), str)


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def namespace_of(element: etree._Element) -> str | None:
    return etree.QName(element).namespace


def child_elements(element: etree._Element, namespace: str) -> Iterator[etree._Element]:
    """Yield direct element children in *namespace*, in document order."""
    for child in element:
        if is_element(child) and namespace_of(child) == namespace:
            yield child


def text_content(element: etree._Element) -> str:
    """All descendant text of *element*, trimmed."""
    return "".join(element.itertext()).strip()


def has_attribute(element: etree._Element, name: str) -> bool:
    return element.get(name) is not None


def attribute(element: etree._Element, name: str) -> str:
    """Attribute value, or ``""`` when absent."""
    return element.get(name, "")


def is_nil(element: etree._Element) -> bool:
    """True when the element carries ``xsi:nil="true"`` (or ``"1"``)."""
    return element.get(f"{{{XSI_NAMESPACE}}}nil") in ("true", "1")
