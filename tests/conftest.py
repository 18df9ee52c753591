"""Shared fixtures: routing documents written to a temporary directory."""

from collections.abc import Callable
from pathlib import Path

import pytest
from lxml import etree

NS = "http://symfony.com/schema/routing"
XSI = "http://www.w3.org/2001/XMLSchema-instance"


def routes_xml(body: str) -> str:
    """Wrap *body* in a ``<routes>`` root with the routing and xsi namespaces."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<routes xmlns="{NS}" xmlns:xsi="{XSI}">\n'
        f"{body}\n"
        "</routes>\n"
    )


@pytest.fixture
def xml_element() -> Callable[[str], etree._Element]:
    """Parse one routing element (no schema validation) and return it."""

    def _parse(body: str) -> etree._Element:
        root = etree.fromstring(routes_xml(body).encode())
        return next(child for child in root if isinstance(child.tag, str))

    return _parse


@pytest.fixture
def write_routes(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a routing file under ``tmp_path`` and return its path.

    ``write_routes("sub/api.xml", '<route id="a" path="/a"/>')``
    """

    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(routes_xml(body), encoding="utf-8")
        return path

    return _write
