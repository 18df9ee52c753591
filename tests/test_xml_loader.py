"""Tests for perch.loader.xml_file — dispatching, routes and config extraction."""

from collections.abc import Callable
from pathlib import Path

import pytest

from perch.config import LoaderConfig
from perch.errors import (
    ConflictingDefault,
    MissingRequiredAttribute,
    MutuallyExclusiveAttributes,
    UnknownElement,
)
from perch.loader import create_loader, load_routes
from perch.loader.xml_file import split_list
from perch.routing.values import NULL, BoolValue, IntValue, ListValue, StringValue

Write = Callable[[str, str], Path]

NO_SCHEMA = LoaderConfig(validate_schema=False)


class TestSupports:
    def test_xml_extension(self) -> None:
        loader = create_loader()
        assert loader.supports("routes.xml")
        assert loader.supports("routes.xml", "xml")

    def test_other_extension_or_type(self) -> None:
        loader = create_loader()
        assert not loader.supports("routes.yaml")
        assert not loader.supports("routes.xml", "yaml")
        assert not loader.supports("config/")


class TestSplitList:
    def test_separators(self) -> None:
        assert split_list("GET|HEAD, POST  put") == ["GET", "HEAD", "POST", "put"]

    def test_empty(self) -> None:
        assert split_list("") == []
        assert split_list(" ,| ") == []


class TestDispatcher:
    def test_single_route(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a"/>')
        table = load_routes(path)
        assert table.names() == ["a"]
        assert table.get("a").path == "/a"

    def test_document_order(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="b" path="/b"/>\n<!-- comment -->\n<route id="a" path="/a"/>',
        )
        assert load_routes(path).names() == ["b", "a"]

    def test_foreign_namespace_skipped(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<x:meta xmlns:x="urn:example:meta">ignored</x:meta>\n<route id="a" path="/a"/>',
        )
        assert load_routes(path).names() == ["a"]

    def test_unknown_top_level_tag(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<router id="a" path="/a"/>')
        with pytest.raises(UnknownElement) as exc_info:
            load_routes(path, NO_SCHEMA)
        assert exc_info.value.tag == "router"
        assert exc_info.value.expected == ("route", "import")
        assert str(path) in str(exc_info.value)

    def test_records_resource(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a"/>')
        assert load_routes(path).resources == (str(path.resolve()),)


class TestRouteBuilder:
    def test_missing_id(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route path="/a"/>')
        with pytest.raises(MissingRequiredAttribute) as exc_info:
            load_routes(path)
        assert exc_info.value.attribute == "id"
        assert str(path.resolve()) in str(exc_info.value)

    def test_missing_path(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a"/>')
        with pytest.raises(MissingRequiredAttribute) as exc_info:
            load_routes(path)
        assert exc_info.value.attribute == "path"

    def test_path_attribute_and_children(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/x"><path locale="en">/y</path></route>',
        )
        with pytest.raises(MutuallyExclusiveAttributes):
            load_routes(path)

    def test_attributes(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a" host="{sub}.example.com" schemes="https|http" '
            'methods="get, post" controller="app.a" format="json" locale="en">'
            "<condition> request.isSecure() </condition>"
            "</route>",
        )
        route = load_routes(path).get("a")
        assert route.host == "{sub}.example.com"
        assert route.schemes == ("https", "http")
        assert route.methods == ("GET", "POST")
        assert route.condition == "request.isSecure()"
        assert route.defaults["_controller"] == StringValue("app.a")
        assert route.defaults["_format"] == StringValue("json")
        assert route.defaults["_locale"] == StringValue("en")

    def test_unrestricted_by_default(self, write_routes: Write) -> None:
        route = load_routes(write_routes("routes.xml", '<route id="a" path="/a"/>')).get("a")
        assert route.host == ""
        assert route.schemes == ()
        assert route.methods == ()
        assert route.condition is None

    def test_utf8_attribute(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a" utf8="1"/>')
        assert load_routes(path).get("a").options["utf8"] == BoolValue(True)

    def test_stateless_attribute(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a" stateless="true"/>')
        assert load_routes(path).get("a").defaults["_stateless"] == BoolValue(True)

    def test_localized_paths(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="about" controller="pages.about">'
            '<path locale="en">/about</path><path locale="fr">/a-propos</path>'
            "</route>",
        )
        table = load_routes(path)
        assert table.names() == ["about.en", "about.fr"]
        fr = table.get("about.fr")
        assert fr.path == "/a-propos"
        assert fr.get_default("_locale") == "fr"
        assert fr.get_default("_canonical_route") == "about"
        assert fr.get_default("_controller") == "pages.about"
        assert fr.requirements["_locale"] == "fr"

    def test_localized_locale_not_overwritten_by_locale_attribute(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="about" locale="de"><path locale="en">/about</path></route>',
        )
        assert load_routes(path).get("about.en").get_default("_locale") == "en"

    def test_duplicate_id_replaces_in_place(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a1"/><route id="b" path="/b"/><route id="a" path="/a2"/>',
        )
        table = load_routes(path)
        assert table.names() == ["a", "b"]
        assert table.get("a").path == "/a2"


class TestConfigExtraction:
    def test_defaults_requirements_options(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a/{page}">'
            '<default key="page"><int>1</int></default>'
            '<default key="tags"><list><int>1</int><int>2</int></list></default>'
            '<default key="title">foo</default>'
            '<default key="nothing" xsi:nil="true"/>'
            '<requirement key="page">\\d+</requirement>'
            '<option key="compiler_class">App\\Compiler</option>'
            '<option key="utf8">true</option>'
            '<option key="weight">3</option>'
            "</route>",
        )
        route = load_routes(path).get("a")
        assert route.defaults["page"] == IntValue(1)
        assert route.defaults["tags"] == ListValue((IntValue(1), IntValue(2)))
        assert route.defaults["title"] == StringValue("foo")
        assert route.defaults["nothing"] is NULL
        assert route.requirements == {"page": "\\d+"}
        assert route.options["compiler_class"] == StringValue("App\\Compiler")
        assert route.options["utf8"] == BoolValue(True)
        assert route.options["weight"] == IntValue(3)

    def test_nested_value_elements_not_read_as_configs(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a">'
            '<default key="m"><map><string key="path">/nested</string></map></default>'
            "</route>",
        )
        route = load_routes(path).get("a")
        assert route.path == "/a"
        assert route.get_default("m") == {"path": "/nested"}

    def test_last_condition_wins(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a"><condition>first</condition><condition>second</condition></route>',
        )
        assert load_routes(path).get("a").condition == "second"

    def test_unknown_child(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a"><defaults key="x"/></route>')
        with pytest.raises(UnknownElement) as exc_info:
            load_routes(path, NO_SCHEMA)
        assert exc_info.value.tag == "defaults"
        assert "condition" in exc_info.value.expected

    def test_exclude_child_on_route_is_unknown(self, write_routes: Write) -> None:
        path = write_routes("routes.xml", '<route id="a" path="/a"><exclude>x.xml</exclude></route>')
        with pytest.raises(UnknownElement):
            load_routes(path, NO_SCHEMA)

    def test_foreign_child_ignored(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a" xmlns:doc="urn:example:doc"><doc:note>hi</doc:note></route>',
        )
        assert load_routes(path).get("a").path == "/a"

    def test_controller_conflict(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a" controller="x"><default key="_controller">y</default></route>',
        )
        with pytest.raises(ConflictingDefault) as exc_info:
            load_routes(path)
        assert exc_info.value.key == "_controller"
        assert '"a"' in str(exc_info.value)

    def test_stateless_conflict(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a" stateless="true"><default key="_stateless">false</default></route>',
        )
        with pytest.raises(ConflictingDefault) as exc_info:
            load_routes(path)
        assert exc_info.value.key == "_stateless"

    def test_null_child_default_does_not_conflict(self, write_routes: Write) -> None:
        path = write_routes(
            "routes.xml",
            '<route id="a" path="/a" controller="x"><default key="_controller" xsi:nil="true"/></route>',
        )
        assert load_routes(path).get("a").get_default("_controller") == "x"
