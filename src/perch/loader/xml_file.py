"""XML routing file loader.

Reads documents such as::

    <routes xmlns="http://symfony.com/schema/routing">
        <route id="blog_show" path="/blog/{slug}" methods="GET|HEAD"
               controller="blog.show">
            <requirement key="slug">[a-z0-9-]+</requirement>
            <default key="page"><int>1</int></default>
        </route>
        <import resource="admin.xml" prefix="/admin" name-prefix="admin_"/>
    </routes>

and turns them into a ``RouteTable``.  Elements outside the routing
namespace are skipped; unknown elements inside it are errors.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from lxml import etree

from perch.errors import (
    ConflictingDefault,
    MissingRequiredAttribute,
    MutuallyExclusiveAttributes,
    UnknownElement,
)
from perch.loader.base import FileLoader
from perch.loader.document import load_document
from perch.loader.elements import (
    attribute,
    child_elements,
    has_attribute,
    is_element,
    is_nil,
    local_name,
    namespace_of,
    text_content,
)
from perch.loader.localized import add_prefix_to_table, create_localized_route
from perch.loader.values import parse_default
from perch.routing.table import RouteTable
from perch.routing.values import NULL, NullValue, StringValue, TypedValue, coerce_scalar, is_truthy

logger = logging.getLogger("perch.loader")

_LIST_SEPARATORS = re.compile(r"[\s,|]+")

_CONFIG_TAGS = ("path", "prefix", "default", "requirement", "option", "condition")


def split_list(value: str) -> list[str]:
    """Split a ``schemes``/``methods`` attribute on whitespace, commas and pipes."""
    return [token for token in _LIST_SEPARATORS.split(value) if token]


@dataclass(slots=True)
class RouteConfigs:
    """Settings shared by ``<route>`` and ``<import>`` elements."""

    defaults: dict[str, TypedValue] = field(default_factory=dict)
    requirements: dict[str, str] = field(default_factory=dict)
    options: dict[str, TypedValue] = field(default_factory=dict)
    condition: str | None = None
    paths: dict[str, str] = field(default_factory=dict)
    prefixes: dict[str, str] = field(default_factory=dict)
    excludes: list[str] = field(default_factory=list)


class XmlFileLoader(FileLoader):
    """Loads ``.xml`` routing files into route tables."""

    def supports(self, resource: str, type: str | None = None) -> bool:  # noqa: A002
        return (
            isinstance(resource, str)
            and os.path.splitext(resource)[1] == ".xml"
            and (not type or type == "xml")
        )

    def load(self, resource: str, type: str | None = None) -> RouteTable:  # noqa: A002
        path = str(self.locator.locate(resource, self.current_dir))
        root = load_document(
            path,
            self.config.schema_path,
            validate=self.config.validate_schema,
        )

        table = RouteTable()
        table.add_resource(path)

        for node in root:
            if not is_element(node):
                continue
            self.parse_node(table, node, path, resource)

        logger.debug("Parsed %d routes from %s", len(table), path)
        return table

    def parse_node(self, table: RouteTable, node: etree._Element, path: str, file: str) -> None:
        """Dispatch one top-level element to the route or import parser."""
        if namespace_of(node) != self.config.namespace:
            return

        match local_name(node):
            case "route":
                self.parse_route(table, node, path)
            case "import":
                self.parse_import(table, node, path, file)
            case tag:
                raise UnknownElement(tag, path, ("route", "import"))

    # -- <route> --------------------------------------------------------------

    def parse_route(self, table: RouteTable, node: etree._Element, path: str) -> None:
        route_id = attribute(node, "id")
        if not route_id:
            raise MissingRequiredAttribute("route", "id", path)

        schemes = split_list(attribute(node, "schemes"))
        methods = split_list(attribute(node, "methods"))

        configs = self.parse_configs(node, path)

        route_path = attribute(node, "path")
        if not configs.paths and not route_path:
            raise MissingRequiredAttribute(
                "route",
                "path",
                path,
                detail=(
                    f'The <route> element in file "{path}" must have a "path" '
                    f"attribute or <path> child nodes."
                ),
            )
        if configs.paths and route_path:
            msg = (
                f'The <route> element in file "{path}" must not have both a "path" '
                f"attribute and <path> child nodes."
            )
            raise MutuallyExclusiveAttributes(msg, path)

        routes = create_localized_route(table, route_id, configs.paths or route_path, source=path)
        routes.add_defaults(configs.defaults)
        routes.add_requirements(configs.requirements)
        routes.add_options(configs.options)
        routes.set_host(attribute(node, "host"))
        routes.set_schemes(schemes)
        routes.set_methods(methods)
        routes.set_condition(configs.condition)

    # -- <import> ------------------------------------------------------------------

    def parse_import(self, table: RouteTable, node: etree._Element, path: str, file: str) -> None:
        resource = attribute(node, "resource")
        if not resource:
            raise MissingRequiredAttribute("import", "resource", path)

        type_hint = attribute(node, "type") or None
        prefix = attribute(node, "prefix")
        host = attribute(node, "host") if has_attribute(node, "host") else None
        schemes = split_list(attribute(node, "schemes")) if has_attribute(node, "schemes") else None
        methods = split_list(attribute(node, "methods")) if has_attribute(node, "methods") else None
        trailing_slash_on_root = (
            is_truthy(coerce_scalar(attribute(node, "trailing-slash-on-root")))
            if has_attribute(node, "trailing-slash-on-root")
            else True
        )
        name_prefix = attribute(node, "name-prefix") or None

        configs = self.parse_configs(node, path)

        if prefix and configs.prefixes:
            msg = (
                f'The <import> element in file "{path}" must not have both a "prefix" '
                f"attribute and <prefix> child nodes."
            )
            raise MutuallyExclusiveAttributes(msg, path)

        exclude = list(configs.excludes)
        exclude_attr = attribute(node, "exclude")
        if exclude_attr:
            if exclude:
                msg = (
                    f'The <import> element in file "{path}" must not use both the '
                    f'"exclude" attribute and <exclude> child nodes.'
                )
                raise MutuallyExclusiveAttributes(msg, path)
            exclude = [exclude_attr]

        self.set_current_dir(os.path.dirname(path))
        imported = self.import_resource(resource, type_hint, False, file, exclude) or []
        if isinstance(imported, RouteTable):
            imported = [imported]

        for sub_table in imported:
            add_prefix_to_table(sub_table, configs.prefixes or prefix, trailing_slash_on_root, path)

            if host is not None:
                sub_table.set_host(host)
            if configs.condition is not None:
                sub_table.set_condition(configs.condition)
            if schemes is not None:
                sub_table.set_schemes(schemes)
            if methods is not None:
                sub_table.set_methods(methods)
            if name_prefix is not None:
                sub_table.add_name_prefix(name_prefix)
            sub_table.add_defaults(configs.defaults)
            sub_table.add_requirements(configs.requirements)
            sub_table.add_options(configs.options)

            table.add_table(sub_table)
            logger.debug("Imported %d routes from %r into %s", len(sub_table), resource, path)

    # -- Shared configs -------------------------------------------------------------

    def parse_configs(self, node: etree._Element, path: str) -> RouteConfigs:
        """Collect defaults, requirements, options, condition, paths and prefixes.

        Only direct children count: ``<list>``/``<map>`` elements nested in a
        ``<default>`` are in the same namespace and must not be read here.
        """
        configs = RouteConfigs()
        is_import = local_name(node) == "import"
        allowed = (*_CONFIG_TAGS, "exclude") if is_import else _CONFIG_TAGS

        for child in child_elements(node, self.config.namespace):
            match local_name(child):
                case "path":
                    configs.paths[attribute(child, "locale")] = text_content(child)
                case "prefix":
                    configs.prefixes[attribute(child, "locale")] = text_content(child)
                case "default":
                    if is_nil(child):
                        configs.defaults[attribute(child, "key")] = NULL
                    else:
                        configs.defaults[attribute(child, "key")] = parse_default(
                            child,
                            path,
                            self.config.namespace,
                            self.config.max_value_depth,
                        )
                case "requirement":
                    configs.requirements[attribute(child, "key")] = text_content(child)
                case "option":
                    configs.options[attribute(child, "key")] = coerce_scalar(text_content(child))
                case "condition":
                    configs.condition = text_content(child)
                case "exclude" if is_import:
                    configs.excludes.append(text_content(child))
                case tag:
                    raise UnknownElement(tag, path, allowed)

        controller = attribute(node, "controller")
        if controller:
            self._check_synthesized(configs, node, path, "_controller", "controller")
            configs.defaults["_controller"] = StringValue(controller)
        if has_attribute(node, "locale"):
            configs.defaults["_locale"] = StringValue(attribute(node, "locale"))
        if has_attribute(node, "format"):
            configs.defaults["_format"] = StringValue(attribute(node, "format"))
        if has_attribute(node, "utf8"):
            configs.options["utf8"] = coerce_scalar(attribute(node, "utf8"))
        stateless = attribute(node, "stateless")
        if stateless:
            self._check_synthesized(configs, node, path, "_stateless", "stateless")
            configs.defaults["_stateless"] = coerce_scalar(stateless)

        return configs

    def _check_synthesized(
        self,
        configs: RouteConfigs,
        node: etree._Element,
        path: str,
        key: str,
        attribute_name: str,
    ) -> None:
        existing = configs.defaults.get(key)
        if existing is None or isinstance(existing, NullValue):
            return
        if has_attribute(node, "id"):
            owner = f'"{attribute(node, "id")}"'
        else:
            owner = f'the "{local_name(node)}" tag'
        raise ConflictingDefault(key, attribute_name, owner, path)
