"""Tests for perch.loader.locator and perch.loader.resolver."""

from pathlib import Path

import pytest

from perch.errors import LoaderNotFound, ResourceNotFound
from perch.loader.directory import DirectoryLoader
from perch.loader.locator import FileLocator
from perch.loader.resolver import LoaderResolver
from perch.loader.xml_file import XmlFileLoader


class TestFileLocator:
    def test_absolute(self, tmp_path: Path) -> None:
        path = tmp_path / "a.xml"
        path.write_text("", encoding="utf-8")
        assert FileLocator().locate(str(path)) == str(path.resolve())

    def test_absolute_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceNotFound, match="does not exist"):
            FileLocator().locate(str(tmp_path / "missing.xml"))

    def test_relative_to_current_dir(self, tmp_path: Path) -> None:
        (tmp_path / "a.xml").write_text("", encoding="utf-8")
        assert FileLocator().locate("a.xml", tmp_path) == str((tmp_path / "a.xml").resolve())

    def test_search_paths(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / "a.xml").write_text("", encoding="utf-8")
        locator = FileLocator([first, second])
        assert locator.locate("a.xml", first) == str((second / "a.xml").resolve())

    def test_all_matches(self, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        for directory in (first, second):
            directory.mkdir()
            (directory / "a.xml").write_text("", encoding="utf-8")
        found = FileLocator([second]).locate("a.xml", first, first=False)
        assert found == [str((first / "a.xml").resolve()), str((second / "a.xml").resolve())]

    def test_relative_missing_lists_directories(self, tmp_path: Path) -> None:
        with pytest.raises(ResourceNotFound) as exc_info:
            FileLocator().locate("a.xml", tmp_path)
        assert str(tmp_path) in str(exc_info.value)
        assert exc_info.value.resource == "a.xml"

    def test_empty_name(self) -> None:
        with pytest.raises(ResourceNotFound):
            FileLocator().locate("")


class TestLoaderResolver:
    def test_resolves_by_support(self) -> None:
        locator = FileLocator()
        xml_loader = XmlFileLoader(locator)
        directory_loader = DirectoryLoader(locator)
        resolver = LoaderResolver([xml_loader, directory_loader])
        assert resolver.resolve("routes.xml") is xml_loader
        assert resolver.resolve("routes/") is directory_loader
        assert resolver.resolve("routes", "directory") is directory_loader
        assert resolver.loaders == (xml_loader, directory_loader)

    def test_registers_back_reference(self) -> None:
        loader = XmlFileLoader(FileLocator())
        resolver = LoaderResolver()
        resolver.add_loader(loader)
        assert loader.resolver is resolver

    def test_not_found(self) -> None:
        resolver = LoaderResolver([XmlFileLoader(FileLocator())])
        with pytest.raises(LoaderNotFound, match='type "yaml"'):
            resolver.resolve("routes.yaml", "yaml")

    def test_loader_without_resolver(self) -> None:
        loader = XmlFileLoader(FileLocator())
        with pytest.raises(LoaderNotFound):
            loader.resolve("routes/")
        assert loader.can_import("routes.xml")
        assert not loader.can_import("routes/")
