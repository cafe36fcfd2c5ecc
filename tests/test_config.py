"""Tests for [tool.typeforge] configuration handling."""

import textwrap
import tomllib

import pytest

from typeforge.catalog import LIBRARY
from typeforge.cli.config import (
    TypeforgeConfig,
    build_cli_registry,
    load_library,
    read_config,
    read_pyproject,
    validate_config,
    write_library_config,
)
from typeforge.constraints import TypeRegistry

LIBRARY_SOURCE = textwrap.dedent("""
    from typeforge.constraints import TypeRegistry
    from typeforge.standard import STANDARD

    REGISTRY = TypeRegistry("extra")
    REGISTRY.declare("Port", parent=STANDARD.resolve("Int"), predicate=lambda v: 0 < v < 65536)
    NOT_A_REGISTRY = 42
""")


@pytest.fixture
def library_file(project):
    """A type library module inside the project."""
    (project / "extra_types.py").write_text(LIBRARY_SOURCE)
    return project / "extra_types.py"


class TestReadConfig:
    """Tests for reading configuration."""

    def test_missing_pyproject_gives_defaults(self, project):
        assert read_pyproject() == {}
        assert read_config() == TypeforgeConfig()

    def test_missing_table_gives_defaults(self, project):
        (project / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        assert read_config() == TypeforgeConfig()

    def test_reads_table(self, project):
        (project / "pyproject.toml").write_text(textwrap.dedent("""
            [tool.typeforge]
            libraries = ["extra_types:REGISTRY"]
            strict = true
        """))
        config = read_config()
        assert config.libraries == ("extra_types:REGISTRY",)
        assert config.strict is True

    def test_explicit_root(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.typeforge]\nstrict = true\n")
        assert read_config(tmp_path).strict is True

    def test_invalid_config_raises(self, project):
        (project / "pyproject.toml").write_text("[tool.typeforge]\nlibraries = 'x'\n")
        with pytest.raises(ValueError, match="'libraries' must be a list"):
            read_config()


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self):
        assert validate_config({"libraries": ["a:B"], "strict": False}) == []
        assert validate_config({}) == []

    def test_errors(self):
        errors = validate_config({
            "libraries": ["a:B", "a:B", "nocolon", 3],
            "strict": "yes",
            "colour": "blue",
        })
        assert "Duplicate library: a:B" in errors
        assert "libraries[2] must be in format 'module:attribute', got: nocolon" in errors
        assert "libraries[3] must be a string" in errors
        assert "'strict' must be true or false" in errors
        assert "Unknown settings: ['colour']" in errors


class TestLibraries:
    """Tests for loading configured type libraries."""

    def test_load_library_from_module(self, library_file, project):
        registry = load_library("extra_types:REGISTRY", str(project))
        assert isinstance(registry, TypeRegistry)
        assert registry.own_names() == ["Port"]

    def test_load_library_from_file(self, library_file):
        registry = load_library("extra_types.py:REGISTRY")
        assert "Port" in registry

    def test_load_non_registry_raises(self, library_file):
        with pytest.raises(TypeError, match="not a TypeRegistry"):
            load_library("extra_types.py:NOT_A_REGISTRY")

    def test_load_missing_attribute_raises(self, library_file):
        with pytest.raises(AttributeError, match="has no attribute 'MISSING'"):
            load_library("extra_types.py:MISSING")

    def test_cli_registry_without_libraries_is_catalog(self):
        assert build_cli_registry(TypeforgeConfig()) is LIBRARY

    def test_cli_registry_with_libraries(self, library_file):
        registry = build_cli_registry(TypeforgeConfig(libraries=("extra_types.py:REGISTRY",)))
        assert registry.resolve("Port").validate(8080)
        assert registry.resolve("FileHandleList") is LIBRARY.resolve("FileHandleList")
        assert registry.frozen


class TestWriteConfig:
    """Tests for write_library_config."""

    def test_creates_table(self, project):
        assert write_library_config("extra_types:REGISTRY")
        with open(project / "pyproject.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["tool"]["typeforge"]["libraries"] == ["extra_types:REGISTRY"]

    def test_preserves_existing_content(self, project):
        (project / "pyproject.toml").write_text(textwrap.dedent("""
            [project]
            name = "demo"

            [tool.typeforge]
            strict = true
        """))
        write_library_config("a:B")
        config = read_config()
        assert config.libraries == ("a:B",)
        assert config.strict is True
        assert "demo" in (project / "pyproject.toml").read_text()

    def test_duplicate_not_added(self, project):
        assert write_library_config("a:B")
        assert not write_library_config("a:B")
        assert read_config().libraries == ("a:B",)
