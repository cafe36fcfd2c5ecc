"""Tests for the typeforge CLI.

End-to-end testing of CLI commands against the default catalog and
configured libraries.
"""

import textwrap

import pytest
from typer.testing import CliRunner

from typeforge.cli.__main__ import app


class TestCLI:
    """Tests for CLI commands."""

    def setup_method(self):
        """Set up test runner."""
        self.runner = CliRunner()

    def test_no_command_shows_help(self, project):
        result = self.runner.invoke(app, [])
        assert result.exit_code == 1
        assert "Missing command" in result.output

    def test_version(self):
        result = self.runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "typeforge version" in result.stdout

    def test_types_list(self, project):
        result = self.runner.invoke(app, ["types", "list"])
        assert result.exit_code == 0
        names = result.stdout.split()
        assert "FileHandleList" in names
        assert "Str" in names

    def test_types_describe(self, project):
        result = self.runner.invoke(app, ["types", "describe", "FileHandleList"])
        assert result.exit_code == 0
        assert "parents: Collection[FileHandle] -> Collection" in result.stdout
        assert "coercions: Collection[Str], ArrayRef[Str], ArrayRef[FileHandle]" in result.stdout
        assert "parameterizable: no" in result.stdout

    def test_types_describe_expression(self, project):
        result = self.runner.invoke(app, ["types", "describe", "Collection[Int]"])
        assert result.exit_code == 0
        assert result.stdout.startswith("Collection[Int]")
        assert "coercions: ArrayRef" in result.stdout

    def test_types_describe_unknown(self, project):
        result = self.runner.invoke(app, ["types", "describe", "NoSuchType"])
        assert result.exit_code == 2
        assert "Unknown type: NoSuchType" in result.output

    def test_check_valid(self, project):
        result = self.runner.invoke(app, ["check", "ArrayRef[Int]", "[1, 2, 3]"])
        assert result.exit_code == 0
        assert "is a valid ArrayRef[Int]" in result.stdout

    def test_check_invalid(self, project):
        result = self.runner.invoke(app, ["check", "ArrayRef[Int]", '[1, "x"]'])
        assert result.exit_code == 1
        assert "did not pass type constraint 'ArrayRef[Int]'" in result.output

    def test_check_plain_text_is_string(self, project):
        result = self.runner.invoke(app, ["check", "Str", "hello"])
        assert result.exit_code == 0

    def test_check_without_coerce_fails(self, project):
        result = self.runner.invoke(app, ["check", "FileHandleList", '["a.txt", "b.txt"]'])
        assert result.exit_code == 1

    def test_check_with_coerce(self, project):
        result = self.runner.invoke(app, ["check", "FileHandleList", '["a.txt", "b.txt"]', "--coerce"])
        assert result.exit_code == 0
        assert "a.txt" in result.stdout
        assert "is a valid FileHandleList" in result.stdout

    def test_check_strict_coerce_failure(self, project):
        result = self.runner.invoke(app, ["check", "FileHandleList", "[1, 2]", "--coerce", "--strict"])
        assert result.exit_code == 1
        assert "did not pass type constraint 'FileHandleList'" in result.output

    def test_invalid_config_exits(self, project):
        (project / "pyproject.toml").write_text("[tool.typeforge]\nstrict = 'sometimes'\n")
        result = self.runner.invoke(app, ["types", "list"])
        assert result.exit_code == 2
        assert "'strict' must be true or false" in result.output


class TestCLILibraries:
    """Tests for configured type libraries in the CLI."""

    def setup_method(self):
        self.runner = CliRunner()

    @pytest.fixture
    def library(self, project):
        (project / "net_types.py").write_text(textwrap.dedent("""
            from typeforge.constraints import TypeRegistry
            from typeforge.standard import STANDARD

            REGISTRY = TypeRegistry("net").extend(STANDARD)
            REGISTRY.declare("Port", parent=REGISTRY.resolve("Int"), predicate=lambda v: 0 < v < 65536)
        """))
        return "net_types.py:REGISTRY"

    def test_add_library_and_use(self, project, library):
        result = self.runner.invoke(app, ["config", "add-library", library])
        assert result.exit_code == 0
        assert f"Added {library} (1 types)" in result.stdout
        assert library in (project / "pyproject.toml").read_text()

        result = self.runner.invoke(app, ["check", "ArrayRef[Port]", "[80, 443]"])
        assert result.exit_code == 0

        result = self.runner.invoke(app, ["check", "Port", "70000"])
        assert result.exit_code == 1

    def test_add_library_twice(self, project, library):
        self.runner.invoke(app, ["config", "add-library", library])
        result = self.runner.invoke(app, ["config", "add-library", library])
        assert result.exit_code == 0
        assert "already configured" in result.stdout

    def test_add_bad_library(self, project):
        result = self.runner.invoke(app, ["config", "add-library", "missing.py:REGISTRY"])
        assert result.exit_code == 2
        assert "No such file" in result.output
        assert not (project / "pyproject.toml").exists()
