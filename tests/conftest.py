"""Shared fixtures for typeforge tests."""

from pathlib import Path

import pytest

from typeforge.constraints import TypeRegistry
from typeforge.standard import STANDARD


@pytest.fixture
def registry():
    """Fresh, unfrozen registry extending the foundational types."""
    reg = TypeRegistry("test")
    reg.extend(STANDARD)
    return reg


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Temporary project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def paths():
    """A few file handles with distinct paths."""
    return [Path("a.txt"), Path("dir/b.txt"), Path("/abs/c.log")]
