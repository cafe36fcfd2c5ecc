"""Import utilities for loading user type libraries.

Type libraries are referenced as "module.path:attribute" or
"path/to/file.py:attribute". Module references are tried as-is first and
then with the project root temporarily prepended to sys.path.
"""

from __future__ import annotations
from importlib import import_module, util
from pathlib import Path
import os
import sys
import types
from typing import Any, Optional


def _import_with_root(module_name: str, root: Path) -> types.ModuleType:
    """Import module_name with root at the front of sys.path for this call only."""
    entry = str(root)
    inserted = entry not in sys.path
    if inserted:
        sys.path.insert(0, entry)
    try:
        return import_module(module_name)
    except ModuleNotFoundError:
        raise ModuleNotFoundError(
            f"Cannot import '{module_name}' even with project root '{root}' in path. "
            f"Check that the module path is correct and the file exists."
        )
    finally:
        if inserted and entry in sys.path:
            sys.path.remove(entry)


def _import_from_file(pyfile: str, project_root: Optional[str] = None) -> types.ModuleType:
    """Import a module directly from a Python file path.

    Relative paths are taken from project_root (default: cwd).

    Raises:
        ModuleNotFoundError: If file doesn't exist or can't be loaded
    """
    py = Path(pyfile)
    if not py.is_absolute():
        py = Path(project_root or os.getcwd()) / py
    py = py.resolve()
    if not py.exists():
        raise ModuleNotFoundError(f"No such file: {py}")
    spec = util.spec_from_file_location(py.stem, py)
    if spec is None or spec.loader is None:
        raise ModuleNotFoundError(f"Could not load module from {py}")
    mod = util.module_from_spec(spec)
    spec.loader.exec_module(mod)  # type: ignore[attr-defined]
    return mod


def load_symbol(qualified: str, project_root: Optional[str] = None) -> Any:
    """Load a symbol from a qualified reference.

    Args:
        qualified: Either 'module.path:Symbol' or 'path/to/file.py:Symbol'
        project_root: Directory used for relative files and as import fallback

    Returns:
        The loaded symbol

    Raises:
        ValueError: If qualified string format is invalid
        ModuleNotFoundError: If module can't be imported
        AttributeError: If symbol doesn't exist in module

    Examples:
        >>> registry = load_symbol("mytypes.library:REGISTRY")
        >>> registry = load_symbol("./types/extra.py:REGISTRY")
    """
    module_part, sep, symbol = qualified.partition(":")
    if not sep or not module_part or not symbol:
        raise ValueError(f"Expected 'module_or_file:Symbol' format, got: {qualified}")

    if module_part.endswith(".py") or "/" in module_part or "\\" in module_part:
        mod = _import_from_file(module_part, project_root)
    else:
        try:
            mod = import_module(module_part)
        except ModuleNotFoundError:
            mod = _import_with_root(module_part, Path(project_root or os.getcwd()).resolve())

    if not hasattr(mod, symbol):
        raise AttributeError(f"Module {module_part} has no attribute '{symbol}'")
    return getattr(mod, symbol)
