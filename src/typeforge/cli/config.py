"""Configuration handling for the typeforge CLI.

Reads and writes the [tool.typeforge] table of pyproject.toml:

    [tool.typeforge]
    libraries = ["mytypes.library:REGISTRY", "extra/types.py:REGISTRY"]
    strict = false
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import tomllib
import toml

from ..constants import CONFIG_TABLE
from ..constraints import TypeRegistry
from ..utils.imports import load_symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeforgeConfig:
    """Validated [tool.typeforge] settings.

    Attributes:
        libraries: References to extra TypeRegistry objects
        strict: Fail when coercion leaves a non-conforming value
    """
    libraries: Tuple[str, ...] = ()
    strict: bool = False


def read_pyproject(root: Optional[Path] = None) -> Dict[str, Any]:
    """Read the [tool.typeforge] table.

    Returns:
        The table, or an empty dict if pyproject.toml or the table is missing

    Raises:
        tomllib.TOMLDecodeError: If TOML is malformed
    """
    pyproject_path = (root or Path.cwd()) / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    return data.get("tool", {}).get(CONFIG_TABLE, {})


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate typeforge configuration.

    Args:
        config: The [tool.typeforge] table

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    libraries = config.get("libraries", [])
    if not isinstance(libraries, list):
        errors.append("'libraries' must be a list")
    else:
        seen = set()
        for i, reference in enumerate(libraries):
            if not isinstance(reference, str):
                errors.append(f"libraries[{i}] must be a string")
                continue
            if ":" not in reference:
                errors.append(f"libraries[{i}] must be in format 'module:attribute', got: {reference}")
            if reference in seen:
                errors.append(f"Duplicate library: {reference}")
            seen.add(reference)

    if "strict" in config and not isinstance(config["strict"], bool):
        errors.append("'strict' must be true or false")

    unknown = sorted(set(config) - {"libraries", "strict"})
    if unknown:
        errors.append(f"Unknown settings: {unknown}")

    return errors


def read_config(root: Optional[Path] = None) -> TypeforgeConfig:
    """Read and validate configuration, applying defaults.

    Raises:
        ValueError: If the configuration is invalid
    """
    config = read_pyproject(root)
    errors = validate_config(config)
    if errors:
        raise ValueError("Invalid [tool.typeforge] configuration:\n  " + "\n  ".join(errors))
    return TypeforgeConfig(
        libraries=tuple(config.get("libraries", [])),
        strict=config.get("strict", False),
    )


def load_library(reference: str, project_root: Optional[str] = None) -> TypeRegistry:
    """Load a TypeRegistry from a 'module:attribute' reference.

    Raises:
        TypeError: If the reference does not point at a TypeRegistry
    """
    registry = load_symbol(reference, project_root)
    if not isinstance(registry, TypeRegistry):
        raise TypeError(f"{reference} is a {type(registry).__name__}, not a TypeRegistry")
    return registry


def build_cli_registry(config: TypeforgeConfig, project_root: Optional[str] = None) -> TypeRegistry:
    """Registry used by the CLI: the catalog plus configured libraries."""
    from ..catalog import LIBRARY

    if not config.libraries:
        return LIBRARY

    registry = TypeRegistry("cli")
    registry.extend(LIBRARY)
    for reference in config.libraries:
        logger.info(f"Loading type library {reference}")
        registry.extend(load_library(reference, project_root))
    return registry.freeze()


def write_library_config(reference: str, root: Optional[Path] = None) -> bool:
    """Add a library reference to [tool.typeforge].libraries.

    Returns:
        True if the reference was added, False if it was already present
    """
    pyproject_path = (root or Path.cwd()) / "pyproject.toml"

    if pyproject_path.exists():
        with open(pyproject_path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    else:
        data = {}

    table = data.setdefault("tool", {}).setdefault(CONFIG_TABLE, {})
    libraries = table.setdefault("libraries", [])
    if reference in libraries:
        return False
    libraries.append(reference)

    with open(pyproject_path, "w", encoding="utf-8") as f:
        toml.dump(data, f)
    return True
