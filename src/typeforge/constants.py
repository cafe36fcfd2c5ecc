"""Global constants for typeforge.

This module centralizes the names of the catalog types so the registry,
CLI and tests agree on them.
"""

# Catalog type names
COLLECTION: str = "Collection"
FILE_HANDLE: str = "FileHandle"
FILE_HANDLE_LIST: str = "FileHandleList"

# pyproject.toml table holding typeforge configuration
CONFIG_TABLE: str = "typeforge"
