"""typeforge: runtime type constraints and coercion.

Declare that values must conform to (possibly parameterized) types and
coerce loosely typed input into canonical strongly typed values.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
