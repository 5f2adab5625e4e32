"""
bitefetch - Pybites Rust exercises, downloaded into a local Cargo workspace

Fetches the exercise list from rustplatform.com and scaffolds one crate per
exercise, keeping a timestamped backup of any starter file it replaces.
"""

__version__ = "1.0.0"
__author__ = "Pybites"
__license__ = "MIT"

from .errors import BitefetchError, ConfigurationError, FetchError, ScaffoldError

__all__ = [
    "__version__",
    "BitefetchError",
    "ConfigurationError",
    "FetchError",
    "ScaffoldError",
]
