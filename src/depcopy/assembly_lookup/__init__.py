"""
Global assembly cache lookup.

This package handles:
1. Parsing strong-name assembly identity strings
2. Locating the matching assembly file under a global assembly cache root
3. The lookup capability interface the dependency resolver acquires and releases
"""

from .lookup import (
    AssemblyLookup,
    AssemblyLookupFactory,
    GacDirectoryLookup,
    create_gac_lookup_factory,
)
from .identity import AssemblyIdentity

__all__ = [
    "AssemblyLookup",
    "AssemblyLookupFactory",
    "GacDirectoryLookup",
    "create_gac_lookup_factory",
    "AssemblyIdentity",
]
