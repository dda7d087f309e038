"""
Dependency models for the unique dependency copy plug-in.

This package provides Pydantic data models describing the dependencies a
documentation project references, the concrete files they resolve to and
the renamed copies produced during a build.
"""

from .dependencies import (
    GAC_PREFIX,
    DependencySpec,
    DependencyProject,
    ResolvedFile,
    CopyRecord,
    has_wildcards,
)

__all__ = [
    "GAC_PREFIX",
    "DependencySpec",
    "DependencyProject",
    "ResolvedFile",
    "CopyRecord",
    "has_wildcards",
]
