"""
Pydantic data models for project dependencies.

A project carries an ordered list of dependency paths. Each path is either a
literal file, a wildcard pattern, or a "GAC:" reference to an assembly in the
global assembly cache. Resolution turns them into ResolvedFile entries and
copying produces one CopyRecord per file.
"""

import os
from typing import List, Optional

from pydantic import BaseModel, Field

GAC_PREFIX = "GAC:"
WILDCARD_CHARACTERS = ("*", "?")


def has_wildcards(path: str) -> bool:
    """Check if a path contains wildcard characters."""
    return any(c in path for c in WILDCARD_CHARACTERS)


class DependencySpec(BaseModel):
    """
    One entry from the project's dependency list.
    """

    dependency_path: str = Field(
        ..., alias="DependencyPath", description="File path, wildcard pattern or GAC:<assembly identity>"
    )

    class Config:
        frozen = True
        populate_by_name = True

    def is_gac_reference(self) -> bool:
        """Check if the path names an assembly in the global assembly cache."""
        return self.dependency_path.startswith(GAC_PREFIX)

    def assembly_identity(self) -> Optional[str]:
        """
        The assembly identity following the GAC: prefix.

        Returns:
            The identity string, or None if this is not a GAC reference
        """
        if not self.is_gac_reference():
            return None
        return self.dependency_path[len(GAC_PREFIX):]

    def __str__(self) -> str:
        return self.dependency_path


class DependencyProject(BaseModel):
    """
    The documentation project whose dependencies are being copied.
    """

    name: Optional[str] = Field(None, description="Project name")
    dependencies: List[DependencySpec] = Field(default_factory=list)
    gac_roots: Optional[List[str]] = Field(
        None, alias="gacRoots", description="Global assembly cache roots for GAC: lookups"
    )

    class Config:
        extra = "allow"
        populate_by_name = True

    @classmethod
    def from_paths(cls, paths: List[str], **kwargs) -> "DependencyProject":
        """Build a project from plain dependency path strings."""
        return cls(
            dependencies=[DependencySpec(dependency_path=p) for p in paths], **kwargs
        )


class ResolvedFile(BaseModel):
    """
    A concrete file produced by expanding one DependencySpec.
    """

    path: str
    spec: DependencySpec

    class Config:
        frozen = True

    @property
    def extension(self) -> str:
        return os.path.splitext(self.path)[1]


class CopyRecord(BaseModel):
    """
    The source file and the uniquely named copy made from it.
    """

    source_path: str
    destination_path: str

    class Config:
        frozen = True

    @property
    def unique_name(self) -> str:
        """The destination file name without its extension."""
        return os.path.splitext(os.path.basename(self.destination_path))[0]
