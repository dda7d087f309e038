"""
Assembly lookup implementation.

Resolves assembly identities to file locations in an on-disk global assembly
cache. Both the Windows layout (GAC_MSIL/GAC_32/GAC_64/GAC under
Microsoft.NET\\assembly or %WINDIR%\\assembly) and the Mono layout
(lib/mono/gac/<Name>/<version>__<token>) are searched.
"""

import logging
import os
import pathlib
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from depcopy.assembly_lookup.identity import AssemblyIdentity, version_key
from depcopy.depcopy_exceptions import AssemblyLookupError
from depcopy.depcopy_logger import DepCopyLogger

if TYPE_CHECKING:
    from depcopy.dependency_models import DependencyProject

GAC_ARCHITECTURE_FOLDERS = ("GAC_MSIL", "GAC_32", "GAC_64", "GAC")
ASSEMBLY_EXTENSIONS = (".dll", ".exe")


class AssemblyLookup(ABC):
    """
    Capability that turns an assembly identity into a file path.

    Acquired at most once per copy pass and released exactly once afterwards.
    """

    @abstractmethod
    def get_assembly_location(self, identity: str) -> str:
        """
        Locate an assembly.

        Args:
            identity: Assembly identity string (the text after "GAC:")

        Returns:
            Path to the assembly file

        Raises:
            AssemblyLookupError: If the assembly cannot be located
        """

    def release(self) -> None:
        """Release anything the lookup holds."""


AssemblyLookupFactory = Callable[["DependencyProject"], AssemblyLookup]


class GacDirectoryLookup(AssemblyLookup):
    """
    Looks assemblies up in global assembly cache folders on disk.
    """

    def __init__(self, gac_roots: List[str], logger: Optional[DepCopyLogger] = None):
        """
        Args:
            gac_roots: Cache root folders, searched in order
            logger: Logger for lookup messages
        """
        self.gac_roots = list(gac_roots)
        self.logger = logger or DepCopyLogger()
        self._cache: Dict[str, str] = {}
        self.released = False

    def get_assembly_location(self, identity: str) -> str:
        if self.released:
            raise AssemblyLookupError("Assembly lookup has already been released")

        if identity in self._cache:
            return self._cache[identity]

        parsed = AssemblyIdentity.parse(identity)
        candidates: List[Tuple[Tuple[int, ...], str]] = []
        for root in self.gac_roots:
            candidates.extend(self._find_in_root(pathlib.Path(root), parsed))

        if not candidates:
            raise AssemblyLookupError(
                f"Unable to locate assembly '{identity}' in the global assembly cache "
                f"(searched: {', '.join(self.gac_roots) or 'nothing'})"
            )

        # Earlier roots win for the same version.
        candidates.sort(key=lambda c: c[0], reverse=True)
        location = candidates[0][1]

        self.logger.log(f"Resolved GAC assembly '{identity}' to {location}", logging.DEBUG)
        self._cache[identity] = location
        return location

    def release(self) -> None:
        self._cache.clear()
        self.released = True

    def _find_in_root(
        self, root: pathlib.Path, identity: AssemblyIdentity
    ) -> List[Tuple[Tuple[int, ...], str]]:
        if not root.is_dir():
            return []

        name_dirs = [root / identity.name]
        name_dirs.extend(root / arch / identity.name for arch in GAC_ARCHITECTURE_FOLDERS)

        found = []
        for name_dir in name_dirs:
            name_dir = self._existing_case_insensitive(name_dir)
            if name_dir is None:
                continue

            for version_dir in sorted(name_dir.iterdir()):
                if not version_dir.is_dir():
                    continue
                version = identity.matches_cache_folder(version_dir.name)
                if version is None:
                    continue
                assembly_file = self._assembly_file(version_dir, identity.name)
                if assembly_file is not None:
                    found.append((version_key(version), str(assembly_file)))

        return found

    @staticmethod
    def _existing_case_insensitive(path: pathlib.Path) -> Optional[pathlib.Path]:
        if path.is_dir():
            return path
        parent = path.parent
        if not parent.is_dir():
            return None
        wanted = path.name.lower()
        for child in parent.iterdir():
            if child.name.lower() == wanted and child.is_dir():
                return child
        return None

    @staticmethod
    def _assembly_file(version_dir: pathlib.Path, name: str) -> Optional[pathlib.Path]:
        wanted = {(name + ext).lower() for ext in ASSEMBLY_EXTENSIONS}
        for child in sorted(version_dir.iterdir()):
            if child.is_file() and child.name.lower() in wanted:
                return child
        return None


def create_gac_lookup_factory(
    default_gac_roots: List[str], logger: Optional[DepCopyLogger] = None
) -> AssemblyLookupFactory:
    """
    Build a factory creating a GacDirectoryLookup for a project.

    The project's own gac_roots take precedence over the defaults.
    """

    def factory(project: "DependencyProject") -> AssemblyLookup:
        roots = project.gac_roots if project.gac_roots else default_gac_roots
        return GacDirectoryLookup([os.fspath(r) for r in roots], logger)

    return factory
