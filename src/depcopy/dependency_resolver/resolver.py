"""
Dependency resolver implementation.

Turns the ordered dependency list of a project into concrete files.
"""

import fnmatch
import logging
import os
from typing import Iterable, List, Optional, Sequence

from depcopy.assembly_lookup import AssemblyLookup, AssemblyLookupFactory
from depcopy.depcopy_config import DEFAULT_BINARY_EXTENSIONS
from depcopy.depcopy_exceptions import DependencyResolutionError
from depcopy.depcopy_logger import DepCopyLogger
from depcopy.dependency_models import (
    DependencyProject,
    DependencySpec,
    ResolvedFile,
    has_wildcards,
)


class DependencyResolver:
    """
    Resolves dependency specs to files.

    The assembly lookup is created on the first GAC: reference and released
    once all specs have been processed, whether or not resolution succeeded.
    """

    def __init__(
        self,
        lookup_factory: AssemblyLookupFactory,
        logger: Optional[DepCopyLogger] = None,
        binary_extensions: Iterable[str] = DEFAULT_BINARY_EXTENSIONS,
    ):
        """
        Initialize the dependency resolver.

        Args:
            lookup_factory: Creates the assembly lookup for a project
            logger: Logger for progress and error messages
            binary_extensions: Extensions kept when expanding wildcards
        """
        self.lookup_factory = lookup_factory
        self.logger = logger or DepCopyLogger()
        self.binary_extensions = {ext.lower() for ext in binary_extensions}

    def resolve(
        self, project: DependencyProject, specs: Optional[Sequence[DependencySpec]] = None
    ) -> List[ResolvedFile]:
        """
        Resolve every dependency of a project, in order.

        Args:
            project: The project owning the dependencies, handed to the lookup factory
            specs: Dependencies to resolve; defaults to project.dependencies

        Returns:
            The resolved files in dependency order

        Raises:
            DependencyResolutionError: On the first dependency that cannot be resolved
        """
        if specs is None:
            specs = project.dependencies

        resolved: List[ResolvedFile] = []
        lookup: Optional[AssemblyLookup] = None
        try:
            for spec in specs:
                dependency_path = spec.dependency_path

                if spec.is_gac_reference():
                    if lookup is None:
                        self.logger.log("Creating assembly lookup", logging.DEBUG)
                        lookup = self._create_lookup(project)
                    dependency_path = self._lookup_assembly(lookup, spec.assembly_identity())

                if not has_wildcards(dependency_path):
                    # Existence is checked by the copy.
                    resolved.append(ResolvedFile(path=dependency_path, spec=spec))
                    continue

                for file_path in self._expand_wildcards(dependency_path):
                    resolved.append(ResolvedFile(path=file_path, spec=spec))
        finally:
            if lookup is not None:
                lookup.release()
                self.logger.log("Released assembly lookup", logging.DEBUG)

        self.logger.log(
            f"Resolved {len(specs)} dependencies to {len(resolved)} files",
            logging.DEBUG,
        )
        return resolved

    def _create_lookup(self, project: DependencyProject) -> AssemblyLookup:
        try:
            return self.lookup_factory(project)
        except DependencyResolutionError:
            raise
        except Exception as e:
            error_msg = f"Failed to create assembly lookup: {str(e)}"
            self.logger.log(error_msg, logging.ERROR)
            raise DependencyResolutionError(error_msg) from e

    def _lookup_assembly(self, lookup: AssemblyLookup, identity: str) -> str:
        try:
            return lookup.get_assembly_location(identity)
        except DependencyResolutionError as e:
            self.logger.log(str(e), logging.ERROR)
            raise
        except Exception as e:
            error_msg = f"Failed to look up assembly '{identity}': {str(e)}"
            self.logger.log(error_msg, logging.ERROR)
            raise DependencyResolutionError(error_msg) from e

    def _expand_wildcards(self, dependency_path: str) -> List[str]:
        """
        List the binary modules in a directory matching a file name pattern.

        Only the file name part may hold wildcards. The search is not recursive.

        Args:
            dependency_path: Directory plus file name pattern

        Returns:
            Matching .dll/.exe files, sorted by name
        """
        search_directory, search_pattern = os.path.split(dependency_path)
        if not search_directory:
            search_directory = os.curdir

        try:
            entries = sorted(os.listdir(search_directory))
        except OSError as e:
            error_msg = f"Unable to search {search_directory} for '{search_pattern}': {str(e)}"
            self.logger.log(error_msg, logging.ERROR)
            raise DependencyResolutionError(error_msg) from e

        # Only * and ? are wildcards; a literal [ must not start a character class.
        pattern = search_pattern.lower().replace("[", "[[]")
        files = []
        for entry in entries:
            if not fnmatch.fnmatchcase(entry.lower(), pattern):
                continue
            file_path = os.path.join(search_directory, entry)
            if not os.path.isfile(file_path):
                continue
            extension = os.path.splitext(entry)[1].lower()
            if extension not in self.binary_extensions:
                self.logger.log(f"Skipping non-binary match {file_path}", logging.DEBUG)
                continue
            files.append(file_path)

        return files
