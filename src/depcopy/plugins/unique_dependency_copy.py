"""
Provides the Unique Dependency Copy plug-in for the help file builder.
"""

import logging
import os
from typing import Any, List, Optional

import depcopy
from depcopy.assembly_lookup import AssemblyLookupFactory, create_gac_lookup_factory
from depcopy.depcopy_config import DepCopyConfig
from depcopy.depcopy_exceptions import PlugInNotInitializedError
from depcopy.depcopy_logger import DepCopyLogger
from depcopy.dependency_copier import UniqueCopier
from depcopy.dependency_models import CopyRecord
from depcopy.dependency_resolver import DependencyResolver
from depcopy.plugin_types import (
    BuildProcess,
    BuildStep,
    ExecutionBehavior,
    ExecutionContext,
    ExecutionPoint,
    ExecutionPointCollection,
    PlugIn,
)

PLUGIN_NAME = "Unique Dependency Copy"
PLUGIN_DESCRIPTION = (
    "Overrides the local dependency copy routine with a version that uniquely "
    "names locally copied files. Helps to avoid name clashes when you indirectly "
    "rely on different versions of the same assembly."
)
PLUGIN_COPYRIGHT = "Copyright (c) the depcopy authors"
MINIMUM_HELP_FILE_BUILDER_VERSION = "1.6.0.1"


class UniqueDependencyCopy(PlugIn):
    """
    Plug-in that copies the project's dependencies into the working folder,
    renaming each copy to a unique identifier.

    The standard copy keeps file names, so two versions of the same assembly
    overwrite each other. This one runs instead of it.
    """

    def __init__(
        self,
        config: Optional[DepCopyConfig] = None,
        logger: Optional[DepCopyLogger] = None,
        lookup_factory: Optional[AssemblyLookupFactory] = None,
    ):
        """
        Args:
            config: Package configuration; defaults apply when omitted
            logger: Logger shared with the resolver and copier
            lookup_factory: Creates the assembly lookup for GAC: dependencies
        """
        self.config = config or DepCopyConfig()
        self.logger = logger or DepCopyLogger(self.config.logging_level)
        self.lookup_factory = lookup_factory or create_gac_lookup_factory(
            self.config.get_gac_roots(), self.logger
        )
        self._build_process: Optional[BuildProcess] = None
        self._execution_points: Optional[ExecutionPointCollection] = None

    @property
    def name(self) -> str:
        return PLUGIN_NAME

    @property
    def description(self) -> str:
        return PLUGIN_DESCRIPTION

    @property
    def version(self) -> str:
        return depcopy.__version__

    @property
    def copyright(self) -> str:
        return PLUGIN_COPYRIGHT

    @property
    def minimum_help_file_builder_version(self) -> str:
        # Older hosts do not create the DLL folder the same way.
        return MINIMUM_HELP_FILE_BUILDER_VERSION

    @property
    def runs_in_partial_build(self) -> bool:
        return True

    @property
    def execution_points(self) -> ExecutionPointCollection:
        if self._execution_points is None:
            self._execution_points = ExecutionPointCollection(
                [ExecutionPoint(BuildStep.COPY_DEPENDENCIES, ExecutionBehavior.INSTEAD_OF)]
            )
        return self._execution_points

    @property
    def is_initialized(self) -> bool:
        return self._build_process is not None

    def configure_plugin(self, current_config: Optional[str]) -> Optional[str]:
        """
        This plug-in has no options, so the configuration is returned as given.
        """
        return current_config

    def initialize(self, build_process: BuildProcess, configuration: Any = None) -> None:
        """
        Bind the plug-in to the build process.

        Raises:
            ValueError: If build_process is None
        """
        if build_process is None:
            raise ValueError("build_process must not be None")
        self._build_process = build_process

    def execute(self, context: ExecutionContext) -> None:
        if context.build_step == BuildStep.COPY_DEPENDENCIES:
            self.copy_dependencies()

    def copy_dependencies(self) -> List[CopyRecord]:
        """
        Copy the project dependencies into the DLL folder of the working folder.

        Returns:
            One CopyRecord per copied file, in dependency order

        Raises:
            PlugInNotInitializedError: If initialize() has not been called
            DependencyResolutionError: If a dependency cannot be resolved
            DependencyCopyError: If a file cannot be copied
        """
        if self._build_process is None:
            raise PlugInNotInitializedError(f"{PLUGIN_NAME} has not been initialized")

        build_process = self._build_process
        project = build_process.current_project
        if len(project.dependencies) == 0:
            build_process.report_progress("No dependencies to copy.")
            return []

        # The host hard-codes the "DLL" folder, so the copies go to the same place.
        dependency_folder = os.path.join(
            build_process.working_folder, self.config.dependency_folder
        )
        os.makedirs(dependency_folder, exist_ok=True)

        resolver = DependencyResolver(
            self.lookup_factory, self.logger, self.config.binary_extensions
        )
        resolved = resolver.resolve(project)

        copier = UniqueCopier(
            self.logger,
            progress_cb=lambda record: build_process.report_progress(
                "%s -> %s", record.source_path, record.destination_path
            ),
        )
        records = copier.copy_all(resolved, dependency_folder)

        self.logger.log(
            f"Copied {len(records)} dependencies to {dependency_folder}",
            logging.INFO,
        )
        return records

    def dispose(self) -> None:
        # Nothing is held between builds.
        pass
