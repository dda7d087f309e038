"""
This file provides the types through which a help file builder host drives its plug-ins:
build steps, execution points, the execution context, the build process facade
and the plug-in interface itself.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from depcopy.depcopy_logger import DepCopyLogger
from depcopy.dependency_models import DependencyProject


class BuildStep(str, Enum):
    """
    The steps of a help file build, in the order the host runs them.
    """

    NONE = "None"
    INITIALIZING = "Initializing"
    CLEAR_WORK_FOLDER = "ClearWorkFolder"
    FINDING_TOOLS = "FindingTools"
    VALIDATING_DOCUMENTATION_SOURCES = "ValidatingDocumentationSources"
    COPY_DEPENDENCIES = "CopyDependencies"
    GENERATE_SHARED_CONTENT = "GenerateSharedContent"
    GENERATE_API_FILTER = "GenerateApiFilter"
    GENERATE_REFLECTION_INFO = "GenerateReflectionInfo"
    GENERATE_NAMESPACE_SUMMARIES = "GenerateNamespaceSummaries"
    TRANSFORM_REFLECTION_INFO = "TransformReflectionInfo"
    COPY_STANDARD_CONTENT = "CopyStandardContent"
    COPY_ADDITIONAL_CONTENT = "CopyAdditionalContent"
    BUILD_TOPICS = "BuildTopics"
    COMPILING_HELP_FILE = "CompilingHelpFile"
    CLEAN_INTERMEDIATES = "CleanIntermediates"
    COMPLETED = "Completed"
    CANCELED = "Canceled"
    FAILED = "Failed"


class ExecutionBehavior(str, Enum):
    """
    How a plug-in runs relative to the host's own handling of a step.
    """

    BEFORE = "Before"
    INSTEAD_OF = "InsteadOf"
    AFTER = "After"


@dataclass(frozen=True)
class ExecutionPoint:
    """A build step a plug-in runs at, and how."""

    build_step: BuildStep
    behavior: ExecutionBehavior


class ExecutionPointCollection(list):
    """
    The execution points a plug-in registers with the host.
    """

    def runs_at(self, build_step: BuildStep, behavior: ExecutionBehavior) -> bool:
        return any(
            p.build_step == build_step and p.behavior == behavior for p in self
        )

    def replaces(self, build_step: BuildStep) -> bool:
        """Check if the plug-in takes over the host's handling of a step."""
        return self.runs_at(build_step, ExecutionBehavior.INSTEAD_OF)


@dataclass
class ExecutionContext:
    """
    Passed to a plug-in each time the host invokes it.
    """

    build_step: BuildStep


class BuildProcess:
    """
    The host build process as seen by a plug-in.

    Progress messages are logged and kept in order in progress_messages.
    """

    def __init__(
        self,
        current_project: DependencyProject,
        working_folder: str,
        logger: Optional[DepCopyLogger] = None,
    ):
        self.current_project = current_project
        self.working_folder = working_folder
        self.logger = logger or DepCopyLogger()
        self.progress_messages: List[str] = []

    def report_progress(self, message: str, *args: Any) -> None:
        """
        Report build progress. args are applied with %-formatting.
        """
        if args:
            message = message % args
        self.progress_messages.append(message)
        self.logger.log(message, logging.INFO)


class PlugIn(ABC):
    """
    Interface every help file builder plug-in implements.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short, friendly plug-in name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Brief description of the plug-in."""

    @property
    @abstractmethod
    def version(self) -> str:
        """The plug-in version."""

    @property
    @abstractmethod
    def copyright(self) -> str:
        """Copyright information for the plug-in."""

    @property
    @abstractmethod
    def minimum_help_file_builder_version(self) -> str:
        """The earliest host version the plug-in works with."""

    @property
    @abstractmethod
    def runs_in_partial_build(self) -> bool:
        """Whether the plug-in is loaded for partial builds."""

    @property
    @abstractmethod
    def execution_points(self) -> ExecutionPointCollection:
        """The points in the build at which the plug-in runs."""

    @abstractmethod
    def configure_plugin(self, current_config: Optional[str]) -> Optional[str]:
        """Let the plug-in edit its configuration fragment and return the new one."""

    @abstractmethod
    def initialize(self, build_process: BuildProcess, configuration: Any = None) -> None:
        """Called by the host at the start of the build."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> None:
        """Called by the host at each registered execution point."""

    def dispose(self) -> None:
        """Release resources held by the plug-in."""

    def __enter__(self) -> "PlugIn":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.dispose()
