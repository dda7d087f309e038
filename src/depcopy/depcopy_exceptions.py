"""
This file contains various exceptions raised by depcopy.
"""


class DepCopyException(Exception):
    """
    Exceptions raised by depcopy
    """

    def __init__(self, message: str):
        super().__init__(message)


class DependencyResolutionError(DepCopyException):
    """
    A dependency path could not be turned into concrete files.
    """

    pass


class AssemblyLookupError(DependencyResolutionError):
    """
    An assembly identity could not be located in the global assembly cache.
    """

    pass


class DependencyCopyError(DepCopyException):
    """
    A resolved dependency could not be copied into the dependency folder.
    """

    pass


class PlugInNotInitializedError(DepCopyException):
    """
    The plug-in was asked to run before the host initialized it.
    """

    pass


class ConfigurationError(DepCopyException):
    """
    The depcopy configuration is malformed.
    """

    pass
