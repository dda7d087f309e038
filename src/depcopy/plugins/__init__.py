"""
Unique Dependency Copy plug-in

Replaces the help file builder's dependency copy step with one that gives every
copied assembly a unique file name, so different versions of one assembly can
be referenced in the same build.
"""

from .unique_dependency_copy import UniqueDependencyCopy


def create_plugin() -> UniqueDependencyCopy:
    return UniqueDependencyCopy()


__all__ = ["UniqueDependencyCopy", "create_plugin"]
