"""
Dependency resolution.

This package handles:
1. Resolving GAC: references through the assembly lookup capability
2. Passing literal file paths through untouched
3. Expanding wildcard patterns and keeping only binary modules
"""

from .resolver import DependencyResolver

__all__ = ["DependencyResolver"]
