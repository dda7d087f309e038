"""
Unique dependency copier.

This package handles:
1. Naming each copy with a fresh unique identifier and the source extension
2. Copying file content and metadata
3. Resetting the copy's attributes so later build steps can change it
"""

from .copier import UniqueCopier

__all__ = ["UniqueCopier"]
