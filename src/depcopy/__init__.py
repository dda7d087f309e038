"""
depcopy - a help file builder plug-in that copies project dependencies into the
build's working folder under unique names.
"""

__version__ = "1.0.0"
