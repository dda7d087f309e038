"""
Defines the platform-dependent default settings for depcopy
"""

import os
import pathlib
import platform
from typing import List


class DepCopySettings:
    """
    Provides the various platform-dependent default locations used by depcopy
    """

    @staticmethod
    def is_windows() -> bool:
        return platform.system() == "Windows"

    @staticmethod
    def get_default_gac_roots() -> List[str]:
        """
        Returns the global assembly cache roots searched when none are configured.

        On Windows these are the .NET 4 and legacy assembly folders under %WINDIR%.
        Elsewhere the Mono gac folders are used.
        """
        if DepCopySettings.is_windows():
            windir = os.environ.get("WINDIR", r"C:\Windows")
            return [
                str(pathlib.PureWindowsPath(windir, "Microsoft.NET", "assembly")),
                str(pathlib.PureWindowsPath(windir, "assembly")),
            ]

        return [
            str(pathlib.PurePosixPath(prefix, "lib", "mono", "gac"))
            for prefix in ("/usr", "/usr/local")
        ]
