"""
Configuration parameters for depcopy.
"""

import inspect
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from depcopy.depcopy_exceptions import ConfigurationError
from depcopy.depcopy_settings import DepCopySettings

DEFAULT_DEPENDENCY_FOLDER = "DLL"
DEFAULT_BINARY_EXTENSIONS = (".dll", ".exe")

DEPCOPY_TOML_SCHEMA = """
# depcopy configuration

[depcopy]
# Subfolder of the build working folder that receives the renamed copies.
# The help file builder expects "DLL".
dependency_folder = "DLL"

# Extensions kept when a dependency path contains wildcards.
binary_extensions = [".dll", ".exe"]

# Global assembly cache roots used to resolve "GAC:" dependencies (optional,
# defaults to the platform locations).
# gac_roots = ["C:/Windows/Microsoft.NET/assembly"]

# Logging level for the "depcopy" logger.
log_level = "INFO"
"""


def _normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


@dataclass
class DepCopyConfig:
    """
    Configuration parameters
    """

    dependency_folder: str = DEFAULT_DEPENDENCY_FOLDER
    binary_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_BINARY_EXTENSIONS)
    )
    gac_roots: Optional[List[str]] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(self.dependency_folder, str) or not self.dependency_folder:
            raise ConfigurationError("'dependency_folder' must be a non-empty string")

        if not isinstance(self.binary_extensions, (list, tuple)) or not all(
            isinstance(ext, str) for ext in self.binary_extensions
        ):
            raise ConfigurationError("'binary_extensions' must be a list of strings")
        self.binary_extensions = [
            _normalize_extension(ext) for ext in self.binary_extensions
        ]

        if self.gac_roots is not None and (
            not isinstance(self.gac_roots, list)
            or not all(isinstance(root, str) for root in self.gac_roots)
        ):
            raise ConfigurationError("'gac_roots' must be a list of strings")

        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(str(self.log_level).upper())

    def get_gac_roots(self) -> List[str]:
        if self.gac_roots is None:
            return DepCopySettings.get_default_gac_roots()
        return list(self.gac_roots)

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "DepCopyConfig":
        """
        Create a DepCopyConfig instance from a dictionary. Unknown keys are ignored.
        """
        return cls(
            **{k: v for k, v in env.items() if k in inspect.signature(cls).parameters}
        )

    @classmethod
    def from_toml_file(cls, path: str) -> "DepCopyConfig":
        """
        Load the [depcopy] section of a TOML file.

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        if not os.path.exists(path):
            raise ConfigurationError(
                f"Configuration file not found: {path}\n\n"
                f"Create it with the following schema:\n{DEPCOPY_TOML_SCHEMA}"
            )

        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse {path}: {str(e)}") from e

        section = toml_dict.get("depcopy", {})
        if not isinstance(section, dict):
            raise ConfigurationError("[depcopy] must be a table")

        return cls.from_dict(section)
