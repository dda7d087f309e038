"""
Unique copier implementation.
"""

import ctypes
import logging
import os
import shutil
import stat
import uuid
from typing import Callable, Iterable, List, Optional

from depcopy.depcopy_exceptions import DependencyCopyError
from depcopy.depcopy_logger import DepCopyLogger
from depcopy.depcopy_settings import DepCopySettings
from depcopy.dependency_models import CopyRecord, ResolvedFile

NORMAL_FILE_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH
FILE_ATTRIBUTE_NORMAL = 0x80


def set_normal_attributes(path: str) -> None:
    """
    Clear read-only, hidden and system attributes on a file.
    """
    os.chmod(path, NORMAL_FILE_MODE)
    if DepCopySettings.is_windows():
        if not ctypes.windll.kernel32.SetFileAttributesW(
            ctypes.c_wchar_p(path), FILE_ATTRIBUTE_NORMAL
        ):
            raise ctypes.WinError()


class UniqueCopier:
    """
    Copies files into a folder under unique names.

    Every copy gets a new random identifier as its base name, so files with the
    same name (e.g. two versions of one assembly) never clash.
    """

    def __init__(
        self,
        logger: Optional[DepCopyLogger] = None,
        progress_cb: Optional[Callable[[CopyRecord], None]] = None,
    ):
        """
        Initialize the unique copier.

        Args:
            logger: Logger for progress and error messages
            progress_cb: Called with the record of every completed copy
        """
        self.logger = logger or DepCopyLogger()
        self.progress_cb = progress_cb

    @staticmethod
    def unique_destination(source_path: str, destination_dir: str) -> str:
        """
        Pick the destination for a source file: <uuid><source extension>.
        """
        extension = os.path.splitext(source_path)[1]
        return os.path.join(destination_dir, str(uuid.uuid4()) + extension)

    def copy_unique(self, source_path: str, destination_dir: str) -> CopyRecord:
        """
        Copy one file into destination_dir under a unique name.

        An existing file at the destination is overwritten.

        Args:
            source_path: The file to copy
            destination_dir: Existing folder receiving the copy

        Returns:
            CopyRecord mapping the source to its copy

        Raises:
            DependencyCopyError: If the file cannot be copied
        """
        destination_path = self.unique_destination(source_path, destination_dir)

        try:
            shutil.copy2(source_path, destination_path)
            set_normal_attributes(destination_path)
        except OSError as e:
            error_msg = f"Failed to copy {source_path} -> {destination_path}: {str(e)}"
            self.logger.log(error_msg, logging.ERROR)
            self._remove_partial_copy(destination_path)
            raise DependencyCopyError(error_msg) from e

        record = CopyRecord(source_path=source_path, destination_path=destination_path)
        if self.progress_cb:
            self.progress_cb(record)
        return record

    def _remove_partial_copy(self, destination_path: str) -> None:
        if not os.path.lexists(destination_path):
            return
        try:
            os.chmod(destination_path, stat.S_IREAD | stat.S_IWRITE)
            os.remove(destination_path)
        except OSError as e:
            self.logger.log(
                f"Failed to remove partial copy {destination_path}: {str(e)}",
                logging.WARNING,
            )

    def copy_all(
        self, files: Iterable[ResolvedFile], destination_dir: str
    ) -> List[CopyRecord]:
        """
        Copy every resolved file, in order. The first failure stops the run.
        """
        return [self.copy_unique(f.path, destination_dir) for f in files]
