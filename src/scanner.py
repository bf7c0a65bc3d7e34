"""
Input Resolver Module for Video Resolution.
Turns the file, file list and directory parameters into the list of files to probe.
"""

import logging
import os
from typing import Iterable, List, Optional, Sequence

from config import VIDEO_EXTENSIONS
from errors import InputError

logger = logging.getLogger(__name__)


def _supplied(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


class InputResolver:
    """Resolves input parameters into an ordered list of video file paths"""

    def __init__(self, extensions: Iterable[str] = VIDEO_EXTENSIONS):
        self.extensions = {e.lower() for e in extensions}

    def resolve(
        self,
        files: Optional[Sequence[str]] = None,
        file: Optional[str] = None,
        input_directory: Optional[str] = None,
        recursive: bool = False,
    ) -> List[str]:
        """
        Resolve the input parameters. The first matching mode wins:
        file list, then single file, then directory scan.

        Args:
            files: Explicit list of file paths
            file: Single file, optionally relative to input_directory
            input_directory: Base directory for file, or directory to scan
            recursive: Include sub-directories when scanning

        Returns:
            List of file paths to probe

        Raises:
            InputError: If the parameters do not resolve to existing files
        """
        if files:
            return self._resolve_file_list(files)

        if _supplied(file):
            return self._resolve_single_file(file, input_directory)

        if _supplied(input_directory):
            return self.scan_directory(input_directory, recursive)

        raise InputError("no valid input parameters")

    def _resolve_file_list(self, files: Sequence[str]) -> List[str]:
        missing = [f for f in files if not os.path.isfile(f)]
        if missing:
            for f in missing:
                logger.debug("File not found: %s", f)
            raise InputError("one or more files not found", missing=missing)
        return list(files)

    def _resolve_single_file(self, file: str, input_directory: Optional[str]) -> List[str]:
        if os.path.isfile(file):
            return [file]

        if _supplied(input_directory):
            joined = os.path.join(input_directory, file)
            if os.path.isfile(joined):
                return [joined]

        raise InputError(f"file not found: {file}")

    def scan_directory(self, directory: str, recursive: bool = False) -> List[str]:
        """
        Collect the video files in a directory.

        Args:
            directory: Directory to scan, used verbatim as the path prefix
            recursive: Descend into sub-directories

        Returns:
            Paths whose extension is in the allow-list, in listing order
        """
        if not os.path.isdir(directory):
            raise InputError(f"directory not found: {directory}")

        video_paths = []
        for root, _dirs, filenames in os.walk(directory):
            for name in filenames:
                if os.path.splitext(name)[1].lower() in self.extensions:
                    video_paths.append(os.path.join(root, name))
            if not recursive:
                break

        logger.debug("Found %d video files in %s", len(video_paths), directory)
        return video_paths
