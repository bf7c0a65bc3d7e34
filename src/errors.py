"""
Exception types raised while resolving, probing and writing results.
"""

from typing import List, Optional


class VideoResolutionError(Exception):
    """Base class for all errors raised by the tool"""


class InputError(VideoResolutionError):
    """The input parameters could not be turned into a list of files"""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class ProberUnavailableError(VideoResolutionError):
    """ffprobe could not be found or started"""


class ProbeFailure(VideoResolutionError):
    """A single file could not be probed"""

    def __init__(self, path: str, message: str):
        super().__init__(f"Error probing {path}: {message}")
        self.path = path
        self.message = message


class OutputDirectoryError(VideoResolutionError):
    """The output directory is missing and could not be created"""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            f"Output directory: {directory} does not exist and unable to create. "
            f"Exception: {reason}"
        )
        self.directory = directory
        self.reason = reason


class OutputWriteError(VideoResolutionError):
    """A report file could not be written to the output directory"""

    def __init__(self, directory: str, reason: str):
        super().__init__(f"Unable to write output files to {directory}. Exception: {reason}")
        self.directory = directory
        self.reason = reason
