"""
Constants and defaults for the Video Resolution tool.
"""

import os
from typing import List, Set

# Extensions picked up when scanning an input directory (compared lower-cased)
VIDEO_EXTENSIONS: Set[str] = {
    ".avi", ".divx", ".iso", ".m2ts", ".m4v",
    ".mkv", ".mp4", ".mpg", ".x265", ".wmv",
}

BYTES_PER_MEGABYTE = 1024 * 1024
BYTES_PER_GIGABYTE = 1024 * 1024 * 1024

# Report layout
RESOLUTION_HEADER: List[str] = ["", "Ordered by resolution:", "----------------------"]
NAME_HEADER: List[str] = ["", "Ordered by name:", "----------------"]
RESULTS_HEADER: List[str] = ["", "Resolution  Size (Mb)   File", "----------  ---------   ----"]
FINISHED_BANNER: List[str] = ["", "Finished! Here are the results:"]
COLUMN_WIDTH = 10

# Output files
OUTPUT_FILE_PREFIX = "VideoResolution_"
OUTPUT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
JSON_INDENT = 2

FFPROBE_ENV_VAR = "VIDEO_RESOLUTION_FFPROBE"


def default_ffprobe_cmd() -> str:
    """Return the ffprobe command, honouring the environment override."""
    return os.environ.get(FFPROBE_ENV_VAR) or "ffprobe"
