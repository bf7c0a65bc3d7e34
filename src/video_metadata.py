"""
Video Metadata Parser Module.
Probes video files for their resolution and size using ffmpeg-python.
"""

import ffmpeg
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import BYTES_PER_GIGABYTE, BYTES_PER_MEGABYTE, COLUMN_WIDTH, default_ffprobe_cmd
from errors import ProbeFailure, ProberUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class VideoRecord:
    """Resolution and size of a single probed video file"""
    path: str
    width: Optional[int]
    height: Optional[int]
    size_in_bytes: int

    def __post_init__(self):
        if self.size_in_bytes < 0:
            raise ValueError(f"size_in_bytes must be non-negative, got {self.size_in_bytes}")

    @property
    def size_in_megabytes(self) -> float:
        return self.size_in_bytes / BYTES_PER_MEGABYTE

    @property
    def size_in_gigabytes(self) -> float:
        return self.size_in_bytes / BYTES_PER_GIGABYTE

    @property
    def resolution(self) -> str:
        """Returns the video resolution as a string (e.g., '1920x1080')"""
        width = "" if self.width is None else self.width
        height = "" if self.height is None else self.height
        return f"{width}x{height}"

    def result_line(self) -> str:
        """Returns the fixed-width report line for this record"""
        resolution = self.resolution.ljust(COLUMN_WIDTH)
        size = f"{self.size_in_megabytes}Mb".ljust(COLUMN_WIDTH)
        return f"{resolution}  {size}  {self.path}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialized shape used by the JSON outputs"""
        return {
            "File": self.path,
            "Width": self.width,
            "Height": self.height,
            "SizeInBytes": self.size_in_bytes,
            "SizeInMb": self.size_in_megabytes,
            "SizeInGb": self.size_in_gigabytes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VideoRecord':
        """Rebuild a record from to_dict() output, ignoring derived keys"""
        return cls(
            path=data["File"],
            width=data.get("Width"),
            height=data.get("Height"),
            size_in_bytes=int(data["SizeInBytes"]),
        )


class VideoMetadataParser:
    """Extracts resolution and size from video files with ffprobe"""

    @staticmethod
    def probe(file_path: str, cmd: Optional[str] = None) -> VideoRecord:
        """
        Probe a single video file.

        Args:
            file_path: Path to the video file, kept verbatim on the record
            cmd: ffprobe executable, defaults to the configured command

        Returns:
            VideoRecord for the file

        Raises:
            ProberUnavailableError: ffprobe is not installed or cannot be run
            ProbeFailure: ffprobe rejected the file or returned unusable output
        """
        cmd = cmd or default_ffprobe_cmd()
        logger.debug("Probing %s with %s", file_path, cmd)

        try:
            probe = ffmpeg.probe(
                str(file_path),
                cmd=cmd,
                v='error',  # Only show errors in ffprobe output
                select_streams='v:0',  # Only analyze first video stream
            )
        except OSError as e:
            # Raised while spawning ffprobe, not while reading the video
            raise ProberUnavailableError(
                f"ffprobe not found or not executable ({cmd}). ffmpeg must be installed."
            ) from e
        except ffmpeg.Error as e:
            stderr = e.stderr.decode(errors='replace').strip() if e.stderr else str(e)
            raise ProbeFailure(str(file_path), stderr) from e
        except ValueError as e:
            # ffprobe stdout was not valid UTF-8 or not JSON
            raise ProbeFailure(str(file_path), f"unreadable ffprobe output: {e}") from e

        try:
            return VideoMetadataParser.parse_probe(file_path, probe)
        except (KeyError, TypeError, ValueError, OSError) as e:
            raise ProbeFailure(str(file_path), f"unexpected ffprobe output: {e}") from e

    @staticmethod
    def parse_probe(file_path: str, probe: Dict[str, Any]) -> VideoRecord:
        """Build a VideoRecord from decoded ffprobe JSON output"""
        video_info = next(
            (s for s in probe.get('streams', []) if s.get('codec_type') == 'video'),
            None,
        )
        width = int(video_info['width']) if video_info and 'width' in video_info else None
        height = int(video_info['height']) if video_info and 'height' in video_info else None

        size = probe.get('format', {}).get('size')
        size_in_bytes = int(size) if size is not None else os.path.getsize(file_path)

        return VideoRecord(
            path=str(file_path),
            width=width,
            height=height,
            size_in_bytes=size_in_bytes,
        )
