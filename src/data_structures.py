"""
Per-run data structures passed between the resolve, probe and output stages.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from video_metadata import VideoRecord


@dataclass
class RunOptions:
    """Parameters of a single run, as given on the command line"""
    files: Optional[List[str]] = None
    file: Optional[str] = None
    input_directory: Optional[str] = None
    recursive: bool = False
    output_directory: Optional[str] = None
    json: bool = False
    as_object: bool = False
    ffprobe_cmd: Optional[str] = None


@dataclass
class RunContext:
    """
    State accumulated during one run. Created per invocation and
    discarded once the output has been produced.
    """
    options: RunOptions
    files_to_process: List[str] = field(default_factory=list)
    records: List[VideoRecord] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
    log_path: Optional[Path] = None
    json_path: Optional[Path] = None
    # Lines, JSON string or records, depending on the output mode
    result: Any = None

    def add_diagnostic(self, message: str) -> None:
        self.diagnostics.append(message)
