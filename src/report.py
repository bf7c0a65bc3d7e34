"""
Report generation for probed video files.

Builds the two orderings (by resolution and by name) and renders them for
the console, the log file and the JSON outputs.
"""

import json
from typing import Any, Dict, List

from config import (
    FINISHED_BANNER, JSON_INDENT, NAME_HEADER, RESOLUTION_HEADER, RESULTS_HEADER
)
from video_metadata import VideoRecord


class ReportGenerator:
    """Formats a list of VideoRecord objects"""

    def __init__(self, records: List[VideoRecord]):
        self.records = list(records)

    def by_resolution(self) -> List[VideoRecord]:
        """Records ordered by width, records without a width first"""
        return sorted(
            self.records,
            key=lambda r: (r.width is not None, r.width or 0)
        )

    def by_name(self) -> List[VideoRecord]:
        """Records ordered by path using plain code point comparison"""
        return sorted(self.records, key=lambda r: r.path)

    def host_lines(self) -> List[str]:
        """
        Lines shown on the console.

        A single result is shown as one table without the ordered sections.
        """
        output = list(FINISHED_BANNER)

        if len(self.records) == 1:
            output.extend(RESULTS_HEADER)
            output.append(self.records[0].result_line())
            output.append("")
            return output

        output.extend(RESOLUTION_HEADER)
        output.extend(RESULTS_HEADER)
        output.extend(r.result_line() for r in self.by_resolution())

        output.extend(NAME_HEADER)
        output.extend(RESULTS_HEADER)
        output.extend(r.result_line() for r in self.by_name())

        output.append("")
        return output

    def log_lines(self) -> List[str]:
        """Lines written to the log file; always both ordered sections"""
        lines = list(RESOLUTION_HEADER)
        lines.extend(r.result_line() for r in self.by_resolution())
        lines.extend(NAME_HEADER)
        lines.extend(r.result_line() for r in self.by_name())
        return lines

    def records_as_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.records]

    def json_document(self) -> str:
        """JSON returned by the --json mode"""
        files = []
        for record in self.records:
            entry = record.to_dict()
            entry["Resolution"] = record.resolution
            files.append(entry)
        return json.dumps({"Files": files}, indent=JSON_INDENT, ensure_ascii=False)
