"""
Writes report files to the output directory.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from config import JSON_INDENT, OUTPUT_FILE_PREFIX, OUTPUT_TIMESTAMP_FORMAT
from errors import OutputDirectoryError, OutputWriteError
from report import ReportGenerator

logger = logging.getLogger(__name__)


class OutputWriter:
    """Persists a report as a timestamped .log and .json file pair"""

    def __init__(self, output_directory: str):
        self.output_directory = Path(output_directory)

    def ensure_directory(self) -> None:
        """
        Create the output directory if it does not exist.

        Raises:
            OutputDirectoryError: If the directory cannot be created
        """
        if self.output_directory.is_dir():
            return
        try:
            self.output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(str(self.output_directory), str(e)) from e

    def base_name(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now()
        return f"{OUTPUT_FILE_PREFIX}{now.strftime(OUTPUT_TIMESTAMP_FORMAT)}"

    def write(self, report: ReportGenerator, now: Optional[datetime] = None) -> Tuple[Path, Path]:
        """
        Write the log and JSON files for a report.

        Args:
            report: Report to persist
            now: Timestamp used in the file names, defaults to local time

        Returns:
            Tuple of (log_path, json_path)
        """
        self.ensure_directory()
        base_name = self.base_name(now)

        log_path = self.output_directory / f"{base_name}.log"
        json_path = self.output_directory / f"{base_name}.json"
        written = []
        try:
            with open(log_path, 'w', encoding='utf-8', newline='\n') as f:
                written.append(log_path)
                for line in report.log_lines():
                    f.write(line + "\n")

            with open(json_path, 'w', encoding='utf-8') as f:
                written.append(json_path)
                json.dump(report.records_as_dicts(), f, indent=JSON_INDENT, ensure_ascii=False)
        except OSError as e:
            for path in written:
                path.unlink(missing_ok=True)
            raise OutputWriteError(str(self.output_directory), str(e)) from e

        logger.info("Log file written: %s", log_path)
        logger.info("JSON file written: %s", json_path)
        return log_path, json_path
