"""
Main entry point for the Video Resolution tool.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Callable, List, Optional, TextIO

from tqdm import tqdm

from config import FFPROBE_ENV_VAR
from data_structures import RunContext, RunOptions
from errors import (
    InputError, OutputDirectoryError, OutputWriteError, ProbeFailure, VideoResolutionError
)
from output_writer import OutputWriter
from report import ReportGenerator
from scanner import InputResolver
from video_metadata import VideoMetadataParser, VideoRecord

logger = logging.getLogger(__name__)

Prober = Callable[[str], VideoRecord]


def setup_logging(verbose: bool):
    """Configure logging; results go to stdout so logs go to stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="video-resolution",
        description="Probe video files for their resolution and size using ffprobe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Single file in the current directory
  %(prog)s --file ExampleFile.mkv

  # File relative to an input directory
  %(prog)s --file ExampleFile.mkv --input-directory /videos

  # Every video under a directory, writing .log and .json files
  %(prog)s --input-directory /videos --recursive --output-directory /videos/logs

  # Paths piped in on stdin
  find /videos -name '*.mkv' | %(prog)s --files - --json
        """
    )
    parser.add_argument("--files", nargs="+", metavar="PATH",
                        help="Files to process; '-' reads paths from stdin, one per line")
    parser.add_argument("--file",
                        help="Single file; joined to --input-directory if not found as given")
    parser.add_argument("--input-directory",
                        help="Directory to scan, or base directory for --file")
    parser.add_argument("--recursive", action="store_true",
                        help="Also scan sub-directories of --input-directory")
    parser.add_argument("--output-directory",
                        help="Write VideoResolution_<timestamp>.log/.json files here")
    parser.add_argument("--json", action="store_true",
                        help="Output results as JSON instead of the text report")
    parser.add_argument("--object", dest="as_object", action="store_true",
                        help="Output one JSON record per line (takes priority over --json)")
    parser.add_argument("--ffprobe", dest="ffprobe_cmd",
                        help=f"ffprobe executable (default: ${FFPROBE_ENV_VAR} or 'ffprobe')")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    return parser


def read_files_from_stdin(stream: TextIO) -> List[str]:
    """Read one path per line, skipping blank lines"""
    return [line.strip() for line in stream if line.strip()]


def options_from_args(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> RunOptions:
    files = args.files
    if files == ["-"]:
        files = read_files_from_stdin(stdin or sys.stdin)
        if not files:
            raise InputError("no file paths received on stdin")

    return RunOptions(
        files=files,
        file=args.file,
        input_directory=args.input_directory,
        recursive=args.recursive,
        output_directory=args.output_directory,
        json=args.json,
        as_object=args.as_object,
        ffprobe_cmd=args.ffprobe_cmd,
    )


def resolve_files(context: RunContext, resolver: Optional[InputResolver] = None) -> None:
    resolver = resolver or InputResolver()
    options = context.options
    context.files_to_process = resolver.resolve(
        files=options.files,
        file=options.file,
        input_directory=options.input_directory,
        recursive=options.recursive,
    )
    logger.debug("Resolved %d file(s) to process", len(context.files_to_process))


def probe_files(context: RunContext, prober: Prober) -> None:
    """
    Probe every resolved file in order.

    A ProbeFailure is recorded and the loop moves on; ProberUnavailableError
    is left to propagate since no further file can be probed.
    """
    total = len(context.files_to_process)
    with tqdm(total=total, desc="Processing video files", unit="file",
              disable=total <= 1) as progress:
        for path in context.files_to_process:
            try:
                context.records.append(prober(path))
            except ProbeFailure as e:
                logger.error("%s", e)
                context.add_diagnostic(str(e))
            progress.update(1)


def write_output(context: RunContext, now: Optional[datetime] = None) -> None:
    """Write the report files if requested, then build the result for the chosen mode."""
    options = context.options
    report = ReportGenerator(context.records)

    if options.output_directory:
        try:
            context.log_path, context.json_path = OutputWriter(options.output_directory).write(report, now)
        except (OutputDirectoryError, OutputWriteError) as e:
            logger.warning("%s", e)
            context.add_diagnostic(str(e))

    if options.as_object:
        context.result = list(context.records)
    elif options.json:
        context.result = report.json_document()
    else:
        context.result = report.host_lines()


def run(options: RunOptions, prober: Optional[Prober] = None,
        now: Optional[datetime] = None) -> RunContext:
    """
    Resolve, probe and report.

    Args:
        options: Run parameters
        prober: Callable returning a VideoRecord for a path; defaults to ffprobe
        now: Timestamp for the output file names

    Returns:
        RunContext holding the records, diagnostics and result

    Raises:
        InputError: The input parameters did not resolve to files
        ProberUnavailableError: ffprobe is not available
    """
    if prober is None:
        def prober(path: str) -> VideoRecord:
            return VideoMetadataParser.probe(path, cmd=options.ffprobe_cmd)

    context = RunContext(options=options)
    resolve_files(context)
    probe_files(context, prober)
    write_output(context, now)
    return context


def get_video_resolution(options: RunOptions, prober: Optional[Prober] = None):
    """Run and return only the result: lines, a JSON string or the records."""
    return run(options, prober).result


def print_result(context: RunContext, out: TextIO) -> None:
    result = context.result
    if context.options.as_object:
        for record in result:
            print(json.dumps(record.to_dict(), ensure_ascii=False), file=out)
    elif isinstance(result, str):
        print(result, file=out)
    else:
        for line in result:
            print(line, file=out)


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = options_from_args(args, stdin)
        context = run(options)
    except VideoResolutionError as e:
        logger.error("%s, terminating.", e)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130

    print_result(context, stdout or sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
