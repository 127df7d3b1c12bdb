"""
NIST Downsampler command-line tool.

Downsamples an image by a factor of two using a Gaussian filter followed by
decimation, as recommended by NIST IR 7839 and NIST SP 500-289, and writes
the result as a PGM file stamped with the downsampler's provenance tag.

Usage:
    nist-downsampler <input image> <output image.pgm>
    nist-downsampler -h | -help | ?

This module is the only place that turns errors into exit statuses.
"""

from pathlib import Path
from typing import List, Optional, Tuple
import logging
import os
import sys

from ND_Libs.constants import (
    DEFAULT_LOG_LEVEL,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EXPECTED_ARGUMENT_COUNT,
    HELP_FLAGS,
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
)
from ND_Libs.errors import (
    ArgumentError,
    DownsamplerError,
    ImageDecodeError,
    InputImageError,
    OutputImageError,
)
from ND_Libs.NodesLib.output_node import check_output_writable, is_pgm_path
from ND_Libs.PipelineLib.node_executors import get_default_registry
from ND_Libs.PipelineLib.pipeline_builder import (
    build_downsample_pipeline,
    execute_pipeline,
    get_pipeline_summary,
    validate_pipeline,
)

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "nist-downsampler"


def configure_logging() -> None:
    """Send log records to stderr at the level named by ND_LOG_LEVEL."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = getattr(logging, DEFAULT_LOG_LEVEL)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def print_usage(executable: str) -> None:
    """Print the usage instructions to stderr."""
    sys.stderr.write(
        f"\nUSAGE: {executable} [INPUT IMAGE] [OUTPUT IMAGE]\n(Output image must be .PGM)\n"
    )


def parse_arguments(args: List[str]) -> Optional[Tuple[str, str]]:
    """
    Parse the arguments that follow the executable name.

    Args:
        args: Command-line arguments without the executable

    Returns:
        (input_path, output_path), or None when help was requested

    Raises:
        ArgumentError: If the argument count or output extension is wrong
    """
    if args and len(args) <= EXPECTED_ARGUMENT_COUNT and args[0] in HELP_FLAGS:
        return None

    if len(args) != EXPECTED_ARGUMENT_COUNT:
        raise ArgumentError("Incorrect number of arguments!")

    input_path, output_path = args
    if not is_pgm_path(output_path):
        raise ArgumentError(f"Output image must be .PGM: \"{output_path}\"!")

    return input_path, output_path


def downsample_file(input_path: str, output_path: str) -> Path:
    """
    Run the downsample pipeline from one file to another.

    Returns:
        Path of the written PGM file

    Raises:
        InputImageError: If the input cannot be opened
        ImageDecodeError: If the input cannot be decoded
        OutputImageError: If the output cannot be written or annotated
    """
    registry = get_default_registry()
    pipeline = build_downsample_pipeline(input_path, output_path)

    is_valid, errors = validate_pipeline(pipeline, registry)
    if not is_valid:
        raise DownsamplerError("; ".join(errors))

    logger.debug(get_pipeline_summary(pipeline))
    results = execute_pipeline(pipeline, registry)
    return results["output"]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line tool.

    Args:
        argv: Full argument vector including the executable (default: sys.argv)

    Returns:
        Process exit status
    """
    if argv is None:
        argv = sys.argv

    configure_logging()
    executable = argv[0] if argv else DEFAULT_EXECUTABLE

    try:
        parsed = parse_arguments(list(argv[1:]))
    except ArgumentError as e:
        sys.stderr.write(f"ERROR: {e}\n")
        print_usage(executable)
        return EXIT_FAILURE

    if parsed is None:
        print_usage(executable)
        return EXIT_SUCCESS

    input_path, output_path = parsed

    try:
        check_output_writable(output_path)
    except OutputImageError:
        sys.stderr.write(f"ERROR: Cannot open output file: \"{output_path}\"!\n")
        print_usage(executable)
        return EXIT_FAILURE

    try:
        downsample_file(input_path, output_path)
    except InputImageError:
        sys.stderr.write(f"ERROR: Cannot open input file:  \"{input_path}\"!\n")
        print_usage(executable)
        return EXIT_FAILURE
    except ImageDecodeError as e:
        sys.stderr.write(f"IMAGE ERROR: {e}\nEncountered while processing file: {input_path}\n")
        return EXIT_FAILURE
    except (DownsamplerError, OSError, ValueError) as e:
        sys.stderr.write(f"ERROR: {e}\nEncountered while processing file: {input_path}\n")
        return EXIT_FAILURE
    except Exception:
        logger.debug("Unhandled exception", exc_info=True)
        sys.stderr.write(f"Encountered an unknown exception while processing file: {input_path}\n")
        return EXIT_FAILURE

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
