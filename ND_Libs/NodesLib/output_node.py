"""
Output Node for the NIST Downsampler.

Writes the downsampled raster as a binary PGM file and stamps it with the
downsampler's provenance tag as a header comment.

The annotation assumes the file starts with a three-byte magic token
("P5\\n") and inserts "#<comment>\\n" right after it. Everything else in the
file is left byte-for-byte unchanged. The rewrite is not atomic.

Classes:
    OutputNodeConfig: Configuration for output node
    OutputNodeHandler: Handles validation, saving and annotation

Functions:
    is_pgm_path: Check an output path has the .pgm extension
    check_output_writable: Prove an output path can be opened for writing
    save_pgm: Write a raster as PGM
    comment_pgm: Insert a comment line into a PGM header
    execute_output_node: Pipeline executor for output nodes
    create_output_node: Helper to create output node dictionary
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

from ND_Libs.constants import (
    DOWNSAMPLER_ID,
    NODE_TYPE_OUTPUT,
    OUTPUT_EXTENSION,
    OUTPUT_SAVE_FORMAT,
    PGM_COMMENT_PREFIX,
    PGM_COMMENT_SUFFIX,
    PGM_MAGIC_LENGTH,
)
from ND_Libs.errors import OutputImageError
from ND_Libs.ImageEditingLib.image_editing_ops import raster_to_image
from ND_Libs.ImageEditingLib.raster_models import Raster

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def output_extension(path: PathLike) -> str:
    """
    Get the lower-cased text after the last '.' in a path.

    A path without any '.' is returned whole.
    """
    return str(path).rsplit(".", 1)[-1].lower()


def is_pgm_path(path: PathLike) -> bool:
    """Check whether a path names a .pgm file (case-insensitive)."""
    return output_extension(path) == OUTPUT_EXTENSION


def check_output_writable(path: PathLike) -> None:
    """
    Open the output path for writing and close it again.

    Creates or truncates the file.

    Raises:
        OutputImageError: If the file cannot be opened for writing
    """
    try:
        with open(path, "wb"):
            pass
    except OSError as e:
        raise OutputImageError(path, e.strerror) from e


def save_pgm(raster: Raster, path: PathLike) -> Path:
    """
    Write a raster as a binary PGM (P5) file.

    Three-channel rasters are written as P6 by the same encoder.

    Raises:
        OutputImageError: If the raster is empty, or the image cannot be
            encoded or written
    """
    output_file = Path(path)
    # The encoder writes the header before it rejects an empty image
    if raster.width == 0 or raster.height == 0:
        raise OutputImageError(
            output_file, f"cannot write empty {raster.width}x{raster.height} image"
        )

    try:
        image = raster_to_image(raster)
        image.save(output_file, format=OUTPUT_SAVE_FORMAT)
    except (OSError, ValueError) as e:
        raise OutputImageError(output_file, str(e)) from e

    logger.debug(f"Wrote {raster.width}x{raster.height} image to {output_file}")
    return output_file


def comment_pgm(pgm_file: PathLike, comment: str) -> None:
    """
    Insert a comment line after the first three bytes of a PGM file.

    Args:
        pgm_file: Path to an existing PGM file
        comment: Comment text (without the leading '#')

    Raises:
        OutputImageError: If the file cannot be read or rewritten
        ValueError: If the file is shorter than its magic token
    """
    path = Path(pgm_file)
    try:
        buffer = path.read_bytes()
    except OSError as e:
        raise OutputImageError(path, e.strerror) from e

    if len(buffer) < PGM_MAGIC_LENGTH:
        raise ValueError(f"File too short to hold a PGM header: {path}")

    annotated = b"".join([
        buffer[:PGM_MAGIC_LENGTH],
        PGM_COMMENT_PREFIX,
        comment.encode("ascii"),
        PGM_COMMENT_SUFFIX,
        buffer[PGM_MAGIC_LENGTH:],
    ])

    try:
        path.write_bytes(annotated)
    except OSError as e:
        raise OutputImageError(path, e.strerror) from e


@dataclass
class OutputNodeConfig:
    """Configuration for output node execution.

    Attributes:
        output_path: Output file path (must end in .pgm)
        comment: Header comment stamped after saving (default: provenance tag)
    """
    output_path: str = "output.pgm"
    comment: str = DOWNSAMPLER_ID

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputNodeConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


class OutputNodeHandler:
    """Validates the output path, saves rasters and annotates the result."""

    def __init__(self, config: OutputNodeConfig):
        """Initialize handler with configuration."""
        self.config = config

    @property
    def output_file(self) -> Path:
        return Path(self.config.output_path)

    def validate(self) -> None:
        """
        Check the output path has a .pgm extension.

        Raises:
            ValueError: If the extension is not pgm
        """
        if not is_pgm_path(self.config.output_path):
            raise ValueError(
                f"Output image must be .PGM, got '.{output_extension(self.config.output_path)}'"
            )

    def save_raster(self, raster: Raster) -> Path:
        """
        Save a raster and stamp the configured comment.

        Returns:
            Path where the raster was saved

        Raises:
            ValueError: If the output path is not a .pgm path
            OutputImageError: If the file cannot be written or annotated
        """
        self.validate()

        output_file = save_pgm(raster, self.output_file)
        comment_pgm(output_file, self.config.comment)

        logger.info(f"Saved downsampled image to {output_file}")
        return output_file


def execute_output_node(node: Dict[str, Any], inputs: List[Any]) -> Path:
    """
    Pipeline executor for output nodes.

    Args:
        node: Node dictionary holding OutputNodeConfig fields
        inputs: Should contain exactly one element: the Raster to save

    Returns:
        Path where the raster was saved

    Raises:
        ValueError: If inputs are empty or the path is not .pgm
        TypeError: If the input is not a Raster
        OutputImageError: If the file cannot be written
    """
    if not inputs:
        raise ValueError("Output node requires 1 input raster")

    raster = inputs[0]
    if not isinstance(raster, Raster):
        raise TypeError(f"Expected Raster, got {type(raster)}")

    config = OutputNodeConfig.from_dict(node)
    return OutputNodeHandler(config).save_raster(raster)


def create_output_node(
    node_id: str,
    input_id: str,
    output_path: PathLike = "output.pgm",
    comment: str = DOWNSAMPLER_ID,
) -> Dict[str, Any]:
    """
    Helper to create an output node dictionary.

    Examples:
        >>> create_output_node("out-1", "decimate-1", "face_half.pgm")
    """
    return {
        "id": node_id,
        "type": NODE_TYPE_OUTPUT,
        "inputs": [input_id],
        "output_path": str(output_path),
        "comment": comment,
    }
