"""
Error types raised by the NIST Downsampler.

Library code raises these and never exits the process; the command-line
entry point maps each one to a diagnostic and an exit status.

Classes:
    DownsamplerError: Base class for every downsampler failure
    ArgumentError: Bad command-line arguments
    InputImageError: Input image cannot be opened
    ImageDecodeError: Input image cannot be decoded
    OutputImageError: Output image cannot be opened, written or annotated
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class DownsamplerError(Exception):
    """Base class for downsampler errors."""


class ArgumentError(DownsamplerError, ValueError):
    """Raised for a wrong argument count or an unsupported output extension."""


class InputImageError(DownsamplerError, OSError):
    """Raised when the input image file cannot be opened."""

    def __init__(self, path: PathLike, reason: Optional[str] = None):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot open input file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ImageDecodeError(DownsamplerError, ValueError):
    """Raised when the image library cannot decode the input file."""

    def __init__(self, path: PathLike, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to decode image {self.path}: {reason}")


class OutputImageError(DownsamplerError, OSError):
    """Raised when the output file cannot be opened, written or annotated."""

    def __init__(self, path: PathLike, reason: Optional[str] = None):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot write output file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
