"""
Raster data models for the NIST Downsampler.

This module defines the data structures passed between pipeline stages.

Classes:
    Raster: 8-bit sample grid with explicit stride and channel count
    Kernel: Square grid of floating-point filter weights
    Point: Integer 2D coordinate
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import numpy as np

from ND_Libs.constants import SAMPLE_MAX, SAMPLE_MIN


class Point(NamedTuple):
    x: int
    y: int


@dataclass
class Raster:
    """8-bit raster stored row-major in a flat buffer.

    Rows are ``stride`` samples apart. Channels are interleaved inside a row,
    so a row holds ``width * channels`` meaningful samples followed by
    ``stride - width * channels`` padding samples that are never read.

    Attributes:
        width: Number of columns
        height: Number of rows
        channels: Samples per pixel (1 for grayscale)
        stride: Samples from the start of one row to the start of the next
        data: Flat uint8 buffer of ``stride * height`` samples
    """
    width: int
    height: int
    channels: int
    stride: int
    data: np.ndarray

    def __post_init__(self):
        """Validate geometry against the buffer."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Raster size must be non-negative, got {self.width}x{self.height}"
            )
        if self.channels < 1:
            raise ValueError(f"channels must be >= 1, got {self.channels}")
        if self.stride < self.width * self.channels:
            raise ValueError(
                f"stride {self.stride} is smaller than width * channels "
                f"({self.width * self.channels})"
            )
        self.data = np.asarray(self.data, dtype=np.uint8).reshape(-1)
        if self.data.size != self.stride * self.height:
            raise ValueError(
                f"Buffer holds {self.data.size} samples, expected "
                f"{self.stride * self.height}"
            )

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        channels: int = 1,
        stride: Optional[int] = None,
    ) -> "Raster":
        """Allocate a zero-filled raster."""
        if stride is None:
            stride = width * channels
        return cls(
            width=width,
            height=height,
            channels=channels,
            stride=stride,
            data=np.zeros(max(stride, 0) * max(height, 0), dtype=np.uint8),
        )

    @classmethod
    def from_array(cls, array, stride: Optional[int] = None) -> "Raster":
        """
        Build a raster from a (height, width) or (height, width, channels) array.

        Args:
            array: Array-like of sample values in 0-255
            stride: Optional row stride in samples (default: compact)

        Returns:
            New Raster holding a copy of the samples

        Raises:
            ValueError: If the array has the wrong rank or out-of-range values
        """
        values = np.asarray(array)
        if values.ndim == 2:
            values = values[:, :, np.newaxis]
        if values.ndim != 3:
            raise ValueError(f"Expected a 2D or 3D array, got {values.ndim}D")
        if values.size and (values.min() < SAMPLE_MIN or values.max() > SAMPLE_MAX):
            raise ValueError("Sample values must be within 0-255")

        height, width, channels = values.shape
        raster = cls.blank(width, height, channels, stride)
        raster._rows()[:, : width * channels] = values.reshape(height, width * channels)
        return raster

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _rows(self) -> np.ndarray:
        return self.data.reshape(self.height, self.stride)

    def _check_bounds(self, x: int, y: int, channel: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside raster of size {self.width}x{self.height}"
            )
        if not 0 <= channel < self.channels:
            raise IndexError(f"Channel {channel} outside 0-{self.channels - 1}")

    def get_pixel(self, x: int, y: int, channel: int = 0) -> int:
        """Read one sample through the stride."""
        self._check_bounds(x, y, channel)
        return int(self.data[y * self.stride + x * self.channels + channel])

    def set_pixel(self, x: int, y: int, value: int, channel: int = 0) -> None:
        """Write one sample through the stride."""
        self._check_bounds(x, y, channel)
        if not SAMPLE_MIN <= value <= SAMPLE_MAX:
            raise ValueError(f"Sample value must be within 0-255, got {value}")
        self.data[y * self.stride + x * self.channels + channel] = value

    def plane(self, channel: int = 0) -> np.ndarray:
        """
        Get one channel as a (height, width) view.

        The view shares memory with the raster and skips row padding.
        """
        if not 0 <= channel < self.channels:
            raise IndexError(f"Channel {channel} outside 0-{self.channels - 1}")
        row_end = self.width * self.channels
        return self._rows()[:, channel:row_end:self.channels]

    def to_array(self) -> np.ndarray:
        """Return a compact copy, 2D for one channel and 3D otherwise."""
        row_end = self.width * self.channels
        compact = self._rows()[:, :row_end].reshape(self.height, self.width, self.channels)
        if self.channels == 1:
            return compact[:, :, 0].copy()
        return compact.copy()


@dataclass
class Kernel:
    """Square convolution kernel indexed ``weights[y, x]``.

    The center tap sits at ``(radius, radius)``.
    """
    radius: int
    sigma: float
    weights: np.ndarray

    @property
    def length(self) -> int:
        return 2 * self.radius + 1

    def weight(self, x: int, y: int) -> float:
        return float(self.weights[y, x])

    def total(self) -> float:
        return float(self.weights.sum(dtype=np.float64))
