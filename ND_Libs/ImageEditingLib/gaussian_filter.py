"""
Gaussian low-pass filter for 2:1 downsampling.

Builds the square Gaussian kernel recommended by NIST IR 7839 and applies it
to a raster with the reference tool's boundary and rounding rules:

- Kernel weights come from the 1D Gaussian density evaluated at each tap's
  Euclidean distance from the center, then normalized to sum to 1.
- Taps that fall outside the raster take the value of the pixel being
  filtered (not the nearest edge pixel).
- Weighted sums are quantized with round-half-to-even and clamped to 0-255.

Example:
    >>> from ND_Libs.ImageEditingLib.raster_models import Raster
    >>> raster = Raster.from_array([[200] * 10] * 10)
    >>> kernel = build_kernel(radius=4, sigma=0.8475)
    >>> blurred = convolve(raster, kernel)
"""

import logging
import math

import numpy as np

from ND_Libs.constants import SAMPLE_MAX, SAMPLE_MIN
from ND_Libs.ImageEditingLib.raster_models import Kernel, Point, Raster

logger = logging.getLogger(__name__)


# ============================================================================
# Helpers
# ============================================================================

def round_half_even(value: float) -> int:
    """
    Round to the nearest integer, sending exact halves to the even neighbour.

    Args:
        value: Value to round

    Returns:
        Rounded integer (2.5 -> 2, 3.5 -> 4, 2.4 -> 2, 2.6 -> 3)
    """
    floor = math.floor(value)
    fraction = value - floor
    if fraction < 0.5:
        return floor
    if fraction > 0.5:
        return floor + 1
    return floor if floor % 2 == 0 else floor + 1


def quantize(values: np.ndarray) -> np.ndarray:
    """Round an array half-to-even and clamp it into 8-bit samples."""
    # np.rint rounds ties to even, matching round_half_even
    return np.clip(np.rint(values), SAMPLE_MIN, SAMPLE_MAX).astype(np.uint8)


def point_distance(a: Point, b: Point) -> float:
    """Euclidean distance from a to b."""
    dx = b.x - a.x
    dy = b.y - a.y
    return math.sqrt(float(dx * dx) + dy * dy)


def gaussian(x: float, mu: int, sigma: float) -> float:
    """Value of the normal density with mean mu and deviation sigma at x."""
    return (1 / math.sqrt(2 * math.pi * sigma * sigma)) * math.exp(
        -((x - mu) * (x - mu)) / (2 * sigma * sigma)
    )


# ============================================================================
# Kernel Builder
# ============================================================================

def build_kernel(radius: int, sigma: float) -> Kernel:
    """
    Build a normalized square Gaussian kernel.

    Each weight is the Gaussian density at the tap's distance from the
    center. Weights are held in single precision and summed in double
    precision, which reproduces the reference output exactly.

    Args:
        radius: Kernel radius in pixels (> 0); side length is 2 * radius + 1
        sigma: Gaussian standard deviation (> 0)

    Returns:
        Kernel whose weights sum to 1

    Raises:
        ValueError: If radius or sigma is not positive
    """
    if radius <= 0:
        raise ValueError(f"radius must be > 0, got {radius}")
    if sigma <= 0:
        raise ValueError(f"sigma must be > 0, got {sigma}")

    length = 2 * radius + 1
    center = Point(radius, radius)
    weights = np.empty((length, length), dtype=np.float32)

    for x in range(length):
        for y in range(length):
            distance = np.float32(point_distance(Point(x, y), center))
            weights[y, x] = gaussian(float(distance), 0, sigma)

    total = 0.0
    for x in range(length):
        for y in range(length):
            total += float(weights[y, x])

    weights = (weights.astype(np.float64) / total).astype(np.float32)

    logger.debug(f"Built {length}x{length} Gaussian kernel (sigma={sigma}, raw sum={total})")
    return Kernel(radius=radius, sigma=sigma, weights=weights)


# ============================================================================
# Convolution Filter
# ============================================================================

def _filter_plane(plane: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Filter one (height, width) channel plane."""
    height, width = plane.shape
    radius = kernel.radius
    source = plane.astype(np.float64)
    weighted_sum = np.zeros((height, width), dtype=np.float64)

    # Columns outer, rows inner: the accumulation order fixes the rounding
    for x2 in range(kernel.length):
        dx = x2 - radius
        x_lo, x_hi = max(0, -dx), min(width, width - dx)

        for y2 in range(kernel.length):
            dy = y2 - radius
            y_lo, y_hi = max(0, -dy), min(height, height - dy)

            # Out-of-range taps keep the value of the pixel being filtered
            taps = source.copy()
            if x_lo < x_hi and y_lo < y_hi:
                taps[y_lo:y_hi, x_lo:x_hi] = source[y_lo + dy:y_hi + dy, x_lo + dx:x_hi + dx]

            weighted_sum += taps * np.float64(kernel.weights[y2, x2])

    return quantize(weighted_sum)


def convolve(src: Raster, kernel: Kernel) -> Raster:
    """
    Apply a kernel to every pixel of a raster.

    Args:
        src: Source raster (left unmodified)
        kernel: Normalized kernel

    Returns:
        New compact raster with the same size and channel count
    """
    dst = Raster.blank(src.width, src.height, src.channels)
    if src.width == 0 or src.height == 0:
        return dst

    for channel in range(src.channels):
        dst.plane(channel)[:, :] = _filter_plane(src.plane(channel), kernel)

    logger.debug(
        f"Filtered {src.width}x{src.height} raster ({src.channels} channel(s)) "
        f"with radius {kernel.radius} kernel"
    )
    return dst


def gaussian_filter(src: Raster, sigma: float, radius: int) -> Raster:
    """Build a Gaussian kernel and apply it to src."""
    return convolve(src, build_kernel(radius, sigma))
