"""
Core image operations for the NIST Downsampler.

This module bridges Pillow images and rasters and composes the three
pipeline stages into a single in-memory downsample.

Functions:
    normalize_mode: Convert an image to a mode the pipeline supports
    image_to_raster: Copy a Pillow image into a Raster
    raster_to_image: Copy a Raster into a Pillow image
    downsample_raster: Gaussian filter then decimate a raster
    downsample_image: Same as downsample_raster, for a Pillow image
"""

import logging
from typing import Any, Dict

import numpy as np
from PIL import Image

from ND_Libs.constants import KERNEL_RADIUS, KERNEL_SIGMA
from ND_Libs.ImageEditingLib.decimation import decimate
from ND_Libs.ImageEditingLib.gaussian_filter import build_kernel, convolve
from ND_Libs.ImageEditingLib.raster_models import Raster

logger = logging.getLogger(__name__)

# Palette, bilevel and grayscale modes become 8-bit grayscale; every other unsupported mode becomes RGB
GRAYSCALE_FAMILY_MODES = {"1", "L", "LA", "P", "PA", "I", "I;16", "I;16B", "I;16L", "F"}
SUPPORTED_MODES = {"L", "RGB"}

_MODE_BY_CHANNELS: Dict[int, str] = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


def normalize_mode(image: Any) -> Any:
    """
    Convert an image to "L" or "RGB".

    Args:
        image: PIL Image

    Returns:
        The same image if already supported, otherwise a converted copy
    """
    if image.mode in SUPPORTED_MODES:
        return image

    target = "L" if image.mode in GRAYSCALE_FAMILY_MODES else "RGB"
    logger.debug(f"Converting {image.mode} image to {target}")
    return image.convert(target)


def image_to_raster(image: Any) -> Raster:
    """Copy a Pillow image into a new raster, normalizing its mode first."""
    image = normalize_mode(image)
    return Raster.from_array(np.asarray(image, dtype=np.uint8))


def raster_to_image(raster: Raster) -> Any:
    """
    Copy a raster into a new Pillow image.

    Raises:
        ValueError: If the raster's channel count has no Pillow mode
    """
    mode = _MODE_BY_CHANNELS.get(raster.channels)
    if mode is None:
        raise ValueError(f"No image mode for {raster.channels} channels")

    if raster.width == 0 or raster.height == 0:
        return Image.new(mode, raster.size)
    return Image.fromarray(raster.to_array())


def downsample_raster(raster: Raster) -> Raster:
    """
    Downsample a raster by two with the fixed NIST filter.

    Args:
        raster: Source raster (left unmodified)

    Returns:
        New raster of size (width // 2, height // 2)
    """
    kernel = build_kernel(KERNEL_RADIUS, KERNEL_SIGMA)
    blurred = convolve(raster, kernel)
    return decimate(blurred)


def downsample_image(image: Any) -> Any:
    """Downsample a Pillow image by two, returning a new "L" or "RGB" image."""
    return raster_to_image(downsample_raster(image_to_raster(image)))
