"""
ImageEditingLib - Core raster processing

This module provides the raster models and the Gaussian filter,
decimation and conversion operations of the downsampler.
"""

from ND_Libs.ImageEditingLib.raster_models import Kernel, Point, Raster
from ND_Libs.ImageEditingLib.gaussian_filter import (
    build_kernel,
    convolve,
    gaussian,
    gaussian_filter,
    point_distance,
    round_half_even,
)
from ND_Libs.ImageEditingLib.decimation import decimate
from ND_Libs.ImageEditingLib.image_editing_ops import (
    downsample_image,
    downsample_raster,
    image_to_raster,
    raster_to_image,
)

__all__ = [
    "Kernel",
    "Point",
    "Raster",
    "build_kernel",
    "convolve",
    "gaussian",
    "gaussian_filter",
    "point_distance",
    "round_half_even",
    "decimate",
    "downsample_image",
    "downsample_raster",
    "image_to_raster",
    "raster_to_image",
]
