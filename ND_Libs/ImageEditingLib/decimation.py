"""
2:1 decimation.

Keeps the samples at odd rows and odd columns, per the NIST recommendation,
so source pixel (x, y) lands at (x // 2, y // 2). Even rows and columns are
dropped.
"""

import logging

from ND_Libs.constants import DECIMATION_FACTOR, DECIMATION_PHASE
from ND_Libs.ImageEditingLib.raster_models import Raster

logger = logging.getLogger(__name__)


def decimate(src: Raster) -> Raster:
    """
    Halve a raster in each dimension by odd-index sampling.

    Args:
        src: Source raster (left unmodified)

    Returns:
        New compact raster of size (src.width // 2, src.height // 2)
    """
    width = src.width // DECIMATION_FACTOR
    height = src.height // DECIMATION_FACTOR
    dst = Raster.blank(width, height, src.channels)

    if width and height:
        for channel in range(src.channels):
            kept = src.plane(channel)[DECIMATION_PHASE::DECIMATION_FACTOR,
                                      DECIMATION_PHASE::DECIMATION_FACTOR]
            dst.plane(channel)[:, :] = kept[:height, :width]

    logger.debug(f"Decimated {src.width}x{src.height} raster to {width}x{height}")
    return dst
