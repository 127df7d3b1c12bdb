"""
Pytest configuration and shared fixtures for NIST Downsampler tests.

This module provides shared test fixtures used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image

from ND_Libs.ImageEditingLib.raster_models import Raster


@pytest.fixture
def uniform_raster():
    """
    Provide a 10x10 grayscale raster with every sample set to 200.

    Returns:
        Raster of constant value
    """
    return Raster.from_array(np.full((10, 10), 200, dtype=np.uint8))


@pytest.fixture
def gradient_raster():
    """
    Provide a 12x9 grayscale raster with a diagonal gradient.

    Returns:
        Raster whose sample at (x, y) is (x * 20 + y * 7) % 256
    """
    ys, xs = np.mgrid[0:9, 0:12]
    return Raster.from_array(((xs * 20 + ys * 7) % 256).astype(np.uint8))


@pytest.fixture
def gray_png(tmp_path):
    """
    Write a 16x12 grayscale PNG and return its path.

    Returns:
        Path to the PNG file
    """
    path = tmp_path / "gray.png"
    ys, xs = np.mgrid[0:12, 0:16]
    Image.fromarray(((xs * 16 + ys * 3) % 256).astype(np.uint8)).save(path)
    return path


@pytest.fixture
def rgb_png(tmp_path):
    """
    Write an 8x8 RGB PNG and return its path.

    Returns:
        Path to the PNG file
    """
    path = tmp_path / "color.png"
    Image.new("RGB", (8, 8), (255, 0, 128)).save(path)
    return path
