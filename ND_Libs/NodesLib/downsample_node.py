"""
Downsample Nodes for the NIST Downsampler pipeline.

Wraps the Gaussian filter and decimation stages for use with the node
executor registry. Neither node takes parameters: the filter always uses
the fixed NIST kernel from ND_Libs.constants.

Example:
    >>> from ND_Libs.PipelineLib.node_executors import get_default_registry
    >>> registry = get_default_registry()
    >>> filter_node = create_gaussian_filter_node("filter-1", "import-1")
    >>> blurred = registry.execute("Gaussian Filter", filter_node, [raster])
"""

from typing import Any, Dict, List

from ND_Libs.constants import (
    KERNEL_RADIUS,
    KERNEL_SIGMA,
    NODE_TYPE_DECIMATE,
    NODE_TYPE_GAUSSIAN_FILTER,
)
from ND_Libs.ImageEditingLib.decimation import decimate
from ND_Libs.ImageEditingLib.gaussian_filter import build_kernel, convolve
from ND_Libs.ImageEditingLib.raster_models import Raster


def _single_raster_input(node_name: str, inputs: List[Any]) -> Raster:
    if not inputs:
        raise ValueError(f"{node_name} node requires raster input")

    raster = inputs[0]
    if not isinstance(raster, Raster):
        raise TypeError(f"Expected Raster, got {type(raster)}")
    return raster


def execute_gaussian_filter_node(node: Dict[str, Any], inputs: List[Any]) -> Raster:
    """
    Execute the Gaussian filter stage.

    Inputs:
        - [0]: Raster to filter

    Returns:
        Filtered Raster of the same size

    Raises:
        ValueError: If no input
        TypeError: If input is not a Raster
    """
    raster = _single_raster_input("Gaussian Filter", inputs)
    kernel = build_kernel(KERNEL_RADIUS, KERNEL_SIGMA)
    return convolve(raster, kernel)


def execute_decimate_node(node: Dict[str, Any], inputs: List[Any]) -> Raster:
    """
    Execute the decimation stage.

    Inputs:
        - [0]: Raster to decimate

    Returns:
        Raster of half the width and height
    """
    raster = _single_raster_input("Decimate", inputs)
    return decimate(raster)


def create_gaussian_filter_node(node_id: str, input_id: str) -> Dict[str, Any]:
    """Create a Gaussian filter node fed by input_id."""
    return {
        "id": node_id,
        "type": NODE_TYPE_GAUSSIAN_FILTER,
        "inputs": [input_id],
    }


def create_decimate_node(node_id: str, input_id: str) -> Dict[str, Any]:
    """Create a decimation node fed by input_id."""
    return {
        "id": node_id,
        "type": NODE_TYPE_DECIMATE,
        "inputs": [input_id],
    }
