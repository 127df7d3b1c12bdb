"""
NIST Downsampler Nodes Library.

This module contains the node implementations run by the downsample pipeline.

Modules:
    image_import_node: Image import node for decoding input files
    downsample_node: Gaussian filter and decimation nodes
    output_node: Output node for writing and annotating PGM files
"""

from ND_Libs.NodesLib.image_import_node import (
    ImageImportNode,
    load_image,
    execute_import_image_node,
    create_image_import_node,
)
from ND_Libs.NodesLib.downsample_node import (
    execute_gaussian_filter_node,
    execute_decimate_node,
    create_gaussian_filter_node,
    create_decimate_node,
)
from ND_Libs.NodesLib.output_node import (
    OutputNodeConfig,
    OutputNodeHandler,
    check_output_writable,
    comment_pgm,
    is_pgm_path,
    save_pgm,
    execute_output_node,
    create_output_node,
)

__all__ = [
    "ImageImportNode",
    "load_image",
    "execute_import_image_node",
    "create_image_import_node",
    "execute_gaussian_filter_node",
    "execute_decimate_node",
    "create_gaussian_filter_node",
    "create_decimate_node",
    "OutputNodeConfig",
    "OutputNodeHandler",
    "check_output_writable",
    "comment_pgm",
    "is_pgm_path",
    "save_pgm",
    "execute_output_node",
    "create_output_node",
]
