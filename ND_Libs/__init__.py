"""
ND_Libs - NIST Downsampler Library Modules

This package contains the downsampler's functionality, organized into
specialized sub-packages:

- ImageEditingLib: Raster models, Gaussian filter and decimation
- NodesLib: Pipeline nodes for image import, filtering and PGM output
- PipelineLib: Node executor registry and pipeline execution
"""

__version__ = "1.0.0"
