"""
PipelineLib - Node registry and pipeline execution

This module wires the downsampler's nodes into a linear pipeline and
runs it through the node executor registry.
"""

from ND_Libs.PipelineLib.node_executors import (
    NodeExecutorRegistry,
    get_default_registry,
    register_default_executors,
)
from ND_Libs.PipelineLib.pipeline_builder import (
    build_downsample_pipeline,
    build_execution_pipeline,
    execute_pipeline,
    get_pipeline_summary,
    validate_pipeline,
)

__all__ = [
    "NodeExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
    "build_downsample_pipeline",
    "build_execution_pipeline",
    "execute_pipeline",
    "get_pipeline_summary",
    "validate_pipeline",
]
