"""
Pipeline Builder for the downsample chain.

The downsampler runs a fixed linear pipeline:

    Image Import -> Gaussian Filter -> Decimate -> Output

Each node sits in its own stage and consumes the result of the stage
before it. Stages run one at a time, in order, on the calling thread.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import logging

from ND_Libs.constants import FIELD_NODE_ID, FIELD_NODE_INPUTS, FIELD_NODE_TYPE
from ND_Libs.NodesLib.downsample_node import (
    create_decimate_node,
    create_gaussian_filter_node,
)
from ND_Libs.NodesLib.image_import_node import create_image_import_node
from ND_Libs.NodesLib.output_node import create_output_node
from ND_Libs.PipelineLib.node_executors import NodeExecutorRegistry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def build_execution_pipeline(nodes: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Place each node of a linear chain in its own stage.

    Args:
        nodes: Node dictionaries in execution order

    Returns:
        Dictionary with pipeline structure:
        {
            "stages": [
                {"stage_number": 0, "nodes": [...]},
                ...
            ],
            "max_stage": int,
            "execution_order": ["node-id-1", "node-id-2", ...]
        }
    """
    stages = [
        {"stage_number": index, "nodes": [dict(node)]}
        for index, node in enumerate(nodes)
    ]
    return {
        "stages": stages,
        "max_stage": len(stages) - 1,
        "execution_order": [str(node.get(FIELD_NODE_ID, "")) for node in nodes],
    }


def build_downsample_pipeline(input_path: PathLike, output_path: PathLike) -> Dict[str, Any]:
    """
    Build the import -> filter -> decimate -> output pipeline.

    Args:
        input_path: Image file to read
        output_path: PGM file to write

    Returns:
        Pipeline structure from build_execution_pipeline()
    """
    nodes = [
        create_image_import_node("import", input_path),
        create_gaussian_filter_node("gaussian", "import"),
        create_decimate_node("decimate", "gaussian"),
        create_output_node("output", "decimate", output_path),
    ]
    return build_execution_pipeline(nodes)


def validate_pipeline(
    pipeline: Dict[str, Any],
    registry: NodeExecutorRegistry,
) -> Tuple[bool, List[str]]:
    """
    Validate pipeline structure against a registry.

    Performs the following checks:
    - Pipeline has at least one stage
    - Each node id appears exactly once
    - Every node type has a registered executor
    - Every input refers to a node from an earlier stage
    - Every node gets the input count its type expects

    Returns:
        Tuple of (is_valid: bool, errors: List[str])
    """
    errors: List[str] = []
    stages = pipeline.get("stages", [])

    if not stages:
        errors.append("Pipeline has no stages")

    execution_order = pipeline.get("execution_order", [])
    if len(execution_order) != len(set(execution_order)):
        duplicates = sorted({nid for nid in execution_order if execution_order.count(nid) > 1})
        errors.append(f"Nodes appear multiple times in pipeline: {', '.join(duplicates)}")

    seen: set = set()
    for stage in stages:
        for node in stage.get("nodes", []):
            node_id = str(node.get(FIELD_NODE_ID, ""))
            node_type = str(node.get(FIELD_NODE_TYPE, ""))
            inputs = node.get(FIELD_NODE_INPUTS, [])

            if not registry.has_executor(node_type):
                errors.append(f"Node '{node_id}': no executor for type '{node_type}'")
            else:
                expected = registry.get_metadata(node_type)["input_count"]
                if len(inputs) != expected:
                    errors.append(
                        f"Node '{node_id}': expected {expected} input(s), got {len(inputs)}"
                    )

            for input_id in inputs:
                if input_id not in seen:
                    errors.append(
                        f"Node '{node_id}': input '{input_id}' is not produced by an earlier stage"
                    )

        for node in stage.get("nodes", []):
            seen.add(str(node.get(FIELD_NODE_ID, "")))

    return not errors, errors


def execute_pipeline(
    pipeline: Dict[str, Any],
    registry: NodeExecutorRegistry,
) -> Dict[str, Any]:
    """
    Execute nodes in stage order.

    Args:
        pipeline: Pipeline structure from build_execution_pipeline()
        registry: Registry used to look up each node's executor

    Returns:
        Dictionary mapping node_id -> execution result

    Raises:
        KeyError: If a node type has no registered executor
        Exception: Any exception raised by node executors, unchanged
    """
    results: Dict[str, Any] = {}

    for stage in pipeline.get("stages", []):
        for node in stage.get("nodes", []):
            node_id = str(node.get(FIELD_NODE_ID, ""))
            node_type = node.get(FIELD_NODE_TYPE, "")
            executor_fn = registry.get_executor(node_type)
            inputs = [results[dep_id] for dep_id in node.get(FIELD_NODE_INPUTS, [])]

            logger.debug(f"Stage {stage.get('stage_number', 0)}: running {node_type} ({node_id})")
            try:
                results[node_id] = executor_fn(node, inputs)
            except Exception:
                logger.debug(f"Node {node_id} ({node_type}) failed", exc_info=True)
                raise

    return results


def get_pipeline_summary(pipeline: Dict[str, Any]) -> str:
    """
    Generate human-readable summary of pipeline structure.

    Example:
        >>> print(get_pipeline_summary(build_downsample_pipeline("in.png", "out.pgm")))
        Pipeline Summary:
          Total Stages: 4
        ...
    """
    stages = pipeline.get("stages", [])
    execution_order = pipeline.get("execution_order", [])

    lines = [
        "Pipeline Summary:",
        f"  Total Stages: {pipeline.get('max_stage', -1) + 1}",
        f"  Total Nodes: {len(execution_order)}",
        "",
    ]

    for stage in stages:
        lines.append(f"Stage {stage.get('stage_number', 0)}:")
        for node in stage.get("nodes", []):
            inputs = node.get(FIELD_NODE_INPUTS, [])
            input_str = f" <- [{', '.join(inputs)}]" if inputs else " (source)"
            lines.append(
                f"  - {node.get(FIELD_NODE_TYPE, 'Unknown')} ({node.get(FIELD_NODE_ID, 'unknown')}){input_str}"
            )

    lines.append("")
    lines.append(f"Execution Order: {' -> '.join(execution_order)}")

    return "\n".join(lines)
