"""
Node Executors Registry.

This module provides a centralized registry for node type executors used by
the downsample pipeline.

Classes:
    NodeExecutorRegistry: Registry for node executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register all built-in node executors
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from ND_Libs.constants import (
    NODE_TYPE_DECIMATE,
    NODE_TYPE_GAUSSIAN_FILTER,
    NODE_TYPE_IMAGE_IMPORT,
    NODE_TYPE_OUTPUT,
)

logger = logging.getLogger(__name__)

# Type alias for executor function
ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]



class NodeExecutorRegistry:
    """
    Maps node type names to the functions that run them.

    Each executor is called as ``executor(node_dict, inputs)`` where inputs
    holds the results of the nodes listed in ``node_dict["inputs"]``.

    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Decimate", execute_decimate_node, input_count=1)
        >>> halved = registry.execute("Decimate", node_dict, [raster])
    """

    def __init__(self):
        self._executors: Dict[str, ExecutorFunction] = {}
        self._node_metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        node_type: str,
        executor: ExecutorFunction,
        description: str = "",
        input_count: int = 0,
        output_count: int = 1,
    ) -> None:
        """
        Register the executor for a node type.

        Args:
            node_type: Node type name (e.g., "Decimate")
            executor: Callable accepting (node_dict, inputs)
            description: Short description shown in summaries
            input_count: Number of inputs the node consumes (0 for sources)
            output_count: Number of results the node hands on (0 for sinks)

        Raises:
            ValueError: If node_type is blank or executor is not callable
            RuntimeError: If node_type already has an executor
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if node_type in self._executors:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        self._executors[node_type] = executor
        self._node_metadata[node_type] = {
            "description": str(description),
            "input_count": int(input_count),
            "output_count": int(output_count),
        }

        logger.debug(f"Registered executor for node type: {node_type}")

    def get_executor(self, node_type: str) -> ExecutorFunction:
        """
        Look up the executor for a node type.

        Raises:
            KeyError: If node_type is not registered
        """
        node_type = str(node_type).strip()

        if node_type not in self._executors:
            raise KeyError(
                f"No executor registered for node type '{node_type}'. "
                f"Available types: {', '.join(self.list_node_types())}"
            )

        return self._executors[node_type]

    def has_executor(self, node_type: str) -> bool:
        return str(node_type).strip() in self._executors

    def execute(self, node_type: str, node_dict: Dict[str, Any], inputs: List[Any]) -> Any:
        """Run the executor registered for node_type."""
        return self.get_executor(node_type)(node_dict, inputs)

    def list_node_types(self) -> List[str]:
        return sorted(self._executors)

    def get_metadata(self, node_type: str) -> Dict[str, Any]:
        """
        Get a copy of the metadata stored for a node type.

        Returns:
            Dictionary with description, input_count and output_count

        Raises:
            KeyError: If node_type is not registered
        """
        node_type = str(node_type).strip()

        if node_type not in self._node_metadata:
            raise KeyError(f"No metadata for node type: {node_type}")

        return dict(self._node_metadata[node_type])


# Global singleton registry
_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers default executors.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """
    Register the built-in node executors.

    This function registers:
    - Image Import node
    - Gaussian Filter node
    - Decimate node
    - Output node
    """
    from ND_Libs.NodesLib.image_import_node import execute_import_image_node
    from ND_Libs.NodesLib.downsample_node import (
        execute_decimate_node,
        execute_gaussian_filter_node,
    )
    from ND_Libs.NodesLib.output_node import execute_output_node

    registry.register(
        node_type=NODE_TYPE_IMAGE_IMPORT,
        executor=execute_import_image_node,
        description="Decode an image from disk into a raster",
        input_count=0,
        output_count=1,
    )

    registry.register(
        node_type=NODE_TYPE_GAUSSIAN_FILTER,
        executor=execute_gaussian_filter_node,
        description="Low-pass filter with the fixed NIST Gaussian kernel",
        input_count=1,
        output_count=1,
    )

    registry.register(
        node_type=NODE_TYPE_DECIMATE,
        executor=execute_decimate_node,
        description="Keep odd rows and columns, halving each dimension",
        input_count=1,
        output_count=1,
    )

    registry.register(
        node_type=NODE_TYPE_OUTPUT,
        executor=execute_output_node,
        description="Write a PGM file and stamp the provenance comment",
        input_count=1,
        output_count=0,
    )

    logger.info("Registered default node executors")
