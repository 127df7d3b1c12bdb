"""
Image Import Node for the NIST Downsampler.

Loads an image file from disk with Pillow and hands it to the pipeline as a
Raster. Grayscale-family images become one-channel rasters; anything else is
converted to RGB and processed per channel.

Classes:
    ImageImportNode: Data model for an image import node

Functions:
    load_image: Decode an image file into a Raster
    execute_import_image_node: Pipeline executor for image import nodes
    create_image_import_node: Helper to create an import node dictionary
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

from PIL import Image, UnidentifiedImageError

from ND_Libs.constants import NODE_TYPE_IMAGE_IMPORT
from ND_Libs.errors import ImageDecodeError, InputImageError
from ND_Libs.ImageEditingLib.image_editing_ops import image_to_raster
from ND_Libs.ImageEditingLib.raster_models import Raster

logger = logging.getLogger(__name__)


def load_image(file_path: Union[str, Path]) -> Raster:
    """
    Decode an image file into a raster.

    Args:
        file_path: Path to any image format Pillow can read

    Returns:
        Raster holding the decoded samples

    Raises:
        InputImageError: If the file does not exist or cannot be opened
        ImageDecodeError: If Pillow cannot identify or decode the file
    """
    path = Path(file_path)
    try:
        with Image.open(path) as img:
            img.load()
            logger.debug(f"Loaded {path} ({img.format}, {img.mode}, {img.size[0]}x{img.size[1]})")
            return image_to_raster(img)
    except UnidentifiedImageError as e:
        raise ImageDecodeError(path, str(e)) from e
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise InputImageError(path, e.strerror) from e
    except (OSError, EOFError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(path, str(e)) from e


@dataclass
class ImageImportNode:
    """Data model for an image import node.

    Attributes:
        node_id: Unique identifier for this node
        file_path: Path to the image file to import
    """

    node_id: str
    file_path: Path

    def __post_init__(self):
        """Validate the input path."""
        self.file_path = Path(self.file_path)

        if not self.file_path.exists():
            raise InputImageError(self.file_path, "file not found")

        if not self.file_path.is_file():
            raise InputImageError(self.file_path, "not a file")

    def load_raster(self) -> Raster:
        """Decode the node's file."""
        return load_image(self.file_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation for serialization."""
        return {
            "node_id": self.node_id,
            "file_path": str(self.file_path),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageImportNode":
        """Create from dictionary representation."""
        return cls(
            node_id=data.get("node_id", ""),
            file_path=Path(data.get("file_path", "")),
        )


def execute_import_image_node(node: Dict[str, Any], inputs: List[Any]) -> Raster:
    """
    Pipeline executor for image import nodes.

    Args:
        node: Node dictionary containing 'file_path' (required)
        inputs: Should be empty (import nodes have no inputs)

    Returns:
        Decoded Raster

    Raises:
        KeyError: If 'file_path' is missing
        InputImageError: If the file cannot be opened
        ImageDecodeError: If the file cannot be decoded
    """
    file_path = node.get("file_path")
    if not file_path:
        raise KeyError("Image import node missing required 'file_path' field")

    import_node = ImageImportNode(
        node_id=node.get("id", node.get("node_id", "unknown")),
        file_path=Path(file_path),
    )
    return import_node.load_raster()


def create_image_import_node(node_id: str, file_path: Union[str, Path]) -> Dict[str, Any]:
    """Create an image import node dictionary for a pipeline."""
    return {
        "id": node_id,
        "type": NODE_TYPE_IMAGE_IMPORT,
        "file_path": str(file_path),
        "inputs": [],
    }
