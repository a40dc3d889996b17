# Copyright (C) 2025 Frederik Pasch
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions
# and limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""
Loading of georeferenced scene images.

A scene is a top-down raster of a site together with the world extent it
covers. Scenes are described by a small YAML file:

- image: path to the image file (PNG, JPEG, ...), relative to the YAML file
- x_world_limits: [min, max] world X of the left and right image edges
- y_world_limits: [min, max] world Y of the bottom and top image edges

Scenes can also be looked up by name in a list of scene directories, where
the scene ``name`` resolves to ``<scene_dir>/<name>.yaml``.
"""

import logging
import math
import os
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import yaml
from PIL import Image

from .coordinate_mapper import CoordinateMapper
from .data_model import ImageReference

logger = logging.getLogger(__name__)


class InvalidImageReference(ValueError):
    """Image and spatial reference do not describe a valid scene."""


class SceneNotFound(FileNotFoundError):
    """A scene name or file could not be resolved."""


class Scene:
    """
    Container for a scene image and its spatial reference.
    """

    def __init__(self, image: np.ndarray, reference: ImageReference,
                 name: Optional[str] = None, image_path: Optional[str] = None):
        """
        Initialize scene container.

        Args:
            image: numpy array of shape (rows, cols) or (rows, cols, channels)
            reference: spatial reference matching the image size
            name: optional scene name
            image_path: path to the image file, if loaded from disk
        """
        self.image = image
        self.reference = reference
        self.name = name
        self.image_path = image_path
        self.mapper = CoordinateMapper(reference)


def validate_reference(reference: ImageReference) -> None:
    """
    Check that a spatial reference has positive size and a non-degenerate extent.

    Raises:
        InvalidImageReference: if the reference is invalid
    """
    if reference.pixel_width <= 0 or reference.pixel_height <= 0:
        raise InvalidImageReference(
            f"Image size must be positive, got {reference.pixel_width}x{reference.pixel_height}")

    limits = (*reference.x_world_limits, *reference.y_world_limits)
    if not all(math.isfinite(value) for value in limits):
        raise InvalidImageReference(f"World limits must be finite, got {limits}")
    if reference.x_max <= reference.x_min:
        raise InvalidImageReference(f"Degenerate X world limits: {reference.x_world_limits}")
    if reference.y_max <= reference.y_min:
        raise InvalidImageReference(f"Degenerate Y world limits: {reference.y_world_limits}")


def validate_image(image: np.ndarray, reference: ImageReference) -> np.ndarray:
    """
    Check that an image array has a supported shape and the pixel size of its reference.

    Returns:
        The image as a numpy array

    Raises:
        InvalidImageReference: if the image does not match the reference
    """
    image = np.asarray(image)
    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (3, 4)):
        raise InvalidImageReference(f"Unsupported image shape: {image.shape}")

    rows, cols = image.shape[:2]
    if (rows, cols) != (reference.pixel_height, reference.pixel_width):
        raise InvalidImageReference(
            f"Image size {cols}x{rows} does not match reference size "
            f"{reference.pixel_width}x{reference.pixel_height}")
    return image


def create_scene(image: np.ndarray, reference: ImageReference,
                 name: Optional[str] = None, image_path: Optional[str] = None) -> Scene:
    """
    Create a scene from an image array and its spatial reference.

    Args:
        image: grayscale (rows, cols) or color (rows, cols, 3|4) image
        reference: spatial reference of the image

    Returns:
        Scene object

    Raises:
        InvalidImageReference: if the image does not match the reference
    """
    validate_reference(reference)
    image = validate_image(image, reference)
    return Scene(image=image, reference=reference, name=name, image_path=image_path)


def _read_limits(config: dict, key: str) -> tuple:
    limits = config.get(key)
    if limits is None:
        raise ValueError(f"Scene YAML missing required '{key}' field")
    if len(limits) != 2:
        raise ValueError(f"'{key}' must contain exactly two values, got {limits}")
    return float(limits[0]), float(limits[1])


def load_scene_image(image_file: str, x_world_limits: Tuple[float, float],
                     y_world_limits: Tuple[float, float], name: Optional[str] = None) -> Scene:
    """
    Load a scene from an image file and the world extent it covers.

    Args:
        image_file: path to the image
        x_world_limits: world X of the left and right image edges
        y_world_limits: world Y of the bottom and top image edges
        name: optional scene name, defaults to the image file name

    Raises:
        SceneNotFound: If the image file does not exist
        InvalidImageReference: If the world limits are degenerate
    """
    if not os.path.exists(image_file):
        raise SceneNotFound(f"Scene image file not found: {image_file}")

    scene_image = Image.open(image_file)
    if scene_image.mode not in ("L", "RGB", "RGBA"):
        scene_image = scene_image.convert("RGB")
    image_array = np.array(scene_image)

    reference = ImageReference(
        pixel_width=image_array.shape[1],
        pixel_height=image_array.shape[0],
        x_world_limits=(float(x_world_limits[0]), float(x_world_limits[1])),
        y_world_limits=(float(y_world_limits[0]), float(y_world_limits[1])),
    )
    if name is None:
        name = os.path.splitext(os.path.basename(image_file))[0]

    logger.debug(f"Loaded image {image_file}: "
                 f"{reference.pixel_width}x{reference.pixel_height} px, "
                 f"x {reference.x_world_limits}, y {reference.y_world_limits}")
    return create_scene(image_array, reference, name=name, image_path=image_file)


def load_scene(scene_file_path: str) -> Scene:
    """
    Load a scene from a YAML file.

    Args:
        scene_file_path: Path to the scene YAML file

    Returns:
        Scene object containing the image and its spatial reference

    Raises:
        SceneNotFound: If scene YAML or image file not found
        InvalidImageReference: If image and world limits do not match
        ValueError: If scene YAML is invalid or image cannot be loaded
    """
    if not os.path.exists(scene_file_path):
        raise SceneNotFound(f"Scene YAML file not found: {scene_file_path}")

    scene_dir = os.path.dirname(scene_file_path)
    name = os.path.splitext(os.path.basename(scene_file_path))[0]

    try:
        with open(scene_file_path, "r") as f:
            scene_config = yaml.safe_load(f)

        if scene_config is None:
            raise ValueError(f"Invalid or empty scene YAML file: {scene_file_path}")

        image_file = scene_config.get("image", "")
        if not image_file:
            raise ValueError("Scene YAML missing required 'image' field")

        # Handle relative paths
        if not os.path.isabs(image_file):
            image_file = os.path.join(scene_dir, image_file)

        x_limits = _read_limits(scene_config, "x_world_limits")
        y_limits = _read_limits(scene_config, "y_world_limits")

        scene = load_scene_image(image_file, x_limits, y_limits, name=name)

    except (FileNotFoundError, InvalidImageReference):
        raise
    except Exception as e:
        raise ValueError(f"Error loading scene {scene_file_path}: {e}") from e

    logger.debug(f"Loaded scene '{name}' from {scene_file_path}")
    return scene


def resolve_scene(name: str, scene_dirs: Iterable[str]) -> str:
    """
    Find the YAML file of a named scene.

    Args:
        name: scene name, e.g. "vineyard"
        scene_dirs: directories searched in order

    Returns:
        Path to the scene YAML file

    Raises:
        SceneNotFound: if no directory contains the scene
    """
    searched: Sequence[str] = list(scene_dirs)
    for scene_dir in searched:
        for extension in (".yaml", ".yml"):
            candidate = os.path.join(scene_dir, name + extension)
            if os.path.isfile(candidate):
                return candidate
    raise SceneNotFound(f"Scene '{name}' not found in: {', '.join(searched) or '<no scene directories>'}")


def load_scene_by_name(name: str, scene_dirs: Iterable[str]) -> Scene:
    """Resolve a scene name and load it."""
    return load_scene(resolve_scene(name, scene_dirs))
