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


import logging
from typing import List, Optional

import numpy as np

from .coordinate_mapper import CoordinateMapper
from .data_model import ImageReference, ScenePath
from .scene_loader import Scene, validate_image, validate_reference

logger = logging.getLogger(__name__)


class SceneDocument:
    """
    Owns the scene image, its spatial reference and all drawn paths.

    Committed paths are kept in draw order. At most one path is in progress.
    """

    def __init__(self, reference: ImageReference, image: Optional[np.ndarray] = None,
                 name: Optional[str] = None):
        validate_reference(reference)
        if image is not None:
            image = validate_image(image, reference)
        self.reference = reference
        self.image = image
        self.name = name
        self.mapper = CoordinateMapper(reference)
        self.paths: List[ScenePath] = []
        self.in_progress: Optional[ScenePath] = None

    @classmethod
    def from_scene(cls, scene: Scene) -> "SceneDocument":
        """Create an empty document for a loaded scene."""
        return cls(scene.reference, image=scene.image, name=scene.name)

    def add_path(self, path: ScenePath) -> int:
        """
        Append a committed path.

        Returns:
            Index of the path in draw order
        """
        self.paths.append(path)
        index = len(self.paths) - 1
        logger.debug(f"Committed path {index} with {len(path)} points")
        return index

    def clear(self) -> None:
        """Remove all paths."""
        self.paths.clear()
        self.in_progress = None
