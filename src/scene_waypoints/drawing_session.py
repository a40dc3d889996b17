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
from enum import Enum
from typing import Optional

from .data_model import ScenePath, WorldPoint
from .path_model import InsufficientPoints, append_point, commit
from .scene_document import SceneDocument

logger = logging.getLogger(__name__)


class DrawingState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    COMMITTED = "committed"
    DISCARDED = "discarded"


class DrawingSession:
    """
    State machine for drawing one polyline at a time.

    A path starts with a pointer press on the image, grows with every
    further click and ends with a double-click or right-click. Paths with
    fewer than two points are discarded.
    """

    def __init__(self, document: SceneDocument):
        self.document = document
        self.state = DrawingState.IDLE
        self.last_committed_index: Optional[int] = None

    @property
    def path(self) -> Optional[ScenePath]:
        return self.document.in_progress

    @property
    def is_drawing(self) -> bool:
        return self.state is DrawingState.DRAWING

    def reset(self) -> None:
        """Return a finished session to IDLE."""
        if self.state is DrawingState.DRAWING:
            raise RuntimeError("Cannot reset while a path is being drawn")
        self.state = DrawingState.IDLE

    def pointer_down(self, point: WorldPoint, inside_image: bool) -> bool:
        """
        Start a new path at the pointer position.

        Returns:
            True if drawing started
        """
        if self.state is not DrawingState.IDLE or not inside_image:
            return False

        path = ScenePath()
        append_point(path, point)
        self.document.in_progress = path
        self.state = DrawingState.DRAWING
        logger.debug(f"Started path at ({point.x:.2f}, {point.y:.2f})")
        return True

    def click(self, point: WorldPoint, inside_image: bool = True) -> bool:
        """Append a point to the path being drawn."""
        if self.state is not DrawingState.DRAWING or not inside_image:
            return False
        append_point(self.document.in_progress, point)
        return True

    def undo_point(self) -> bool:
        """Remove the last point, keeping at least the start point."""
        if self.state is not DrawingState.DRAWING or len(self.path) < 2:
            return False
        self.path.points.pop()
        return True

    def finish(self) -> Optional[ScenePath]:
        """
        End the path being drawn.

        Returns:
            The committed path, or None if it was discarded
        """
        if self.state is not DrawingState.DRAWING:
            return None

        path = self.document.in_progress
        self.document.in_progress = None
        try:
            committed = commit(path)
        except InsufficientPoints as e:
            logger.debug(f"Discarded path: {e}")
            self.state = DrawingState.DISCARDED
            return None

        self.last_committed_index = self.document.add_path(committed)
        self.state = DrawingState.COMMITTED
        logger.info(f"Path {self.last_committed_index} finished with {len(committed)} points")
        return committed

    def cancel(self) -> None:
        """Drop the path being drawn."""
        if self.state is not DrawingState.DRAWING:
            return
        self.document.in_progress = None
        self.state = DrawingState.DISCARDED
        logger.debug("Path drawing cancelled")
