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
Conversion between image pixel coordinates and world coordinates.

Pixel coordinates are continuous: (0, 0) is the top-left corner of the image
and (pixel_width, pixel_height) the bottom-right corner. World Y increases
upwards, so the pixel row axis is flipped.
"""

from typing import Tuple

import numpy as np

from .data_model import ImageReference, WorldPoint


class CoordinateMapper:
    """Affine pixel <-> world mapping for a fixed-size reference image."""

    def __init__(self, reference: ImageReference):
        """
        Initialize the mapper.

        Args:
            reference: spatial reference of the scene image
        """
        self.reference = reference

    def meters_per_pixel(self) -> Tuple[float, float]:
        """
        Get the world size of one pixel.

        Returns:
            Tuple of (x_resolution, y_resolution) in meters/pixel
        """
        ref = self.reference
        return ref.world_width / ref.pixel_width, ref.world_height / ref.pixel_height

    def pixel_to_world(self, pixel_x: float, pixel_y: float) -> WorldPoint:
        """
        Convert pixel coordinates to world coordinates.

        Args:
            pixel_x: column position in pixels
            pixel_y: row position in pixels

        Returns:
            WorldPoint in meters, possibly outside the image extent
        """
        res_x, res_y = self.meters_per_pixel()
        world_x = self.reference.x_min + pixel_x * res_x
        # Flip Y-axis: image origin is top-left, world origin is bottom-left
        world_y = self.reference.y_max - pixel_y * res_y
        return WorldPoint(x=world_x, y=world_y)

    def world_to_pixel(self, x: float, y: float) -> Tuple[float, float]:
        """
        Convert world coordinates to pixel coordinates.

        Args:
            x, y: World coordinates in meters

        Returns:
            Tuple of (pixel_x, pixel_y), possibly outside the image
        """
        res_x, res_y = self.meters_per_pixel()
        pixel_x = (x - self.reference.x_min) / res_x
        pixel_y = (self.reference.y_max - y) / res_y
        return pixel_x, pixel_y

    def world_extent(self) -> Tuple[float, float, float, float]:
        """Get the image bounds as (min_x, max_x, min_y, max_y)."""
        ref = self.reference
        return ref.x_min, ref.x_max, ref.y_min, ref.y_max

    def contains(self, point: WorldPoint) -> bool:
        """Check if a world point lies within the image extent (inclusive)."""
        min_x, max_x, min_y, max_y = self.world_extent()
        return min_x <= point.x <= max_x and min_y <= point.y <= max_y

    def clamp(self, point: WorldPoint) -> WorldPoint:
        """Clamp a world point into the image extent."""
        min_x, max_x, min_y, max_y = self.world_extent()
        return WorldPoint(x=float(np.clip(point.x, min_x, max_x)),
                          y=float(np.clip(point.y, min_y, max_y)))
