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


from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class WorldPoint:
    """Represents a 2D position in world coordinates (meters)."""

    x: float
    y: float


@dataclass(frozen=True)
class Pose:
    """Represents a world position with a heading in degrees within [0, 360)."""

    x: float
    y: float
    heading: float


@dataclass
class ScenePath:
    """An ordered sequence of world points drawn by the user."""

    points: List[WorldPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[WorldPoint]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]


@dataclass(frozen=True)
class ImageReference:
    """
    Spatial reference of a scene image.

    The world limits describe the outer edges of the image. Pixel row 0 is
    the top edge of the image and maps to the maximum world Y.
    """

    pixel_width: int
    pixel_height: int
    x_world_limits: Tuple[float, float]
    y_world_limits: Tuple[float, float]

    @property
    def x_min(self) -> float:
        return self.x_world_limits[0]

    @property
    def x_max(self) -> float:
        return self.x_world_limits[1]

    @property
    def y_min(self) -> float:
        return self.y_world_limits[0]

    @property
    def y_max(self) -> float:
        return self.y_world_limits[1]

    @property
    def world_width(self) -> float:
        return self.x_max - self.x_min

    @property
    def world_height(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class ViewportState:
    """Currently visible world rectangle."""

    x_range: Tuple[float, float]
    y_range: Tuple[float, float]

    @property
    def x_span(self) -> float:
        return self.x_range[1] - self.x_range[0]

    @property
    def y_span(self) -> float:
        return self.y_range[1] - self.y_range[0]
