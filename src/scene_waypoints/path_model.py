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
Operations on drawn paths: point capture, commit-time cleanup and derivation
of reference poses (x, y, heading) from waypoints.
"""

import math
from typing import Iterable, List, Sequence

import numpy as np

from .data_model import Pose, ScenePath, WorldPoint


class PathError(ValueError):
    """Base class for path errors."""


class InsufficientPoints(PathError):
    """Path has fewer than two distinct points."""


class DegenerateSegment(PathError):
    """Two consecutive path points coincide, so the heading is undefined."""


def append_point(path: ScenePath, point: WorldPoint) -> None:
    """
    Append a point to the end of a path.

    Raises:
        ValueError: if a coordinate is not finite
    """
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise ValueError(f"Path points must be finite, got ({point.x}, {point.y})")
    path.points.append(point)


def dedup(points: Iterable[WorldPoint]) -> List[WorldPoint]:
    """Remove exact duplicate points, keeping the first occurrence in order."""
    seen = set()
    unique = []
    for point in points:
        key = (point.x, point.y)
        if key in seen:
            continue
        seen.add(key)
        unique.append(point)
    return unique


def commit(path: ScenePath) -> ScenePath:
    """
    Validate and clean a finished path.

    Args:
        path: path as drawn

    Returns:
        New path without duplicate points

    Raises:
        InsufficientPoints: if the path has, or dedups to, fewer than 2 points
    """
    if len(path) < 2:
        raise InsufficientPoints(f"A path needs at least 2 points, got {len(path)}")

    cleaned = dedup(path.points)
    if len(cleaned) < 2:
        raise InsufficientPoints(f"A path needs at least 2 distinct points, got {len(cleaned)}")
    return ScenePath(points=cleaned)


def segment_headings(points: Sequence[WorldPoint]) -> np.ndarray:
    """
    Compute the heading of every segment of a polyline.

    The heading is measured from the +X axis in degrees within [0, 360).

    Raises:
        DegenerateSegment: if two consecutive points coincide
    """
    xy = np.array([[p.x, p.y] for p in points], dtype=float)
    diff = np.diff(xy, axis=0)
    lengths = np.hypot(diff[:, 0], diff[:, 1])

    degenerate = np.flatnonzero(lengths == 0.0)
    if degenerate.size:
        index = int(degenerate[0])
        raise DegenerateSegment(
            f"Points {index} and {index + 1} coincide at ({xy[index, 0]}, {xy[index, 1]})")

    cosines = np.clip(diff[:, 0] / lengths, -1.0, 1.0)
    theta = np.degrees(np.arccos(cosines))

    # Correct for 3rd and 4th quadrants
    lower_half = diff[:, 1] < 0
    theta[lower_half] = 360.0 - theta[lower_half]
    return np.mod(theta, 360.0)


def to_poses(path: ScenePath) -> List[Pose]:
    """
    Convert waypoints to reference poses.

    Every point after the first takes the heading of the segment leading to
    it. The first point has no incoming segment and takes the heading of the
    first segment instead.

    Raises:
        InsufficientPoints: if the path has fewer than 2 points
        DegenerateSegment: if two consecutive points coincide
    """
    if len(path) < 2:
        raise InsufficientPoints(f"Cannot derive poses from {len(path)} point(s)")

    theta = segment_headings(path.points)
    headings = np.zeros(len(path))
    headings[1:] = theta
    headings[0] = theta[0]

    return [Pose(x=p.x, y=p.y, heading=float(h)) for p, h in zip(path.points, headings)]


def to_array(path: ScenePath) -> np.ndarray:
    """Get the waypoints as an M-by-2 array of [x, y]."""
    return np.array([[p.x, p.y] for p in path.points], dtype=float).reshape(-1, 2)


def poses_to_array(poses: Sequence[Pose]) -> np.ndarray:
    """Get poses as an M-by-3 array of [x, y, heading]."""
    return np.array([[p.x, p.y, p.heading] for p in poses], dtype=float).reshape(-1, 3)
