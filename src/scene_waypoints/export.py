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
Export of drawn paths as waypoints and reference poses.

Paths are keyed by their index in draw order. A path whose poses cannot be
derived is left out of both collections and reported in ``skipped``.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List

import numpy as np

from .data_model import Pose, ScenePath, WorldPoint
from .path_model import PathError, dedup, poses_to_array, to_array, to_poses
from .scene_document import SceneDocument

logger = logging.getLogger(__name__)

WAYPOINTS_LABEL = "Waypoints ([x y] only)"
POSES_LABEL = "Poses ([x y theta])"


@dataclass
class ExportResult:
    """Waypoints and reference poses of all exportable paths."""

    waypoints: Dict[int, List[WorldPoint]] = field(default_factory=dict)
    ref_poses: Dict[int, List[Pose]] = field(default_factory=dict)
    skipped: Dict[int, str] = field(default_factory=dict)

    def as_arrays(self) -> Dict[str, Dict[int, np.ndarray]]:
        """Get M-by-2 waypoint and M-by-3 pose arrays per path."""
        return {
            "waypoints": {i: to_array(ScenePath(points)) for i, points in self.waypoints.items()},
            "ref_poses": {i: poses_to_array(poses) for i, poses in self.ref_poses.items()},
        }

    def to_dict(self) -> dict:
        """Convert to plain data, e.g. for YAML output."""
        return {
            "waypoints": {i: [asdict(p) for p in points] for i, points in self.waypoints.items()},
            "ref_poses": {i: [asdict(p) for p in poses] for i, poses in self.ref_poses.items()},
            "skipped": dict(self.skipped),
        }


def export_paths(document: SceneDocument) -> ExportResult:
    """
    Derive waypoints and reference poses for all committed paths.

    Duplicate points are removed again before poses are computed.
    """
    result = ExportResult()
    for index, path in enumerate(document.paths):
        waypoints = dedup(path.points)
        try:
            poses = to_poses(ScenePath(waypoints))
        except PathError as e:
            logger.warning(f"Path {index} not exported: {e}")
            result.skipped[index] = str(e)
            continue
        result.waypoints[index] = waypoints
        result.ref_poses[index] = poses
    return result


def log_export(result: ExportResult) -> None:
    """Default export consumer, reports what has been exported."""
    logger.info(f"{WAYPOINTS_LABEL} has been exported ({len(result.waypoints)} paths).")
    logger.info(f"{POSES_LABEL} has been exported ({len(result.ref_poses)} paths).")
    if result.skipped:
        logger.warning(f"Skipped paths: {sorted(result.skipped)}")


ExportConsumer = Callable[[ExportResult], None]
