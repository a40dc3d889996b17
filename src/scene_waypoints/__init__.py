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


from .coordinate_mapper import CoordinateMapper
from .data_model import ImageReference, Pose, ScenePath, ViewportState, WorldPoint
from .drawing_session import DrawingSession, DrawingState
from .export import ExportResult, export_paths
from .path_model import (DegenerateSegment, InsufficientPoints, PathError,
                         append_point, commit, to_poses)
from .scene_document import SceneDocument
from .scene_loader import (InvalidImageReference, Scene, SceneNotFound,
                           create_scene, load_scene, load_scene_by_name)
from .viewport import PanDirection, ViewportController

__all__ = [
    'CoordinateMapper',
    'ImageReference',
    'Pose',
    'ScenePath',
    'ViewportState',
    'WorldPoint',
    'DrawingSession',
    'DrawingState',
    'ExportResult',
    'export_paths',
    'DegenerateSegment',
    'InsufficientPoints',
    'PathError',
    'append_point',
    'commit',
    'to_poses',
    'SceneDocument',
    'InvalidImageReference',
    'Scene',
    'SceneNotFound',
    'create_scene',
    'load_scene',
    'load_scene_by_name',
    'PanDirection',
    'ViewportController',
]
