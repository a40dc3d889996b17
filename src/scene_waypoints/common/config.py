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


import os
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

# left, bottom, width, height in figure-normalized units
Rect = Tuple[float, float, float, float]


class EditorConfig(BaseModel):
    model_config = ConfigDict(extra='forbid')

    figure_title: str = "Draw Scene Waypoints"
    axes_rect: Rect = (0.09, 0.12, 0.82, 0.85)
    readout_rect: Rect = (0.11, 0.04, 0.2, 0.07)
    export_button_rect: Rect = (0.4, 0.02, 0.2, 0.03)
    export_label: str = "Export"
    readout_decimals: int = 2

    zoom_factor: float = 1.1
    pan_max_fraction: float = 0.01
    pan_window_margin: float = 0.95
    max_zoom_out_fraction: float = 0.95
    pan_interval_ms: int = 20

    scene_dirs: List[str] = []

    @field_validator('axes_rect', 'readout_rect', 'export_button_rect')
    @classmethod
    def validate_rect(cls, v: Rect) -> Rect:
        left, bottom, width, height = v
        if width <= 0 or height <= 0:
            raise ValueError(f'rectangle {v} must have positive width and height')
        if left < 0 or bottom < 0 or left + width > 1 or bottom + height > 1:
            raise ValueError(f'rectangle {v} must lie within the figure')
        return v

    @field_validator('pan_max_fraction', 'pan_window_margin', 'max_zoom_out_fraction')
    @classmethod
    def validate_fraction(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError(f'fraction {v} must be within (0, 1]')
        return v

    @field_validator('zoom_factor')
    @classmethod
    def validate_zoom_factor(cls, v: float) -> float:
        if v <= 1:
            raise ValueError(f'zoom factor {v} must be greater than 1')
        return v

    @field_validator('pan_interval_ms', 'readout_decimals')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f'value {v} must not be negative')
        return v


def load_editor_config(config_file: Optional[str]) -> EditorConfig:
    """Load editor settings from a YAML file.

    The settings are read from the top-level ``editor`` section if present,
    otherwise from the whole document. Relative scene directories are
    resolved against the location of the file.
    """
    if not config_file:
        return EditorConfig()

    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Config file {config_file} not found")

    with open(config_file, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML file {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping")
    settings = data.get('editor', data)
    if settings is None:
        settings = {}
    if not isinstance(settings, dict):
        raise ValueError(f"'editor' section of {config_file} must be a mapping")

    config_dir = os.path.dirname(os.path.abspath(config_file))
    scene_dirs = settings.get('scene_dirs')
    if scene_dirs:
        settings = dict(settings)
        settings['scene_dirs'] = [d if os.path.isabs(d) else os.path.join(config_dir, d)
                                  for d in scene_dirs]

    try:
        return EditorConfig(**settings)
    except ValidationError as e:
        raise ValueError(f"Invalid editor configuration in {config_file}: {e}") from e
