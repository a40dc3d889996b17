#!/usr/bin/env python3
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


"""Command line entry point of the scene waypoint editor."""

import os
from typing import Optional

import click
import yaml

from .common.config import load_editor_config
from .common.logging_config import get_logger, setup_logging
from .export import ExportConsumer, ExportResult, log_export
from .scene_document import SceneDocument
from .scene_loader import (InvalidImageReference, Scene, SceneNotFound, load_scene,
                           load_scene_by_name, load_scene_image)

logger = get_logger(__name__)


def resolve_cli_scene(scene: Optional[str], image: Optional[str], x_limits, y_limits,
                      scene_dirs) -> Scene:
    """Load the scene selected on the command line."""
    if image:
        if not x_limits or not y_limits:
            raise click.UsageError("--image requires --x-limits and --y-limits")
        return load_scene_image(image, x_limits, y_limits)
    if not scene:
        raise click.UsageError("Provide a scene name, a scene YAML file or --image")
    if os.path.isfile(scene):
        return load_scene(scene)
    return load_scene_by_name(scene, scene_dirs)


def yaml_export_consumer(output: str) -> ExportConsumer:
    """Create an export consumer that also writes the result to a YAML file."""
    def consume(result: ExportResult) -> None:
        log_export(result)
        with open(output, 'w') as f:
            yaml.safe_dump(result.to_dict(), f, sort_keys=False)
        logger.info(f"Export written to {output}")
    return consume


@click.command()
@click.version_option(package_name="scene_waypoints", prog_name="scene-waypoints")
@click.argument('scene', required=False)
@click.option('--image', '-i', type=click.Path(exists=True, dir_okay=False),
              help='Scene image file, requires --x-limits and --y-limits')
@click.option('--x-limits', nargs=2, type=float, default=None,
              help='World X of the left and right image edges in meters')
@click.option('--y-limits', nargs=2, type=float, default=None,
              help='World Y of the bottom and top image edges in meters')
@click.option('--scene-dir', '-d', multiple=True, type=click.Path(file_okay=False),
              help='Directory containing <name>.yaml scene files (repeatable)')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Editor configuration YAML file')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write exported waypoints and poses to this YAML file')
@click.option('--log-level', default='INFO',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
def main(scene, image, x_limits, y_limits, scene_dir, config, output, log_level):
    """Draw waypoint paths on a scene image.

    SCENE is either a scene YAML file or the name of a scene found in one of
    the scene directories.

    Click on the scene to start a path, click to add points and finish it
    with a double-click or right-click. Hover between the axes and the window
    edge to pan, scroll to zoom. Press "Export" to export waypoints and
    reference poses of all paths.
    """
    setup_logging(log_level)

    try:
        editor_config = load_editor_config(config)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    scene_dirs = list(scene_dir) + list(editor_config.scene_dirs)
    try:
        loaded = resolve_cli_scene(scene, image, x_limits, y_limits, scene_dirs)
    except (SceneNotFound, InvalidImageReference, ValueError) as e:
        raise click.ClickException(str(e)) from e

    consumer = yaml_export_consumer(output) if output else log_export

    # Import the GUI only when it is needed
    from .gui.scene_editor import SceneEditorController

    editor = SceneEditorController(SceneDocument.from_scene(loaded), editor_config,
                                   on_export=consumer)
    editor.show()


if __name__ == '__main__':
    main()
