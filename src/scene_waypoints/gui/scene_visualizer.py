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
Rendering of scene images and drawn paths with matplotlib.
"""

from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from ..common.config import Rect
from ..data_model import ImageReference, Pose, WorldPoint


class SceneVisualizer:
    """
    Draws a scene image in world coordinates and paths on top of it.

    Path artists are tracked so they can be removed without redrawing the
    image.
    """

    def __init__(self):
        self.fig: Optional[Figure] = None
        self.ax: Optional[Axes] = None
        self._path_artists: List = []
        self._draft_artists: List = []

    def create_figure(self, image: np.ndarray, reference: ImageReference,
                      axes_rect: Rect, title: str = "",
                      figsize: Tuple[int, int] = (10, 8),
                      fig: Optional[Figure] = None) -> Tuple[Figure, Axes]:
        """
        Create a figure showing the scene image.

        Args:
            image: scene image, row 0 is the top of the scene
            reference: spatial reference of the image
            axes_rect: axes position in the figure (left, bottom, width, height)
            title: window title
            figsize: Figure size as (width, height). Ignored if fig is provided.
            fig: Optional figure to draw into instead of creating a new one

        Returns:
            Tuple of (figure, axes) objects
        """
        self.fig = fig if fig is not None else plt.figure(figsize=figsize)
        self.ax = self.fig.add_axes(axes_rect)
        if title and self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(title)

        extent = [reference.x_min, reference.x_max, reference.y_min, reference.y_max]

        # Flip vertically so that image row 0 ends up at the maximum world Y
        cmap = 'gray' if image.ndim == 2 else None
        self.ax.imshow(np.flipud(image), cmap=cmap, extent=extent, origin='lower')
        self.ax.set_xlim(reference.x_min, reference.x_max)
        self.ax.set_ylim(reference.y_min, reference.y_max)
        self.ax.set_autoscale_on(False)

        self.ax.set_xlabel('X (m)')
        self.ax.set_ylabel('Y (m)')
        return self.fig, self.ax

    def _plot_path(self, points: Sequence[WorldPoint], color: str, linestyle: str,
                   alpha: float) -> List:
        x_coords = [point.x for point in points]
        y_coords = [point.y for point in points]
        return self.ax.plot(x_coords, y_coords, color=color, linestyle=linestyle,
                            marker='o', markersize=4, linewidth=2.0, alpha=alpha)

    def draw_path(self, points: Sequence[WorldPoint], color: str = 'red',
                  show_endpoints: bool = True) -> List:
        """
        Draw a committed path.

        Args:
            points: path points in world frame
            color: Color of the path line
            show_endpoints: Whether to show start/end markers

        Returns:
            Created artists
        """
        if self.ax is None:
            raise ValueError("No figure created. Call create_figure() first")
        if len(points) < 2:
            return []

        artists = self._plot_path(points, color, '-', 0.8)
        if show_endpoints:
            artists += self.ax.plot(points[0].x, points[0].y, 'go', markersize=8)
            artists += self.ax.plot(points[-1].x, points[-1].y, 'ro', markersize=8)
        self._path_artists.extend(artists)
        return artists

    def draw_poses(self, poses: Sequence[Pose], color: str = 'yellow', length: float = 1.0) -> List:
        """Draw heading arrows for reference poses."""
        if self.ax is None:
            raise ValueError("No figure created. Call create_figure() first")
        if not poses:
            return []

        headings = np.radians([p.heading for p in poses])
        quiver = self.ax.quiver([p.x for p in poses], [p.y for p in poses],
                                length * np.cos(headings), length * np.sin(headings),
                                color=color, angles='xy', scale_units='xy', scale=1.0,
                                width=0.003)
        self._path_artists.append(quiver)
        return [quiver]

    def draw_draft(self, points: Sequence[WorldPoint], cursor: Optional[WorldPoint] = None,
                   color: str = 'cyan') -> List:
        """Draw the path being drawn, with a rubber band to the cursor."""
        self.clear_draft()
        if self.ax is None or not points:
            return []

        self._draft_artists = self._plot_path(points, color, '-', 0.9)
        if cursor is not None:
            self._draft_artists += self.ax.plot([points[-1].x, cursor.x], [points[-1].y, cursor.y],
                                                color=color, linestyle='--', linewidth=1.0)
        return self._draft_artists

    def clear_draft(self) -> None:
        for artist in self._draft_artists:
            artist.remove()
        self._draft_artists = []

    def clear_paths(self) -> None:
        for artist in self._path_artists:
            artist.remove()
        self._path_artists = []

    @property
    def path_artists(self) -> List:
        return list(self._path_artists)

    @property
    def draft_artists(self) -> List[Line2D]:
        return list(self._draft_artists)
