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
Interactive editor for drawing waypoint paths on a scene image.

1. Explore the scene by zooming with the mouse wheel or the toolbar and by
   hovering between the axes and the window edge to pan in that direction.
2. Click on the scene to start a path, click again to add points and finish
   it with a double-click or a right-click. Escape drops the path being
   drawn, Delete or "u" removes its last point.
3. Press "Export" to hand the waypoints and reference poses of all paths to
   the export consumer.

The matplotlib callbacks in this module only translate events into calls on
:class:`ViewportController` and :class:`DrawingSession`.
"""

import logging
import time
from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.backend_bases import MouseButton
from matplotlib.figure import Figure
from matplotlib.transforms import Bbox
from matplotlib.widgets import Button

from ..common.config import EditorConfig
from ..data_model import ViewportState, WorldPoint
from ..drawing_session import DrawingSession, DrawingState
from ..export import ExportConsumer, ExportResult, export_paths, log_export
from ..scene_document import SceneDocument
from ..viewport import ViewportController
from .scene_visualizer import SceneVisualizer

logger = logging.getLogger(__name__)

OUTSIDE_AXIS_TEXT = "\nX: Outside Axis\nY: Outside Axis"


class SceneEditorController:
    """Wires matplotlib events to the viewport and the drawing session."""

    def __init__(self, document: SceneDocument, config: Optional[EditorConfig] = None,
                 on_export: Optional[ExportConsumer] = None, fig: Optional[Figure] = None):
        """
        Create the editor window.

        Args:
            document: scene document receiving the drawn paths, must hold an image
            config: editor settings
            on_export: consumer of exported paths, defaults to logging a summary
            fig: optional figure to build the editor in
        """
        if document.image is None:
            raise ValueError("Scene document has no image to display")

        self.document = document
        self.config = config or EditorConfig()
        self.on_export = on_export or log_export

        self.viewport = ViewportController.from_config(document.reference, self.config)
        self.session = DrawingSession(document)
        self.visualizer = SceneVisualizer()
        self.last_export: Optional[ExportResult] = None

        self._closed = False
        self._applying_view = False
        self._last_display: Optional[Tuple[float, float]] = None
        self._last_tick: Optional[float] = None

        self.fig, self.ax = self.visualizer.create_figure(
            document.image, document.reference, self.config.axes_rect,
            title=self.config.figure_title, fig=fig)

        left, bottom, _, height = self.config.readout_rect
        self.readout = self.fig.text(left, bottom + height, self._position_text(None),
                                     fontsize=10, ha='left', va='top')

        self.button_ax = self.fig.add_axes(self.config.export_button_rect)
        self.export_button = Button(self.button_ax, self.config.export_label)
        self.export_button.on_clicked(lambda _event: self.export())

        self.pan_timer = self.fig.canvas.new_timer(interval=self.config.pan_interval_ms)
        self.pan_timer.add_callback(self._on_pan_timer)

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect('button_press_event', self._on_press),
            canvas.mpl_connect('motion_notify_event', self._on_motion),
            canvas.mpl_connect('scroll_event', self._on_scroll),
            canvas.mpl_connect('key_press_event', self._on_key),
            canvas.mpl_connect('figure_leave_event', self._on_leave),
            canvas.mpl_connect('close_event', self._on_close),
        ]
        self.ax.callbacks.connect('xlim_changed', self._on_limits_changed)
        self.ax.callbacks.connect('ylim_changed', self._on_limits_changed)

        logger.info(f"Editor opened for scene '{document.name or 'unnamed'}'")

    # Helpers

    @property
    def closed(self) -> bool:
        return self._closed

    def _position_text(self, pointer: Optional[WorldPoint]) -> str:
        if pointer is None:
            return "Current Position\nX: 0m\nY: 0m"
        state = self.viewport.state
        if (state.x_range[0] < pointer.x < state.x_range[1]
                and state.y_range[0] < pointer.y < state.y_range[1]):
            decimals = self.config.readout_decimals
            return (f"Current Position\nX: {pointer.x:.{decimals}f}m"
                    f"\nY: {pointer.y:.{decimals}f}m")
        return OUTSIDE_AXIS_TEXT

    def _display_to_world(self, display_xy: Tuple[float, float]) -> WorldPoint:
        x, y = self.ax.transData.inverted().transform(display_xy)
        return WorldPoint(x=float(x), y=float(y))

    def _toolbar_mode_active(self) -> bool:
        toolbar = getattr(self.fig.canvas, 'toolbar', None)
        return toolbar is not None and getattr(toolbar, 'mode', '') != ''

    def _export_region(self) -> Bbox:
        """Area around the export button in which panning is disabled."""
        box = self.button_ax.get_window_extent()
        return Bbox.from_extents(box.x0 - 0.5 * box.width, box.y0 - box.height,
                                 box.x1 + 0.5 * box.width, box.y1 + box.height)

    def pan_blocked(self, display_xy: Tuple[float, float]) -> bool:
        """Check if another interaction forbids hover panning."""
        return self._toolbar_mode_active() or self._export_region().contains(*display_xy)

    def _apply_view(self) -> None:
        state = self.viewport.state
        self._applying_view = True
        try:
            self.ax.set_xlim(*state.x_range)
            self.ax.set_ylim(*state.y_range)
        finally:
            self._applying_view = False

    def _redraw(self, cursor: Optional[WorldPoint] = None) -> None:
        self.visualizer.clear_paths()
        for path in self.document.paths:
            self.visualizer.draw_path(path.points)
        if self.last_export is not None:
            arrow_length = 0.02 * self.document.reference.world_width
            for poses in self.last_export.ref_poses.values():
                self.visualizer.draw_poses(poses, length=arrow_length)
        self._redraw_draft(cursor)

    def _redraw_draft(self, cursor: Optional[WorldPoint] = None) -> None:
        path = self.session.path
        if self.session.is_drawing and path is not None:
            self.visualizer.draw_draft(path.points, cursor)
        else:
            self.visualizer.clear_draft()

    # Event adapters

    def _on_press(self, event) -> None:
        if event.inaxes is not self.ax or event.xdata is None or self._toolbar_mode_active():
            return

        point = WorldPoint(x=float(event.xdata), y=float(event.ydata))
        inside = self.document.mapper.contains(point)

        if event.button == MouseButton.RIGHT or event.dblclick:
            if self.session.is_drawing:
                self.session.finish()
                self._redraw()
        elif event.button == MouseButton.LEFT:
            if self.session.is_drawing:
                self.session.click(point, inside)
            else:
                if self.session.state is not DrawingState.IDLE:
                    self.session.reset()
                self.session.pointer_down(point, inside)
            self._redraw_draft()
        self.fig.canvas.draw_idle()

    def _on_motion(self, event) -> None:
        if self._closed:
            return
        display_xy = (event.x, event.y)
        self._last_display = display_xy
        pointer = self._display_to_world(display_xy)

        self.readout.set_text(self._position_text(pointer))
        if self.session.is_drawing:
            self._redraw_draft(pointer if self.document.mapper.contains(pointer) else None)

        if (self.viewport.pan_direction(pointer) is not None
                and not self.viewport.is_max_zoomed_out()
                and not self.pan_blocked(display_xy)):
            self._start_pan()
        self.fig.canvas.draw_idle()

    def _on_scroll(self, event) -> None:
        focal = self._display_to_world((event.x, event.y))
        # matplotlib reports scrolling up as a positive step, which zooms in
        self.viewport.zoom(focal, -event.step)
        self._stop_pan()
        self._apply_view()
        self.fig.canvas.draw_idle()

    def _on_key(self, event) -> None:
        if event.key == 'escape':
            self.session.cancel()
        elif event.key in ('delete', 'u'):
            self.session.undo_point()
        else:
            return
        self._redraw_draft()
        self.fig.canvas.draw_idle()

    def _on_leave(self, _event) -> None:
        self._stop_pan()

    def _on_close(self, _event) -> None:
        self._closed = True
        self._stop_pan()
        logger.debug("Editor closed")

    def _on_limits_changed(self, _ax) -> None:
        """Follow view changes made by the navigation toolbar."""
        if self._applying_view:
            return
        try:
            self.viewport.state = ViewportState(x_range=tuple(self.ax.get_xlim()),
                                                y_range=tuple(self.ax.get_ylim()))
        except ValueError as e:
            logger.debug(f"Ignoring view outside the scene: {e}")
        if (self.viewport.state.x_range != tuple(self.ax.get_xlim())
                or self.viewport.state.y_range != tuple(self.ax.get_ylim())):
            self._apply_view()

    # Panning

    def _start_pan(self) -> None:
        if self.viewport.is_panning:
            return
        self.viewport.axes_rect = tuple(self.ax.get_position().bounds)
        self.viewport.start_pan()
        self._last_tick = None
        self.pan_timer.start()

    def _stop_pan(self) -> None:
        if self.viewport.is_panning:
            self.pan_timer.stop()
            self.viewport.end_pan()

    def _on_pan_timer(self) -> None:
        # a timer callback returning False would be unregistered
        self.pan_step()

    def pan_step(self) -> bool:
        """
        Move the view one pan step towards the last pointer position.

        Returns:
            True if the view moved
        """
        if self._closed or self._last_display is None:
            self._stop_pan()
            return False

        now = time.monotonic()
        dt = None if self._last_tick is None else now - self._last_tick
        self._last_tick = now

        pointer = self._display_to_world(self._last_display)
        moved = self.viewport.tick_pan(pointer, dt=dt, blocked=self.pan_blocked(self._last_display))
        if not moved:
            self._stop_pan()
            return False

        self._apply_view()
        self.readout.set_text(self._position_text(self._display_to_world(self._last_display)))
        self.fig.canvas.draw_idle()
        return True

    # Export

    def export(self) -> ExportResult:
        """Export all committed paths to the export consumer."""
        result = export_paths(self.document)
        self.last_export = result
        logger.info(f"Exporting {len(result.waypoints)} of {len(self.document.paths)} paths")
        self.on_export(result)
        self._redraw()
        self.fig.canvas.draw_idle()
        return result

    def show(self) -> None:
        plt.show()
